"""Specification Resolver - turns a Generation Spec into value trees."""

from typing import Any

from faker import Faker

from mockdata.engine.spec import ByKeys, ByMap, ByType, Leaf, ListNode, MapNode, ObjectNode
from mockdata.generators.fields import FieldRegistry, get_field_registry
from mockdata.generators.presets import PresetRegistry, get_preset_registry
from mockdata.errors import ClientSpecError


class SpecResolver:
    """Resolves generation specs against the field and preset registries.

    Unknown field names are tolerated: ``ByKeys`` drops them, and a ``ByMap``
    leaf naming an unknown field is omitted from its enclosing object (or
    becomes ``None`` inside a list).
    """

    def __init__(
        self,
        field_registry: FieldRegistry | None = None,
        preset_registry: PresetRegistry | None = None,
    ):
        self.field_registry = field_registry or get_field_registry()
        self.preset_registry = preset_registry or get_preset_registry()

    def resolve(self, spec: ByKeys | ByMap | ByType, faker: Faker) -> Any:
        """Generate one value tree for a spec.

        Args:
            spec: The generation spec
            faker: The request's Faker instance

        Returns:
            The generated value tree
        """
        if isinstance(spec, ByKeys):
            return self._resolve_keys(spec.keys, faker)
        if isinstance(spec, ByMap):
            return self._resolve_node(spec.node, faker)
        if isinstance(spec, ByType):
            record = self.preset_registry.generate(spec.preset, faker)
            if record is None:
                raise ClientSpecError(ClientSpecError.INVALID_REQUEST, f"Unknown type: {spec.preset}")
            return record
        raise TypeError(f"Unsupported generation spec: {type(spec).__name__}")

    def resolve_many(self, spec: ByKeys | ByMap | ByType, faker: Faker, count: int = 1) -> Any:
        """Generate ``count`` value trees.

        A count of one returns the bare tree, not a one-element list.
        """
        if count <= 1:
            return self.resolve(spec, faker)
        return [self.resolve(spec, faker) for _ in range(count)]

    def _resolve_keys(self, keys: list[str], faker: Faker) -> dict[str, Any]:
        record = {}
        for key in keys:
            if key in self.field_registry:
                record[key] = self.field_registry.generate(key, faker)
        return record

    def _resolve_node(self, node: MapNode, faker: Faker) -> Any:
        if isinstance(node, Leaf):
            if node.field is None:
                return None
            return self.field_registry.generate(node.field, faker)

        if isinstance(node, ListNode):
            return [self._resolve_node(item, faker) for item in node.items]

        record = {}
        for alias, child in node.entries.items():
            value = self._resolve_node(child, faker)
            if value is not None:
                record[alias] = value
        return record

"""Generation Spec models.

A request selects what to generate in exactly one of three ways:

- ``keys``: a flat list of field names (``ByKeys``)
- ``map``: a JSON document whose leaves are field names (``ByMap``)
- ``type``: a preset record type (``ByType``)

The raw ``map`` JSON is validated into a recursive node tree here, at the
boundary, so the resolver only ever sees well-formed nodes.
"""

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field

from mockdata.errors import ClientSpecError
from mockdata.generators.presets import PresetRegistry, PresetType

SELECTOR_HINT = "Provide ?keys=..., ?map=..., or ?type=... (see /types)"


class Leaf(BaseModel):
    """A field name; ``None`` marks a leaf that can never be generated."""

    field: str | None = None


class ListNode(BaseModel):
    items: list["MapNode"] = Field(default_factory=list)


class ObjectNode(BaseModel):
    entries: dict[str, "MapNode"] = Field(default_factory=dict)


MapNode = Union[Leaf, ListNode, ObjectNode]

ListNode.model_rebuild()
ObjectNode.model_rebuild()


class ByKeys(BaseModel):
    kind: Literal["keys"] = "keys"
    keys: list[str] = Field(default_factory=list, description="Field names, in output order")


class ByMap(BaseModel):
    kind: Literal["map"] = "map"
    node: MapNode = Field(..., description="Root of the output shape")


class ByType(BaseModel):
    kind: Literal["type"] = "type"
    preset: PresetType = Field(..., description="Preset record type")


GenerationSpec = Annotated[Union[ByKeys, ByMap, ByType], Field(discriminator="kind")]


def parse_map_node(raw: Any) -> MapNode:
    """Convert decoded ``map`` JSON into a node tree.

    Strings become leaves, lists and objects recurse. Anything else (numbers,
    booleans, null) becomes an empty leaf, which resolves to nothing rather
    than failing the request.

    Nesting depth is not limited.
    """
    if isinstance(raw, str):
        return Leaf(field=raw)
    if isinstance(raw, list):
        return ListNode(items=[parse_map_node(item) for item in raw])
    if isinstance(raw, dict):
        return ObjectNode(entries={str(key): parse_map_node(value) for key, value in raw.items()})
    return Leaf(field=None)


def parse_map_text(text: str) -> ByMap:
    """Parse the ``map`` query parameter.

    Raises:
        ClientSpecError: If the text is not valid JSON
    """
    try:
        raw = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ClientSpecError(ClientSpecError.INVALID_MAP_JSON) from e
    return ByMap(node=parse_map_node(raw))


def spec_from_params(
    keys: list[str] | None = None,
    map_text: str | None = None,
    type_name: str | None = None,
) -> ByKeys | ByMap | ByType:
    """Select the generation spec from request parameters.

    Precedence is keys, then map, then type; later selectors are ignored
    once an earlier one is present.

    Args:
        keys: Parsed ``keys`` list, or None if the parameter was absent
        map_text: Raw ``map`` JSON text
        type_name: Preset name

    Returns:
        The selected spec

    Raises:
        ClientSpecError: No selector, malformed map JSON, or unknown preset
    """
    if keys is not None:
        return ByKeys(keys=keys)

    if map_text:
        return parse_map_text(map_text)

    if type_name:
        preset = PresetRegistry.parse(type_name)
        if preset is not None:
            return ByType(preset=preset)

    raise ClientSpecError(ClientSpecError.INVALID_REQUEST, SELECTOR_HINT)

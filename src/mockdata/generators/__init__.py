"""Generators module - atomic fields and composite presets.

Atomic generators draw a single value for a named field; composite
generators assemble fixed-shape records (user, company, location, ...).
Both draw from a Faker instance passed in by the caller.
"""

from mockdata.generators.providers import make_faker
from mockdata.generators.fields import FieldRegistry, FIELD_GENERATORS, get_field_registry
from mockdata.generators.presets import (
    PresetType,
    PresetRegistry,
    PRESET_GENERATORS,
    get_preset_registry,
)

__all__ = [
    "make_faker",
    "FieldRegistry",
    "FIELD_GENERATORS",
    "get_field_registry",
    "PresetType",
    "PresetRegistry",
    "PRESET_GENERATORS",
    "get_preset_registry",
]

"""
Mock Data - Parameterized fake-data generation for APIs and test fixtures.

Callers ask for synthetic records (users, companies, addresses, or arbitrary
custom shapes) and receive JSON or CSV. Generation is seeded per request, so a
given seed always reproduces the same records.
"""

__version__ = "1.0.0"

from mockdata.errors import MockDataError, ClientSpecError, EncodingError
from mockdata.generators.presets import PresetType
from mockdata.engine.spec import ByKeys, ByMap, ByType, GenerationSpec
from mockdata.engine.resolver import SpecResolver
from mockdata.engine.pipeline import ShapingPipeline
from mockdata.engine.service import DataService, DataResponse, GenerationRequest

__all__ = [
    "MockDataError",
    "ClientSpecError",
    "EncodingError",
    "PresetType",
    "ByKeys",
    "ByMap",
    "ByType",
    "GenerationSpec",
    "SpecResolver",
    "ShapingPipeline",
    "DataService",
    "DataResponse",
    "GenerationRequest",
]

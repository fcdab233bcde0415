"""Engine module - spec resolution and the shaping pipeline.

Contains:
- Generation Spec models and selection
- Specification Resolver: specs to value trees
- Shaping Pipeline: seeding, projection, flattening, encoding
- Data Service: the request-level contract
"""

from mockdata.engine.spec import ByKeys, ByMap, ByType, GenerationSpec, spec_from_params
from mockdata.engine.resolver import SpecResolver
from mockdata.engine.pipeline import ShapingPipeline
from mockdata.engine.models import DataResponse, GenerationRequest, OutputFormat
from mockdata.engine.service import DataService

__all__ = [
    "ByKeys",
    "ByMap",
    "ByType",
    "GenerationSpec",
    "spec_from_params",
    "SpecResolver",
    "ShapingPipeline",
    "DataResponse",
    "GenerationRequest",
    "OutputFormat",
    "DataService",
]

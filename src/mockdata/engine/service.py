"""Data Service - the contract the HTTP layer calls into.

Each public method takes the raw query parameters of one request and returns
a ``DataResponse``: a value tree or CSV text on success, or an error
descriptor with a 4xx/5xx status. Client and encoding errors are converted
here; anything else propagates to the caller as an internal error.
"""

from typing import Any, Mapping

import structlog

from mockdata import __version__
from mockdata.config import Settings, get_settings
from mockdata.engine.models import DataResponse, GenerationRequest
from mockdata.engine.pipeline import ShapingPipeline
from mockdata.engine.resolver import SpecResolver
from mockdata.engine.spec import ByType, spec_from_params
from mockdata.errors import ClientSpecError, MockDataError
from mockdata.generators.fields import FieldRegistry, get_field_registry
from mockdata.generators.presets import PresetRegistry, PresetType, get_preset_registry

logger = structlog.get_logger(__name__)


class DataService:
    """Entry point for the generation core.

    The DataService:
    - Parses query parameters into a ``GenerationRequest``
    - Selects the generation spec (keys, map or preset type)
    - Runs the shaping pipeline
    - Maps known errors to error responses
    """

    def __init__(
        self,
        settings: Settings | None = None,
        field_registry: FieldRegistry | None = None,
        preset_registry: PresetRegistry | None = None,
    ):
        self.settings = settings or get_settings()
        self.field_registry = field_registry or get_field_registry()
        self.preset_registry = preset_registry or get_preset_registry()
        self.pipeline = ShapingPipeline(
            settings=self.settings,
            resolver=SpecResolver(self.field_registry, self.preset_registry),
        )

    def generate(self, params: Mapping[str, Any] | None = None) -> DataResponse:
        """Flexible generation from ``keys``, ``map`` or ``type``.

        Args:
            params: Raw query parameters

        Returns:
            The shaped data, or a 400/500 error response
        """
        try:
            request = GenerationRequest.from_query(params)
            spec = spec_from_params(keys=request.keys, map_text=request.map, type_name=request.type)
            return self.pipeline.run(spec, request)
        except MockDataError as e:
            return self._error_response(e)

    def preset(
        self,
        preset: PresetType | str,
        params: Mapping[str, Any] | None = None,
        multiple: bool = False,
    ) -> DataResponse:
        """Generate a fixed preset, as the dedicated routes (``/user``, ...) do.

        Args:
            preset: Preset name
            params: Raw query parameters
            multiple: Honor ``count`` (``/users``); otherwise one record

        Returns:
            The shaped data, or an error response for an unknown preset
        """
        try:
            preset_type = self.preset_registry.parse(preset)
            if preset_type is None:
                raise ClientSpecError(ClientSpecError.INVALID_REQUEST, f"Unknown type: {preset}")

            request = GenerationRequest.from_query(params)
            if not multiple:
                request.count = None
            return self.pipeline.run(ByType(preset=preset_type), request)
        except MockDataError as e:
            return self._error_response(e)

    def list_types_and_fields(self) -> dict[str, list[str]]:
        """Discovery payload: preset names and sorted field names."""
        return {
            "types": self.preset_registry.list_types(),
            "fields": self.field_registry.list_fields(),
        }

    def health(self) -> dict[str, Any]:
        """Liveness payload with the limits this process enforces."""
        return {
            "status": "ok",
            "version": __version__,
            "maxCount": self.settings.max_count,
            "rateLimitEnabled": self.settings.rate_limit_enabled,
        }

    def _error_response(self, error: MockDataError) -> DataResponse:
        if error.status_code >= 500:
            logger.error("service.request_failed", error=error.kind, detail=error.detail)
        else:
            logger.info("service.request_rejected", error=error.kind, detail=error.detail)
        return DataResponse.error(error.status_code, error.to_dict())

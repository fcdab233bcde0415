"""Request and response models shared by the pipeline and the service."""

import json
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field

from mockdata.utils.helpers import split_list, to_boolean

JSON_CONTENT_TYPE = "application/json"
CSV_CONTENT_TYPE = "text/csv"
CSV_FILENAME = "data.csv"


class OutputFormat(str, Enum):
    """Supported response encodings."""

    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, value: str | None) -> "OutputFormat":
        """Parse a format name; anything other than csv means JSON."""
        if value and value.strip().lower() == cls.CSV.value:
            return cls.CSV
        return cls.JSON


class GenerationRequest(BaseModel):
    """Query parameters the HTTP layer hands to the generation core.

    ``count`` and ``seed`` stay raw strings; the pipeline decides how lenient
    to be with them.
    """

    count: str | None = Field(default=None, description="Requested record count")
    format: OutputFormat = Field(default=OutputFormat.JSON, description="Response encoding")
    flatten: bool = Field(default=False, description="Collapse nested objects into dotted keys")
    seed: str | None = Field(default=None, description="Seed for reproducible output")
    fields: list[str] = Field(default_factory=list, description="Dotted paths to keep")
    keys: list[str] | None = Field(default=None, description="Field names for a flat record")
    map: str | None = Field(default=None, description="JSON document describing the output shape")
    type: str | None = Field(default=None, description="Preset record type")

    @classmethod
    def from_query(cls, params: Mapping[str, Any] | None = None) -> "GenerationRequest":
        """Build a request from a raw query-string mapping.

        Args:
            params: Mapping of parameter name to raw value

        Returns:
            The parsed request
        """
        params = params or {}

        def text(name: str) -> str | None:
            value = params.get(name)
            return None if value is None else str(value)

        keys_text = text("keys")
        return cls(
            count=text("count"),
            format=OutputFormat.parse(text("format")),
            flatten=to_boolean(params.get("flatten"), default=False),
            seed=text("seed"),
            fields=split_list(text("fields")),
            keys=split_list(keys_text) if keys_text else None,
            map=text("map") or None,
            type=text("type") or None,
        )


class DataResponse(BaseModel):
    """What the core returns to the HTTP layer."""

    status_code: int = Field(default=200, description="HTTP status code")
    content_type: str = Field(default=JSON_CONTENT_TYPE, description="Response content type")
    body: Any = Field(default=None, description="Value tree, CSV text or error descriptor")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra response headers")

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    @property
    def filename(self) -> str | None:
        """Filename suggested by the Content-Disposition header, if any."""
        disposition = self.headers.get("Content-Disposition", "")
        marker = 'filename="'
        if marker not in disposition:
            return None
        return disposition.split(marker, 1)[1].rstrip('"')

    def render(self, pretty: bool = False) -> str:
        """Serialize the body as it would go over the wire."""
        if self.content_type == CSV_CONTENT_TYPE:
            return self.body
        return json.dumps(self.body, indent=2 if pretty else None, ensure_ascii=False, default=str)

    @classmethod
    def error(cls, status_code: int, payload: dict[str, Any]) -> "DataResponse":
        return cls(status_code=status_code, content_type=JSON_CONTENT_TYPE, body=payload)

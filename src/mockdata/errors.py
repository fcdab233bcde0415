"""Error taxonomy for the generation pipeline.

Only two conditions are errors: a bad generation spec selector (client side)
and a failure to encode tabular output (server side). Unknown field names,
unparseable seeds and out-of-range counts are tolerated and never raise.
"""

from typing import Any


class MockDataError(Exception):
    """Base class for errors surfaced to callers as an error descriptor."""

    status_code: int = 500

    def __init__(self, kind: str, detail: str | None = None):
        super().__init__(detail or kind)
        self.kind = kind
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        """Return the machine-readable error descriptor."""
        payload: dict[str, Any] = {"error": self.kind}
        if self.detail:
            payload["detail"] = self.detail
        return payload


class ClientSpecError(MockDataError, ValueError):
    """Missing or malformed generation spec selector."""

    status_code = 400

    INVALID_REQUEST = "invalid_request"
    INVALID_MAP_JSON = "invalid_map_json"


class EncodingError(MockDataError):
    """Tabular encoding of the generated records failed."""

    status_code = 500

    CSV_GENERATION_FAILED = "csv_generation_failed"

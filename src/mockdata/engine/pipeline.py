"""Shaping Pipeline - seeding, generation, projection, flattening, encoding.

The steps always run in this order:

1. Seed: an integer ``seed`` seeds the request's Faker instance
2. Count: clamped to ``[1, max_count]``
3. Generation: one value tree, or a list of them when count > 1
4. Projection: keep only the requested dotted ``fields``
5. Flattening: nested objects collapse into dotted keys
6. Encoding: JSON as-is, or CSV (always flattened)
"""

import csv
import io
from typing import Any

import structlog

from mockdata.config import Settings, get_settings
from mockdata.engine.models import (
    CSV_CONTENT_TYPE,
    CSV_FILENAME,
    JSON_CONTENT_TYPE,
    DataResponse,
    GenerationRequest,
    OutputFormat,
)
from mockdata.engine.resolver import SpecResolver
from mockdata.engine.spec import ByKeys, ByMap, ByType
from mockdata.errors import EncodingError
from mockdata.generators.providers import make_faker
from mockdata.utils.helpers import flatten_dict, get_path, has_path, int_prefix, parse_int, set_path

logger = structlog.get_logger(__name__)


def parse_seed(raw: Any) -> int | None:
    """Parse the seed parameter; values without a leading integer are ignored."""
    return parse_int(raw)


def clamp_count(raw: Any, max_count: int, default: int = 1) -> int:
    """Parse the count parameter.

    Invalid or sub-1 values fall back to ``default``; values above
    ``max_count`` are clamped down, never rejected.
    """
    if raw is None:
        return default

    parsed = parse_int(raw)
    if parsed is None:
        # a digit run too long to convert is still a count above the maximum
        digits = int_prefix(raw)
        return max_count if digits is not None and not digits.startswith("-") else default
    if parsed < 1:
        return default
    return min(parsed, max_count)


def _project(record: Any, paths: list[str]) -> dict[str, Any]:
    projected: dict[str, Any] = {}
    for path in paths:
        if has_path(record, path):
            set_path(projected, path, get_path(record, path))
    return projected


def select_fields(data: Any, paths: list[str]) -> Any:
    """Prune records down to the given dotted paths.

    Applied per record when ``data`` is a list. Paths missing from a record
    are left out of that record; intermediate nesting is rebuilt.

    Args:
        data: A record or list of records
        paths: Dotted paths to keep, in output order

    Returns:
        The projected record(s), or ``data`` unchanged if no paths are given
    """
    if not paths:
        return data
    if isinstance(data, list):
        return [_project(record, paths) for record in data]
    return _project(data, paths)


def flatten_record(record: Any) -> dict[str, Any]:
    """Flatten one record into dotted keys.

    A record that is not an object (e.g. a bare value from a ``map`` spec
    whose root is a field name) is placed under a single ``value`` key.
    """
    if isinstance(record, dict):
        return flatten_dict(record)
    return flatten_dict({"value": record})


def flatten_records(data: Any) -> Any:
    if isinstance(data, list):
        return [flatten_record(record) for record in data]
    return flatten_record(data)


def _csv_cell(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def to_csv(rows: list[dict[str, Any]]) -> str:
    """Encode flattened rows as CSV with a header row.

    The columns are the union of all row keys, in first-seen order; a row
    missing a column gets an empty cell.

    Raises:
        EncodingError: If a row cannot be written
    """
    fieldnames: list[str] = []
    seen: set[str] = set()
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                fieldnames.append(key)

    output = io.StringIO()
    try:
        writer = csv.DictWriter(output, fieldnames=fieldnames, restval="")
        writer.writeheader()
        for row in rows:
            writer.writerow({key: _csv_cell(value) for key, value in row.items()})
    except Exception as e:
        raise EncodingError(EncodingError.CSV_GENERATION_FAILED, str(e)) from e

    return output.getvalue()


class ShapingPipeline:
    """Runs one request's spec through generation and shaping.

    Every run builds its own Faker instance, so seeding one request never
    affects another, even when requests run concurrently.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        resolver: SpecResolver | None = None,
    ):
        self.settings = settings or get_settings()
        self.resolver = resolver or SpecResolver()

    def generate(
        self,
        spec: ByKeys | ByMap | ByType,
        count: Any = None,
        seed: Any = None,
    ) -> Any:
        """Run the seeding, count and generation steps only.

        Args:
            spec: What to generate
            count: Raw count parameter
            seed: Raw seed parameter

        Returns:
            A bare value tree for count 1, otherwise a list of trees
        """
        parsed_seed = parse_seed(seed)
        total = clamp_count(count, self.settings.max_count, self.settings.default_count)
        logger.debug("pipeline.generate", spec=spec.kind, count=total, seeded=parsed_seed is not None)
        return self.resolver.resolve_many(spec, make_faker(parsed_seed), total)

    def shape(
        self,
        data: Any,
        fields: list[str] | None = None,
        flatten: bool = False,
        output_format: OutputFormat = OutputFormat.JSON,
    ) -> DataResponse:
        """Apply projection, flattening and encoding to generated data."""
        filtered = select_fields(data, fields or [])

        if output_format != OutputFormat.CSV:
            payload = flatten_records(filtered) if flatten else filtered
            return DataResponse(content_type=JSON_CONTENT_TYPE, body=payload)

        rows = filtered if isinstance(filtered, list) else [filtered]
        try:
            text = to_csv([flatten_record(row) for row in rows])
        except EncodingError:
            logger.error("pipeline.csv_failed", rows=len(rows))
            raise

        return DataResponse(
            content_type=CSV_CONTENT_TYPE,
            body=text,
            headers={"Content-Disposition": f'inline; filename="{CSV_FILENAME}"'},
        )

    def run(self, spec: ByKeys | ByMap | ByType, request: GenerationRequest) -> DataResponse:
        """Execute every pipeline step for one request."""
        data = self.generate(spec, count=request.count, seed=request.seed)
        return self.shape(
            data,
            fields=request.fields,
            flatten=request.flatten,
            output_format=request.format,
        )

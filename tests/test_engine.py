"""Tests for the Engine module."""

import csv
import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from mockdata.config import Settings
from mockdata.engine.models import CSV_CONTENT_TYPE, JSON_CONTENT_TYPE, GenerationRequest, OutputFormat
from mockdata.engine.pipeline import (
    ShapingPipeline,
    clamp_count,
    flatten_record,
    parse_seed,
    select_fields,
    to_csv,
)
from mockdata.engine.resolver import SpecResolver
from mockdata.engine.service import DataService
from mockdata.engine.spec import (
    ByKeys,
    ByMap,
    ByType,
    Leaf,
    ListNode,
    ObjectNode,
    parse_map_node,
    spec_from_params,
)
from mockdata.errors import ClientSpecError, EncodingError
from mockdata.generators.presets import PresetType
from mockdata.generators.providers import make_faker
from mockdata.utils.helpers import flatten_dict


@pytest.fixture
def settings():
    """Settings with an explicit maximum, independent of the environment."""
    return Settings(max_count=100, default_count=1)


@pytest.fixture
def resolver():
    return SpecResolver()


@pytest.fixture
def service(settings):
    return DataService(settings=settings)


class Unprintable:
    def __str__(self):
        raise ValueError("cannot stringify")

    __repr__ = __str__


class TestSpecSelection:
    """Tests for choosing a Generation Spec from request parameters."""

    def test_keys_selected(self):
        spec = spec_from_params(keys=["firstName", "email"])
        assert isinstance(spec, ByKeys)
        assert spec.keys == ["firstName", "email"]

    def test_map_selected(self):
        spec = spec_from_params(map_text='{"id": "uuid"}')
        assert isinstance(spec, ByMap)
        assert isinstance(spec.node, ObjectNode)
        assert spec.node.entries["id"] == Leaf(field="uuid")

    def test_type_selected_case_insensitive(self):
        spec = spec_from_params(type_name="User")
        assert isinstance(spec, ByType)
        assert spec.preset == PresetType.USER

    def test_keys_take_precedence(self):
        spec = spec_from_params(keys=["uuid"], map_text="not-json", type_name="bogus")
        assert isinstance(spec, ByKeys)

    def test_no_selector(self):
        with pytest.raises(ClientSpecError) as exc_info:
            spec_from_params()
        assert exc_info.value.kind == "invalid_request"
        assert exc_info.value.status_code == 400

    def test_unknown_type(self):
        with pytest.raises(ClientSpecError) as exc_info:
            spec_from_params(type_name="bogus")
        assert exc_info.value.kind == "invalid_request"

    def test_malformed_map_json(self):
        with pytest.raises(ClientSpecError) as exc_info:
            spec_from_params(map_text="not-json")
        assert exc_info.value.kind == "invalid_map_json"
        assert exc_info.value.to_dict() == {"error": "invalid_map_json"}

    def test_parse_map_node_shapes(self):
        node = parse_map_node({"a": "uuid", "b": ["email", 5], "c": {"d": None}})

        assert node.entries["a"] == Leaf(field="uuid")
        assert isinstance(node.entries["b"], ListNode)
        assert node.entries["b"].items[1] == Leaf(field=None)
        assert node.entries["c"].entries["d"] == Leaf(field=None)


class TestSpecResolver:
    """Tests for SpecResolver."""

    def test_keys_are_lenient(self, resolver):
        record = resolver.resolve(ByKeys(keys=["firstName", "doesNotExist"]), make_faker(1))
        assert list(record.keys()) == ["firstName"]

    def test_keys_preserve_order(self, resolver):
        record = resolver.resolve(ByKeys(keys=["uuid", "email", "city"]), make_faker(1))
        assert list(record.keys()) == ["uuid", "email", "city"]

    def test_map_structure_preserved(self, resolver):
        spec = spec_from_params(map_text=json.dumps({
            "id": "uuid",
            "loc": {"lat": "latitude", "lng": "longitude"},
        }))
        record = resolver.resolve(spec, make_faker(1))

        assert list(record.keys()) == ["id", "loc"]
        assert isinstance(record["id"], str)
        assert list(record["loc"].keys()) == ["lat", "lng"]
        assert isinstance(record["loc"]["lat"], float)
        assert isinstance(record["loc"]["lng"], float)

    def test_map_unknown_leaves(self, resolver):
        spec = spec_from_params(map_text=json.dumps({
            "name": "firstName",
            "missing": "doesNotExist",
            "tags": ["email", "doesNotExist"],
        }))
        record = resolver.resolve(spec, make_faker(1))

        assert "missing" not in record
        assert isinstance(record["tags"][0], str)
        assert record["tags"][1] is None

    def test_map_deep_nesting(self, resolver):
        raw = "uuid"
        for _ in range(50):
            raw = {"child": raw}
        record = resolver.resolve(ByMap(node=parse_map_node(raw)), make_faker(1))

        for _ in range(50):
            record = record["child"]
        assert isinstance(record, str)

    def test_map_root_leaf(self, resolver):
        value = resolver.resolve(spec_from_params(map_text='"email"'), make_faker(1))
        assert "@" in value

    def test_type(self, resolver):
        record = resolver.resolve(ByType(preset=PresetType.HEALTH), make_faker(1))
        assert set(record.keys()) == {"patientName", "medicalRecordNumber", "diagnosisCode"}

    def test_resolve_many_single_is_bare(self, resolver):
        record = resolver.resolve_many(ByType(preset=PresetType.USER), make_faker(1), count=1)
        assert isinstance(record, dict)

    def test_resolve_many_list(self, resolver):
        records = resolver.resolve_many(ByType(preset=PresetType.USER), make_faker(1), count=2)
        assert isinstance(records, list)
        assert len(records) == 2
        assert records[0].keys() == records[1].keys()

    def test_deterministic(self, resolver):
        spec = ByKeys(keys=["firstName", "lastName"])
        first = resolver.resolve(spec, make_faker(42))
        second = resolver.resolve(spec, make_faker(42))

        assert first == second
        assert all(isinstance(value, str) for value in first.values())


class TestPipelineSteps:
    """Tests for the individual shaping steps."""

    def test_parse_seed(self):
        assert parse_seed("42") == 42
        assert parse_seed(" -7 ") == -7
        assert parse_seed("42abc") == 42
        assert parse_seed("abc") is None
        assert parse_seed(None) is None
        assert parse_seed("4\u00b2") == 4
        assert parse_seed("\u00b2") is None
        assert parse_seed("1" * 5000) is None

    def test_clamp_count(self):
        assert clamp_count(None, 100) == 1
        assert clamp_count("5", 100) == 5
        assert clamp_count("0", 100) == 1
        assert clamp_count("-3", 100) == 1
        assert clamp_count("abc", 100) == 1
        assert clamp_count("100000", 100) == 100
        assert clamp_count("9" * 5000, 100) == 100
        assert clamp_count("-" + "9" * 5000, 100) == 1
        assert clamp_count("\u0663", 100) == 1

    def test_select_fields_rebuilds_nesting(self):
        record = {"name": {"first": "A", "last": "B"}, "age": 3}
        assert select_fields(record, ["name.first"]) == {"name": {"first": "A"}}

    def test_select_fields_keeps_path_order(self):
        record = {"a": 1, "b": 2, "c": 3}
        assert list(select_fields(record, ["c", "a"]).keys()) == ["c", "a"]

    def test_select_fields_full_key_set_is_identity(self):
        record = {"id": "x", "address": {"city": "C", "state": "S"}, "tags": [1, 2]}
        paths = list(flatten_dict(record).keys())
        assert select_fields(record, paths) == record

    def test_select_fields_no_match(self):
        assert select_fields({"a": 1}, ["zzz"]) == {}
        assert select_fields([{"a": 1}, {"a": 2}], ["zzz"]) == [{}, {}]

    def test_select_fields_partial_match_per_record(self):
        records = [{"a": 1, "b": 2}, {"a": 3}]
        assert select_fields(records, ["a", "b"]) == [{"a": 1, "b": 2}, {"a": 3}]

    def test_select_fields_without_paths(self):
        record = {"a": 1}
        assert select_fields(record, []) is record

    def test_flatten_record(self):
        record = {
            "id": 1,
            "address": {"city": "C", "geo": {"lat": 1.5}},
            "route": [{"latitude": 1.0}],
        }
        assert flatten_record(record) == {
            "id": 1,
            "address.city": "C",
            "address.geo.lat": 1.5,
            "route": '[{"latitude":1.0}]',
        }

    def test_flatten_non_object_record(self):
        assert flatten_record("x") == {"value": "x"}

    def test_to_csv_union_of_columns(self):
        text = to_csv([{"a": 1}, {"b": True, "a": 2}])
        rows = list(csv.reader(io.StringIO(text)))

        assert rows[0] == ["a", "b"]
        assert rows[1] == ["1", ""]
        assert rows[2] == ["2", "true"]

    def test_to_csv_failure(self):
        with pytest.raises(EncodingError) as exc_info:
            to_csv([{"a": Unprintable()}])
        assert exc_info.value.kind == "csv_generation_failed"
        assert exc_info.value.status_code == 500


class TestShapingPipeline:
    """Tests for ShapingPipeline."""

    def test_count_clamped_to_settings(self):
        pipeline = ShapingPipeline(settings=Settings(max_count=10))
        records = pipeline.generate(ByKeys(keys=["uuid"]), count="500")
        assert len(records) == 10

    def test_seed_reproducible(self, settings):
        pipeline = ShapingPipeline(settings=settings)
        spec = ByType(preset=PresetType.LOCATION)

        first = pipeline.generate(spec, count="3", seed="42")
        second = pipeline.generate(spec, count="3", seed="42")
        assert json.dumps(first) == json.dumps(second)

    def test_run_json(self, settings):
        pipeline = ShapingPipeline(settings=settings)
        request = GenerationRequest(count="2", fields=["address.city"], flatten=True)
        response = pipeline.run(ByType(preset=PresetType.USER), request)

        assert response.content_type == JSON_CONTENT_TYPE
        assert len(response.body) == 2
        assert list(response.body[0].keys()) == ["address.city"]

    def test_run_csv(self, settings):
        pipeline = ShapingPipeline(settings=settings)
        request = GenerationRequest(format=OutputFormat.CSV)
        response = pipeline.run(ByType(preset=PresetType.ADDRESS), request)

        assert response.content_type == CSV_CONTENT_TYPE
        assert response.headers["Content-Disposition"] == 'inline; filename="data.csv"'
        assert response.filename == "data.csv"
        assert response.body.splitlines()[0] == "street,city,state,postalCode,country"


class TestGenerationRequest:
    """Tests for parsing raw query parameters."""

    def test_defaults(self):
        request = GenerationRequest.from_query({})
        assert request.format == OutputFormat.JSON
        assert request.flatten is False
        assert request.fields == []
        assert request.keys is None
        assert request.map is None
        assert request.type is None

    def test_parsing(self):
        request = GenerationRequest.from_query({
            "format": "CSV",
            "flatten": "yes",
            "fields": " a , ,b.c ",
            "keys": "uuid, email,",
            "count": "3",
            "seed": "9",
        })
        assert request.format == OutputFormat.CSV
        assert request.flatten is True
        assert request.fields == ["a", "b.c"]
        assert request.keys == ["uuid", "email"]
        assert request.count == "3"
        assert request.seed == "9"

    def test_unknown_format_is_json(self):
        assert GenerationRequest.from_query({"format": "xml"}).format == OutputFormat.JSON

    def test_falsy_flatten_values(self):
        for value in ("0", "false", "no", "off", "maybe"):
            assert GenerationRequest.from_query({"flatten": value}).flatten is False


class TestDataService:
    """Tests for DataService - the request-level contract."""

    def test_determinism(self, service):
        params = {"keys": "firstName,lastName", "seed": "42"}
        first = service.generate(params)
        second = DataService(settings=Settings(max_count=100)).generate(params)

        assert first.status_code == 200
        assert first.render() == second.render()
        assert list(first.body.keys()) == ["firstName", "lastName"]

    def test_determinism_across_processes(self, service):
        params = {"keys": "firstName,lastName", "seed": "42"}
        script = (
            "from mockdata.config import Settings\n"
            "from mockdata.engine.service import DataService\n"
            "from mockdata.log import configure_logging\n"
            "configure_logging('WARNING')\n"
            f"print(DataService(settings=Settings(max_count=100)).generate({params!r}).render())\n"
        )
        src = Path(__file__).resolve().parents[1] / "src"
        env = {**os.environ, "PYTHONPATH": str(src), "PYTHONIOENCODING": "utf-8"}
        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            encoding="utf-8",
            env=env,
            check=True,
        )

        assert result.stdout.strip() == service.generate(params).render()

    def test_seeded_preset_is_reproducible(self, service):
        first = service.preset("location", {"seed": "5"})
        second = DataService(settings=Settings(max_count=100)).preset("location", {"seed": "5"})

        assert len(first.body["route"]) == len(second.body["route"])
        assert first.body["route"] == second.body["route"]
        assert first.body == second.body

    def test_unusual_seed_strings_are_ignored(self, service):
        for seed in ("4²", "²", "1" * 5000, "-" + "7" * 5000):
            response = service.generate({"keys": "uuid", "seed": seed})
            assert response.status_code == 200
            assert "uuid" in response.body

    def test_overlong_count_is_clamped(self, service):
        response = service.generate({"keys": "uuid", "count": "9" * 5000})
        assert response.status_code == 200
        assert len(response.body) == 100

    def test_projection_into_lists(self, service):
        response = service.generate({"type": "location", "fields": "route.0.latitude", "seed": "3"})
        full = service.generate({"type": "location", "seed": "3"})

        assert response.status_code == 200
        assert response.body == {"route": {"0": {"latitude": full.body["route"][0]["latitude"]}}}

    def test_different_seeds_differ(self, service):
        first = service.generate({"type": "user", "seed": "1"})
        second = service.generate({"type": "user", "seed": "2"})
        assert first.body["id"] != second.body["id"]

    def test_unparseable_seed_ignored(self, service):
        response = service.generate({"keys": "uuid", "seed": "abc"})
        assert response.status_code == 200
        assert "uuid" in response.body

    def test_key_leniency(self, service):
        response = service.generate({"keys": "firstName,doesNotExist"})
        assert response.status_code == 200
        assert list(response.body.keys()) == ["firstName"]

    def test_count_clamping(self, service):
        response = service.generate({"keys": "uuid", "count": "100000"})
        assert response.status_code == 200
        assert len(response.body) == 100

    def test_single_vs_multi_count(self, service):
        single = service.generate({"type": "company", "count": "1"})
        multi = service.generate({"type": "company", "count": "2"})

        assert isinstance(single.body, dict)
        assert isinstance(multi.body, list)
        assert len(multi.body) == 2
        assert all(record.keys() == single.body.keys() for record in multi.body)

    def test_projection(self, service):
        response = service.generate({"type": "personal", "fields": "names.first,nothing.here"})
        assert list(response.body.keys()) == ["names"]
        assert list(response.body["names"].keys()) == ["first"]

    def test_projection_no_match(self, service):
        single = service.generate({"type": "user", "fields": "zzz"})
        multi = service.generate({"type": "user", "fields": "zzz", "count": "3"})

        assert single.body == {}
        assert multi.body == [{}, {}, {}]

    def test_flatten_json(self, service):
        response = service.generate({"type": "location", "flatten": "true"})

        assert "coordinates.latitude" in response.body
        assert isinstance(response.body["route"], str)
        assert isinstance(json.loads(response.body["route"]), list)

    @pytest.mark.parametrize("flatten", ["true", "false"])
    def test_csv_equals_flatten(self, service, flatten):
        params = {"type": "user", "count": "3", "seed": "11"}
        expected = service.generate({**params, "flatten": "true"}).body
        response = service.generate({**params, "format": "csv", "flatten": flatten})

        assert response.status_code == 200
        assert response.content_type == CSV_CONTENT_TYPE

        rows = list(csv.DictReader(io.StringIO(response.body)))
        assert len(rows) == 3
        for row, record in zip(rows, expected):
            assert list(row.keys()) == list(record.keys())
            assert row == {key: str(value) for key, value in record.items()}

    def test_map_scenario(self, service):
        response = service.generate({"map": '{"id":"uuid","loc":{"lat":"latitude","lng":"longitude"}}'})
        assert response.status_code == 200
        assert isinstance(response.body["loc"]["lat"], float)

    def test_bogus_type(self, service):
        response = service.generate({"type": "bogus"})
        assert response.status_code == 400
        assert response.body["error"] == "invalid_request"
        assert "detail" in response.body

    def test_invalid_map_json(self, service):
        response = service.generate({"map": "not-json"})
        assert response.status_code == 400
        assert response.body == {"error": "invalid_map_json"}

    def test_no_selector(self, service):
        response = service.generate({})
        assert response.status_code == 400
        assert response.body["error"] == "invalid_request"
        assert response.content_type == JSON_CONTENT_TYPE

    def test_csv_failure_is_server_error(self, service, monkeypatch):
        monkeypatch.setattr(service.pipeline, "generate", lambda spec, count=None, seed=None: [{"a": Unprintable()}])
        response = service.generate({"keys": "uuid", "format": "csv"})

        assert response.status_code == 500
        assert response.body["error"] == "csv_generation_failed"

    def test_preset_single(self, service):
        response = service.preset("user", {"count": "5"})
        assert isinstance(response.body, dict)

    def test_preset_multiple(self, service):
        response = service.preset("user", {"count": "5"}, multiple=True)
        assert len(response.body) == 5

    def test_preset_unknown(self, service):
        response = service.preset("bogus")
        assert response.status_code == 400
        assert response.body["error"] == "invalid_request"

    def test_preset_matches_generate_type(self, service):
        dedicated = service.preset(PresetType.FINANCIAL, {"seed": "5"})
        flexible = service.generate({"type": "financial", "seed": "5"})
        assert dedicated.body == flexible.body

    def test_list_types_and_fields(self, service):
        payload = service.list_types_and_fields()

        assert payload["types"][0] == "user"
        assert len(payload["types"]) == 10
        assert payload["fields"] == sorted(payload["fields"])
        assert "latitude" in payload["fields"]

    def test_health(self, service):
        payload = service.health()
        assert payload["status"] == "ok"
        assert payload["maxCount"] == 100
        assert "rateLimitEnabled" in payload

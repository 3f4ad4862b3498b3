import pytest
from pydantic import ValidationError

import sample_app
from swag.annotations import DocEntry
from swag.config import Config
from swag.errors import DefinitionError
from swag.record import generate_record, localize, new_record
from swag.router import Route, Router
from swag.schema.builder import SchemaBuilder
from swag.schema.content import ResponseBuilder

PIPES = {
    "api": {"headers": {"X-Api-Version": {"type": "string"}}},
    "auth": {"headers": {"Authorization": {"type": "string", "required": True}}},
}


def _config(**kwargs) -> Config:
    return Config(router=Router(), **kwargs)


class TestLocalize:
    def test_absent(self):
        assert localize(None, "en") == ""

    def test_plain(self):
        assert localize("List users.", "en") == "List users."

    def test_localized_hit(self):
        assert localize({"en": "Hello", "fr": "Bonjour"}, "fr") == "Bonjour"

    def test_localized_miss_has_no_fallback(self):
        assert localize({"en": "Hello"}, "de") is None


class TestNewRecord:
    def test_route_fields(self):
        route = Route(path="/users", verb="get", handler=object, action="index", pipe_through=["api"])
        record = new_record(DocEntry(None, {}), _config(), route)
        assert record.path == "/users"
        assert record.verb == "get"
        assert record.pipe_through == ["api"]
        assert record.description == ""
        assert record.headers == {}
        assert record.responses == {}
        assert record.metadata == {}

    def test_annotation_headers_override_pipe_through(self):
        doc = DocEntry("Show", {"headers": {"Authorization": {"desc": "Bearer token"}}})
        record = new_record(doc, _config(pipe_through_mapping=PIPES), path="/x", verb="get", pipe_through=["auth"])
        assert record.headers == {
            "Authorization": {"type": "string", "required": True, "desc": "Bearer token"}
        }

    def test_metadata_and_extra_keys(self):
        doc = DocEntry("Show", {"metadata": {"owner": "accounts"}, "tags": ["users"], "deprecated": True})
        record = new_record(doc, _config(), path="/x", verb="get")
        assert record.metadata == {"owner": "accounts"}
        assert record.tags == ["users"]
        assert record.deprecated is True

    def test_localized_description(self):
        doc = DocEntry({"en": "Fetch", "fr": "Obtenir"}, {})
        assert new_record(doc, _config(locale="fr"), path="/x", verb="get").description == "Obtenir"
        assert new_record(doc, _config(locale="de"), path="/x", verb="get").description is None

    def test_record_is_immutable(self):
        record = new_record(DocEntry(None, {}), _config(), path="/x", verb="get")
        with pytest.raises(ValidationError):
            record.path = "/y"

    def test_two_pipelines_and_external_reference(self):
        account = SchemaBuilder("Account").field("id", "uuid").build()
        response = (
            ResponseBuilder("AccountResponse")
            .content("application/json")
            .schema("application/json", account)
            .build()
        )
        route = Route(path="/accounts", verb="get", handler=object, action="index", pipe_through=["api", "auth"])
        record = new_record(DocEntry("List", {"responses": {200: response}}), _config(pipe_through_mapping=PIPES), route)

        assert record.headers == {
            "X-Api-Version": {"type": "string"},
            "Authorization": {"type": "string", "required": True},
        }
        assert record.responses[200].get_refs() == ["Account"]

    def test_schema_headers_expand_to_fields(self):
        trace = SchemaBuilder("TraceHeaders").field("X-Trace-Id", {"type": "uuid", "required": True}).build()
        doc = DocEntry("Show", {"headers": trace})
        record = new_record(doc, _config(pipe_through_mapping=PIPES), path="/x", verb="get", pipe_through=["api"])
        assert list(record.headers) == ["X-Api-Version", "X-Trace-Id"]
        assert record.headers["X-Trace-Id"] == trace.fields()["X-Trace-Id"]

    def test_malformed_annotation_is_a_definition_error(self):
        doc = DocEntry("Show", {"headers": "Authorization"})
        with pytest.raises(DefinitionError, match="GET /x"):
            new_record(doc, _config(), path="/x", verb="get")


class TestGenerateRecord:
    def test_documents_a_route(self):
        config = _config(pipe_through_mapping=PIPES)
        route = sample_app.router.routes()[0]
        record = generate_record(route, config)

        assert record.path == "/api/users"
        assert record.description == "List users."
        assert record.tags == ["users"]
        assert record.query_params == {"page": {"type": "integer", "desc": "Page number"}}
        assert set(record.headers) == {"X-Api-Version", "Authorization"}
        assert record.responses == {200: sample_app.UsersResponse}

    def test_body_from_annotation(self):
        route = sample_app.router.routes()[2]
        record = generate_record(route, _config())
        assert record.body is sample_app.UserRequestBody
        assert record.metadata == {"owner": "accounts"}

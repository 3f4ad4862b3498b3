"""OpenAPI 3 JSON processor.

Renders the document as a stream of JSON fragments: the prelude opens the
``paths`` object, each path group is one member of it, and the footer
closes it and appends ``components.schemas`` from the registry.
"""

import json
import re

from swag.processors.base import Processor
from swag.schema.builder import SchemaDescriptor
from swag.schema.content import KIND_REQUEST_BODY, KIND_RESPONSE, ContentDescriptor
from swag.schema.field import Field
from swag.schema.interfaces import JsonSchemaProvider

OPENAPI_VERSION = "3.0.3"
DEFAULT_CONTENT_TYPE = "application/json"
RESPONSES_PREFIX = "#/components/responses/"
REQUEST_BODIES_PREFIX = "#/components/requestBodies/"

PATH_PARAM_RE = re.compile(r"\{(\w+)\}|:(\w+)")


def openapi_path(path: str) -> str:
    """Rewrite ``/users/:id`` style segments to ``/users/{id}``."""
    return re.sub(r":(\w+)", r"{\1}", path)


def path_params(path: str) -> list[str]:
    return [brace or colon for brace, colon in PATH_PARAM_RE.findall(path)]


class OpenAPIProcessor(Processor):
    def init(self, config) -> str:
        info = {"title": config.title, "version": config.version}
        if config.description:
            info["description"] = config.description
        return (
            f'{{"openapi":{json.dumps(OPENAPI_VERSION)},'
            f'"info":{json.dumps(info)},'
            f'"paths":{{'
        )

    def process(self, record, schemas, config) -> str:
        return f"{json.dumps(record.verb.lower())}:{json.dumps(self.operation(record, schemas))}"

    def path_key(self, path: str) -> str:
        return openapi_path(path)

    def group(self, path: str, fragments: list[str]) -> str:
        return f"{json.dumps(openapi_path(path))}:{{{','.join(fragments)}}}"

    def finalize(self, schemas, config) -> str:
        components: dict = {"schemas": {name: schemas.schemas[name] for name in sorted(schemas.schemas)}}
        if schemas.responses:
            components["responses"] = {
                name: _inline_response(schemas.responses[name], schemas)
                for name in sorted(schemas.responses)
            }
        if schemas.request_bodies:
            components["requestBodies"] = {
                name: _inline_request_body(schemas.request_bodies[name])
                for name in sorted(schemas.request_bodies)
            }
        return f'}},"components":{json.dumps(components)}}}'

    # -- operation rendering --------------------------------------------------

    def operation(self, record, schemas) -> dict:
        """Build the operation object of one record.

        Named response and request-body descriptors present in ``schemas``
        are referenced from ``components``; anything else is inlined.
        """
        op: dict = {}
        lines = (record.description or "").strip().splitlines()
        if lines:
            op["summary"] = lines[0]
            op["description"] = record.description
        if record.tags:
            op["tags"] = list(record.tags)

        parameters = [
            {"name": name, "in": "path", "required": True, "schema": {"type": "string"}}
            for name in path_params(record.path)
        ]
        parameters += _parameters(record.query_params, "query")
        parameters += _parameters(record.headers, "header")
        if parameters:
            op["parameters"] = parameters

        body = _request_body(record.body, schemas)
        if body:
            op["requestBody"] = body

        responses = {
            str(status): _response(value, schemas) for status, value in record.responses.items()
        }
        op["responses"] = responses or {"default": {"description": ""}}
        return op


def _param_fields(params) -> dict[str, Field]:
    if isinstance(params, SchemaDescriptor):
        return params.fields()
    if isinstance(params, dict):
        return {name: Field.new(spec) for name, spec in params.items()}
    return {}


def _parameters(params, location: str) -> list[dict]:
    result = []
    for name, field in _param_fields(params).items():
        schema = field.to_json_schema()
        param = {"name": name, "in": location, "required": bool(field.required)}
        description = schema.pop("description", None)
        if description:
            param["description"] = description
        param["schema"] = schema
        result.append(param)
    return result


def _content(descriptor: ContentDescriptor) -> dict:
    content = {}
    for content_type in descriptor.content_types():
        entry: dict = {}
        schema = descriptor.schema_for(content_type)
        if schema is not None:
            entry["schema"] = schema.to_json_schema()
        examples = descriptor.examples_for(content_type)
        if examples:
            entry["examples"] = {name: {"value": value} for name, value in examples.items()}
        content[content_type] = entry
    return content


def _schema_content(schema: JsonSchemaProvider) -> dict:
    return {DEFAULT_CONTENT_TYPE: {"schema": Field.new(schema).to_json_schema()}}


def _inline_request_body(body: ContentDescriptor) -> dict:
    rendered = {"content": _content(body)}
    if body.description:
        rendered["description"] = body.description
    return rendered


def _request_body(body, schemas) -> dict | None:
    if isinstance(body, ContentDescriptor):
        if body.kind == KIND_REQUEST_BODY and body.name in schemas.request_bodies:
            return {"$ref": REQUEST_BODIES_PREFIX + body.name}
        return _inline_request_body(body)
    if isinstance(body, JsonSchemaProvider):
        return {"content": _schema_content(body)}
    if isinstance(body, dict) and body:
        fields = _param_fields(body)
        schema = {
            "type": "object",
            "properties": {name: field.to_json_schema() for name, field in fields.items()},
        }
        return {"content": {DEFAULT_CONTENT_TYPE: {"schema": schema}}}
    return None


def _inline_response(value: ContentDescriptor, schemas) -> dict:
    rendered = {"description": value.description or ""}
    headers = _response_headers(value.headers, schemas)
    if headers:
        rendered["headers"] = headers
    rendered["content"] = _content(value)
    return rendered


def _response(value, schemas) -> dict:
    if isinstance(value, ContentDescriptor):
        if value.kind == KIND_RESPONSE and value.name in schemas.responses:
            return {"$ref": RESPONSES_PREFIX + value.name}
        return _inline_response(value, schemas)
    if isinstance(value, JsonSchemaProvider):
        description = getattr(value, "description", None) or ""
        return {"description": description, "content": _schema_content(value)}
    if isinstance(value, dict):
        return value
    return {"description": str(value)}


def _response_headers(headers, schemas) -> dict:
    if isinstance(headers, Field):
        # a reference to a header schema: expand its registered properties
        schema = schemas.get(headers.ref) if headers.is_ref else None
        if schema is None:
            return {}
        return {name: {"schema": prop} for name, prop in schema.get("properties", {}).items()}
    if isinstance(headers, dict):
        rendered = {}
        for name, field in headers.items():
            schema = field.to_json_schema()
            header: dict = {}
            description = schema.pop("description", None)
            if description:
                header["description"] = description
            header["schema"] = schema
            rendered[name] = header
        return rendered
    return {}

"""Request/response body descriptors.

A body declares a description, optional headers shared by every content
type, and one or more content types, each with a schema and named examples.
Every content-type-scoped call takes the content type explicitly::

    UserResponse = (
        ResponseBuilder("UserResponse")
        .desc("A single user")
        .headers({"X-Request-Id": "uuid"})
        .content("application/json")
        .schema("application/json", User)
        .example("application/json", "user", {"id": "1"})
        .build()
    )
"""

from types import MappingProxyType

from swag.errors import ContentTypeNotFoundError, DefinitionError, ExampleNotFoundError
from swag.schema.field import COLLECTION_TYPES, Field
from swag.schema.interfaces import JsonSchemaProvider, MapSerializable
from swag.schema.refs import get_refs

KIND_CONTENT = "content"
KIND_REQUEST_BODY = "request_body"
KIND_RESPONSE = "response"


class ContentDescriptor(MapSerializable):
    """An immutable body description."""

    def __init__(
        self,
        name: str,
        description: str | None,
        headers: Field | dict[str, Field] | None,
        content: dict[str, dict],
        kind: str = KIND_CONTENT,
    ):
        self._name = name
        self._description = description
        self._headers = MappingProxyType(dict(headers)) if isinstance(headers, dict) else headers
        self._content = {
            ct: {
                "schema": entry["schema"],
                "examples": MappingProxyType(dict(entry["examples"])),
            }
            for ct, entry in content.items()
        }
        self._kind = kind

    def __repr__(self) -> str:
        return f"ContentDescriptor({self._name!r}, kind={self._kind!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def headers(self) -> Field | dict[str, Field] | None:
        """A reference field, a mapping header-name -> field, or None."""
        if isinstance(self._headers, MappingProxyType):
            return dict(self._headers)
        return self._headers

    def content_types(self) -> list[str]:
        """Declared content types, in declaration order."""
        return list(self._content)

    def schema_for(self, content_type: str) -> Field | None:
        return self._entry(content_type)["schema"]

    def examples_for(self, content_type: str) -> dict:
        """Examples of a content type as an ordered mapping name -> body."""
        return dict(self._entry(content_type)["examples"])

    def example(self, content_type: str, name: str):
        examples = self._entry(content_type)["examples"]
        if name not in examples:
            raise ExampleNotFoundError(content_type, name)
        return examples[name]

    def _entry(self, content_type: str) -> dict:
        try:
            return self._content[content_type]
        except KeyError:
            raise ContentTypeNotFoundError(self._name, content_type) from None

    def to_map(self) -> dict:
        if isinstance(self._headers, Field):
            headers = self._headers.to_map()
        elif self._headers is not None:
            headers = {name: field.to_map() for name, field in self._headers.items()}
        else:
            headers = None

        content = {}
        for ct, entry in self._content.items():
            schema = entry["schema"]
            content[ct] = {
                "schema": schema.to_map() if schema is not None else None,
                "examples": dict(entry["examples"]),
            }
        return {"description": self._description, "headers": headers, "content": content}

    def get_refs(self) -> list[str]:
        return get_refs(self)


class ContentBuilder:
    """Accumulates body declarations, then freezes them into a ContentDescriptor."""

    kind = KIND_CONTENT

    def __init__(self, name: str):
        self.name = name
        self._description: str | None = None
        self._headers: Field | dict[str, Field] | None = None
        self._content: dict[str, dict] = {}

    def desc(self, text: str) -> "ContentBuilder":
        self._description = text
        return self

    def headers(self, spec) -> "ContentBuilder":
        """Shared headers: a schema descriptor, or a mapping header -> field spec."""
        if isinstance(spec, (JsonSchemaProvider, Field)):
            self._headers = Field.new(spec)
        elif isinstance(spec, dict):
            self._headers = {header: Field.new(opts) for header, opts in spec.items()}
        else:
            raise DefinitionError(f"Headers must be a schema or a mapping, got {spec!r}")
        return self

    def content(self, content_type: str) -> "ContentBuilder":
        """Declare a content type. Each content type may be declared once."""
        if content_type in self._content:
            raise DefinitionError(f"{self.name}: content type {content_type!r} declared twice")
        self._content[content_type] = {"schema": None, "examples": {}}
        return self

    def schema(self, content_type: str, spec, collection: str | None = None) -> "ContentBuilder":
        """Set the schema of a declared content type.

        ``spec`` is a single descriptor, a list of descriptors, or with
        ``collection="list"`` / ``"one_of"`` a sequence wrapped in that
        collection type.
        """
        entry = self._entry(content_type)
        if collection is not None:
            if collection not in COLLECTION_TYPES:
                raise DefinitionError(f"Unknown collection type {collection!r}")
            if not isinstance(spec, (list, tuple)):
                raise DefinitionError(f"A {collection!r} schema needs a list of members")
            entry["schema"] = Field.new({"type": collection, "of": list(spec)})
        else:
            entry["schema"] = Field.new(spec)
        return self

    def example(self, content_type: str, name: str, body) -> "ContentBuilder":
        """Add a named literal example to a declared content type."""
        examples = self._entry(content_type)["examples"]
        if name in examples:
            raise DefinitionError(
                f"{self.name}: example {name!r} declared twice for {content_type!r}"
            )
        examples[name] = body
        return self

    def _entry(self, content_type: str) -> dict:
        if content_type not in self._content:
            raise DefinitionError(
                f"{self.name}: content type {content_type!r} must be declared before use"
            )
        return self._content[content_type]

    def build(self) -> ContentDescriptor:
        if not self.name:
            raise DefinitionError("A body needs a name")
        if not self._content:
            raise DefinitionError(f"{self.name}: declare at least one content type")
        return ContentDescriptor(
            self.name, self._description, self._headers, self._content, kind=self.kind
        )


class RequestBodyBuilder(ContentBuilder):
    """A body rendered under ``components/requestBodies``."""

    kind = KIND_REQUEST_BODY


class ResponseBuilder(ContentBuilder):
    """A body rendered under ``components/responses``."""

    kind = KIND_RESPONSE

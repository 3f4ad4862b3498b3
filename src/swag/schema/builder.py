"""Schema descriptors and the builder that declares them.

Example::

    User = (
        SchemaBuilder("User", desc="A user record")
        .field("id", {"type": "uuid", "required": True})
        .field("comments", [Comment])
        .build()
    )
"""

from types import MappingProxyType

from swag.errors import DefinitionError
from swag.schema.field import Field
from swag.schema.interfaces import JsonSchemaProvider, MapSerializable


class SchemaDescriptor(MapSerializable, JsonSchemaProvider):
    """An immutable named object schema."""

    __slots__ = ("_name", "_description", "_fields")

    def __init__(self, name: str, description: str | None, fields: dict[str, Field]):
        self._name = name
        self._description = description
        self._fields = MappingProxyType(dict(fields))

    def __repr__(self) -> str:
        return f"SchemaDescriptor({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    def fields(self) -> dict[str, Field]:
        """Declared fields, in declaration order."""
        return dict(self._fields)

    def to_map(self) -> dict:
        return {
            "type": "object",
            "desc": self._description,
            "properties": {name: field.to_map() for name, field in self._fields.items()},
        }

    def get_refs(self) -> list[str]:
        refs: set[str] = set()
        for field in self._fields.values():
            refs |= field.get_refs()
        return sorted(refs)

    def to_json_schema(self) -> dict:
        schema: dict = {"type": "object"}
        if self._description:
            schema["description"] = self._description
        schema["properties"] = {
            name: field.to_json_schema() for name, field in self._fields.items()
        }
        required = [name for name, field in self._fields.items() if field.required]
        if required:
            schema["required"] = required
        return schema


class SchemaBuilder:
    """Accumulates field declarations, then freezes them into a SchemaDescriptor."""

    def __init__(self, name: str, desc: str | None = None):
        self.name = name
        self.desc = desc
        self._fields: dict[str, Field] = {}

    def field(self, name: str, spec) -> "SchemaBuilder":
        """Declare a field. Re-declaring a name replaces the earlier declaration."""
        self._fields[name] = Field.new(spec)
        return self

    def build(self, catalog=None) -> SchemaDescriptor:
        """Freeze the declarations; optionally register the result in ``catalog``."""
        if not self.name:
            raise DefinitionError("A schema needs a name")
        descriptor = SchemaDescriptor(self.name, self.desc, self._fields)
        if catalog is not None:
            catalog.register(descriptor)
        return descriptor

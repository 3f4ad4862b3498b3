"""Field model: one value descriptor inside a schema or body.

A field is a primitive (``string``, ``uuid``...), a reference to another
schema by name, or a ``list`` / ``one_of`` collection of nested fields.
References only store the target's name, so walking a field never loops.
"""

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from swag.errors import DefinitionError
from swag.schema.interfaces import JsonSchemaProvider

REF_TYPE = "ref"
COLLECTION_TYPES = ("list", "one_of")

COMPONENTS_PREFIX = "#/components/schemas/"

# primitive kind -> OpenAPI type/format
PRIMITIVE_TYPES = {
    "string": {"type": "string"},
    "integer": {"type": "integer"},
    "number": {"type": "number"},
    "float": {"type": "number", "format": "float"},
    "boolean": {"type": "boolean"},
    "uuid": {"type": "string", "format": "uuid"},
    "date": {"type": "string", "format": "date"},
    "datetime": {"type": "string", "format": "date-time"},
    "email": {"type": "string", "format": "email"},
    "uri": {"type": "string", "format": "uri"},
    "binary": {"type": "string", "format": "binary"},
    "object": {"type": "object"},
}


class Field(BaseModel):
    """A single value descriptor."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str  # primitive kind / ref / list / one_of
    desc: str | None = None
    required: bool | None = None
    ref: str | None = None  # target schema name, only for type "ref"
    of: tuple["Field", ...] | None = None  # only for list / one_of

    @model_validator(mode="after")
    def _check_shape(self):
        if self.type in COLLECTION_TYPES:
            if not self.of:
                raise ValueError(f"{self.type!r} field requires a non-empty 'of'")
        elif self.of is not None:
            raise ValueError(f"{self.type!r} field does not accept 'of'")

        if self.type == REF_TYPE:
            if not self.ref:
                raise ValueError("'ref' field requires a target name")
        elif self.ref is not None:
            raise ValueError(f"{self.type!r} field does not accept 'ref'")

        if (
            self.type not in PRIMITIVE_TYPES
            and self.type not in COLLECTION_TYPES
            and self.type != REF_TYPE
        ):
            raise ValueError(f"Unknown field type {self.type!r}")
        return self

    @classmethod
    def new(cls, spec) -> "Field":
        """Build a field from a descriptor, a kind, a list shorthand or an options dict.

        - ``User`` (a schema descriptor) -> reference to ``User``
        - ``"string"`` -> primitive string
        - ``[User]`` -> list of references to ``User``
        - ``{"type": "list", "of": [...], "desc": ...}`` -> explicit options

        Raises DefinitionError for anything malformed.
        """
        if isinstance(spec, Field):
            return spec
        if isinstance(spec, JsonSchemaProvider):
            return ref(spec.name)
        if isinstance(spec, str):
            return cls._build(type=spec)
        if isinstance(spec, (list, tuple)):
            return cls._build(type="list", of=[cls.new(s) for s in spec])
        if isinstance(spec, dict):
            opts = dict(spec)
            if "of" in opts:
                if not isinstance(opts["of"], (list, tuple)):
                    raise DefinitionError(f"'of' must be a list, got {opts['of']!r}")
                opts["of"] = [cls.new(s) for s in opts["of"]]
            if isinstance(opts.get("ref"), JsonSchemaProvider):
                opts["ref"] = opts["ref"].name
            return cls._build(**opts)
        raise DefinitionError(f"Cannot build a field from {spec!r}")

    @classmethod
    def _build(cls, **opts) -> "Field":
        try:
            return cls(**opts)
        except ValidationError as e:
            raise DefinitionError(f"Invalid field {opts!r}: {e}") from e

    @property
    def is_ref(self) -> bool:
        return self.type == REF_TYPE

    def get_refs(self) -> set[str]:
        """Names of every schema reachable from this field."""
        if self.type == REF_TYPE:
            return {self.ref}
        refs: set[str] = set()
        for member in self.of or ():
            refs |= member.get_refs()
        return refs

    def to_map(self) -> dict:
        data = {"type": self.type}
        if self.ref is not None:
            data["ref"] = self.ref
        if self.desc is not None:
            data["desc"] = self.desc
        if self.required is not None:
            data["required"] = self.required
        if self.of is not None:
            data["of"] = [member.to_map() for member in self.of]
        return data

    def to_json_schema(self) -> dict:
        """Render as an OpenAPI schema object."""
        if self.type == REF_TYPE:
            # siblings of $ref are ignored by OpenAPI 3.0
            return {"$ref": f"{COMPONENTS_PREFIX}{self.ref}"}

        if self.type in COLLECTION_TYPES:
            members = [member.to_json_schema() for member in self.of]
            if self.type == "list":
                items = members[0] if len(members) == 1 else {"oneOf": members}
                schema = {"type": "array", "items": items}
            else:
                schema = {"oneOf": members}
        else:
            schema = dict(PRIMITIVE_TYPES[self.type])

        if self.desc:
            schema["description"] = self.desc
        return schema


def ref(name: str) -> Field:
    """Reference another schema by name (it may be declared later)."""
    return Field._build(type=REF_TYPE, ref=name)

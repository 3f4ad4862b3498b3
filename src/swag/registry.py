"""Component registry built during a generation pass.

Each record contributes a partial registry; partials are merged by a single
reduce step, so no registry is ever written from two threads.
"""

from swag.schema.content import KIND_REQUEST_BODY, KIND_RESPONSE, ContentDescriptor
from swag.schema.field import Field
from swag.schema.interfaces import MapSerializable, can_generate_schema
from swag.schema.refs import SchemaCatalog


class SchemaRegistry:
    """Rendered component schemas by name, plus names nothing could resolve.

    Named response and request-body descriptors are kept alongside, keyed by
    descriptor name, so a renderer can emit them as reusable components.
    """

    def __init__(
        self,
        schemas: dict[str, dict] | None = None,
        outstanding=(),
        *,
        responses: dict[str, ContentDescriptor] | None = None,
        request_bodies: dict[str, ContentDescriptor] | None = None,
    ):
        self.schemas: dict[str, dict] = dict(schemas or {})
        self.outstanding: set[str] = set(outstanding) - self.schemas.keys()
        self.responses: dict[str, ContentDescriptor] = dict(responses or {})
        self.request_bodies: dict[str, ContentDescriptor] = dict(request_bodies or {})

    def __contains__(self, name: str) -> bool:
        return name in self.schemas

    def __repr__(self) -> str:
        return f"SchemaRegistry(schemas={sorted(self.schemas)}, outstanding={sorted(self.outstanding)})"

    def get(self, name: str) -> dict | None:
        return self.schemas.get(name)

    def merge(self, other: "SchemaRegistry") -> "SchemaRegistry":
        """Return a new registry holding both; the first entry seen for a name is kept."""
        return SchemaRegistry(
            _first_wins(self.schemas, other.schemas),
            self.outstanding | other.outstanding,
            responses=_first_wins(self.responses, other.responses),
            request_bodies=_first_wins(self.request_bodies, other.request_bodies),
        )


def _first_wins(left: dict, right: dict) -> dict:
    merged = dict(left)
    for name, value in right.items():
        merged.setdefault(name, value)
    return merged


def generate_schema_refs(record, catalog: SchemaCatalog | None = None) -> SchemaRegistry:
    """Partial registry for one record.

    Responses and the body that can render themselves as schemas are
    registered directly; every name they, the query params or the header,
    query and body field specs reference is resolved through ``catalog``.
    Query params are inlined as parameters, so they are never a component
    themselves. Values without either capability are skipped.
    """
    values = [*record.responses.values(), record.body]

    direct = [value for value in values if can_generate_schema(value)]
    names = {value.name for value in direct}
    for value in [*values, record.query_params, record.headers]:
        if isinstance(value, MapSerializable):
            names.update(value.get_refs())
    names |= _param_refs(record.headers)
    names |= _param_refs(record.query_params)
    names |= _param_refs(record.body)

    lookup = SchemaCatalog(catalog or ())
    for value in direct:
        if value.name not in lookup:
            lookup.register(value)

    found, outstanding = lookup.resolve(names)
    return SchemaRegistry(
        {name: descriptor.to_json_schema() for name, descriptor in found.items()},
        outstanding,
        responses={
            value.name: value
            for value in record.responses.values()
            if _is_component(value, KIND_RESPONSE)
        },
        request_bodies=(
            {record.body.name: record.body} if _is_component(record.body, KIND_REQUEST_BODY) else {}
        ),
    )


def _is_component(value, kind: str) -> bool:
    return isinstance(value, ContentDescriptor) and value.kind == kind


def _param_refs(params) -> set[str]:
    if not isinstance(params, dict):
        return set()
    refs: set[str] = set()
    for spec in params.values():
        refs |= Field.new(spec).get_refs()
    return refs

"""Reference collection over serialized descriptors.

References are walked on the plain map form so that anything that can be
serialized can be inspected the same way.
"""

import logging

from swag.schema.field import REF_TYPE
from swag.schema.interfaces import JsonSchemaProvider, MapSerializable

logger = logging.getLogger(__name__)


def collect_field_refs(field_map: dict | None) -> set[str]:
    """Names referenced by a field in map form, directly or through ``of``."""
    if not field_map:
        return set()
    if field_map.get("type") == REF_TYPE:
        return {field_map["ref"]}
    refs: set[str] = set()
    for member in field_map.get("of") or ():
        refs |= collect_field_refs(member)
    return refs


def collect_refs(data: dict, refs: set[str]) -> set[str]:
    """Add the references found in ``data`` to ``refs``.

    Covers body maps (headers and content schemas) and schema maps
    (properties).
    """
    refs = _add_headers_ref(refs, data)
    refs = _add_content_refs(refs, data)
    return _add_properties_refs(refs, data)


def _add_headers_ref(refs: set[str], data: dict) -> set[str]:
    headers = data.get("headers")
    if not isinstance(headers, dict):
        return refs
    if headers.get("type") == REF_TYPE:
        return refs | {headers["ref"]}
    for field_map in headers.values():
        if isinstance(field_map, dict):
            refs = refs | collect_field_refs(field_map)
    return refs


def _add_content_refs(refs: set[str], data: dict) -> set[str]:
    for entry in (data.get("content") or {}).values():
        refs = refs | collect_field_refs(entry.get("schema"))
    return refs


def _add_properties_refs(refs: set[str], data: dict) -> set[str]:
    for field_map in (data.get("properties") or {}).values():
        refs = refs | collect_field_refs(field_map)
    return refs


def get_refs(descriptor: MapSerializable) -> list[str]:
    """Distinct schema names a body or schema descriptor touches, sorted."""
    data = descriptor.to_map()
    return sorted(collect_refs(data, set()))


class SchemaCatalog:
    """Name -> schema descriptor lookup used to resolve references."""

    def __init__(self, descriptors=()):
        self._schemas: dict[str, JsonSchemaProvider] = {}
        for descriptor in descriptors:
            self.register(descriptor)

    def __contains__(self, name: str) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self):
        return iter(self._schemas.values())

    def register(self, descriptor: JsonSchemaProvider) -> JsonSchemaProvider:
        existing = self._schemas.get(descriptor.name)
        if existing is not None and existing is not descriptor:
            logger.warning("Schema %r registered twice, keeping the latest", descriptor.name)
        self._schemas[descriptor.name] = descriptor
        return descriptor

    def get(self, name: str) -> JsonSchemaProvider | None:
        return self._schemas.get(name)

    def resolve(self, names) -> tuple[dict[str, JsonSchemaProvider], set[str]]:
        """Follow references transitively from ``names``.

        Returns the descriptors found by name and the names that could not
        be resolved. Never raises for unknown names.
        """
        found: dict[str, JsonSchemaProvider] = {}
        outstanding: set[str] = set()
        pending = list(names)
        while pending:
            name = pending.pop()
            if name in found or name in outstanding:
                continue
            descriptor = self._schemas.get(name)
            if descriptor is None:
                outstanding.add(name)
                continue
            found[name] = descriptor
            if isinstance(descriptor, MapSerializable):
                pending.extend(descriptor.get_refs())
        return found, outstanding

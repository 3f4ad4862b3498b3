"""Documentation records, one per route."""

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from swag.annotations import DocEntry, fetch_doc
from swag.errors import DefinitionError
from swag.pipe_through import MERGED_KEYS, deep_merge, pipe_through_mapping
from swag.router import Route
from swag.schema.builder import SchemaDescriptor

logger = logging.getLogger(__name__)


class DocRecord(BaseModel):
    """Everything known about one documented route."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, extra="allow")

    path: str
    verb: str
    pipe_through: list[str] | None = None
    description: str | None = ""  # None when a localized description misses the locale
    headers: dict = {}  # {name: field spec}; a schema descriptor is expanded to its fields
    query_params: Any = {}  # {name: field spec} or a schema descriptor
    body: Any = {}  # body descriptor, schema descriptor or {} when absent
    responses: dict = {}  # {status: body descriptor | schema descriptor}
    tags: list[str] = []
    metadata: dict = {}


def localize(description, locale: str) -> str | None:
    """Absent -> "", localized mapping -> entry for ``locale`` (or None), else as-is."""
    if description is None:
        return ""
    if isinstance(description, dict):
        return description.get(locale)
    return description


def new_record(doc: DocEntry, config, route: Route | None = None, **fields) -> DocRecord:
    """Combine a route, its doc annotation and pipe-through defaults into a record.

    Annotation values win over pipe-through defaults; nested maps merge.
    """
    optional: dict = {}
    if route is not None:
        optional.update(path=route.path, verb=route.verb, pipe_through=route.pipe_through)
    optional.update(fields)

    defaults = pipe_through_mapping(optional.get("pipe_through"), config)
    annotation = {k: v for k, v in doc.metadata.items() if k != "metadata"}
    if isinstance(annotation.get("headers"), SchemaDescriptor):
        annotation["headers"] = annotation["headers"].fields()

    data = deep_merge(optional, annotation)
    for key in MERGED_KEYS:
        data[key] = _with_default(defaults[key], annotation.get(key))
    data["description"] = localize(doc.description, config.locale)
    data["metadata"] = doc.metadata.get("metadata", {})

    try:
        return DocRecord(**data)
    except ValidationError as e:
        where = f"{data.get('verb', '').upper()} {data.get('path', '')}".strip()
        raise DefinitionError(f"Invalid documentation for {where or 'route'}: {e}") from e


def _with_default(default, value):
    if value is None:
        return default
    if isinstance(default, dict) and isinstance(value, dict):
        return deep_merge(default, value)
    return value


def generate_record(route: Route, config) -> DocRecord:
    """Build the record of one route. Pure function of the route and config."""
    logger.debug("Documenting %s %s", route.verb.upper(), route.path)
    return new_record(fetch_doc(route.handler, route.action), config, route)

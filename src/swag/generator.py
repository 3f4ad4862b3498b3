"""Generation pipeline.

Routes are documented independently on a thread pool; the schema registry is
built by reducing per-record partials on the calling thread. Output goes to
the writer strictly as: prelude, path groups joined by ",", footer, close.
Any failure aborts the pass; the writer is still closed.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from typing import NamedTuple

from swag.config import Config
from swag.errors import UnresolvedReferenceError
from swag.record import DocRecord, generate_record
from swag.registry import SchemaRegistry, generate_schema_refs

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ","


class GenerationResult(NamedTuple):
    records: list[DocRecord]  # every documented route, filtered ones included
    rendered: int  # number of records written
    schemas: SchemaRegistry


def build_records(config: Config, pool: ThreadPoolExecutor) -> list[DocRecord]:
    """Document every route, keeping route order."""
    return list(pool.map(lambda route: generate_record(route, config), config.router.routes()))


def build_registry(records: list[DocRecord], config: Config, pool: ThreadPoolExecutor) -> SchemaRegistry:
    """Collect component schemas: disjoint parallel map, then a single reduce."""
    partials = list(pool.map(lambda record: generate_schema_refs(record, config.catalog), records))
    registry = reduce(SchemaRegistry.merge, partials, SchemaRegistry())

    if registry.outstanding:
        names = sorted(registry.outstanding)
        if config.strict_refs:
            raise UnresolvedReferenceError(names)
        logger.warning("Unresolved schema references: %s", ", ".join(names))
    return registry


def group_by_path(records, key=None) -> dict[str, list[DocRecord]]:
    """Group records by path, in order of first appearance.

    ``key`` maps a route path to its rendered form, so that spellings of the
    same path (``/u/:id`` and ``/u/{id}``) land in one group.
    """
    groups: dict[str, list[DocRecord]] = {}
    for record in records:
        path = key(record.path) if key else record.path
        groups.setdefault(path, []).append(record)
    return groups


def _render_group(item, registry: SchemaRegistry, config: Config) -> str:
    path, records = item
    processor = config.processor
    fragments = [processor.process(record, registry, config) for record in records]
    return processor.group(path, fragments)


def generate_documentation(config: Config) -> GenerationResult:
    """Run one generation pass and write its output."""
    processor = config.processor
    writer = config.writer.module

    handle = writer.init(config)
    try:
        writer.write(handle, processor.init(config))

        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            records = build_records(config, pool)
            logger.debug("Documented %d routes", len(records))
            registry = build_registry(records, config, pool)

            kept = [record for record in records if not config.rejects(record)]
            groups = group_by_path(kept, key=processor.path_key)
            bodies = list(
                pool.map(lambda item: _render_group(item, registry, config), groups.items())
            )

        writer.write(handle, PATH_SEPARATOR.join(bodies))
        writer.write(handle, processor.finalize(registry, config))
    finally:
        writer.close(handle)

    return GenerationResult(records=records, rendered=len(kept), schemas=registry)

"""Processor interface that renders records into an output format.

The generator writes ``init(config)`` first, then the groups of rendered
records joined by ``","``, then ``finalize(schemas, config)``.
"""

from abc import ABC, abstractmethod


class Processor(ABC):
    @abstractmethod
    def init(self, config) -> str:
        """Text written before any path."""

    @abstractmethod
    def process(self, record, schemas, config) -> str:
        """Render one documentation record."""

    def path_key(self, path: str) -> str:
        """Key records are grouped under; routes with equal keys render as one path."""
        return path

    def group(self, path: str, fragments: list[str]) -> str:
        """Combine the rendered records that share ``path``."""
        return ",".join(fragments)

    @abstractmethod
    def finalize(self, schemas, config) -> str:
        """Text written after every path."""

"""Capability interfaces for descriptors.

Values take part in serialization or schema generation by implementing
these base classes; callers check capabilities with ``isinstance``.
"""

from abc import ABC, abstractmethod


class MapSerializable(ABC):
    """A descriptor that can be projected to plain nested maps."""

    @abstractmethod
    def to_map(self) -> dict:
        """Return the plain map form of this descriptor."""

    @abstractmethod
    def get_refs(self) -> list[str]:
        """Return the sorted names of schemas this descriptor references."""


class JsonSchemaProvider(ABC):
    """A named descriptor that renders itself as a component schema."""

    name: str

    @abstractmethod
    def to_json_schema(self) -> dict:
        """Return the OpenAPI schema object for this descriptor."""


def can_generate_schema(value) -> bool:
    """Whether ``value`` can be registered as a component schema."""
    return isinstance(value, JsonSchemaProvider)

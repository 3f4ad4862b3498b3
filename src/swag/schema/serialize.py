"""Projection of descriptors to plain nested maps."""

from swag.schema.interfaces import MapSerializable


def to_map(descriptor) -> dict:
    """Serialize a schema or body descriptor. Pure and repeatable."""
    if not isinstance(descriptor, MapSerializable):
        raise TypeError(f"{descriptor!r} cannot be serialized to a map")
    return descriptor.to_map()

"""Exception hierarchy for swag.

Definition-time problems (malformed fields, duplicate content types or
examples) are raised while descriptors are built. Everything raised by the
generation pass propagates and aborts it.
"""


class SwagError(Exception):
    """Base class for all swag errors."""


class DefinitionError(SwagError, ValueError):
    """A schema, field or content declaration is malformed."""


class ContentTypeNotFoundError(SwagError, LookupError):
    """A content type was looked up on a descriptor that never declared it."""

    def __init__(self, descriptor: str, content_type: str):
        self.descriptor = descriptor
        self.content_type = content_type
        super().__init__(f"{descriptor!r} declares no content type {content_type!r}")


class ExampleNotFoundError(SwagError, LookupError):
    """An example name was looked up that the content type never declared."""

    def __init__(self, content_type: str, name: str):
        self.content_type = content_type
        self.name = name
        super().__init__(f"No example {name!r} declared for {content_type!r}")


class DocumentationError(SwagError):
    """A route's handler action could not be found for doc extraction."""


class ConfigError(SwagError):
    """The generator configuration is invalid or cannot be loaded."""


class UnresolvedReferenceError(SwagError):
    """Raised in strict mode when schema references point at unknown schemas."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(f"Unresolved schema references: {', '.join(names)}")

"""Documentation annotations on handler actions.

    class UsersController:
        @doc(responses={200: UserResponse}, tags=["users"])
        def show(self, request):
            \"\"\"Fetch a single user.\"\"\"
"""

import inspect
from typing import NamedTuple

from swag.errors import DocumentationError

DOC_ATTR = "__swag_doc__"


class DocEntry(NamedTuple):
    description: str | dict | None  # None when absent, dict when localized
    metadata: dict


def doc(**metadata):
    """Attach documentation metadata to a handler action.

    Recognised keys: ``description`` (string or locale -> string mapping),
    ``headers``, ``query_params``, ``body``, ``responses``, ``tags`` and
    ``metadata``. Other keys are carried onto the record as-is.
    """

    def decorator(func):
        existing = getattr(func, DOC_ATTR, {})
        setattr(func, DOC_ATTR, {**existing, **metadata})
        return func

    return decorator


def fetch_doc(handler, action: str) -> DocEntry:
    """Return the documentation attached to ``handler.action``.

    The description comes from the annotation, then the docstring; it is
    None when neither is present.
    """
    func = getattr(handler, action, None)
    if func is None or not callable(func):
        raise DocumentationError(f"{_handler_name(handler)} has no action {action!r}")

    metadata = dict(getattr(func, DOC_ATTR, {}))
    description = metadata.pop("description", None)
    if description is None:
        description = inspect.getdoc(func)
    return DocEntry(description=description, metadata=metadata)


def _handler_name(handler) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))

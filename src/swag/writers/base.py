"""Writer sink interface.

A generation pass calls ``init`` once, ``write`` one or more times, then
``close`` once.
"""

from abc import ABC, abstractmethod


class Writer(ABC):
    @abstractmethod
    def init(self, config):
        """Open the sink and return a handle for ``write`` / ``close``."""

    @abstractmethod
    def write(self, handle, content: str) -> None:
        ...

    @abstractmethod
    def close(self, handle) -> None:
        ...

"""Writes the generated document to a file."""

from pathlib import Path

from swag.errors import ConfigError
from swag.writers.base import Writer


class FileWriter(Writer):
    """Writes to ``writer.config.file_path``, creating parent directories."""

    def init(self, config):
        path = self._file_path(config)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path.open("w", encoding="utf-8")

    def write(self, handle, content: str) -> None:
        handle.write(content)

    def close(self, handle) -> None:
        handle.close()

    def _file_path(self, config) -> Path:
        file_path = config.writer.config.get("file_path")
        if not file_path:
            raise ConfigError("The file writer needs writer.config.file_path")
        return Path(file_path)

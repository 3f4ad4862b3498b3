"""Generator configuration.

A config names the router to document, the processor that renders records
and the writer that receives the output. It is usually loaded from YAML::

    title: Users API
    version: 1.2.0
    locale: en
    router: myapp.web:router
    catalog: myapp.schemas:catalog
    processor: openapi
    writer:
      module: file
      config:
        file_path: build/openapi.json
    pipe_through_mapping:
      api:
        headers:
          X-Api-Key: {type: string, required: true}
    filter:
      - "GET /health"
"""

import importlib
from fnmatch import fnmatch
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from swag.errors import ConfigError
from swag.schema.refs import SchemaCatalog

BUILTIN_PROCESSORS = {
    "openapi": "swag.processors.openapi:OpenAPIProcessor",
}

BUILTIN_WRITERS = {
    "file": "swag.writers.file:FileWriter",
    "stdout": "swag.writers.stdout:StdoutWriter",
}


def import_object(target: str):
    """Import ``package.module:attr`` (or ``package.module.attr``)."""
    if ":" in target:
        module_name, _, attr = target.partition(":")
    else:
        module_name, _, attr = target.rpartition(".")
    if not module_name or not attr:
        raise ConfigError(f"Cannot import {target!r}: expected 'package.module:attr'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import {target!r}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ConfigError(f"Module {module_name!r} has no attribute {attr!r}") from None


def _instantiate(value, builtins: dict[str, str]):
    if isinstance(value, str):
        value = import_object(builtins.get(value, value))
    if isinstance(value, type):
        value = value()
    return value


class WriterConfig(BaseModel):
    """Which writer to use and its options."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    module: Any = Field(default="stdout", validate_default=True)
    config: dict = {}

    @field_validator("module", mode="before")
    @classmethod
    def _resolve_module(cls, value):
        return _instantiate(value, BUILTIN_WRITERS)


class Config(BaseModel):
    """Everything a generation pass needs."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    title: str = "API"
    version: str = "1.0.0"
    description: str | None = None
    locale: str = "en"
    router: Any
    catalog: Any = Field(default=None, validate_default=True)
    processor: Any = Field(default="openapi", validate_default=True)
    writer: WriterConfig = Field(default_factory=WriterConfig)
    pipe_through_mapping: dict[str, dict] | None = None
    filter: Any = None  # "VERB /path" / "/path" glob patterns, or a predicate
    workers: int | None = None
    strict_refs: bool = False

    @field_validator("router", mode="before")
    @classmethod
    def _resolve_router(cls, value):
        if isinstance(value, str):
            value = import_object(value)
        if not callable(getattr(value, "routes", None)):
            raise ConfigError(f"Router {value!r} has no routes() method")
        return value

    @field_validator("catalog", mode="before")
    @classmethod
    def _resolve_catalog(cls, value):
        if value is None:
            return SchemaCatalog()
        if isinstance(value, str):
            value = import_object(value)
        if isinstance(value, SchemaCatalog):
            return value
        if isinstance(value, (list, tuple)):
            return SchemaCatalog(value)
        raise ConfigError(f"Catalog must be a SchemaCatalog or a list of schemas, got {value!r}")

    @field_validator("processor", mode="before")
    @classmethod
    def _resolve_processor(cls, value):
        return _instantiate(value, BUILTIN_PROCESSORS)

    @field_validator("writer", mode="before")
    @classmethod
    def _normalize_writer(cls, value):
        if isinstance(value, str):
            return {"module": value}
        return value

    @field_validator("filter", mode="before")
    @classmethod
    def _normalize_filter(cls, value):
        if isinstance(value, str):
            return [value]
        return value

    def rejects(self, record) -> bool:
        """Whether ``record`` is excluded from the rendered paths."""
        if self.filter is None:
            return False
        if callable(self.filter):
            return bool(self.filter(record))
        return any(_matches(pattern, record) for pattern in self.filter)


def _matches(pattern: str, record) -> bool:
    """Match 'POST /pets' or '/pets/*' style patterns against a record."""
    parts = pattern.strip().split(None, 1)
    if len(parts) == 2:
        verb, path_pattern = parts
        return verb.lower() == record.verb.lower() and fnmatch(record.path, path_pattern)
    return fnmatch(record.path, parts[0])


def load_config(path: Path, **overrides) -> Config:
    """Load a YAML config file. ``None`` overrides are ignored."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

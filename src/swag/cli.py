"""CLI entry point for swag."""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import click

from swag.config import Config, load_config
from swag.errors import SwagError
from swag.generator import build_records, build_registry, generate_documentation


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_path: Path, app_dir: Path, **overrides) -> Config:
    """Load the config with the application directory importable."""
    app_dir = str(app_dir.resolve())
    if app_dir not in sys.path:
        sys.path.insert(0, app_dir)
    try:
        return load_config(config_path, **overrides)
    except SwagError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def main():
    """Generate API documentation from an application's routes."""
    pass


@main.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the document to this file instead of the configured writer.")
@click.option("--locale", default=None, help="Locale used for localized descriptions.")
@click.option("--strict", is_flag=True, default=False, help="Fail when schema references cannot be resolved.")
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory the application is imported from.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log every documented route.")
def generate(config_path: Path, output: Path | None, locale: str | None, strict: bool, app_dir: Path, verbose: bool):
    """Generate the API document described by CONFIG_PATH."""
    _setup_logging(verbose)

    overrides: dict = {"locale": locale}
    if strict:
        overrides["strict_refs"] = True
    if output is not None:
        overrides["writer"] = {"module": "file", "config": {"file_path": str(output)}}

    config = _load(config_path, app_dir, **overrides)
    click.echo(f"Generating {config.title} {config.version}...", err=True)
    try:
        result = generate_documentation(config)
    except SwagError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Documented {result.rendered} of {len(result.records)} routes.", err=True)
    if output is not None:
        click.echo(f"Document saved to {output}", err=True)


@main.command()
@click.argument("config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--app-dir", default=".", type=click.Path(file_okay=False, path_type=Path), help="Directory the application is imported from.")
def schemas(config_path: Path, app_dir: Path):
    """List the component schemas the routes reference."""
    _setup_logging(False)
    config = _load(config_path, app_dir)

    try:
        with ThreadPoolExecutor(max_workers=config.workers) as pool:
            registry = build_registry(build_records(config, pool), config, pool)
    except SwagError as e:
        raise click.ClickException(str(e)) from e

    for name in sorted(registry.schemas):
        click.echo(name)
    for name in sorted(registry.outstanding):
        click.echo(f"{name} (unresolved)")

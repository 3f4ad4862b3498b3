"""Writes the generated document to standard output."""

import click

from swag.writers.base import Writer


class StdoutWriter(Writer):
    def init(self, config):
        return None

    def write(self, handle, content: str) -> None:
        click.echo(content, nl=False)

    def close(self, handle) -> None:
        click.echo("")

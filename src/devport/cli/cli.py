"""Main CLI entry point for devport"""

import asyncclick as click

from devport import __version__
from . import commands


@click.group()
@click.version_option(version=__version__, prog_name="devport")
def cli() -> None:
    """Development server with consistent port allocation."""
    pass


cli.add_command(commands.serve)

if __name__ == "__main__":
    cli()

"""CLI command for serving the build output with live reload"""
from pathlib import Path

import asyncclick as click

from devport.cli.exceptions import ProxyURLMissingScheme
from devport.cli.handlers import ServeHandler
from devport.cli.models import ServeOptions
from devport.shared.logging import get_logger
from devport.shared.settings import port_settings

logger = get_logger()

ENVIRONMENT_ALIASES = {
    "dev": "development",
    "prod": "production",
}


def expand_environment(ctx: click.Context, param: click.Parameter, value: str) -> str:
    return ENVIRONMENT_ALIASES.get(value, value)


@click.command(name="serve")
@click.option(
    "--port", "-p",
    type=click.IntRange(0, 65535),
    default=lambda: port_settings.default_port,
    show_default="$PORT or 4200",
    help="Port for the development server (0 = find a free port)"
)
@click.option(
    "--host", "-H",
    type=str,
    default=None,
    help="Host to listen on (listens on all interfaces by default)"
)
@click.option(
    "--proxy", "--pr", "--pxy",
    type=str,
    default=None,
    help="URL requests not matching a file are forwarded to"
)
@click.option(
    "--insecure-proxy/--secure-proxy", "--inspr",
    default=False,
    help="Allow proxying to targets with self-signed SSL certificates"
)
@click.option(
    "--watcher", "-w",
    type=str,
    default="events",
    show_default=True
)
@click.option(
    "--live-reload/--no-live-reload", "--lr",
    default=True,
    show_default=True
)
@click.option(
    "--live-reload-host", "--lrh",
    type=str,
    default=None,
    help="Host of the live reload server (defaults to host)"
)
@click.option(
    "--live-reload-base-url", "--lrbu",
    type=str,
    default=None,
    help="Base URL of the live reload server (defaults to base URL)"
)
@click.option(
    "--live-reload-port", "--lrp",
    type=click.IntRange(1, 65535),
    default=None,
    help="First port tried for live reload (defaults to a port within [49152...65535])"
)
@click.option(
    "--environment", "-e",
    type=str,
    default="development",
    show_default=True,
    callback=expand_environment,
    help="Build environment, 'dev' and 'prod' are accepted as aliases"
)
@click.option(
    "--output-path", "--op", "--out",
    type=click.Path(path_type=Path),
    default=Path("dist"),
    show_default=True
)
@click.option(
    "--ssl/--no-ssl",
    default=False,
    show_default=True
)
@click.option(
    "--ssl-key",
    type=click.Path(path_type=Path),
    default=Path("ssl/server.key"),
    show_default=True
)
@click.option(
    "--ssl-cert",
    type=click.Path(path_type=Path),
    default=Path("ssl/server.crt"),
    show_default=True
)
async def serve(**options) -> None:
    """Serve the build output, with a live reload port free on every interface"""

    try:
        await ServeHandler().run(ServeOptions(**options))

    except ProxyURLMissingScheme as ex:
        raise click.ClickException(str(ex))
    except Exception as ex:
        logger.exception(f"Failed to start development server: {str(ex)}")
        raise click.ClickException(f"Unable to start development server: {str(ex)}")

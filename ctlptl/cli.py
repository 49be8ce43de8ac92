"""ctlptl CLI — the main entry point."""

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler

from ctlptl import __version__
from ctlptl.config import Settings
from ctlptl.printers import OUTPUT_FORMATS
from ctlptl.registry.controller import default_controller
from ctlptl.registry.defaults import DEFAULT_REGISTRY_IMAGE_REF

err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(err: Exception) -> NoReturn:
    """Report ``err`` on one line of stderr and exit non-zero."""
    click.echo(str(err), err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """ctlptl — declarative setup for local container registries."""
    settings = Settings()
    _configure_logging("DEBUG" if verbose else settings.LOG_LEVEL)
    for problem in settings.problems:
        logger.warning(problem)
    logger.debug("%r", settings)
    ctx.obj = settings


# ── Create ───────────────────────────────────────────────────────────


@main.group()
def create():
    """Create a resource."""


@create.command(
    name="registry",
    epilog=(
        "\b\nExamples:\n"
        "  ctlptl create registry ctlptl-registry\n"
        "  ctlptl create registry ctlptl-registry --port=5000\n"
        "  ctlptl create registry ctlptl-registry --port=5000 --listen-address 0.0.0.0\n"
        "  ctlptl create registry ctlptl-pull-through-registry "
        "--proxy-remote-url=https://registry-1.docker.io"
    ),
)
@click.argument("name")
@click.option(
    "--port",
    default=0,
    type=click.IntRange(min=0),
    help="The port to expose the registry on host. If not specified, chooses a random port",
)
@click.option(
    "--listen-address",
    default="",
    help="The host's IP address to bind the container to. If not set defaults to 127.0.0.1",
)
@click.option("--image", default=DEFAULT_REGISTRY_IMAGE_REF, help="Registry image to use")
@click.option("--proxy-remote-url", default="", help="The remote URL for the pull-through proxy")
@click.option(
    "--proxy-username", default="", help="The username for the pull-through proxy authentication"
)
@click.option(
    "--proxy-password", default="", help="The password for the pull-through proxy authentication"
)
@click.option("--proxy-ttl", default="", help="The TTL for the pull-through proxy cache")
@click.option(
    "--output",
    "-o",
    default="",
    help=f"Output format. One of: {', '.join(f for f in OUTPUT_FORMATS if f)}",
)
@click.pass_obj
def create_registry(
    settings: Settings,
    name: str,
    port: int,
    listen_address: str,
    image: str,
    proxy_remote_url: str,
    proxy_username: str,
    proxy_password: str,
    proxy_ttl: str,
    output: str,
):
    """Create a registry with the given name."""
    from ctlptl.analytics import Analytics
    from ctlptl.cmd.create_registry import CreateRegistryOptions, RegistryFlags
    from ctlptl.printers import PrintFlags

    options = CreateRegistryOptions(
        flags=RegistryFlags(
            port=port,
            listen_address=listen_address,
            image=image,
            proxy_remote_url=proxy_remote_url,
            proxy_username=proxy_username,
            proxy_password=proxy_password,
            proxy_ttl=proxy_ttl,
        ),
        print_flags=PrintFlags(operation="created", output_format=output),
        analytics=Analytics.from_settings(settings),
        out=sys.stdout,
    )

    try:
        controller = default_controller()
    except Exception as e:
        _fail(e)

    try:
        options.run(controller, name)
    except Exception as e:
        _fail(e)


if __name__ == "__main__":
    main()

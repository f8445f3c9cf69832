"""
Engine Components CLI - Main Entry Point
"""

from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .commands import components
from .core.config import load_settings
from .core.errors import ConfigError
from .utils.display import console
from .utils.logger import setup_logging, log_exception, debug_print

app = typer.Typer(
    name="engine-components",
    help="🐳 Manage the container-based components of the engine",
    add_completion=False,
    no_args_is_help=True
)

# Register component commands
app.command(name="list")(components.list)
app.command(name="install")(components.install)
app.command(name="status")(components.status)
app.command(name="purge")(components.purge)


@app.command()
def version():
    """🔖 Show version information"""
    console.print("[cyan bold]Engine Components CLI[/cyan bold]")
    console.print(f"Version: {__version__}")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug output"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yml")
):
    """
    Engine Components CLI

    Install, inspect and purge the engine's images, containers and volumes.
    """
    try:
        settings = load_settings(config)
    except ConfigError as e:
        setup_logging(debug)
        log_exception(e, "Invalid configuration")
        raise typer.Exit(1)

    settings.debug = settings.debug or debug
    setup_logging(settings.debug)
    debug_print(f"settings: {settings}")
    components.configure(settings)


if __name__ == "__main__":
    app()

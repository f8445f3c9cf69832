"""
Component commands
list, install, status and purge of the tool's components
"""

import json as json_lib
from typing import List, Optional

import typer

from ..core.components import ComponentManager, in_namespace
from ..core.config import Settings
from ..core.errors import ComponentError
from ..core.identity import image_namespace, split_image_reference
from ..core.runtime import ContainerRuntime, DockerRuntime
from ..utils.display import (
    console, create_components_table, create_status_table,
    format_installed, show_purge_plan, create_progress_context
)
from ..utils.logger import log_exception

app = typer.Typer()

_settings = Settings()


def configure(settings: Settings):
    """Set the settings used to build the component manager"""
    global _settings
    _settings = settings


def get_runtime() -> ContainerRuntime:
    """Build the container runtime from the current settings"""
    return DockerRuntime(base_url=_settings.docker_host, timeout=_settings.docker_timeout)


def get_manager() -> ComponentManager:
    return ComponentManager(
        get_runtime(),
        image_removal_timeout=_settings.image_removal_timeout
    )


def fail(e: Exception, context: str):
    """Report a failure and exit non-zero"""
    log_exception(e, context)
    raise typer.Exit(1)


@app.command()
def list(
    namespace: Optional[List[str]] = typer.Option(None, "--namespace", "-n", help="Only show these namespaces"),
    json: bool = typer.Option(False, "--json", help="Output as JSON")
):
    """📋 List installed components"""
    filters = []
    if namespace:
        filters.append(in_namespace(*namespace))

    try:
        components = get_manager().list(*filters)
    except ComponentError as e:
        fail(e, "Could not list components")

    if json:
        console.print(json_lib.dumps(components, indent=2))
        return

    if not components:
        console.print("[yellow]No components installed[/yellow]")
        return

    table = create_components_table()
    for ref in components:
        image, version = split_image_reference(ref)
        table.add_row(image, version, image_namespace(image))

    console.print(table)
    console.print(f"\n[cyan]Total: {len(components)} components[/cyan]")


@app.command()
def install(
    refs: List[str] = typer.Argument(..., help="Component images, e.g. srcd/gitbase:v0.17.0")
):
    """📥 Install (pull) components"""
    manager = get_manager()

    with create_progress_context() as progress:
        task = progress.add_task("Installing...", total=None)

        for ref in refs:
            progress.update(task, description=f"📥 Pulling {ref}...")
            try:
                manager.install(ref)
            except ComponentError as e:
                progress.stop()
                fail(e, f"Failed to install {ref}")

    console.print(f"[green]✓ Installed {len(refs)} components[/green]")


@app.command()
def status(
    ref: Optional[str] = typer.Argument(None, help="Component image to check; all registry components if omitted")
):
    """📊 Show installation status"""
    manager = get_manager()

    if ref:
        try:
            installed = manager.is_installed(ref)
        except ComponentError as e:
            fail(e, f"Could not check {ref}")

        console.print(f"{ref}: {format_installed(installed)}")
        if not installed:
            raise typer.Exit(1)
        return

    try:
        statuses = manager.status()
    except ComponentError as e:
        fail(e, "Could not check component status")

    table = create_status_table()
    for s in statuses:
        table.add_row(
            s.name,
            s.reference,
            format_installed(s.installed),
            "yes" if s.workdir_dependant else ""
        )

    console.print(table)


@app.command()
def purge(
    confirm: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only show what would be removed")
):
    """🧹 Remove all containers, volumes and images of the tool"""
    manager = get_manager()

    if dry_run or not confirm:
        try:
            plan = manager.plan_purge()
        except ComponentError as e:
            fail(e, "Could not inspect the runtime")

        if plan.empty:
            console.print("[green]✓ Nothing to purge[/green]")
            return

        show_purge_plan(plan.containers, plan.volumes, plan.images)

        if dry_run:
            return

        if not typer.confirm("\nThis will permanently delete everything above. Continue?"):
            console.print("[yellow]Cancelled[/yellow]")
            return

    try:
        manager.purge()
    except ComponentError as e:
        fail(e, "Purge failed")

    console.print("[green]✓ Purge complete[/green]")

"""
Display utilities for the CLI
Tables and progress output
"""

from typing import List

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

console = Console()


def create_components_table(title: str = "📦 Installed Components") -> Table:
    """Create a table for installed component images"""
    table = Table(title=title)
    table.add_column("Image", style="cyan", no_wrap=True)
    table.add_column("Version", style="magenta")
    table.add_column("Namespace", style="blue")
    return table


def create_status_table(title: str = "🐳 Component Status") -> Table:
    """Create a table for registry component status"""
    table = Table(title=title)
    table.add_column("Component", style="cyan", no_wrap=True)
    table.add_column("Image", style="blue")
    table.add_column("Status", style="green")
    table.add_column("Workdir", style="dim")
    return table


def format_installed(installed: bool) -> str:
    """Format installation state with color"""
    if installed:
        return "[green]✓ installed[/green]"
    return "[yellow]○ missing[/yellow]"


def show_purge_plan(containers: List[str], volumes: List[str], images: List[str]):
    """Show what a purge is about to remove"""
    for label, items in (("Containers", containers), ("Volumes", volumes), ("Images", images)):
        console.print(f"[cyan]{label} ({len(items)}):[/cyan]")
        for item in items:
            console.print(f"  • {item}")


def create_progress_context():
    """Create a transient spinner; callers add their own task"""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True
    )

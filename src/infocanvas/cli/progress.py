"""
Rich progress displays for CLI operations.

All output goes to stderr so stdout stays free for the exported file path.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from infocanvas import CanvasStudio
from infocanvas.core.viewport import ASPECT_RATIOS, dimensions_for

# Console for stderr output (preserves stdout for machine output)
console = Console(stderr=True)


@contextmanager
def generation_progress(
    action: str,
    model: str | None = None,
    reference_count: int = 0,
    region: bool = False,
) -> Iterator[None]:
    """
    Display a spinner while a generation or edit is in flight.

    Args:
        action: Short label, e.g. "Generating" or "Editing (2/3)"
        model: The image model being used
        reference_count: Number of reference images sent
        region: Whether the edit is limited to a selection region
    """
    progress = Progress(
        SpinnerColumn(spinner_name="dots"),
        TextColumn("[green]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )

    desc_parts = [action]
    if model:
        model_display = model if len(model) <= 40 else f"{model[:37]}..."
        desc_parts.append(f"[dim]({model_display})[/dim]")

    features = []
    if reference_count:
        features.append(f"[dim cyan]{reference_count} reference(s)[/dim cyan]")
    if region:
        features.append("[dim magenta]region[/dim magenta]")
    if features:
        desc_parts.append("• " + " + ".join(features))

    with progress:
        task = progress.add_task(" ".join(desc_parts), total=None)
        yield
        progress.update(task, completed=True)


def print_session_result(studio: CanvasStudio, output_path: Path, model_used: str) -> None:
    """Print the exported file and the session history."""
    active = studio.active_artifact
    dims = studio.dimensions

    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", justify="right", vertical="top")
    table.add_column(style="white")
    table.add_row("Saved to", f"[bold green]{output_path}[/bold green]")
    table.add_row("Model", model_used)
    table.add_row("Format", f"{studio.aspect_ratio} ({dims.label})")
    if active is not None:
        table.add_row("Prompt", f"[dim]{active.prompt_summary}[/dim]")

    history = studio.history
    if len(history) > 1:
        steps = "\n".join(
            f"{'→' if a is active else ' '} {a.id[:8]} [dim]{a.prompt_summary}[/dim]"
            for a in history
        )
        table.add_row("History", steps)

    console.print()
    console.print(
        Panel(
            table,
            title="[bold green]✓ Infographic Generated[/bold green]",
            border_style="green",
            padding=(1, 2),
        )
    )


def print_formats() -> None:
    """Print the supported aspect ratios with canvas and output sizes."""
    table = Table(title="Canvas formats")
    table.add_column("Ratio", style="cyan")
    table.add_column("Canvas (px)", justify="right")
    table.add_column("Output")
    for ratio in ASPECT_RATIOS:
        dims = dimensions_for(ratio)
        table.add_row(ratio, f"{dims.width} x {dims.height}", dims.label)
    console.print(table)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {message}")

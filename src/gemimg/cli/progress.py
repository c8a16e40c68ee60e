"""
Rich progress displays for CLI operations.

All output goes to stderr to preserve stdout for machine-readable output.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from gemimg import GeminiModelInfo, GeneratedImageResult

# Console for stderr output (preserves stdout for machine output)
console = Console(stderr=True)


@contextmanager
def generation_progress(
    action: str = "Generating image",
    model: str | None = None,
    reference_count: int = 0,
) -> Iterator[None]:
    """
    Display a spinner while a generation request is in flight.

    Args:
        action: Leading description (e.g. "Editing image")
        model: The image model being used
        reference_count: Number of input images sent with the prompt
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
        # Truncate long model names
        model_display = model if len(model) <= 40 else f"{model[:37]}..."
        desc_parts.append(f"[dim]({model_display})[/dim]")
    if reference_count:
        noun = "image" if reference_count == 1 else "images"
        desc_parts.append(f"• [dim cyan]{reference_count} input {noun}[/dim cyan]")

    with progress:
        task = progress.add_task(" ".join(desc_parts), total=None)
        yield
        progress.update(task, completed=True)


def print_success_result(
    result: GeneratedImageResult,
    generation_time: float,
    reference_count: int = 0,
) -> None:
    """Print a panel with the saved path, model, timing and any text response."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", justify="right", vertical="top")
    table.add_column(style="white")

    table.add_row("Saved to", f"[bold green]{result.output_path}[/bold green]")
    table.add_row("Model", result.model)
    table.add_row("Type", result.mime_type)
    table.add_row("Time", f"{generation_time:.1f}s")
    if reference_count:
        table.add_row("Inputs", str(reference_count))
    table.add_row("Prompt", f"[dim]{result.prompt}[/dim]")
    if result.text_response:
        table.add_row("Response", result.text_response.strip())

    panel = Panel(
        table,
        title="[bold green]✓ Image Generated[/bold green]",
        border_style="green",
        padding=(1, 2),
    )

    console.print()
    console.print(panel)


def print_models(models: list[GeminiModelInfo]) -> None:
    """Print a table of models."""
    table = Table(title=f"{len(models)} model(s)", show_lines=False)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name")
    table.add_column("Methods", style="dim")
    for m in models:
        table.add_row(m.name, m.display_name or "", ", ".join(m.supported_generation_methods))
    console.print(table)


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]✗[/red] {message}")

"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich import box
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from flashdraw.core.metrics import NOT_AVAILABLE, UNNAMED, DiagramSummary, OrderSummary

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for diagram rendering.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Flashdraw[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_order_info(order_path: str, diagram_count: int, invalid_count: int) -> None:
    """Print order information.

    Args:
        order_path: Path to the order file
        diagram_count: Number of diagrams in the order
        invalid_count: Diagrams with unusable point data
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(order_path)
    console.print(line)
    invalid_style = "yellow" if invalid_count else "green"
    console.print(
        f"  {diagram_count} diagrams {SYM_DOT} "
        f"[{invalid_style}]{invalid_count} invalid[/{invalid_style}]"
    )


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_processing_info(workers: int, is_auto: bool = False) -> None:
    """Print processing configuration.

    Args:
        workers: Number of parallel workers
        is_auto: Whether the count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def print_success(
    output_dir: str,
    total_time_s: float,
    rendered: int,
    placeholders: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        output_dir: Directory the SVG files were written to
        total_time_s: Total render time in seconds
        rendered: Number of diagrams rendered
        placeholders: Number of invalid diagrams replaced by placeholders
        errors: Number of errors encountered
        avg_time_ms: Average render time per diagram in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_dir, style="bold")
    console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {rendered} diagrams {SYM_DOT} {placeholders} placeholders {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.1f}ms avg")


def print_diagram_properties(summary: DiagramSummary) -> None:
    """Print the property table of one diagram.

    Args:
        summary: Diagram summary values
    """
    table = Table(
        title=f"Diagram {summary.path_index}",
        show_header=False,
        box=box.SIMPLE,
        title_justify="left",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value")
    for label, value in summary.property_rows():
        table.add_row(label, value)
    console.print(table)


def print_order_summary(summary: OrderSummary) -> None:
    """Print the order summary table with grand totals.

    Args:
        summary: Order summary values
    """
    table = Table(title="Order Summary", box=box.SIMPLE_HEAVY, show_footer=True)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Colour")
    table.add_column("Code")
    table.add_column("Qty", justify="right", footer=str(summary.total_quantity))
    table.add_column("F", justify="right")
    table.add_column("Girth", justify="right")
    table.add_column("Q x L", footer="Total")
    table.add_column("T", justify="right", footer=str(summary.total_folds))

    for position, diagram in enumerate(summary.diagrams, start=1):
        table.add_row(
            str(position),
            diagram.name or UNNAMED,
            diagram.color or NOT_AVAILABLE,
            diagram.code or NOT_AVAILABLE,
            str(diagram.quantity),
            str(diagram.folds_per_piece),
            f"{diagram.girth} mm",
            diagram.quantity_length or NOT_AVAILABLE,
            str(diagram.total_folds),
        )
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress diagrams")


def print_cancellation_summary(rendered: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        rendered: Number of diagrams rendered before cancellation
        cancelled: Number of pending diagrams that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {rendered} diagrams completed {SYM_DOT} {cancelled} diagrams cancelled")
    console.print("  No SVG files written")

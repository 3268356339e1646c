"""CLI application entry point for flashdraw.

This module provides the main CLI interface using Typer.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, TypeVar

import typer

from flashdraw import __version__
from flashdraw.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_diagram_properties,
    print_error,
    print_header,
    print_order_info,
    print_order_summary,
    print_processing_info,
    print_step,
    print_success,
)
from flashdraw.config import (
    AngleSkipPolicy,
    DiagramPolicy,
    DrawingConfig,
    FlashdrawSettings,
    FoldLabelPolicy,
    LabelConfig,
    LoggingConfig,
    ProcessingConfig,
    QuantityLengthFormat,
)
from flashdraw.core import DiagramProcessor, summarize_order
from flashdraw.domain import DiagramSet
from flashdraw.exceptions import (
    FlashdrawError,
    FontMetricsError,
    OrderFormatError,
    OrderLoadError,
    RenderCancelledError,
)
from flashdraw.io import OrderReader, load_font_metrics

E = TypeVar("E", bound=Enum)

# Create the Typer app
app = typer.Typer(
    name="flashdraw",
    help="Render flashing fabrication diagrams from order files.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Flashdraw[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render flashing fabrication diagrams from order files."""


def _parse_choice(enum_cls: type[E], value: str, option: str) -> E:
    """Resolve a policy option or exit with a readable error."""
    try:
        return enum_cls(value.lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        print_error(f"Invalid {option}: {value}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1) from None


def _check_order_path(order: Path) -> None:
    if not order.exists():
        print_error(
            f"Order file not found: {order}",
            details=f"The file '{order}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not order.is_file():
        print_error(
            f"Order path is not a file: {order}",
            details="Please provide a path to an order JSON file.",
        )
        raise typer.Exit(code=1)


@app.command()
def render(
    order: Annotated[
        Path,
        typer.Argument(
            help="Path to order JSON file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (default: {order}-diagrams next to the order)",
        ),
    ] = None,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    angle_policy: Annotated[
        str,
        typer.Option(
            "--angle-policy",
            help="Unlabeled default angles (standard|legacy)",
        ),
    ] = AngleSkipPolicy.STANDARD.value,
    fold_label_policy: Annotated[
        str,
        typer.Option(
            "--fold-label-policy",
            help="Fold callout distance (fixed_distance|proportional)",
        ),
    ] = FoldLabelPolicy.FIXED_DISTANCE.value,
    qxl_format: Annotated[
        str,
        typer.Option(
            "--qxl-format",
            help="Quantity by length format (spaced|sorted_comma)",
        ),
    ] = QuantityLengthFormat.SPACED.value,
    font: Annotated[
        Path | None,
        typer.Option(
            "--font",
            help="TTF/OTF font used to measure label text",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render every diagram of an order to SVG files.

    Each diagram is written as diagram-{pathIndex}.svg. Diagrams with
    unusable point data are written as an "Invalid path data"
    placeholder so the rest of the order still renders.

    Example:
        flashdraw render order.json -o out/
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    _check_order_path(order)

    angle_skip = _parse_choice(AngleSkipPolicy, angle_policy, "angle policy")
    fold_label = _parse_choice(FoldLabelPolicy, fold_label_policy, "fold label policy")
    quantity_format = _parse_choice(QuantityLengthFormat, qxl_format, "Q x L format")

    if font is not None and not font.is_file():
        print_error(f"Font file not found: {font}")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    settings = FlashdrawSettings(
        drawing=DrawingConfig(
            label=LabelConfig(font_path=font),
            policy=DiagramPolicy(
                angle_skip=angle_skip,
                fold_label=fold_label,
                quantity_length_format=quantity_format,
            ),
        ),
        processing=ProcessingConfig(
            max_workers=workers,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "WARNING",
        ),
    )

    output_dir = output if output is not None else order.parent / f"{order.stem}-diagrams"

    try:
        if not quiet:
            print_step("Loading order")

        diagram_set = OrderReader(order).load()

        if not quiet:
            print_order_info(
                order_path=str(order),
                diagram_count=len(diagram_set.paths),
                invalid_count=len(diagram_set.paths) - len(diagram_set.valid_paths),
            )

        if not diagram_set.paths:
            if not quiet:
                console.print("\nNo diagrams in order. Nothing to render.")
            raise typer.Exit(code=0)

        if font is not None:
            # Fail fast here rather than once per worker
            load_font_metrics(font)

        if not quiet:
            actual_workers = workers if workers else os.cpu_count() or 1
            print_step("Rendering")
            print_processing_info(actual_workers, is_auto=(workers is None))

        processor = DiagramProcessor(settings)

        try:
            if not quiet:
                with create_progress() as progress:
                    task_id = progress.add_task(
                        f"Rendering {len(diagram_set.paths)} diagrams",
                        total=len(diagram_set.paths),
                    )

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    batch = processor.process(
                        diagram_set,
                        output_dir=output_dir,
                        max_workers=workers,
                        progress_callback=update_progress,
                    )
            else:
                batch = processor.process(
                    diagram_set,
                    output_dir=output_dir,
                    max_workers=workers,
                )
        except (RenderCancelledError, KeyboardInterrupt) as e:
            if not quiet:
                print_cancellation_notice()
                print_cancellation_summary(
                    rendered=getattr(e, "rendered_count", 0),
                    cancelled=getattr(e, "pending_count", 0),
                )
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        stats = batch.stats
        if not quiet:
            print_success(
                output_dir=str(output_dir),
                total_time_s=stats.duration_seconds,
                rendered=stats.rendered_count,
                placeholders=stats.placeholder_count,
                errors=stats.error_count,
                avg_time_ms=stats.average_diagram_ms if stats.diagram_timings_ms else None,
            )
            if verbose:
                print_order_summary(batch.summary)

    except (OrderLoadError, OrderFormatError) as e:
        print_error(f"Could not load order: {e}")
        raise typer.Exit(code=1)
    except FontMetricsError as e:
        print_error(f"Could not read font: {e.reason}")
        raise typer.Exit(code=1)
    except FlashdrawError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command()
def summary(
    order: Annotated[
        Path,
        typer.Argument(
            help="Path to order JSON file",
            show_default=False,
        ),
    ],
    qxl_format: Annotated[
        str,
        typer.Option(
            "--qxl-format",
            help="Quantity by length format (spaced|sorted_comma)",
        ),
    ] = QuantityLengthFormat.SPACED.value,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Also print the property table of every diagram",
        ),
    ] = False,
) -> None:
    """Print the order summary table: quantities, folds and girth per diagram.

    Example:
        flashdraw summary order.json
    """
    _check_order_path(order)
    quantity_format = _parse_choice(QuantityLengthFormat, qxl_format, "Q x L format")

    try:
        diagram_set: DiagramSet = OrderReader(order).load()
    except (OrderLoadError, OrderFormatError) as e:
        print_error(f"Could not load order: {e}")
        raise typer.Exit(code=1)

    order_summary = summarize_order(diagram_set.paths, diagram_set.quantities, quantity_format)

    if verbose:
        for diagram in order_summary.diagrams:
            print_diagram_properties(diagram)

    print_order_summary(order_summary)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()

"""Parallel batch rendering of diagram sets.

This module renders every diagram of an order with a ProcessPoolExecutor.
Diagrams are independent, so each one is shipped to a worker as plain
dictionaries and rendered there.

Key components:
- render_path_task: Top-level picklable function for parallel execution
- DiagramProcessor: Orchestrates rendering, SVG output and the order summary
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path as FilePath
from typing import Any

from flashdraw.config import DrawingConfig, FlashdrawSettings
from flashdraw.core.metrics import OrderSummary, summarize_order
from flashdraw.core.scene import SceneAssembler
from flashdraw.domain import DiagramSet, Path, RenderOptions, Scene
from flashdraw.exceptions import RenderCancelledError
from flashdraw.io import SvgWriter
from flashdraw.utils import RenderLogger, RenderStats, configure_logging


def render_path_task(
    path_dict: dict[str, Any],
    options_dict: dict[str, Any],
    drawing_dict: dict[str, Any],
) -> dict[str, Any]:
    """Render a single diagram.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor. Deserializes the path, renders it and returns the
    serialized scene.

    Args:
        path_dict: Serialized path (from Path.to_dict())
        options_dict: Serialized render flags (from RenderOptions.to_dict())
        drawing_dict: Serialized drawing configuration

    Returns:
        Dictionary containing either:
        - Success: {"path_index": int, "scene": scene_dict, "duration_ms": float}
        - Error: {"path_index": int, "error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        path = Path.from_dict(path_dict)
        options = RenderOptions.from_dict(options_dict)
        config = DrawingConfig.model_validate(drawing_dict)

        scene = SceneAssembler(config).assemble(path, options)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "path_index": path.path_index,
            "scene": scene.to_dict(),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "path_index": path_dict.get("pathIndex", -1),
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class DiagramResult:
    """Outcome of rendering one diagram."""

    path_index: int
    scene: Scene | None = None
    output_path: FilePath | None = None
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def success(self) -> bool:
        return self.scene is not None


@dataclass
class BatchResult:
    """Outcome of rendering a diagram set.

    Attributes:
        results: One result per path, in input order
        summary: Order summary table values
        stats: Counts and timings
    """

    results: list[DiagramResult] = field(default_factory=list)
    summary: OrderSummary = field(default_factory=OrderSummary)
    stats: RenderStats = field(default_factory=RenderStats)


class DiagramProcessor:
    """Orchestrates parallel diagram rendering.

    Manages the complete workflow:
    1. Serialize every path of the set for the workers
    2. Render diagrams in parallel worker processes
    3. Collect results in input order and update statistics
    4. Write SVG files, when an output directory is given
    5. Compute the order summary

    Example:
        settings = FlashdrawSettings()
        processor = DiagramProcessor(settings)
        batch = processor.process(
            diagram_set,
            output_dir=Path("out"),
            max_workers=4,
        )
    """

    def __init__(self, config: FlashdrawSettings) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Flashdraw settings containing drawing and processing config
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=False,
        )
        self.render_logger = RenderLogger(self.logger)

    def process(
        self,
        diagram_set: DiagramSet,
        output_dir: FilePath | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, int, bool], None] | None = None,
    ) -> BatchResult:
        """Render every diagram of a set.

        A failure in one diagram is recorded and does not stop the others.

        Args:
            diagram_set: Paths, shared render flags and order lines
            output_dir: Directory for ``diagram-{pathIndex}.svg`` files
                (nothing is written if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, path_index, success)
                for progress updates

        Returns:
            BatchResult with per-diagram scenes, summary and statistics

        Raises:
            RenderCancelledError: If rendering is cancelled by the user
            SceneWriteError: If an SVG file cannot be written
        """
        self.render_logger = RenderLogger(self.logger)
        stats = self.render_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting diagram rendering",
            diagrams=len(diagram_set.paths),
            output_dir=str(output_dir) if output_dir else None,
            max_workers=max_workers,
        )

        results = self._render_parallel(diagram_set, max_workers, progress_callback)

        if output_dir is not None:
            for result in results:
                if result.scene is not None:
                    target = SvgWriter.get_output_path(output_dir, result.path_index)
                    result.output_path = SvgWriter(result.scene).save(target)
                    self.logger.debug("Diagram written", output=str(target))

        summary = summarize_order(
            diagram_set.paths,
            diagram_set.quantities,
            self.config.drawing.policy.quantity_length_format,
        )

        stats.end_time = time.time()
        self.logger.info(
            "Rendering complete",
            rendered=stats.rendered_count,
            placeholders=stats.placeholder_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return BatchResult(results=results, summary=summary, stats=stats)

    def _render_parallel(
        self,
        diagram_set: DiagramSet,
        max_workers: int | None,
        progress_callback: Callable[[int, int, int, bool], None] | None,
    ) -> list[DiagramResult]:
        """Render paths in parallel using ProcessPoolExecutor.

        Returns:
            Results in the order of ``diagram_set.paths``
        """
        paths = diagram_set.paths
        results: list[DiagramResult | None] = [None] * len(paths)
        if not paths:
            return []

        # Serialize shared inputs once for all workers
        options_dict = diagram_set.options.to_dict()
        drawing_dict = self.config.drawing.model_dump()

        total = len(paths)
        completed = 0
        pending_futures: dict[Future, int] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for position, path in enumerate(paths):
                self.render_logger.log_diagram_start(path.path_index)
                future = executor.submit(render_path_task, path.to_dict(), options_dict, drawing_dict)
                pending_futures[future] = position

            try:
                for future in as_completed(pending_futures):
                    position = pending_futures.pop(future)
                    path_index = paths[position].path_index
                    result = DiagramResult(path_index=path_index)

                    try:
                        payload = future.result()
                        result.duration_ms = payload.get("duration_ms", 0.0)

                        if "error" in payload:
                            result.error = payload["error"]
                            self.render_logger.log_diagram_error(
                                path_index=path_index,
                                error=Exception(payload["error"]),
                                traceback=payload.get("traceback"),
                            )
                        else:
                            result.scene = Scene.from_dict(payload["scene"])
                            if result.scene.placeholder:
                                self.render_logger.log_diagram_placeholder(
                                    path_index, "invalid path data"
                                )
                            else:
                                self.render_logger.log_diagram_complete(
                                    path_index=path_index,
                                    primitive_count=sum(1 for _ in result.scene.iter_primitives()),
                                    duration_ms=result.duration_ms,
                                )

                    except Exception as e:
                        # Executor-level error
                        result.error = str(e)
                        self.render_logger.log_diagram_error(
                            path_index=path_index,
                            error=e,
                            traceback=traceback.format_exc(),
                        )

                    results[position] = result
                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, path_index, result.success)

            except KeyboardInterrupt:
                for f in pending_futures:
                    f.cancel()
                self.render_logger.log_cancelled(len(pending_futures))
                executor.shutdown(wait=True, cancel_futures=True)
                raise RenderCancelledError(completed, len(pending_futures)) from None

        return [r for r in results if r is not None]

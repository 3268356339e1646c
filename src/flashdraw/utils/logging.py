"""Logging utilities for Flashdraw."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class RenderStats:
    """Statistics from a batch render."""

    rendered_count: int = 0
    placeholder_count: int = 0
    error_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    diagram_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate render duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def average_diagram_ms(self) -> float:
        """Mean per-diagram render time."""
        if not self.diagram_timings_ms:
            return 0.0
        return sum(self.diagram_timings_ms) / len(self.diagram_timings_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"flashdraw_{timestamp}.log")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Repeated configuration must not stack handlers
    for handler in list(root_logger.handlers):
        if getattr(handler, "_flashdraw", False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )
    file_handler._flashdraw = True  # type: ignore[attr-defined]
    root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        console_handler._flashdraw = True  # type: ignore[attr-defined]
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("flashdraw")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class RenderLogger:
    """Logger for tracking batch render progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RenderStats()

    def log_diagram_start(self, path_index: int) -> None:
        """Log start of diagram rendering."""
        self._logger.debug("Rendering diagram", path_index=path_index)

    def log_diagram_complete(
        self,
        path_index: int,
        primitive_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful diagram render."""
        self._logger.info(
            "Diagram rendered",
            path_index=path_index,
            primitives=primitive_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.rendered_count += 1
        self._stats.diagram_timings_ms.append(duration_ms)

    def log_diagram_placeholder(self, path_index: int, reason: str) -> None:
        """Log a diagram replaced by the invalid-path placeholder."""
        self._logger.warning("Diagram replaced by placeholder", path_index=path_index, reason=reason)
        self._stats.placeholder_count += 1

    def log_diagram_error(
        self,
        path_index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log diagram render error."""
        self._logger.error(
            "Diagram rendering failed",
            path_index=path_index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((path_index, str(error)))

    def log_cancelled(self, pending_count: int) -> None:
        """Log user cancellation of the remaining diagrams."""
        self._logger.info("Cancellation requested by user", pending=pending_count)
        self._stats.was_cancelled = True
        self._stats.cancelled_count = pending_count

    @property
    def stats(self) -> RenderStats:
        """Get current render statistics."""
        return self._stats

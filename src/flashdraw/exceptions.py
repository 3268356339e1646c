"""Exception hierarchy for Flashdraw.

The rendering core recovers locally from bad path data (placeholder scenes,
skipped segments, default fold values). These exceptions belong to the
I/O and batch layers around it.
"""


class FlashdrawError(Exception):
    """Base exception for all Flashdraw errors."""

    pass


class OrderError(FlashdrawError):
    """Errors related to order files."""

    pass


class OrderLoadError(OrderError):
    """Error loading an order file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load order '{path}': {reason}")


class OrderFormatError(OrderError):
    """Order file content does not match the expected structure."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid order format '{path}': {details}")


class FontMetricsError(FlashdrawError):
    """Error loading font metrics for text measurement."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font metrics '{path}': {reason}")


class SceneWriteError(FlashdrawError):
    """Error writing a rendered scene."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write scene '{path}': {reason}")


class RenderCancelledError(FlashdrawError):
    """Batch rendering was cancelled by user."""

    def __init__(self, rendered_count: int, pending_count: int) -> None:
        self.rendered_count = rendered_count
        self.pending_count = pending_count
        super().__init__(
            f"Rendering cancelled: {rendered_count} completed, {pending_count} pending"
        )

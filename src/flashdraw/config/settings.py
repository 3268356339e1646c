"""Configuration settings for Flashdraw."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AngleSkipPolicy(str, Enum):
    """Which joint angles are treated as default and left unlabeled."""

    STANDARD = "standard"
    LEGACY = "legacy"

    @property
    def skipped_angles(self) -> frozenset[int]:
        """Rounded angle values that never get a callout."""
        if self is AngleSkipPolicy.LEGACY:
            return frozenset({90, 270})
        return frozenset({90, 270, 45, 315})


class FoldLabelPolicy(str, Enum):
    """How far a fold callout sits from its fold base point."""

    FIXED_DISTANCE = "fixed_distance"
    PROPORTIONAL = "proportional"


class QuantityLengthFormat(str, Enum):
    """Presentation of quantity-by-length summaries."""

    SPACED = "spaced"
    SORTED_COMMA = "sorted_comma"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ViewportConfig(_FrozenModel):
    """Canvas size and bounding-box padding rules."""

    size: float = Field(default=1200.0, gt=0, description="Side of the square canvas")
    fill_ratio: float = Field(
        default=0.95,
        gt=0.0,
        le=1.0,
        description="Share of the canvas the padded bounds may occupy",
    )
    padding: float = Field(default=40.0, ge=0, description="Flat padding for normal diagrams")
    large_threshold: float = Field(
        default=10_000.0,
        gt=0,
        description="Raw extent above which a diagram counts as large",
    )
    large_padding_min: float = Field(
        default=50.0, ge=0, description="Minimum padding for large diagrams"
    )
    large_padding_ratio: float = Field(
        default=0.05,
        ge=0,
        le=1.0,
        description="Padding for large diagrams as a share of the larger dimension",
    )
    fallback_size: float = Field(
        default=100.0, gt=0, description="Side of the bounds used for invalid paths"
    )


class GridConfig(_FrozenModel):
    """Background grid settings."""

    size: float = Field(default=20.0, gt=0, description="Major grid cell size in model units")
    max_lines: int = Field(
        default=200,
        ge=2,
        description="Maximum lines per axis and tier before the spacing is coarsened",
    )
    minor_color: str = "#E4E4E4"
    minor_stroke_width: float = Field(default=0.25, ge=0)
    major_color: str = "#CCCCCC"
    major_stroke_width: float = Field(default=0.5, ge=0)


class LabelConfig(_FrozenModel):
    """Callout box sizing in canvas units, plus bounds margins in model units."""

    min_width: float = Field(default=65.0, gt=0)
    height: float = Field(default=30.0, gt=0)
    corner_radius: float = Field(default=10.0, ge=0)
    border_width: float = Field(
        default=0.5, ge=0, description="Callout outline width in canvas units"
    )
    font_size: float = Field(default=16.0, gt=0)
    char_width_factor: float = Field(
        default=9.0, gt=0, description="Estimated width of one character at font_size"
    )
    text_padding: float = Field(default=16.0, ge=0)
    tail_length: float = Field(default=6.0, ge=0)
    attach_size: float = Field(default=6.0, ge=0)
    arrow_size: float = Field(default=10.0, ge=0)
    bounds_margin_x: float = Field(default=50.0, ge=0)
    bounds_margin_top: float = Field(default=30.0, ge=0)
    bounds_margin_bottom: float = Field(default=30.0, ge=0)
    shadow: bool = Field(default=True, description="Tag label boxes with a drop-shadow filter")
    font_path: Path | None = Field(
        default=None,
        description="TTF/OTF file used to measure label text (estimate if None)",
    )


class FoldConfig(_FrozenModel):
    """End-fold glyph settings in model units."""

    default_length: float = Field(default=14.0, gt=0, description="FOLD_LENGTH")
    default_angle: float = 0.0
    default_tail_length: float = Field(default=20.0, ge=0)
    break_offset_ratio: float = Field(
        default=0.35, ge=0, description="Sideways kink of a break fold, share of its length"
    )
    hook_radius: float = Field(default=8.0, gt=0)
    crush_width_ratio: float = Field(default=0.8, gt=0)
    crush_height_ratio: float = Field(default=0.6, gt=0)
    label_distance: float = Field(
        default=20.0, gt=0, description="Fixed real-world distance of fold callouts"
    )
    proportional_label_gap: float = Field(
        default=25.0, ge=0, description="Gap past the fold end for proportional callouts"
    )
    stroke_width: float = Field(default=2.0, ge=0)
    color: str = "#000000"


class BorderConfig(_FrozenModel):
    """Offset border and direction chevron settings in model units."""

    offset_distance: float = Field(default=15.0, gt=0)
    chevron_size: float = Field(default=8.0, gt=0)
    stroke_width: float = Field(default=3.0, ge=0)
    dash: tuple[float, float] = (6.0, 4.0)
    color: str = "#000000"
    chevron_color: str = "#000000"


class StyleConfig(_FrozenModel):
    """Colors and weights of the profile itself."""

    path_color: str = "#000000"
    path_stroke_width: float = Field(default=2.5, ge=0)
    point_color: str = "#000000"
    point_radius: float = Field(default=3.0, ge=0)
    label_background: str = "#FFFFFF"
    label_border: str = "#000000"
    label_text: str = "#000000"
    tail_color: str = "#000000"
    angle_text: str = "#000000"


class DiagramPolicy(_FrozenModel):
    """Named choices where earlier renderers disagreed."""

    angle_skip: AngleSkipPolicy = AngleSkipPolicy.STANDARD
    fold_label: FoldLabelPolicy = FoldLabelPolicy.FIXED_DISTANCE
    quantity_length_format: QuantityLengthFormat = QuantityLengthFormat.SPACED


class DrawingConfig(_FrozenModel):
    """Every constant the rendering engine reads, as one immutable value."""

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    label: LabelConfig = Field(default_factory=LabelConfig)
    fold: FoldConfig = Field(default_factory=FoldConfig)
    border: BorderConfig = Field(default_factory=BorderConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)
    policy: DiagramPolicy = Field(default_factory=DiagramPolicy)


class ProcessingConfig(_FrozenModel):
    """Configuration for batch rendering."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(_FrozenModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FlashdrawSettings(_FrozenModel):
    """Main application settings."""

    drawing: DrawingConfig = Field(default_factory=DrawingConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FlashdrawSettings:
    """Get default application settings."""
    return FlashdrawSettings()

"""Data models shared by the geometry and text layout code."""

import math
import numbers
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np

Point = Tuple[float, float]


@dataclass(frozen=True)
class PuzzleSpec:
    """Everything needed to rebuild the cut-lines of one puzzle.

    Instances are immutable: two builds from equal values produce identical geometry.
    """

    width: float
    height: float
    rows: int
    cols: int
    seed: int

    def __post_init__(self) -> None:
        """Reject specs the geometry code cannot work with."""
        for name in ("rows", "cols"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value!r}")
        if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
            raise ValueError(f"seed must be an integer, got {self.seed!r}")

    @property
    def cell_width(self) -> float:
        """Width of one grid cell in pixels."""
        return self.width / self.cols

    @property
    def cell_height(self) -> float:
        """Height of one grid cell in pixels."""
        return self.height / self.rows

    @property
    def piece_count(self) -> int:
        """Number of pieces in the grid."""
        return self.rows * self.cols


@dataclass(frozen=True)
class EdgeProfile:
    """Normalised control points of one edge.

    x runs along the edge in [0, 1], y is the perpendicular bulge in [-1, 1].
    """

    points: Tuple[Point, ...]
    amplitude: float = 0.0
    sign: int = 0

    @property
    def is_flat(self) -> bool:
        """True for straight border edges."""
        return self.sign == 0


@dataclass(frozen=True)
class EdgeMeta:
    """Bulge of one edge in pixels and the side it bulges towards."""

    amplitude_px: float = 0.0
    sign: int = 0


@dataclass
class EdgeMetadataGrid:
    """Edge metadata for a whole grid.

    ``horizontal[row][col]`` has ``rows + 1`` rows of ``cols`` edges and
    ``vertical[col][row]`` has ``cols + 1`` columns of ``rows`` edges.
    """

    horizontal: List[List[EdgeMeta]]
    vertical: List[List[EdgeMeta]]

    @property
    def rows(self) -> int:
        return len(self.horizontal) - 1

    @property
    def cols(self) -> int:
        return len(self.vertical) - 1

    def to_dict(self) -> Dict[str, List[List[Dict[str, float]]]]:
        """Convert to dictionary for JSON serialization."""

        def _rows(grid: List[List[EdgeMeta]]) -> List[List[Dict[str, float]]]:
            return [[{"amplitude_px": m.amplitude_px, "sign": m.sign} for m in line] for line in grid]

        return {"horizontal": _rows(self.horizontal), "vertical": _rows(self.vertical)}


@dataclass
class BezierCurve:
    """A cubic Bezier curve defined by 4 control points."""

    p0: Point  # Start point
    p1: Point  # Control point 1
    p2: Point  # Control point 2
    p3: Point  # End point

    @classmethod
    def line(cls, start: Point, end: Point) -> "BezierCurve":
        """Straight segment expressed as a degenerate cubic."""
        return cls(start, start, end, end)

    @property
    def is_line(self) -> bool:
        """True when the control points sit on the end points."""
        return self.p1 == self.p0 and self.p2 == self.p3

    def evaluate(self, t: float) -> Point:
        """Evaluate the curve at parameter t (0 to 1)."""
        t2 = t * t
        t3 = t2 * t
        mt = 1 - t
        mt2 = mt * mt
        mt3 = mt2 * mt

        x = mt3 * self.p0[0] + 3 * mt2 * t * self.p1[0] + 3 * mt * t2 * self.p2[0] + t3 * self.p3[0]
        y = mt3 * self.p0[1] + 3 * mt2 * t * self.p1[1] + 3 * mt * t2 * self.p2[1] + t3 * self.p3[1]
        return (x, y)

    def get_points(self, num_points: int = 20) -> np.ndarray:
        """Generate points along the curve."""
        if self.is_line:
            return np.array([self.p0, self.p3])
        t_values = np.linspace(0, 1, num_points)
        return np.array([self.evaluate(t) for t in t_values])


@dataclass(frozen=True)
class CellSafeBox:
    """Part of a cell that no neighbouring tab reaches into."""

    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2


@dataclass(frozen=True)
class TextFitResult:
    """Outcome of fitting a piece of text into a rectangle.

    ``reason`` is ``None`` for a fit, otherwise ``"word_too_long"`` or
    ``"too_many_lines"``.
    """

    lines: Tuple[str, ...]
    font_size: int
    line_height: float
    truncated: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "lines": list(self.lines),
            "font_size": self.font_size,
            "line_height": self.line_height,
            "truncated": self.truncated,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of shortening text that did not fit."""

    text: str
    changed: bool
    fit: TextFitResult
    failed: bool = False


@dataclass
class LayoutConfig:
    """Tunables for safe zones and text layout."""

    # Font search
    min_font_size: int = 8
    max_font_size: int = 40
    initial_font_ratio: float = 0.2
    line_height_ratio: float = 1.2
    max_lines: int = 6
    max_attempts: int = 40

    # Approximate glyph width relative to the font size
    average_glyph_width: float = 0.6

    # Safe zones
    tab_inset_ratio: float = 0.18
    baseline_inset_ratio: float = 0.05
    min_safe_size: float = 10.0
    fallback_ratio: float = 0.8
    padding_ratio: float = 0.08
    min_padding: int = 4

    # Share of the original length a stopword-trimmed rewrite has to keep
    rewrite_min_retention: float = 0.6

    ellipsis: str = field(default="…")

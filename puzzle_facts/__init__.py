"""Puzzle facts - geometry and text layout for two-sided fact puzzles.

This package builds seeded jigsaw cut-lines for a photo, works out the part of
every piece that is free of tabs, and fits user supplied facts into those areas
for the mirrored back side.
"""

from .curves import build_edge_curves, curves_to_path, rectangle_path, sample_curves
from .edges import AMPLITUDE_SAFETY, build_edge_lines, flat_edge_profile, sample_edge_profile
from .facts import EmptyFactError, FactAssignment, FactEntry
from .font_metrics import ApproximateFontMetrics, FontMetrics, PillowFontMetrics, resolve_font_metrics
from .geometry import PuzzleGeometry, build_puzzle_geometry
from .mirroring import mirror_facts, mirror_index
from .models import (
    BezierCurve,
    CellSafeBox,
    EdgeMeta,
    EdgeMetadataGrid,
    EdgeProfile,
    LayoutConfig,
    PuzzleSpec,
    RewriteResult,
    TextFitResult,
)
from .rewrite import DEFAULT_STRATEGIES, auto_rewrite, first_success
from .rng import SeededRandom, mulberry32_step
from .safe_zone import compute_safe_box, compute_safe_boxes, text_padding
from .sanitize import sanitize_text, split_fact_lines
from .svg import SvgStyle, build_back_svg, build_front_svg
from .text_layout import fit_text, font_scale_for_piece_count, wrap_words

__all__ = [
    # Models
    "PuzzleSpec",
    "EdgeProfile",
    "EdgeMeta",
    "EdgeMetadataGrid",
    "BezierCurve",
    "CellSafeBox",
    "TextFitResult",
    "RewriteResult",
    "LayoutConfig",
    # Geometry
    "SeededRandom",
    "mulberry32_step",
    "AMPLITUDE_SAFETY",
    "flat_edge_profile",
    "sample_edge_profile",
    "build_edge_lines",
    "build_edge_curves",
    "curves_to_path",
    "rectangle_path",
    "sample_curves",
    "PuzzleGeometry",
    "build_puzzle_geometry",
    "compute_safe_box",
    "compute_safe_boxes",
    "text_padding",
    # Text
    "FontMetrics",
    "ApproximateFontMetrics",
    "PillowFontMetrics",
    "resolve_font_metrics",
    "sanitize_text",
    "split_fact_lines",
    "wrap_words",
    "fit_text",
    "font_scale_for_piece_count",
    "DEFAULT_STRATEGIES",
    "auto_rewrite",
    "first_success",
    "mirror_index",
    "mirror_facts",
    "EmptyFactError",
    "FactAssignment",
    "FactEntry",
    # Output
    "SvgStyle",
    "build_front_svg",
    "build_back_svg",
]

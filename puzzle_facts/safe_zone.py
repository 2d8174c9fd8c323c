"""Usable text area of every puzzle cell.

A tab that bulges into a cell eats into the space available for text, so each
side of the raw cell is moved inwards by a small baseline inset plus, when the
neighbouring tab points into the cell, part of that tab's amplitude.
"""

import math
from typing import List, Optional, Union

from .geometry import PuzzleGeometry
from .models import CellSafeBox, EdgeMeta, EdgeMetadataGrid, LayoutConfig, PuzzleSpec

DEFAULT_CONFIG = LayoutConfig()


def _side_inset(edge: EdgeMeta, bulges_in: bool, dimension: float, config: LayoutConfig) -> float:
    inset = config.baseline_inset_ratio * dimension
    if bulges_in:
        inset += min(edge.amplitude_px, config.tab_inset_ratio * dimension)
    return inset


def _fallback_box(left: float, top: float, cell_w: float, cell_h: float, config: LayoutConfig) -> CellSafeBox:
    margin_x = (cell_w - cell_w * config.fallback_ratio) / 2
    margin_y = (cell_h - cell_h * config.fallback_ratio) / 2
    return CellSafeBox(
        left=left + margin_x,
        right=left + cell_w - margin_x,
        top=top + margin_y,
        bottom=top + cell_h - margin_y,
    )


def compute_safe_box(
    source: Union[PuzzleGeometry, EdgeMetadataGrid],
    spec: PuzzleSpec,
    row: int,
    col: int,
    config: Optional[LayoutConfig] = None,
) -> CellSafeBox:
    """Compute the safe rectangle of one cell.

    Args:
        source: Geometry (or just its metadata) built from ``spec``.
        spec: The puzzle spec the metadata was built from.
        row: Cell row.
        col: Cell column.
        config: Layout tunables.

    Returns:
        The safe box; never degenerate.

    Raises:
        IndexError: If the cell is outside the grid.
    """
    config = config or DEFAULT_CONFIG
    metadata = source.metadata if isinstance(source, PuzzleGeometry) else source
    if not (0 <= row < spec.rows and 0 <= col < spec.cols):
        raise IndexError(f"cell ({row}, {col}) outside {spec.rows}x{spec.cols} grid")

    cell_w = spec.cell_width
    cell_h = spec.cell_height
    left = col * cell_w
    top = row * cell_h

    top_edge = metadata.horizontal[row][col]
    bottom_edge = metadata.horizontal[row + 1][col]
    left_edge = metadata.vertical[col][row]
    right_edge = metadata.vertical[col + 1][row]

    # A positive sign bulges down (horizontal) or right (vertical)
    box = CellSafeBox(
        left=left + _side_inset(left_edge, left_edge.sign > 0, cell_w, config),
        right=left + cell_w - _side_inset(right_edge, right_edge.sign < 0, cell_w, config),
        top=top + _side_inset(top_edge, top_edge.sign > 0, cell_h, config),
        bottom=top + cell_h - _side_inset(bottom_edge, bottom_edge.sign < 0, cell_h, config),
    )

    if box.width < config.min_safe_size or box.height < config.min_safe_size:
        return _fallback_box(left, top, cell_w, cell_h, config)
    return box


def compute_safe_boxes(
    source: Union[PuzzleGeometry, EdgeMetadataGrid],
    spec: PuzzleSpec,
    config: Optional[LayoutConfig] = None,
) -> List[CellSafeBox]:
    """Safe boxes of every cell in row-major order."""
    return [compute_safe_box(source, spec, r, c, config) for r in range(spec.rows) for c in range(spec.cols)]


def text_padding(box: CellSafeBox, config: Optional[LayoutConfig] = None) -> int:
    """Padding between the safe box border and the text."""
    config = config or DEFAULT_CONFIG
    return max(config.min_padding, int(math.floor(config.padding_ratio * min(box.width, box.height))))

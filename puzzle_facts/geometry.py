"""Assemble the cut-lines of a whole puzzle grid.

The same :class:`PuzzleSpec` always yields the same paths and edge metadata,
which is what lets the front image and the back image be rendered separately
and still line up.
"""

import logging
from dataclasses import dataclass
from typing import List

from .curves import build_edge_curves, curves_to_path, rectangle_path
from .edges import build_edge_lines
from .models import BezierCurve, EdgeMeta, EdgeMetadataGrid, EdgeProfile, Point, PuzzleSpec
from .rng import SeededRandom

logger = logging.getLogger(__name__)


@dataclass
class PuzzleGeometry:
    """Cut-lines of one puzzle.

    ``horizontal_curves[row][col]`` and ``vertical_curves[col][row]`` follow the
    same indexing as the metadata grid.
    """

    spec: PuzzleSpec
    paths: List[str]
    metadata: EdgeMetadataGrid
    horizontal_curves: List[List[List[BezierCurve]]]
    vertical_curves: List[List[List[BezierCurve]]]

    def edge_curves(self) -> List[List[BezierCurve]]:
        """All edges in path order: horizontal lines first, then vertical ones."""
        edges = [edge for line in self.horizontal_curves for edge in line]
        edges.extend(edge for line in self.vertical_curves for edge in line)
        return edges


def _horizontal_points(profile: EdgeProfile, row: int, col: int, cell_w: float, cell_h: float) -> List[Point]:
    return [((x + col) * cell_w, (y + row) * cell_h) for x, y in profile.points]


def _vertical_points(profile: EdgeProfile, col: int, row: int, cell_w: float, cell_h: float) -> List[Point]:
    # Vertical edges reuse the horizontal shape with the axes swapped
    return [((y + col) * cell_w, (x + row) * cell_h) for x, y in profile.points]


def build_puzzle_geometry(spec: PuzzleSpec) -> PuzzleGeometry:
    """Generate all cut-lines and edge metadata for a puzzle.

    Args:
        spec: Puzzle size, grid and seed.

    Returns:
        The assembled geometry. Paths start with the outer rectangle, followed by
        every horizontal edge (row-major) and every vertical edge (column-major).
    """
    rng = SeededRandom(spec.seed)
    cell_w = spec.cell_width
    cell_h = spec.cell_height

    # Horizontal lines are sampled before vertical ones; the order is part of the seed contract
    horizontal_lines = build_edge_lines(spec.rows, spec.cols, rng)
    vertical_lines = build_edge_lines(spec.cols, spec.rows, rng)

    horizontal_curves = [
        [build_edge_curves(_horizontal_points(profile, i, j, cell_w, cell_h)) for j, profile in enumerate(line)]
        for i, line in enumerate(horizontal_lines)
    ]
    vertical_curves = [
        [build_edge_curves(_vertical_points(profile, i, j, cell_w, cell_h)) for j, profile in enumerate(line)]
        for i, line in enumerate(vertical_lines)
    ]

    metadata = EdgeMetadataGrid(
        horizontal=[[EdgeMeta(p.amplitude * cell_h, p.sign) for p in line] for line in horizontal_lines],
        vertical=[[EdgeMeta(p.amplitude * cell_w, p.sign) for p in line] for line in vertical_lines],
    )

    paths = [rectangle_path(spec.width, spec.height)]
    for line in horizontal_curves + vertical_curves:
        for curves in line:
            path = curves_to_path(curves)
            if path:
                paths.append(path)

    logger.debug(
        "Built geometry for %dx%d grid (%sx%s px, seed=%d): %d paths",
        spec.rows,
        spec.cols,
        spec.width,
        spec.height,
        spec.seed,
        len(paths),
    )
    return PuzzleGeometry(
        spec=spec,
        paths=paths,
        metadata=metadata,
        horizontal_curves=horizontal_curves,
        vertical_curves=vertical_curves,
    )

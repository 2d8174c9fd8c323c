"""Random edge shapes for the puzzle cut-lines.

Every interior edge is described by six control points in a 0-100 box that is
normalised to [0, 1] along the edge. The two neck points sit near the middle of
the edge close to the baseline, the two shoulder points set the widest part of
the tab. One coin flip per edge decides which neighbour the tab points into.
"""

from typing import List

from .models import EdgeProfile
from .rng import SeededRandom

# Bounds for the neck points (close to the baseline, slightly behind it)
NECK_X_RANGE = (51.0, 62.0)
NECK_Y_RANGE = (-15.0, 5.0)

# Bounds for the shoulder points (the bulb of the tab)
SHOULDER_X_RANGE = (20.0, 30.0)
SHOULDER_Y_RANGE = (20.0, 44.0)

# Smoothing can push the curve slightly past its control points
AMPLITUDE_SAFETY = 1.05

_SCALE = 100.0


def flat_edge_profile() -> EdgeProfile:
    """Straight edge used for the puzzle border."""
    return EdgeProfile(points=((0.0, 0.0), (1.0, 0.0)), amplitude=0.0, sign=0)


def sample_edge_profile(rng: SeededRandom) -> EdgeProfile:
    """Sample one tabbed edge.

    Draw order is fixed (neck, shoulder, shoulder, neck, sign) so the same
    generator state always yields the same edge.

    Args:
        rng: Generator owned by the current geometry build.

    Returns:
        The sampled edge profile.
    """
    start = (0.0, 0.0)
    neck_a = (rng.uniform(*NECK_X_RANGE), rng.uniform(*NECK_Y_RANGE))
    shoulder_a = (rng.uniform(*SHOULDER_X_RANGE), rng.uniform(*SHOULDER_Y_RANGE))
    shoulder_b = (
        rng.uniform(_SCALE - SHOULDER_X_RANGE[1], _SCALE - SHOULDER_X_RANGE[0]),
        rng.uniform(*SHOULDER_Y_RANGE),
    )
    neck_b = (
        rng.uniform(_SCALE - NECK_X_RANGE[1], _SCALE - NECK_X_RANGE[0]),
        rng.uniform(*NECK_Y_RANGE),
    )
    end = (_SCALE, 0.0)

    sign = -1 if rng.random() < 0.5 else 1

    points = tuple(
        (x / _SCALE, (y / _SCALE) * sign) for x, y in (start, neck_a, shoulder_a, shoulder_b, neck_b, end)
    )
    amplitude = max(abs(y) for _, y in points) * AMPLITUDE_SAFETY
    return EdgeProfile(points=points, amplitude=amplitude, sign=sign)


def build_edge_lines(line_count: int, segment_count: int, rng: SeededRandom) -> List[List[EdgeProfile]]:
    """Build all edges running in one direction.

    Args:
        line_count: Number of cells crossed by the lines (rows for horizontal
            lines, columns for vertical ones); ``line_count + 1`` lines result.
        segment_count: Number of edges per line.
        rng: Generator owned by the current geometry build.

    Returns:
        Lines of edge profiles; the first and last line are flat borders.
    """
    border = [flat_edge_profile() for _ in range(segment_count)]
    lines = [border]
    for _ in range(1, line_count):
        lines.append([sample_edge_profile(rng) for _ in range(segment_count)])
    lines.append([flat_edge_profile() for _ in range(segment_count)])
    return lines

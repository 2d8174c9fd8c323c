"""Shared fixtures for the puzzle tests."""

import pytest

from puzzle_facts import PuzzleGeometry, PuzzleSpec, build_puzzle_geometry


@pytest.fixture
def spec_3x4() -> PuzzleSpec:
    """The 12 piece puzzle used throughout the tests."""
    return PuzzleSpec(width=1200, height=900, rows=3, cols=4, seed=42)


@pytest.fixture
def geometry_3x4(spec_3x4: PuzzleSpec) -> PuzzleGeometry:
    """Geometry of the 12 piece puzzle."""
    return build_puzzle_geometry(spec_3x4)

"""Reorder back-side content so it lines up with the front once flipped."""

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def mirror_index(index: int, rows: int, cols: int) -> int:
    """Back index of a front cell when the sheet is flipped left to right.

    Args:
        index: Row-major front index.
        rows: Number of grid rows.
        cols: Number of grid columns.

    Returns:
        Row-major back index.
    """
    if not 0 <= index < rows * cols:
        raise IndexError(f"index {index} outside {rows}x{cols} grid")
    row, col = divmod(index, cols)
    return row * cols + (cols - 1 - col)


def mirror_facts(facts: Sequence[T], rows: int, cols: int) -> List[T]:
    """Mirror a full row-major list of cell contents.

    Applying this twice returns the original order.

    Raises:
        ValueError: If the list does not hold exactly ``rows * cols`` items.
    """
    if len(facts) != rows * cols:
        raise ValueError(f"expected {rows * cols} items for a {rows}x{cols} grid, got {len(facts)}")
    mirrored: List[T] = list(facts)
    for index, item in enumerate(facts):
        mirrored[mirror_index(index, rows, cols)] = item
    return mirrored

"""Collect facts for a puzzle and lay each one out on the back side.

Facts are numbered in front order (row-major). The back side is the front
flipped left to right, so each fact is fitted into the safe box of the back cell
it ends up in.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .font_metrics import FontMetrics, resolve_font_metrics
from .geometry import PuzzleGeometry
from .mirroring import mirror_facts, mirror_index
from .models import CellSafeBox, LayoutConfig, RewriteResult, TextFitResult
from .rewrite import auto_rewrite
from .safe_zone import compute_safe_box, text_padding
from .sanitize import sanitize_text
from .text_layout import fit_text, font_scale_for_piece_count

logger = logging.getLogger(__name__)


class EmptyFactError(ValueError):
    """Raised when a fact has no text left after cleanup."""


@dataclass
class FactEntry:
    """One fact placed on the puzzle."""

    index: int
    back_index: int
    original: str
    sanitized: str
    text: str
    fit: TextFitResult
    box: CellSafeBox
    rewrite: Optional[RewriteResult] = None

    @property
    def changed(self) -> bool:
        """True when the text was shortened and the author should be told."""
        return self.rewrite is not None and self.rewrite.changed

    @property
    def failed(self) -> bool:
        """True when no version of the text fits its cell."""
        return self.fit.truncated

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "back_index": self.back_index,
            "original": self.original,
            "text": self.text,
            "changed": self.changed,
            "failed": self.failed,
            "fit": self.fit.to_dict(),
            "box": {
                "left": self.box.left,
                "top": self.box.top,
                "width": self.box.width,
                "height": self.box.height,
            },
        }


class FactAssignment:
    """Facts of one puzzle, filled in as the user sends them."""

    def __init__(
        self,
        geometry: PuzzleGeometry,
        metrics: Optional[FontMetrics] = None,
        config: Optional[LayoutConfig] = None,
    ):
        """Initialize an empty assignment.

        Args:
            geometry: Geometry shared with the front image.
            metrics: Width measurement backend; approximate when omitted.
            config: Layout tunables.
        """
        self.geometry = geometry
        self.spec = geometry.spec
        self.config = config or LayoutConfig()
        self.metrics = resolve_font_metrics(metrics, self.config.average_glyph_width)
        self.font_scale = font_scale_for_piece_count(self.spec.piece_count)
        self.entries: Dict[int, FactEntry] = {}

    @property
    def capacity(self) -> int:
        return self.spec.piece_count

    @property
    def is_complete(self) -> bool:
        return len(self.entries) >= self.capacity

    def _fit(self, text: str, box: CellSafeBox) -> TextFitResult:
        return fit_text(
            text,
            box.width,
            box.height,
            text_padding(box, self.config),
            font_scale=self.font_scale,
            metrics=self.metrics,
            config=self.config,
        )

    def place(self, index: int, raw: str) -> FactEntry:
        """Lay out a fact for a given front cell, replacing any previous one.

        Args:
            index: Row-major front index.
            raw: Text as typed by the user.

        Returns:
            The placed entry.

        Raises:
            EmptyFactError: If nothing printable is left after cleanup; the
                cell keeps its previous fact, if any.
        """
        sanitized = sanitize_text(raw)
        if not sanitized:
            raise EmptyFactError(f"Fact {raw!r} is empty after cleanup")

        back_index = mirror_index(index, self.spec.rows, self.spec.cols)
        row, col = divmod(back_index, self.spec.cols)
        box = compute_safe_box(self.geometry, self.spec, row, col, self.config)

        fit = self._fit(sanitized, box)
        text = sanitized
        rewrite = None
        if fit.truncated:
            rewrite = auto_rewrite(
                sanitized,
                lambda candidate: self._fit(candidate, box),
                min_retention=self.config.rewrite_min_retention,
            )
            text = rewrite.text
            fit = rewrite.fit

        entry = FactEntry(
            index=index,
            back_index=back_index,
            original=raw,
            sanitized=sanitized,
            text=text,
            fit=fit,
            box=box,
            rewrite=rewrite,
        )
        self.entries[index] = entry
        logger.debug("Placed fact %d in back cell %d at %dpx", index, back_index, fit.font_size)
        return entry

    def add(self, raw: str) -> Optional[FactEntry]:
        """Place a fact in the next free cell; None when the puzzle is full.

        Raises:
            EmptyFactError: If the fact is empty after cleanup. No cell is used.
        """
        if self.is_complete:
            return None
        index = next(i for i in range(self.capacity) if i not in self.entries)
        return self.place(index, raw)

    def extend(self, facts: Iterable[str], rejected: Optional[List[str]] = None) -> List[FactEntry]:
        """Place facts in order until the puzzle is full.

        Args:
            facts: Facts as typed by the user.
            rejected: Collects facts skipped for being empty after cleanup.

        Returns:
            The placed entries.
        """
        placed = []
        for raw in facts:
            if self.is_complete:
                break
            try:
                entry = self.add(raw)
            except EmptyFactError:
                logger.info("Skipping fact without printable text: %r", raw)
                if rejected is not None:
                    rejected.append(raw)
                continue
            if entry is not None:
                placed.append(entry)
        return placed

    def front_order(self) -> List[Optional[FactEntry]]:
        """Entries by front index; empty cells are None."""
        return [self.entries.get(i) for i in range(self.capacity)]

    def back_order(self) -> List[Optional[FactEntry]]:
        """Entries by back index."""
        return mirror_facts(self.front_order(), self.spec.rows, self.spec.cols)

    def changes(self) -> List[FactEntry]:
        """Entries whose text was shortened."""
        return [e for e in self.front_order() if e is not None and e.changed]

    def failures(self) -> List[FactEntry]:
        """Entries that still do not fit."""
        return [e for e in self.front_order() if e is not None and e.failed]

"""Per-puzzle working state.

A session holds the photo, the geometry built for the chosen size and the facts
received so far. Choosing a new size drops the geometry and facts; a new photo
starts a new session.
"""

import logging
import random
import time
import uuid
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

from PIL import Image
from puzzle_facts import (
    FactAssignment,
    FactEntry,
    FontMetrics,
    LayoutConfig,
    PuzzleGeometry,
    PuzzleSpec,
    build_puzzle_geometry,
    split_fact_lines,
)

from puzzle_service.config import PIECE_COUNT_OPTIONS

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Raised when a session operation is not possible in the current state."""


class PuzzleSession:
    """Working set of one puzzle."""

    def __init__(
        self,
        photo: Image.Image,
        metrics: Optional[FontMetrics] = None,
        config: Optional[LayoutConfig] = None,
        puzzle_id: Optional[str] = None,
    ):
        """Initialize a session for an uploaded photo.

        Args:
            photo: Normalised photo.
            metrics: Width measurement backend for text layout.
            config: Layout tunables.
            puzzle_id: Identifier; generated when omitted.
        """
        self.puzzle_id = puzzle_id or str(uuid.uuid4())
        self.photo = photo
        self.metrics = metrics
        self.config = config or LayoutConfig()
        self.spec: Optional[PuzzleSpec] = None
        self.geometry: Optional[PuzzleGeometry] = None
        self.assignment: Optional[FactAssignment] = None

    @property
    def width(self) -> int:
        return self.photo.width

    @property
    def height(self) -> int:
        return self.photo.height

    def select_size(self, piece_count: int, seed: Optional[int] = None) -> PuzzleGeometry:
        """Build the geometry for a piece count, discarding earlier facts.

        Raises:
            SessionError: If the piece count is not offered.
        """
        if piece_count not in PIECE_COUNT_OPTIONS:
            raise SessionError(f"Unsupported piece count {piece_count}")
        rows, cols = PIECE_COUNT_OPTIONS[piece_count]
        if seed is None:
            seed = random.getrandbits(32)

        self.spec = PuzzleSpec(width=self.width, height=self.height, rows=rows, cols=cols, seed=seed)
        self.geometry = build_puzzle_geometry(self.spec)
        self.assignment = FactAssignment(self.geometry, metrics=self.metrics, config=self.config)
        logger.info("Session %s: %d pieces (%dx%d), seed %d", self.puzzle_id, piece_count, rows, cols, seed)
        return self.geometry

    def _require_assignment(self) -> FactAssignment:
        if self.assignment is None:
            raise SessionError("Choose the number of pieces first")
        return self.assignment

    def add_facts(self, text: str) -> Tuple[List[FactEntry], List[str]]:
        """Add newline separated facts until every piece has one.

        Returns:
            The placed entries and the lines skipped for having no printable text.

        Raises:
            SessionError: If no size has been chosen yet.
        """
        assignment = self._require_assignment()
        rejected: List[str] = []
        placed = assignment.extend(split_fact_lines(text), rejected)
        return placed, rejected

    @property
    def is_complete(self) -> bool:
        return self.assignment is not None and self.assignment.is_complete

    @property
    def capacity(self) -> int:
        return self.assignment.capacity if self.assignment is not None else 0

    @property
    def fact_count(self) -> int:
        return len(self.assignment.entries) if self.assignment is not None else 0


class SessionStore:
    """In-memory sessions keyed by puzzle id.

    Sessions unused for longer than the TTL are dropped, and the least
    recently used one is evicted when a new session would exceed the limit.
    """

    def __init__(
        self,
        max_sessions: int = 100,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be positive")
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: "OrderedDict[str, PuzzleSession]" = OrderedDict()
        self._last_used: Dict[str, float] = {}

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [pid for pid, used in self._last_used.items() if now - used > self.ttl_seconds]
        for puzzle_id in expired:
            self._drop(puzzle_id)
            logger.info("Session %s expired", puzzle_id)

    def _drop(self, puzzle_id: str) -> bool:
        self._last_used.pop(puzzle_id, None)
        return self._sessions.pop(puzzle_id, None) is not None

    def _touch(self, puzzle_id: str) -> None:
        self._sessions.move_to_end(puzzle_id)
        self._last_used[puzzle_id] = self._clock()

    def create(
        self,
        photo: Image.Image,
        metrics: Optional[FontMetrics] = None,
        config: Optional[LayoutConfig] = None,
    ) -> PuzzleSession:
        """Start a session for a new photo."""
        self._purge_expired()
        while len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            self._drop(oldest)
            logger.info("Session %s evicted, %d sessions open", oldest, self.max_sessions)

        session = PuzzleSession(photo, metrics=metrics, config=config)
        self._sessions[session.puzzle_id] = session
        self._touch(session.puzzle_id)
        return session

    def get(self, puzzle_id: str) -> Optional[PuzzleSession]:
        """Look up a session and mark it as used."""
        self._purge_expired()
        session = self._sessions.get(puzzle_id)
        if session is not None:
            self._touch(puzzle_id)
        return session

    def discard(self, puzzle_id: str) -> bool:
        """Drop a session; returns False if it did not exist."""
        return self._drop(puzzle_id)

    def __len__(self) -> int:
        return len(self._sessions)

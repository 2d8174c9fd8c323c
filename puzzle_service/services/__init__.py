"""Services backing the puzzle endpoints."""

from .renderer import PuzzleRenderer, get_renderer, normalize_photo
from .session import PuzzleSession, SessionError, SessionStore

__all__ = ["PuzzleRenderer", "get_renderer", "normalize_photo", "PuzzleSession", "SessionError", "SessionStore"]

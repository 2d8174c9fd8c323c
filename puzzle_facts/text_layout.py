"""Fit text into a rectangle by shrinking the font and greedy word-wrapping."""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from .font_metrics import FontMetrics, resolve_font_metrics
from .models import LayoutConfig, TextFitResult

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = LayoutConfig()

# Piece count the base font sizes were tuned for
BASE_PIECE_COUNT = 12
MAX_FONT_SCALE = 1.35


@dataclass
class WrapResult:
    """Lines produced by greedy wrapping at one font size."""

    lines: List[str]
    word_too_long: bool = False


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return " ".join(text.split())


def font_scale_for_piece_count(piece_count: int) -> float:
    """Font multiplier that keeps text readable as cells get smaller.

    Args:
        piece_count: Number of pieces in the puzzle.

    Returns:
        ``sqrt(piece_count / 12)`` clamped to [1.0, 1.35].
    """
    if piece_count <= 0:
        return 1.0
    return min(MAX_FONT_SCALE, max(1.0, math.sqrt(piece_count / BASE_PIECE_COUNT)))


def wrap_words(text: str, max_width: float, font_size: float, metrics: FontMetrics) -> WrapResult:
    """Greedy word wrap.

    Args:
        text: Whitespace-normalised text.
        max_width: Available line width in pixels.
        font_size: Font size to measure with.
        metrics: Width measurement backend.

    Returns:
        The wrapped lines. ``word_too_long`` is set when a single word is wider
        than the line; such a word still gets a line of its own.
    """
    lines: List[str] = []
    current = ""
    word_too_long = False

    for word in text.split(" "):
        if not word:
            continue
        if metrics.measure(word, font_size) > max_width:
            word_too_long = True
        if not current:
            current = word
        elif metrics.measure(f"{current} {word}", font_size) <= max_width:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word

    if current or not lines:
        lines.append(current)
    return WrapResult(lines=lines, word_too_long=word_too_long)


def initial_font_size(width: float, height: float, font_scale: float, config: LayoutConfig) -> int:
    """Starting font size for the search, clamped to the allowed range."""
    upper = max(config.min_font_size, int(math.floor(config.max_font_size * font_scale)))
    size = int(math.floor(min(width, height) * config.initial_font_ratio * font_scale))
    return min(upper, max(config.min_font_size, size))


def _clip_lines(lines: List[str], capacity: int, ellipsis: str) -> List[str]:
    if len(lines) <= capacity:
        return list(lines)
    kept = lines[:capacity]
    last = kept[-1]
    kept[-1] = f"{last[:-1]}{ellipsis}" if len(last) > 1 else ellipsis
    return kept


def fit_text(
    text: str,
    width: float,
    height: float,
    padding: float,
    font_scale: float = 1.0,
    metrics: Optional[FontMetrics] = None,
    config: Optional[LayoutConfig] = None,
) -> TextFitResult:
    """Find the largest font size at which the text fits the rectangle.

    Args:
        text: Sanitized text.
        width: Rectangle width in pixels.
        height: Rectangle height in pixels.
        padding: Inner padding on every side.
        font_scale: Multiplier from :func:`font_scale_for_piece_count`.
        metrics: Width measurement backend; approximate when omitted.
        config: Layout tunables.

    Returns:
        The fit. When nothing fits, the last attempt with ``truncated=True``.
    """
    config = config or DEFAULT_CONFIG
    metrics = resolve_font_metrics(metrics, config.average_glyph_width)
    cleaned = normalize_whitespace(text)

    font_size = initial_font_size(width, height, font_scale, config)
    if not cleaned:
        return TextFitResult(lines=("",), font_size=font_size, line_height=font_size * config.line_height_ratio)

    available_width = max(1.0, width - 2 * padding)
    available_height = max(1.0, height - 2 * padding)

    last: Optional[TextFitResult] = None
    attempt = 0
    while font_size >= config.min_font_size and attempt < config.max_attempts:
        line_height = font_size * config.line_height_ratio
        capacity = max(1, min(int(math.floor(available_height / line_height)), config.max_lines))
        wrapped = wrap_words(cleaned, available_width, font_size, metrics)

        if not wrapped.word_too_long and len(wrapped.lines) <= capacity:
            logger.debug("Fit %d chars at %dpx after %d attempts", len(cleaned), font_size, attempt + 1)
            return TextFitResult(lines=tuple(wrapped.lines), font_size=font_size, line_height=line_height)

        last = TextFitResult(
            lines=tuple(_clip_lines(wrapped.lines, capacity, config.ellipsis)),
            font_size=font_size,
            line_height=line_height,
            truncated=True,
            reason="word_too_long" if wrapped.word_too_long else "too_many_lines",
        )
        font_size -= 1
        attempt += 1

    logger.debug("Text of %d chars does not fit %.0fx%.0f", len(cleaned), width, height)
    if last is None:
        # No attempt allowed by the config
        return TextFitResult(
            lines=(cleaned,),
            font_size=font_size,
            line_height=font_size * config.line_height_ratio,
            truncated=True,
            reason="too_many_lines",
        )
    return last

"""Text measurement backends for the layout engine.

The layout engine only needs two things from a font: how wide a string is at a
given size, and a renderable element for a line of text. Without a font file the
approximate metrics estimate widths from an average glyph width, which wraps
less precisely but never fails.
"""

import logging
from typing import Dict, Optional, Protocol
from xml.sax.saxutils import escape

from PIL import ImageFont

logger = logging.getLogger(__name__)

_SVG_ANCHORS = {"start": "start", "middle": "middle", "end": "end"}


class FontMetrics(Protocol):
    """Font capability used by the layout engine."""

    def measure(self, text: str, font_size: float) -> float:
        """Width of ``text`` in pixels at ``font_size``."""
        ...

    def outline(self, text: str, x: float, y: float, font_size: float, anchor: str = "middle") -> str:
        """Renderable SVG element for one line of text."""
        ...


def _text_element(text: str, x: float, y: float, font_size: float, anchor: str, family: str) -> str:
    svg_anchor = _SVG_ANCHORS.get(anchor, "middle")
    return (
        f'<text x="{x:.2f}" y="{y:.2f}" font-size="{font_size}" text-anchor="{svg_anchor}" '
        f'dominant-baseline="central" font-family="{escape(family, {chr(34): "&quot;"})}">{escape(text)}</text>'
    )


class ApproximateFontMetrics:
    """Width estimate from an average glyph width."""

    def __init__(self, average_glyph_width: float = 0.6, family: str = "Arial, sans-serif"):
        """Initialize the metrics.

        Args:
            average_glyph_width: Glyph width relative to the font size.
            family: Font family written into rendered text elements.
        """
        self.average_glyph_width = average_glyph_width
        self.family = family

    def measure(self, text: str, font_size: float) -> float:
        return len(text) * font_size * self.average_glyph_width

    def outline(self, text: str, x: float, y: float, font_size: float, anchor: str = "middle") -> str:
        return _text_element(text, x, y, font_size, anchor, self.family)


class PillowFontMetrics:
    """Measure text with a TrueType font through Pillow.

    Any problem loading or measuring the font is logged and answered by the
    approximate metrics instead.
    """

    def __init__(self, font_path: Optional[str] = None, family: str = "Arial, sans-serif"):
        """Initialize the metrics.

        Args:
            font_path: TrueType/OpenType file. ``None`` uses Pillow's bundled
                default font.
            family: Font family written into rendered text elements.
        """
        self.font_path = font_path
        self.family = family
        self.fallback = ApproximateFontMetrics(family=family)
        self._fonts: Dict[int, Optional[ImageFont.FreeTypeFont]] = {}
        self._warned = False

    def _warn(self, message: str, *args: object) -> None:
        if not self._warned:
            logger.warning(message, *args)
            self._warned = True

    def get_font(self, font_size: float) -> Optional[ImageFont.FreeTypeFont]:
        """Load (and cache) the font at an integer size, or None if unavailable."""
        size = max(1, int(round(font_size)))
        if size not in self._fonts:
            try:
                if self.font_path:
                    font = ImageFont.truetype(self.font_path, size)
                else:
                    font = ImageFont.load_default(size=size)
                self._fonts[size] = font if isinstance(font, ImageFont.FreeTypeFont) else None
            except (OSError, ValueError) as e:
                self._warn("Font %r unavailable, using approximate metrics: %s", self.font_path, e)
                self._fonts[size] = None
        return self._fonts[size]

    def measure(self, text: str, font_size: float) -> float:
        font = self.get_font(font_size)
        if font is None:
            return self.fallback.measure(text, font_size)
        try:
            return float(font.getlength(text))
        except (OSError, ValueError, UnicodeError) as e:
            self._warn("Measuring with %r failed, using approximate metrics: %s", self.font_path, e)
            return self.fallback.measure(text, font_size)

    def outline(self, text: str, x: float, y: float, font_size: float, anchor: str = "middle") -> str:
        return _text_element(text, x, y, font_size, anchor, self.family)


def resolve_font_metrics(metrics: Optional[FontMetrics] = None, average_glyph_width: float = 0.6) -> FontMetrics:
    """Return the given metrics or the approximate fallback."""
    if metrics is not None:
        return metrics
    return ApproximateFontMetrics(average_glyph_width=average_glyph_width)

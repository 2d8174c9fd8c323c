"""Service for rasterising puzzle fronts and backs with Pillow."""

import base64
import io
import logging
from typing import Dict, Optional, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError
from puzzle_facts import FactAssignment, PuzzleGeometry, sample_curves

from puzzle_service.config import settings

logger = logging.getLogger(__name__)


class InvalidPhotoError(ValueError):
    """Raised when uploaded bytes are not a readable image."""


def normalize_photo(data: bytes, max_side: int) -> Image.Image:
    """Decode a photo, apply its EXIF rotation and fit it inside ``max_side``.

    Args:
        data: Encoded image bytes.
        max_side: Largest allowed width or height.

    Returns:
        RGB image.

    Raises:
        InvalidPhotoError: If the bytes cannot be decoded.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise InvalidPhotoError(f"Could not read image: {e}") from e

    image = ImageOps.exif_transpose(image)
    if image.mode != "RGB":
        image = image.convert("RGB")
    if image.width > max_side or image.height > max_side:
        image.thumbnail((max_side, max_side), Image.Resampling.LANCZOS)
    return image


class PuzzleRenderer:
    """Draws cut-lines and facts onto bitmaps."""

    def __init__(
        self,
        line_color: str = "#000000",
        line_width: float = 2,
        line_opacity: float = 0.6,
        text_color: str = "#111111",
        font_path: Optional[str] = None,
        points_per_curve: int = 12,
    ):
        """Initialize the renderer.

        Args:
            line_color: Cut-line colour.
            line_width: Cut-line width in pixels.
            line_opacity: Cut-line opacity (0-1).
            text_color: Colour of the facts on the back.
            font_path: TrueType font for the facts; Pillow's default font if None.
            points_per_curve: Number of points to sample per Bezier curve.
        """
        self.line_color = line_color
        self.line_width = line_width
        self.line_opacity = line_opacity
        self.text_color = text_color
        self.font_path = font_path
        self.points_per_curve = points_per_curve
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _line_rgba(self) -> Tuple[int, int, int, int]:
        r, g, b = ImageColor.getrgb(self.line_color)[:3]
        return (r, g, b, int(round(255 * self.line_opacity)))

    def _font(self, size: int):
        if size not in self._fonts:
            try:
                if self.font_path:
                    self._fonts[size] = ImageFont.truetype(self.font_path, size)
                else:
                    self._fonts[size] = ImageFont.load_default(size=size)
            except OSError as e:
                logger.warning("Font %r unavailable, using Pillow default: %s", self.font_path, e)
                self._fonts[size] = ImageFont.load_default()
        return self._fonts[size]

    def draw_cut_lines(self, image: Image.Image, geometry: PuzzleGeometry) -> Image.Image:
        """Composite the cut-lines of ``geometry`` onto a copy of ``image``."""
        base = image.convert("RGBA")
        overlay = Image.new("RGBA", base.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        width = max(1, int(round(self.line_width)))
        color = self._line_rgba()

        spec = geometry.spec
        draw.rectangle((0, 0, spec.width - 1, spec.height - 1), outline=color, width=width)
        for curves in geometry.edge_curves():
            polyline = sample_curves(curves, self.points_per_curve)
            if len(polyline) >= 2:
                draw.line(polyline, fill=color, width=width, joint="curve")

        return Image.alpha_composite(base, overlay)

    def render_front(self, photo: Image.Image, geometry: PuzzleGeometry) -> Image.Image:
        """Photo with the cut-lines on top."""
        return self.draw_cut_lines(photo, geometry).convert("RGB")

    def render_back(self, geometry: PuzzleGeometry, assignment: FactAssignment) -> Image.Image:
        """White sheet with cut-lines and the mirrored facts."""
        spec = geometry.spec
        canvas = Image.new("RGB", (int(round(spec.width)), int(round(spec.height))), "#ffffff")
        image = self.draw_cut_lines(canvas, geometry)
        draw = ImageDraw.Draw(image)

        for entry in assignment.back_order():
            if entry is None or not entry.text:
                continue
            fit = entry.fit
            font = self._font(fit.font_size)
            start_y = entry.box.center_y - (len(fit.lines) - 1) * fit.line_height / 2
            for i, line in enumerate(fit.lines):
                draw.text(
                    (entry.box.center_x, start_y + i * fit.line_height),
                    line,
                    fill=self.text_color,
                    font=font,
                    anchor="mm",
                )
        return image.convert("RGB")

    @staticmethod
    def image_to_base64(image: Image.Image) -> str:
        """Convert a PIL Image to a base64 PNG data URL.

        Args:
            image: The image to convert.

        Returns:
            Base64 encoded data URL string.
        """
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        buffer.seek(0)
        base64_data = base64.b64encode(buffer.getvalue()).decode("utf-8")
        return f"data:image/png;base64,{base64_data}"


# Singleton instance
_renderer: Optional[PuzzleRenderer] = None


def get_renderer() -> PuzzleRenderer:
    """Get the singleton PuzzleRenderer instance."""
    global _renderer
    if _renderer is None:
        _renderer = PuzzleRenderer(
            line_color=settings.LINE_COLOR,
            line_width=settings.LINE_WIDTH,
            line_opacity=settings.LINE_OPACITY,
            font_path=settings.FONT_PATH,
        )
    return _renderer

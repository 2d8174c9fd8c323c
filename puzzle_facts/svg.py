"""SVG documents for the front and back of a puzzle."""

from dataclasses import dataclass
from typing import List, Optional

from .facts import FactAssignment
from .font_metrics import FontMetrics
from .geometry import PuzzleGeometry


@dataclass
class SvgStyle:
    """Stroke and text colours for the documents."""

    line_color: str = "#000000"
    line_width: float = 2
    line_opacity: float = 0.6
    text_color: str = "#111111"


def _cut_lines_group(geometry: PuzzleGeometry, style: SvgStyle) -> str:
    paths = "".join(f'<path d="{d}" />' for d in geometry.paths)
    return (
        f'<g fill="none" stroke="{style.line_color}" stroke-opacity="{style.line_opacity}" '
        f'stroke-width="{style.line_width}" stroke-linejoin="round" stroke-linecap="round">{paths}</g>'
    )


def _document(width: float, height: float, body: List[str]) -> str:
    content = "\n  ".join(body)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" height="{height:g}" '
        f'viewBox="0 0 {width:g} {height:g}">\n  {content}\n</svg>'
    )


def build_front_svg(geometry: PuzzleGeometry, style: Optional[SvgStyle] = None) -> str:
    """Cut-line overlay for the photo side."""
    style = style or SvgStyle()
    spec = geometry.spec
    return _document(spec.width, spec.height, [_cut_lines_group(geometry, style)])


def build_back_svg(
    geometry: PuzzleGeometry,
    assignment: FactAssignment,
    style: Optional[SvgStyle] = None,
    metrics: Optional[FontMetrics] = None,
) -> str:
    """Back side with cut-lines and every fact centred on its safe box.

    Args:
        geometry: Geometry shared with the front image.
        assignment: Facts laid out for the back cells.
        style: Colours and stroke settings.
        metrics: Backend producing the text elements; defaults to the one the
            assignment was laid out with.

    Returns:
        The SVG document.
    """
    style = style or SvgStyle()
    metrics = metrics or assignment.metrics
    spec = geometry.spec

    body = ['<rect width="100%" height="100%" fill="#ffffff" />', _cut_lines_group(geometry, style)]
    for entry in assignment.back_order():
        if entry is None or not entry.text:
            continue
        fit = entry.fit
        start_y = entry.box.center_y - (len(fit.lines) - 1) * fit.line_height / 2
        lines = "".join(
            metrics.outline(line, entry.box.center_x, start_y + i * fit.line_height, fit.font_size, "middle")
            for i, line in enumerate(fit.lines)
        )
        body.append(f'<g fill="{style.text_color}">{lines}</g>')
    return _document(spec.width, spec.height, body)

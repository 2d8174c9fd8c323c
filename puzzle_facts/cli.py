r"""Command line puzzle generator.

Builds the front cut-line overlay and the back fact sheet of a puzzle as SVG
documents, plus a JSON dump of the layout.

Example usage:
  # 12 piece puzzle from a facts file (one fact per line)
  python -m puzzle_facts --width 1200 --height 900 --rows 3 --cols 4 \
    --seed 42 --facts facts.txt --output-dir out/
"""

import argparse
import json
import logging
import os
import random
from typing import List, Optional

from .facts import FactAssignment
from .font_metrics import ApproximateFontMetrics, FontMetrics, PillowFontMetrics
from .geometry import build_puzzle_geometry
from .models import LayoutConfig, PuzzleSpec
from .sanitize import split_fact_lines
from .svg import SvgStyle, build_back_svg, build_front_svg

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate the front and back of a fact puzzle")
    parser.add_argument("--width", type=float, required=True, help="Puzzle width in pixels")
    parser.add_argument("--height", type=float, required=True, help="Puzzle height in pixels")
    parser.add_argument("--rows", type=int, required=True, help="Number of piece rows")
    parser.add_argument("--cols", type=int, required=True, help="Number of piece columns")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the cut-lines (random if omitted)",
    )
    parser.add_argument("--facts", help="Text file with one fact per line")
    parser.add_argument("--output-dir", default=".", help="Directory for front.svg, back.svg and layout.json")
    parser.add_argument("--font", default=None, help="TrueType font used to measure text")
    parser.add_argument(
        "--max-lines",
        type=int,
        default=LayoutConfig.max_lines,
        help=f"Maximum lines per fact (default: {LayoutConfig.max_lines})",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Process command-line arguments and write the puzzle files."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    seed = args.seed if args.seed is not None else random.getrandbits(32)
    spec = PuzzleSpec(width=args.width, height=args.height, rows=args.rows, cols=args.cols, seed=seed)
    config = LayoutConfig(max_lines=args.max_lines)
    metrics: FontMetrics = PillowFontMetrics(args.font) if args.font else ApproximateFontMetrics()

    geometry = build_puzzle_geometry(spec)
    assignment = FactAssignment(geometry, metrics=metrics, config=config)
    if args.facts:
        with open(args.facts, encoding="utf-8") as f:
            facts = split_fact_lines(f.read())
        rejected: List[str] = []
        assignment.extend(facts, rejected)
        for raw in rejected:
            print(f"Skipped fact without printable text: {raw!r}")
        ignored = len(facts) - len(rejected) - assignment.capacity
        if ignored > 0:
            logger.warning("Ignoring %d facts beyond %d pieces", ignored, assignment.capacity)

    os.makedirs(args.output_dir, exist_ok=True)
    style = SvgStyle()
    with open(os.path.join(args.output_dir, "front.svg"), "w", encoding="utf-8") as f:
        f.write(build_front_svg(geometry, style))
    with open(os.path.join(args.output_dir, "back.svg"), "w", encoding="utf-8") as f:
        f.write(build_back_svg(geometry, assignment, style))

    layout = {
        "spec": {"width": spec.width, "height": spec.height, "rows": spec.rows, "cols": spec.cols, "seed": spec.seed},
        "paths": geometry.paths,
        "metadata": geometry.metadata.to_dict(),
        "front": [e.to_dict() if e else None for e in assignment.front_order()],
        "back": [e.to_dict() if e else None for e in assignment.back_order()],
    }
    with open(os.path.join(args.output_dir, "layout.json"), "w", encoding="utf-8") as f:
        json.dump(layout, f, ensure_ascii=False, indent=2)

    for entry in assignment.changes():
        print(f"Fact {entry.index + 1} shortened: {entry.sanitized!r} -> {entry.text!r}")
    for entry in assignment.failures():
        print(f"Fact {entry.index + 1} does not fit its piece: {entry.text!r}")
    print(f"Wrote puzzle with seed {spec.seed} to {args.output_dir}")
    return 0

"""Command-line interface for stroke segmentation.

Reads a segmentation input as JSON, runs the segmenter and prints the result
as JSON. Optionally writes the SVG overlays and a PNG preview.

Usage:
    stroke-segmenter input.json
    stroke-segmenter input.json --config tuning.json --output out_dir
    stroke-segmenter - --png preview.png < input.json

Or run via the package:
    python -m stroke_segmenter input.json -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .api.segmenter import Segmenter
from .config import SegmentationConfig
from .domain.results import SegmentInput, SegmentResult
from .errors import SegmentationError
from .utils.rendering import render_preview

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog='stroke-segmenter',
        description='Split handwritten strokes into Japanese-ordered character slots'
    )
    parser.add_argument('input', type=str,
                        help="Input JSON file ('-' for stdin)")
    parser.add_argument('--config', '-c', type=str, default=None,
                        help='JSON file with configuration overrides')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Directory for segmentation.svg, lassos.svg and result.json')
    parser.add_argument('--png', type=str, default=None,
                        help='Write a raster preview to this file')
    parser.add_argument('--scale', type=float, default=1.0,
                        help='Preview pixels per canvas unit (default: 1.0)')
    parser.add_argument('--indent', type=int, default=2,
                        help='JSON indent for stdout (default: 2)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log pipeline stages to stderr')
    return parser


def _load_json(source: str) -> Any:
    if source == '-':
        return json.load(sys.stdin)
    return json.loads(Path(source).read_text(encoding='utf-8'))


def _write_outputs(output_dir: Path, result: SegmentResult) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / 'segmentation.svg').write_text(result.segmentation_svg, encoding='utf-8')
    (output_dir / 'lassos.svg').write_text(result.lasso_svg, encoding='utf-8')
    (output_dir / 'result.json').write_text(json.dumps(result.to_dict(), indent=2), encoding='utf-8')
    logger.info("wrote overlays and result to %s", output_dir)


def run(args: argparse.Namespace) -> int:
    """Run one segmentation as described by parsed arguments."""
    config = SegmentationConfig.from_dict(_load_json(args.config)) if args.config else None
    seg_input = SegmentInput.from_dict(_load_json(args.input))

    result = Segmenter(config).segment(seg_input)

    if args.output:
        _write_outputs(Path(args.output), result)
    if args.png:
        render_preview(seg_input, result, scale=args.scale).save(args.png)
        logger.info("wrote preview to %s", args.png)

    print(json.dumps(result.to_dict(), indent=args.indent))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``.

    Returns:
        0 on success, 2 if the input or configuration could not be read or
        was rejected.
    """
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        return run(args)
    except (SegmentationError, OSError, json.JSONDecodeError) as e:
        logger.error("%s", e)
        return EXIT_FAILURE


if __name__ == '__main__':
    sys.exit(main())

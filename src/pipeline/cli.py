"""
Command-line document scanner.

Scans a single image or every image in a directory and writes the
rectified pages plus a corners.json summary.

Usage:
    docscan --input photos/ --output scans/ --enhancement binarize --overlay --figure
"""

import argparse
import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from src.pipeline.config_loader import DEFAULT_CONFIG_PATH, load_config
from src.pipeline.processor import DocumentScanner
from src.pipeline.types import RectifiedResult
from src.rectification.enhancement import ENHANCEMENT_METHODS
from src.utils.io import list_images, load_image, save_image, save_json
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect and rectify documents in photos",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument('--input', type=str, required=True, help='Input image or directory')
    parser.add_argument('--output', type=str, default='scans', help='Output directory')
    parser.add_argument('--config', type=str, default=str(DEFAULT_CONFIG_PATH), help='Configuration file')
    parser.add_argument(
        '--enhancement',
        choices=ENHANCEMENT_METHODS,
        default=None,
        help='Override the configured enhancement method',
    )
    parser.add_argument('--overlay', action='store_true', help='Also write images with detected corners drawn')
    parser.add_argument('--figure', action='store_true', help='Also write a side-by-side matplotlib figure of corners and page')
    parser.add_argument('--log-level', type=str, default='INFO', help='Logging level')
    return parser


def _summarize(result: RectifiedResult) -> Dict[str, Any]:
    return {
        "corners": result.quadrilateral.to_list() if result.quadrilateral else None,
        "rectified": result.is_rectified(),
        "failure_reason": result.failure_reason.value,
    }


def scan_paths(
    scanner: DocumentScanner,
    image_paths: List[Path],
    output_dir: Path,
    overlay: bool = False,
    figure: bool = False,
) -> Dict[str, Any]:
    """
    Scan each image and write ``<stem>_scan.png``.

    With ``overlay`` also writes ``<stem>_overlay.png``; with ``figure`` also
    writes ``<stem>_figure.png`` (original with corners beside the page).

    Returns:
        Mapping of file name to corners, rectified flag and failure reason.
    """
    summary: Dict[str, Any] = {}

    for image_path in image_paths:
        try:
            image = load_image(image_path)
        except ValueError as e:
            logger.error(f"Skipping {image_path.name}: {e}")
            summary[image_path.name] = {"error": str(e)}
            continue

        result = scanner.scan(image)
        save_image(result.deliverable, output_dir / f"{image_path.stem}_scan.png")

        if overlay:
            from src.utils.visualization import draw_quadrilateral

            save_image(
                draw_quadrilateral(image, result.editable_corners()),
                output_dir / f"{image_path.stem}_overlay.png",
            )

        if figure:
            from src.utils.visualization import plot_scan_result

            plot_scan_result(
                image,
                result.editable_corners(),
                rectified=result.rectified,
                save_path=output_dir / f"{image_path.stem}_figure.png",
                show=False,
            )

        summary[image_path.name] = _summarize(result)
        logger.info(f"{image_path.name}: {result.get_error_message()}")

    return summary


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    input_path = Path(args.input)
    output_dir = Path(args.output)

    if not input_path.exists():
        logger.error(f"Input not found: {input_path}")
        return 1

    try:
        config = load_config(Path(args.config))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.enhancement is not None:
        config = dataclasses.replace(
            config,
            enhancement=dataclasses.replace(config.enhancement, method=args.enhancement),
        )

    image_paths = list_images(input_path) if input_path.is_dir() else [input_path]
    if not image_paths:
        logger.warning(f"No images found in {input_path}")

    scanner = DocumentScanner(config=config)
    summary = scan_paths(
        scanner, image_paths, output_dir, overlay=args.overlay, figure=args.figure
    )
    save_json(summary, output_dir / "corners.json")

    rectified = sum(1 for entry in summary.values() if entry.get("rectified"))
    logger.info(f"Rectified {rectified}/{len(image_paths)} images into {output_dir}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())

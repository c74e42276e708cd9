import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import httpx

from fake_product_detector.analysis.config import get_analysis_config
from fake_product_detector.ui.session import SelectedImage, UploadSession

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check a product photo against a running detector API"
    )
    parser.add_argument("image", type=Path)
    parser.add_argument("--demo", action="store_true", help="use the randomized demo endpoint")
    parser.add_argument(
        "--base-url", default=os.getenv("DETECTOR_BASE_URL", "http://127.0.0.1:8000")
    )
    parser.add_argument("--report-dir", type=Path, help="write the JSON report here")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, client: Optional[httpx.Client] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=get_analysis_config().log_level)

    if not args.image.is_file():
        print(f"File not found: {args.image}", file=sys.stderr)
        return 2
    image = SelectedImage.from_path(args.image)

    client = client or httpx.Client(base_url=args.base_url, timeout=None)
    with client:
        session = UploadSession(client=client, demo_mode=args.demo)
        if not session.select_image(image):
            print(f"Not an image file: {args.image}", file=sys.stderr)
            return 2
        result = session.analyze()

    if result is None:
        print(f"Error: {session.error}", file=sys.stderr)
        return 1

    print(f"Prediction: {result.prediction}")
    print(f"Confidence: {result.confidence}%")
    print(f"Reasoning: {result.reasoning}")
    for cue in result.details.visual_cues:
        print(f"  cue: {cue}")
    for factor in result.details.risk_factors:
        print(f"  risk: {factor}")

    if args.report_dir:
        downloaded = session.download_report()
        args.report_dir.mkdir(parents=True, exist_ok=True)
        report_path = args.report_dir / downloaded.filename
        report_path.write_text(downloaded.content)
        logger.info("Report written to %s", report_path)
        print(f"Report: {report_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

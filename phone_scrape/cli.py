"""Command-line interface for the phone catalog tools."""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

# .env overrides must be in the environment before config is imported
load_dotenv()

from phone_scrape.config import (  # noqa: E402
    CATALOG_URL,
    FEED_DOCS_JSON_PATH,
    FEED_EXCEL_PATH,
    FEED_JSON_PATH,
    IMAGE_NAMESPACE,
    IMAGES_DIR,
    OUTPUT_PATH,
    REQUEST_TIMEOUT,
)
from phone_scrape.feed import rename_feed_images, sync_feed_from_excel  # noqa: E402
from phone_scrape.logging_config import get_logger, setup_logging  # noqa: E402
from phone_scrape.scraper import FetchError  # noqa: E402
from phone_scrape.workflows import build_catalog_workflow  # noqa: E402

__all__ = ["main", "parse_args"]

logger = get_logger("cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the Paraguay phones workbook and the storefront product feed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape the catalog, download images, write data/products-paraguay.xlsx
  python -m phone_scrape.cli

  # Scrape without downloading images
  python -m phone_scrape.cli --skip-images

  # Regenerate public/data/products.json from data/products.xlsx
  python -m phone_scrape.cli --sync-feed

  # Rename downloaded images to brand/model filenames
  python -m phone_scrape.cli --rename-images
        """,
    )

    # Build pipeline
    parser.add_argument(
        "--url",
        default=CATALOG_URL,
        help="Catalog listing URL (default: Tienda Movil phones)",
    )
    parser.add_argument(
        "--output",
        default=OUTPUT_PATH,
        help=f"Workbook output path (default: {OUTPUT_PATH})",
    )
    parser.add_argument(
        "--images-dir",
        default=IMAGES_DIR,
        help=f"Directory for downloaded images (default: {IMAGES_DIR})",
    )
    parser.add_argument(
        "--skip-images",
        action="store_true",
        help="Keep remote image URLs instead of downloading",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT,
        help=f"Catalog request timeout in seconds (default: {REQUEST_TIMEOUT:g})",
    )

    # Feed commands
    parser.add_argument(
        "--sync-feed",
        nargs="?",
        const=FEED_EXCEL_PATH,
        metavar="EXCEL_PATH",
        help=f"Convert a product workbook to the JSON feed (default: {FEED_EXCEL_PATH})",
    )
    parser.add_argument(
        "--rename-images",
        action="store_true",
        help="Rename downloaded images after brand/model and update the feed",
    )
    parser.add_argument(
        "--feed-json",
        default=FEED_JSON_PATH,
        help=f"Feed JSON path (default: {FEED_JSON_PATH})",
    )
    parser.add_argument(
        "--docs-json",
        default=FEED_DOCS_JSON_PATH,
        help=f"Mirror of the feed for the static build (default: {FEED_DOCS_JSON_PATH})",
    )

    # Logging
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Don't write the JSONL log under logs/",
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI. Returns the process exit code."""
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=not args.no_log_file,
    )

    try:
        if args.sync_feed:
            sync_feed_from_excel(args.sync_feed, args.feed_json, args.docs_json)
            return 0

        if args.rename_images:
            rename_feed_images(args.feed_json, args.docs_json, images_dir=args.images_dir)
            return 0

        summary = build_catalog_workflow(
            url=args.url,
            output_path=args.output,
            images_dir=args.images_dir,
            download_images=not args.skip_images,
            timeout=args.timeout,
        )
    except (FetchError, ValueError, OSError) as e:
        # FetchError, bad feed JSON or workbook, missing or unwritable paths
        logger.error(f"Failed: {e}")
        return 1

    logger.info(f"Wrote {summary['rows']} rows to {summary['output_path']}")
    if not args.skip_images:
        logger.info(
            f"Images saved under {args.images_dir} and referenced via "
            f"/images/{IMAGE_NAMESPACE}/<filename>."
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())

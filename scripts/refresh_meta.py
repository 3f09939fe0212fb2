#!/usr/bin/env python3

"""
Auto-SEO Refresh - pull today's trending searches and fold them into the
site's SEO metadata (``data/seo.json``).

Usage
-----
python scripts/refresh_meta.py                      # default region (TRENDS_GEO, TW)
python scripts/refresh_meta.py --geo JP --seo-path /srv/site/data/seo.json

Exit code is 0 when the metadata was updated or there was nothing to update,
1 when the document could not be read or written. Scheduling is left to cron
or CI; concurrent runs against the same file are not coordinated.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from enum import IntEnum
from pathlib import Path
from typing import Callable, List

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fetchers.google_trends_seeder import fetch_trends
from metadata_engine.errors import DocumentReadError, DocumentWriteError
from metadata_engine.store import SEO_META_PATH, load_metadata, merge_keywords, save_metadata

logger = logging.getLogger(__name__)

TRENDS_GEO = os.getenv("TRENDS_GEO", "TW")


class ExitStatus(IntEnum):
    """Process exit code returned by run()."""

    SUCCESS = 0
    FAILURE = 1


def run(
    region: str = TRENDS_GEO,
    seo_path: Path | str = SEO_META_PATH,
    *,
    fetch: Callable[[str], List[str]] = fetch_trends,
) -> ExitStatus:
    """Fetch trends, merge them into the metadata document and save it."""
    trends = fetch(region)
    if not trends:
        logger.info("[Auto-SEO] No trends found, skipping update.")
        return ExitStatus.SUCCESS

    try:
        current = load_metadata(seo_path)
        updated = merge_keywords(current, trends)
        save_metadata(updated, seo_path)
    except DocumentReadError as exc:
        logger.error(f"[Auto-SEO] Could not load metadata: {exc}")
        return ExitStatus.FAILURE
    except DocumentWriteError as exc:
        logger.error(f"[Auto-SEO] Could not save metadata: {exc}")
        return ExitStatus.FAILURE
    except Exception:
        logger.exception("[Auto-SEO] Critical Error")
        return ExitStatus.FAILURE

    logger.info(f"[Auto-SEO] Updated successfully with: {trends[:5]}")
    return ExitStatus.SUCCESS


def main() -> None:
    """Entry-point for the metadata refresh."""
    parser = argparse.ArgumentParser(description="Refresh SEO keywords and description from Google daily trends")
    parser.add_argument("--geo", default=TRENDS_GEO, help=f"Trends region code (default: {TRENDS_GEO})")
    parser.add_argument("--seo-path", type=Path, default=SEO_META_PATH, help="Metadata JSON document to update")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    # Configure logging early so fetchers and the store inherit the level
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    status = run(args.geo, args.seo_path)
    sys.exit(int(status))


if __name__ == "__main__":
    main()

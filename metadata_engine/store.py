"""Load, merge and persist the SEO metadata document.

The document is a single JSON object on disk. A run reads it once, derives a
new :class:`MetadataDocument` with :func:`merge_keywords` and writes it back
with :func:`save_metadata`. The file is never created or deleted here.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv
from pydantic import ValidationError

from .errors import DocumentReadError, DocumentWriteError
from .models import MetadataDocument

load_dotenv()

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
SEO_META_PATH = Path(os.getenv("SEO_META_PATH", _REPO_ROOT / "data" / "seo.json"))

MAX_KEYWORDS = 30
DESCRIPTION_TREND_COUNT = 6
DESCRIPTION_PREFIX = "最新熱門搜尋："
DESCRIPTION_DELIMITER = "、"
DESCRIPTION_TAGLINE = "... 獨家技術｜AI學習演算法｜多種判定引擎"


# ----------------------------------------------------------------------------
# Persistence
# ----------------------------------------------------------------------------


def load_metadata(path: Path | str = SEO_META_PATH) -> MetadataDocument:
    """Read and validate the metadata document at *path*.

    Raises
    ------
    DocumentReadError
        If the file is missing, unreadable, not valid JSON, or its
        ``keywords`` field is not a list of strings.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DocumentReadError(f"Metadata file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(f"Could not read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DocumentReadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise DocumentReadError(f"Expected a JSON object in {path}, got {type(raw).__name__}")

    try:
        return MetadataDocument.model_validate(raw)
    except ValidationError as exc:
        raise DocumentReadError(f"Malformed metadata document {path}: {exc}") from exc


def save_metadata(doc: MetadataDocument, path: Path | str = SEO_META_PATH) -> None:
    """Overwrite the existing document at *path* with *doc*.

    The payload goes to a sibling ``.tmp`` file first and is then renamed over
    the target, so readers never observe a half-written document.
    """
    path = Path(path)
    if not path.exists():
        raise DocumentWriteError(f"Refusing to create missing metadata file: {path}")

    payload = json.dumps(doc.to_json_dict(), ensure_ascii=False, indent=2) + "\n"
    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(path, tmp)
        tmp.replace(path)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise DocumentWriteError(f"Could not write {path}: {exc}") from exc

    logger.debug(f"Wrote {len(doc.keywords)} keywords to {path}")


# ----------------------------------------------------------------------------
# Transformation
# ----------------------------------------------------------------------------


def dedupe_keywords(items: Iterable[str]) -> List[str]:
    """Drop repeated entries, keeping the first occurrence of each."""
    return list(dict.fromkeys(items))


def build_description(trends: List[str]) -> str:
    """Description embedding the first few trend terms plus fixed copy."""
    head = DESCRIPTION_DELIMITER.join(trends[:DESCRIPTION_TREND_COUNT])
    return f"{DESCRIPTION_PREFIX}{head}{DESCRIPTION_TAGLINE}"


def merge_keywords(
    current: MetadataDocument,
    trends: List[str],
    *,
    limit: int = MAX_KEYWORDS,
) -> MetadataDocument:
    """Return a copy of *current* with *trends* merged into its keywords.

    Trend terms come first, stored keywords follow; duplicates are dropped
    (first occurrence wins) and the result is capped at *limit* entries. The
    description is rebuilt from *trends* alone.
    """
    keywords = dedupe_keywords([*trends, *current.keywords])[:limit]
    return current.model_copy(
        update={
            "keywords": keywords,
            "description": build_description(trends),
        },
    )

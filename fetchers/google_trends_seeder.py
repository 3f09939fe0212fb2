from __future__ import annotations
import json
import logging
import os
import re
from typing import Any, List, Optional

import httpx
from dotenv import load_dotenv

from metadata_engine.errors import TransientFetchError

load_dotenv()  # Load environment variables from .env file

logger = logging.getLogger(__name__)

TRENDS_URL = os.getenv("TRENDS_URL", "https://trends.google.com/trends/api/dailytrends")
TRENDS_HL = os.getenv("TRENDS_HL", "zh-TW")
TRENDS_TZ = os.getenv("TRENDS_TZ", "-480")
TRENDS_TIMEOUT_SECS = float(os.getenv("TRENDS_TIMEOUT_SECS", "15"))
TRENDS_USER_AGENT = os.getenv(
    "TRENDS_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)

# Google prepends this to its JSON responses
_GUARD_PREFIX = re.compile(r"^\)\]\}'\n?")


def strip_guard_prefix(text: str) -> str:
    """Remove the leading ``)]}'`` guard (and one newline) if present."""
    return _GUARD_PREFIX.sub("", text, count=1)


def _require(node: Any, key: str | int, kind: type) -> Any:
    """Step one segment into *node*, raising if it is absent or mistyped."""
    try:
        child = node[key]
    except (KeyError, IndexError, TypeError) as exc:
        raise TransientFetchError(f"Trends payload missing segment {key!r}") from exc
    if not isinstance(child, kind):
        raise TransientFetchError(f"Trends payload segment {key!r} is {type(child).__name__}, expected {kind.__name__}")
    return child


def parse_trends_payload(text: str) -> List[str]:
    """Extract trending queries from a daily-trends response body.

    Walks ``default.trendingSearchesDays[0].trendingSearches[*].title.query``
    and keeps feed order. Items without a usable query string are skipped.
    """
    try:
        payload = json.loads(strip_guard_prefix(text))
    except json.JSONDecodeError as exc:
        raise TransientFetchError(f"Trends response is not valid JSON: {exc}") from exc

    default = _require(payload, "default", dict)
    days = _require(default, "trendingSearchesDays", list)
    first_day = _require(days, 0, dict)
    searches = _require(first_day, "trendingSearches", list)

    queries: List[str] = []
    for item in searches:
        title = item.get("title") if isinstance(item, dict) else None
        query = title.get("query") if isinstance(title, dict) else None
        if isinstance(query, str) and query.strip():
            queries.append(query)
    return queries


def fetch_trends(
    region: str,
    *,
    client: Optional[httpx.Client] = None,
    url: str = TRENDS_URL,
    timeout: float = TRENDS_TIMEOUT_SECS,
) -> List[str]:
    """Fetch today's trending searches for *region* (e.g. ``"TW"``).

    Never raises: any network, HTTP or parsing failure is logged and an empty
    list is returned.
    """
    params = {"geo": region, "hl": TRENDS_HL, "tz": TRENDS_TZ}
    headers = {"User-Agent": TRENDS_USER_AGENT}
    try:
        logger.info(f"Requesting daily trends for {region}")
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
                response = own_client.get(url, params=params, headers=headers)
        else:
            response = client.get(url, params=params, headers=headers)
        response.raise_for_status()
        trends = parse_trends_payload(response.text)
    except Exception as e:
        logger.error(f"Fetch trends failed for {region}: {e}")
        return []

    logger.info(f"Fetched {len(trends)} trending searches for {region}")
    return trends

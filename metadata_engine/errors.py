"""Exception types raised by the SEO metadata refresh pipeline."""
from __future__ import annotations


class MetaRefreshError(Exception):
    """Base class for pipeline failures."""


class TransientFetchError(MetaRefreshError):
    """Trend feed could not be fetched or parsed. Always absorbed by the fetcher."""


class DocumentReadError(MetaRefreshError):
    """Metadata document is missing, unreadable or not valid JSON."""


class DocumentWriteError(MetaRefreshError):
    """Metadata document could not be persisted."""

"""Auto-SEO metadata engine.

Loads the persisted SEO metadata document, merges fresh trend terms into its
keyword list and writes it back.
"""

__all__ = [
    "MetadataDocument",
    "load_metadata",
    "save_metadata",
    "merge_keywords",
]

__version__ = "0.1.0"

from .models import MetadataDocument
from .store import load_metadata, merge_keywords, save_metadata

"""Pydantic data models used across the metadata engine."""
from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


class MetadataDocument(BaseModel):
    """SEO metadata persisted in ``data/seo.json`` and read by the page renderer.

    Only ``keywords`` and ``description`` are managed here; any other field
    (title, url, image, ...) is kept as an extra and written back untouched.
    """

    keywords: List[str] = Field(default_factory=list, description="Ordered, de-duplicated keyword list")
    description: str = Field("", description="Meta description shown in search results")

    model_config = {
        "frozen": True,
        "extra": "allow",
    }

    @field_validator("keywords", mode="before")
    @classmethod
    def _null_keywords_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("description", mode="before")
    @classmethod
    def _unusable_description_as_empty(cls, value: Any) -> str:
        # Rebuilt on every merge, so a non-string value is simply dropped
        return value if isinstance(value, str) else ""

    def to_json_dict(self) -> dict:
        """Return the document as a plain dict ready for ``json.dump``."""
        return self.model_dump(mode="json")

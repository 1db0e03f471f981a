from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ARTICLE_TYPES = (
    "Article",
    "NewsArticle",
    "AnalysisNewsArticle",
    "BackgroundNewsArticle",
    "OpinionNewsArticle",
    "ReportageNewsArticle",
    "ReviewNewsArticle",
    "BlogPosting",
    "LiveBlogPosting",
    "SocialMediaPosting",
    "ScholarlyArticle",
    "TechArticle",
    "Report",
)


def _split_csv(raw_value: str | None) -> list[str]:
    if not raw_value:
        return []
    return [fragment.strip() for fragment in raw_value.split(",") if fragment.strip()]


@dataclass(frozen=True)
class ExtractionConfig:
    """Settings consumed by the extraction engine."""

    article_types: frozenset[str] = frozenset(DEFAULT_ARTICLE_TYPES)

    @classmethod
    def from_env(cls) -> ExtractionConfig:
        """Create an ExtractionConfig from environment variables."""
        article_types = _split_csv(os.getenv("ARTICLE_TYPES"))
        if not article_types:
            return cls()
        return cls(article_types=frozenset(article_types))


@dataclass(frozen=True)
class ApiConfig:
    """Settings for the HTTP layer around the engine."""

    allowed_origins: tuple[str, ...]
    max_document_bytes: int
    extract_rate_limit: str
    ratelimit_storage_uri: str

    @classmethod
    def from_env(cls) -> ApiConfig:
        """Create an ApiConfig from environment variables with sensible defaults."""
        raw_max_bytes = os.getenv("MAX_DOCUMENT_BYTES", str(5 * 1024 * 1024))
        try:
            max_bytes = int(raw_max_bytes)
        except ValueError:
            max_bytes = 5 * 1024 * 1024
        return cls(
            allowed_origins=tuple(_split_csv(os.getenv("REQUEST_ORIGIN"))),
            max_document_bytes=max_bytes,
            extract_rate_limit=os.getenv("EXTRACT_RATE_LIMIT", "60/minute"),
            ratelimit_storage_uri=(
                os.getenv("RATELIMIT_STORAGE_URI") or "memory://"
            ).strip(),
        )

"""Single-pass extraction of article data from a rendered document."""

from __future__ import annotations

import time
from typing import Optional

import structlog

from pagegist.config import ExtractionConfig
from pagegist.models.result import ExtractionResult
from pagegist.services.classifier import is_article
from pagegist.services.collectors import collect_external_links, collect_images
from pagegist.services.comments import extract_comments
from pagegist.services.document import PageDocument
from pagegist.services.exceptions import ExtractionFailure
from pagegist.services.locator import locate_content
from pagegist.services.resolvers import resolve_author, resolve_description
from pagegist.utils.text_cleaner import normalize_whitespace

logger = structlog.get_logger(__name__)


def _build_result(document: PageDocument, config: ExtractionConfig) -> ExtractionResult:
    content = locate_content(document.root)
    tree = document.document_element
    return ExtractionResult(
        title=document.title,
        lastModified=document.last_modified,
        author=resolve_author(document),
        description=resolve_description(document),
        text=normalize_whitespace(content.text()),
        images=collect_images(content, document.url),
        comments=extract_comments(tree),
        externalLinks=collect_external_links(tree, document.url),
        isArticle=is_article(tree, config.article_types),
    )


def extract(
    document: PageDocument, config: Optional[ExtractionConfig] = None
) -> ExtractionResult:
    """
    Extract article data from one document snapshot.

    Args:
        document: A fully loaded document.
        config: Engine settings; read from the environment when omitted.

    Returns:
        The complete ExtractionResult. Absent data is represented by empty
        values, never by missing fields.

    Raises:
        ExtractionFailure: The document could not be processed. No partial
            result is produced.
    """
    config = config or ExtractionConfig.from_env()
    started = time.perf_counter()
    try:
        result = _build_result(document, config)
    except Exception as exc:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        # structlog treats the first positional argument as the ``event`` field; keep it keyword-only.
        logger.error(
            event="extraction_failed",
            operation="extraction.run",
            url=document.url,
            status="failure",
            error_type=exc.__class__.__name__,
            error=str(exc),
            elapsed_ms=elapsed_ms,
        )
        raise ExtractionFailure(
            f"Extraction failed: {exc}", url=document.url
        ) from exc

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        event="extraction_completed",
        operation="extraction.run",
        url=document.url,
        status="success",
        chars=len(result.text),
        images=len(result.images),
        comments=len(result.comments),
        external_links=len(result.externalLinks),
        is_article=result.isArticle,
        elapsed_ms=elapsed_ms,
    )
    return result

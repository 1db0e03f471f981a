"""Image and outbound link collection."""

from __future__ import annotations

from typing import Iterable, Optional

from pagegist.services.document import Element, tag_is
from pagegist.utils.http import resolve_link, resolve_source, url_origin


def _unique(values: Iterable[Optional[str]]) -> tuple[str, ...]:
    # dict preserves insertion order, so the first occurrence wins.
    return tuple(dict.fromkeys(value for value in values if value))


def collect_images(content: Element, base_url: str) -> tuple[str, ...]:
    """Resolved ``src`` of every image inside the content element."""
    return _unique(
        resolve_source(base_url, image.attr("src"))
        for image in content.find_all(tag_is("img"))
    )


def _is_external(link: str, document_url: str) -> bool:
    # Loose check kept for compatibility: the link's origin only has to appear
    # somewhere in the document URL for the link to count as same-site.
    return url_origin(link) not in document_url


def collect_external_links(document_element: Element, document_url: str) -> tuple[str, ...]:
    """Absolute URLs of anchors pointing away from the document's own origin."""
    resolved = (
        resolve_link(document_url, anchor.attr("href"))
        for anchor in document_element.find_all(tag_is("a"))
    )
    return _unique(
        link for link in resolved if link is not None and _is_external(link, document_url)
    )

"""
Metadata resolvers built from ordered strategy chains.

Each strategy is a pure function of the document returning a candidate value
or ``None``. A chain runs its strategies left to right and keeps the first
candidate that is not blank.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from pagegist.services.document import (
    Element,
    PageDocument,
    attr_tokens,
    has_itemprop,
    has_itemtype,
    property_value,
)
from pagegist.utils.text_cleaner import normalize_whitespace

StrategyFn = Callable[[PageDocument], Optional[str]]

AUTHOR_KEYWORD = "author"
_AUTHOR_ATTRIBUTES = ("class", "id", "name")


@dataclass(frozen=True)
class ResolverStrategy:
    name: str
    resolve: StrategyFn

    def run(self, document: PageDocument) -> Optional[str]:
        value = normalize_whitespace(self.resolve(document))
        return value or None


def resolve_first(strategies: Iterable[ResolverStrategy], document: PageDocument) -> str:
    """Return the first non-blank, normalised candidate, or an empty string."""
    for strategy in strategies:
        value = strategy.run(document)
        if value:
            return value
    return ""


def _meta_content(document: PageDocument, matches: Callable[[str], bool]) -> Optional[str]:
    meta = document.document_element.find_first(
        lambda element: element.tag == "meta" and matches(element.attr("name") or "")
    )
    if meta is None:
        return None
    return meta.attr("content")


def _author_from_meta(document: PageDocument) -> Optional[str]:
    return _meta_content(document, lambda name: name == AUTHOR_KEYWORD)


def _is_person_author(element: Element) -> bool:
    return has_itemprop(AUTHOR_KEYWORD)(element) and has_itemtype("schema.org/Person")(
        element
    )


def _author_from_schema_person(document: PageDocument) -> Optional[str]:
    for person in document.document_element.find_all(_is_person_author):
        name = person.find_first(has_itemprop("name"))
        if name is None:
            continue
        value = property_value(name)
        if value.strip():
            return value
    return None


def _has_exact_author_attribute(element: Element) -> bool:
    return (
        AUTHOR_KEYWORD in attr_tokens(element, "class")
        or element.attr("id") == AUTHOR_KEYWORD
        or element.attr("name") == AUTHOR_KEYWORD
    )


def _has_partial_author_attribute(element: Element) -> bool:
    return any(
        AUTHOR_KEYWORD in (element.attr(attribute) or "")
        for attribute in _AUTHOR_ATTRIBUTES
    )


def _first_text(document: PageDocument, predicate: Callable[[Element], bool]) -> Optional[str]:
    # Elements without visible text (an empty <meta name="author">) never win.
    element = document.document_element.find_first(
        lambda candidate: predicate(candidate) and bool(candidate.text().strip())
    )
    return element.text() if element is not None else None


def _author_from_exact_attribute(document: PageDocument) -> Optional[str]:
    return _first_text(document, _has_exact_author_attribute)


def _author_from_partial_attribute(document: PageDocument) -> Optional[str]:
    return _first_text(document, _has_partial_author_attribute)


AUTHOR_STRATEGIES: tuple[ResolverStrategy, ...] = (
    ResolverStrategy("meta_author", _author_from_meta),
    ResolverStrategy("schema_person", _author_from_schema_person),
    ResolverStrategy("attribute_exact", _author_from_exact_attribute),
    ResolverStrategy("attribute_partial", _author_from_partial_attribute),
)


def _description_from_meta(document: PageDocument) -> Optional[str]:
    return _meta_content(document, lambda name: name.lower() == "description")


DESCRIPTION_STRATEGIES: tuple[ResolverStrategy, ...] = (
    ResolverStrategy("meta_description", _description_from_meta),
)


def resolve_author(document: PageDocument) -> str:
    return resolve_first(AUTHOR_STRATEGIES, document)


def resolve_description(document: PageDocument) -> str:
    return resolve_first(DESCRIPTION_STRATEGIES, document)

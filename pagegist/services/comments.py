from typing import Optional

from pagegist.models.result import UserComment
from pagegist.services.document import Element, has_itemprop, has_itemtype
from pagegist.utils.text_cleaner import normalize_whitespace

COMMENT_ITEM_TYPE = "schema.org/Comment"


def _property(item: Element, name: str) -> Optional[Element]:
    return item.find_first(has_itemprop(name))


def _property_text(item: Element, name: str) -> str:
    element = _property(item, name)
    return normalize_whitespace(element.text()) if element is not None else ""


def _date_created(item: Element) -> str:
    element = _property(item, "dateCreated")
    if element is None:
        return ""
    return element.attr("datetime") or element.attr("content") or ""


def _to_comment(item: Element) -> UserComment:
    return UserComment(
        user=_property_text(item, "author"),
        text=_property_text(item, "text"),
        dateCreated=_date_created(item),
    )


def extract_comments(document_element: Element) -> tuple[UserComment, ...]:
    """Read every schema.org Comment item in document order."""
    items = document_element.find_all(has_itemtype(COMMENT_ITEM_TYPE))
    return tuple(_to_comment(item) for item in items)

"""
Document model used by the extraction engine.

The engine only needs four capabilities from a document tree: find the first
descendant matching a predicate, find every such descendant, look up an
attribute, and read the rendered text. ``Element`` and ``PageDocument`` spell
that contract out so the resolvers can run against any tree; ``SoupDocument``
is the implementation backed by BeautifulSoup and lxml.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from pagegist.services.exceptions import DocumentError
from pagegist.utils.text_cleaner import normalize_whitespace

Predicate = Callable[["Element"], bool]

# Subtrees whose text never renders.
_HIDDEN_TAGS = frozenset({"script", "style", "noscript", "template", "head"})
# Tags that start a new line when rendered; their text must not fuse with neighbours.
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "details",
        "div", "dl", "dt", "figcaption", "figure", "footer", "form", "h1",
        "h2", "h3", "h4", "h5", "h6", "header", "hr", "li", "main", "nav",
        "ol", "p", "pre", "section", "summary", "table", "td", "th", "tr",
        "ul",
    }
)


class Element(Protocol):
    @property
    def tag(self) -> str: ...

    def attr(self, name: str) -> Optional[str]: ...

    def find_first(self, predicate: Predicate) -> Optional["Element"]: ...

    def find_all(self, predicate: Predicate) -> list["Element"]: ...

    def text(self) -> str: ...


class PageDocument(Protocol):
    url: str
    last_modified: str
    title: str

    @property
    def root(self) -> Element: ...

    @property
    def document_element(self) -> Element: ...


class SoupElement:
    """An ``Element`` view over a BeautifulSoup tag. Never mutates the tree."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SoupElement) and other._tag is self._tag

    def __hash__(self) -> int:
        return id(self._tag)

    def __repr__(self) -> str:
        return f"SoupElement(<{self._tag.name}>)"

    @property
    def tag(self) -> str:
        return self._tag.name

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as class into lists.
        if isinstance(value, list):
            return " ".join(value)
        return value

    def _matcher(self, predicate: Predicate) -> Callable[[Tag], bool]:
        return lambda tag: predicate(SoupElement(tag))

    def find_first(self, predicate: Predicate) -> Optional[SoupElement]:
        found = self._tag.find(self._matcher(predicate))
        return SoupElement(found) if found is not None else None

    def find_all(self, predicate: Predicate) -> list[SoupElement]:
        return [SoupElement(tag) for tag in self._tag.find_all(self._matcher(predicate))]

    def _is_hidden(self, node: NavigableString) -> bool:
        for parent in node.parents:
            if parent is self._tag:
                return False
            if parent.name in _HIDDEN_TAGS:
                return True
        return False

    def text(self) -> str:
        """Approximate the rendered text (``innerText``) of the element."""
        pieces: list[str] = []
        for node in self._tag.descendants:
            if isinstance(node, Tag):
                if node.name in _BLOCK_TAGS:
                    pieces.append("\n")
                continue
            if not isinstance(node, NavigableString) or isinstance(
                node, PreformattedString
            ):
                continue
            if self._is_hidden(node):
                continue
            pieces.append(str(node))
        return "".join(pieces)


class SoupDocument:
    """A rendered page snapshot parsed with BeautifulSoup."""

    def __init__(
        self, soup: BeautifulSoup, url: str, last_modified: Optional[str] = None
    ) -> None:
        self._soup = soup
        self.url = url
        self.last_modified = (
            last_modified if last_modified is not None else self._meta_last_modified()
        )
        title = soup.find("title")
        self.title = normalize_whitespace(title.get_text()) if title else ""

    @classmethod
    def from_html(
        cls, html: str, url: str, last_modified: Optional[str] = None
    ) -> SoupDocument:
        return cls(BeautifulSoup(html or "", "lxml"), url, last_modified)

    def _meta_last_modified(self) -> str:
        meta = self._soup.find(
            "meta",
            attrs={"http-equiv": lambda value: bool(value) and value.lower() == "last-modified"},
        )
        if meta is None:
            return ""
        return meta.get("content") or ""

    @property
    def root(self) -> SoupElement:
        body = self._soup.body
        if body is None:
            raise DocumentError("Document has no body element.", url=self.url)
        return SoupElement(body)

    @property
    def document_element(self) -> SoupElement:
        """The whole tree, head included, for document-wide queries."""
        return SoupElement(self._soup)


def tag_is(name: str) -> Predicate:
    return lambda element: element.tag == name


def attr_tokens(element: Element, name: str) -> list[str]:
    """Split a whitespace-separated attribute (class, itemprop, itemtype)."""
    return (element.attr(name) or "").split()


def has_itemprop(name: str) -> Predicate:
    return lambda element: name in attr_tokens(element, "itemprop")


def has_itemtype(suffix: str) -> Predicate:
    """Match microdata items whose type URL ends with ``suffix``."""
    return lambda element: any(
        item_type.endswith(suffix) for item_type in attr_tokens(element, "itemtype")
    )


def property_value(element: Element) -> str:
    """Microdata value of a property element: ``content`` for meta, else its text."""
    if element.tag == "meta":
        return element.attr("content") or ""
    return element.text()

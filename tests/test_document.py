import pytest
from bs4 import BeautifulSoup

from pagegist.services.document import SoupDocument, has_itemprop, has_itemtype, tag_is
from pagegist.services.exceptions import DocumentError
from pagegist.utils.text_cleaner import normalize_whitespace


def test_text_skips_scripts_styles_and_comments(make_document):
    document = make_document(
        "<p>Visible</p><script>var hidden = 1;</script>"
        "<style>p { color: red; }</style><!-- note --><p>Also visible</p>"
    )

    text = normalize_whitespace(document.root.text())

    assert text == "Visible Also visible"


def test_text_keeps_adjacent_blocks_apart(make_document):
    document = make_document("<div>One</div><div>Two</div><p>Three<br>Four</p>")

    assert normalize_whitespace(document.root.text()) == "One Two Three Four"


def test_attr_joins_multi_valued_attributes(make_document):
    document = make_document('<span class="byline  author">Name</span>')
    span = document.root.find_first(tag_is("span"))

    assert span.attr("class") == "byline author"
    assert span.attr("missing") is None


def test_find_all_returns_document_order(make_document):
    document = make_document(
        '<div itemprop="author">A</div><section><p itemprop="name author">B</p></section>'
    )

    matches = document.root.find_all(has_itemprop("author"))

    assert [element.text() for element in matches] == ["A", "B"]


def test_itemtype_matches_by_suffix(make_document):
    document = make_document(
        '<div itemscope itemtype="http://schema.org/Person">P</div>'
        '<div itemscope itemtype="https://schema.org/Comment">C</div>'
    )

    assert document.root.find_first(has_itemtype("schema.org/Comment")).text() == "C"


def test_title_is_normalised(make_document):
    document = make_document(head="<title>  A   Title\n</title>")

    assert document.title == "A Title"


def test_last_modified_falls_back_to_meta_http_equiv():
    html = (
        '<html><head><meta http-equiv="Last-Modified" content="Tue, 05 Mar 2024 08:00:00 GMT">'
        "</head><body><p>x</p></body></html>"
    )

    document = SoupDocument.from_html(html, "https://example.com/")

    assert document.last_modified == "Tue, 05 Mar 2024 08:00:00 GMT"


def test_explicit_last_modified_is_kept_verbatim():
    document = SoupDocument.from_html("<p>x</p>", "https://example.com/", " 01/01/2024 ")

    assert document.last_modified == " 01/01/2024 "


def test_missing_body_raises_document_error():
    document = SoupDocument(BeautifulSoup("<p>x</p>", "html.parser"), "https://example.com/")

    with pytest.raises(DocumentError):
        document.root

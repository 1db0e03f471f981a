from pagegist.services.collectors import collect_external_links, collect_images
from pagegist.services.locator import locate_content
from pagegist.utils.http import resolve_link, resolve_source, url_origin


def _links(document):
    return collect_external_links(document.document_element, document.url)


def test_duplicate_images_are_collapsed(make_document):
    document = make_document(
        '<article><img src="https://x/a.png"><p>Text</p><img src="https://x/a.png"></article>'
    )

    content = locate_content(document.root)

    assert collect_images(content, document.url) == ("https://x/a.png",)


def test_images_are_scoped_to_content_and_resolved(make_document):
    document = make_document(
        '<header><img src="/logo.png"></header>'
        '<article><img src="/media/one.jpg"><img><img src="  ">'
        '<img src="two.jpg"></article>'
    )

    content = locate_content(document.root)

    assert collect_images(content, document.url) == (
        "https://example.com/media/one.jpg",
        "https://example.com/two.jpg",
    )


def test_same_origin_and_malformed_links_are_excluded(make_document):
    document = make_document(
        '<a href="https://example.com/other">Other post</a>'
        '<a href="https://other.com/page">Elsewhere</a>'
        '<a href="not a url">Broken</a>'
    )

    assert _links(document) == ("https://other.com/page",)


def test_links_deduplicated_in_first_seen_order(make_document):
    document = make_document(
        '<a href="https://b.org/">B</a><a href="https://a.org/x">A</a>'
        '<a href="https://b.org/">B again</a><a href="/relative">Local</a><a>No href</a>'
    )

    assert _links(document) == ("https://b.org/", "https://a.org/x")


def test_links_with_invalid_authority_are_skipped(make_document):
    document = make_document(
        '<a href="https://other.com:abc/">Bad port</a>'
        '<a href="http://[::1">Bad host</a>'
        '<a href="https://other.com:8443/live">Custom port</a>'
    )

    assert _links(document) == ("https://other.com:8443/live",)


def test_same_origin_check_is_substring_based(make_document):
    document = make_document(
        '<a href="https://other.com/page">Shared</a><a href="https://third.net/">Third</a>',
        url="https://example.com/share?u=https://other.com",
    )

    assert _links(document) == ("https://third.net/",)


def test_links_without_network_origin_are_kept(make_document):
    document = make_document('<a href="mailto:editor@example.org">Mail us</a>')

    assert _links(document) == ("mailto:editor@example.org",)


def test_url_origin_normalises_host_and_default_port():
    assert url_origin("https://Example.COM:443/a?b=c") == "https://example.com"
    assert url_origin("http://example.com:8080/") == "http://example.com:8080"
    assert url_origin("http://[::1]:9000/") == "http://[::1]:9000"
    assert url_origin("mailto:someone@example.com") == "null"


def test_resolve_link_encodes_spaces_and_drops_line_breaks():
    base = "https://example.com/post"

    assert resolve_link(base, None) is None
    assert resolve_link(base, "   ") is None
    assert resolve_link(base, "\t\n") is None
    assert resolve_link(base, "two words") == "https://example.com/two%20words"
    assert resolve_link(base, "/a\tb\r\nc") == "https://example.com/abc"
    assert resolve_link(base, " /next ") == "https://example.com/next"


def test_resolve_source_quotes_spaces():
    assert (
        resolve_source("https://example.com/post", "/img/my photo.png")
        == "https://example.com/img/my%20photo.png"
    )


def test_external_link_with_space_is_encoded(make_document):
    document = make_document('<a href="https://other.com/a b">Out</a>')

    assert _links(document) == ("https://other.com/a%20b",)


def test_external_link_with_bare_newline_is_joined(make_document):
    document = make_document('<a href="https://other.com/long\n/path">Out</a>')

    assert _links(document) == ("https://other.com/long/path",)

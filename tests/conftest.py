import pytest

from pagegist.services.document import SoupDocument

DOCUMENT_URL = "https://example.com/post"


@pytest.fixture()
def make_document():
    """Build a SoupDocument from head/body fragments."""

    def _make(body="", head="", url=DOCUMENT_URL, last_modified="03/01/2024 10:00:00"):
        html = f"<html><head>{head}</head><body>{body}</body></html>"
        return SoupDocument.from_html(html, url, last_modified)

    return _make


@pytest.fixture()
def app(monkeypatch):
    from pagegist import create_app

    monkeypatch.delenv("REQUEST_ORIGIN", raising=False)
    monkeypatch.delenv("ARTICLE_TYPES", raising=False)
    app = create_app({"TESTING": True, "RATELIMIT_ENABLED": False})
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()

from typing import Optional
from urllib.parse import quote, urljoin, urlsplit

# Characters left untouched when re-quoting a resolved URL.
_URL_SAFE_CHARS = ":/?#[]@!$&'()*+,;=%~"
_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_URL_STRIP_CHARS = " \t\n\r\f"
# Browsers drop these anywhere inside a URL before parsing it.
_URL_REMOVED_CHARS = str.maketrans("", "", "\t\n\r")


def _resolve(base_url: str, reference: Optional[str]) -> Optional[str]:
    if reference is None:
        return None
    reference = reference.strip(_URL_STRIP_CHARS).translate(_URL_REMOVED_CHARS)
    if not reference:
        return None
    try:
        absolute = urljoin(base_url, reference)
        parts = urlsplit(absolute)
        # Accessing the port validates it; urlsplit alone is lazy about it.
        parts.port
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return quote(absolute, safe=_URL_SAFE_CHARS)


def resolve_link(base_url: str, href: Optional[str]) -> Optional[str]:
    """
    Resolve an anchor href against the document URL, as ``a.href`` would.

    Tabs and newlines are dropped and spaces percent-encoded. Returns None
    when the href is missing or blank, or when the resolved form fails
    validation (e.g. an invalid IPv6 host or a non-numeric port).
    """
    return _resolve(base_url, href)


def resolve_source(base_url: str, src: Optional[str]) -> Optional[str]:
    """Resolve an image source the way ``img.src`` reflects it."""
    return _resolve(base_url, src)


def url_origin(url: str) -> str:
    """
    Return the ``scheme://host[:port]`` origin of a URL.

    URLs without a network location, or with a scheme that has no tuple
    origin, serialise to ``"null"`` like they do in browsers.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname
    if scheme not in _DEFAULT_PORTS or not host:
        return "null"
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is None or port == _DEFAULT_PORTS[scheme]:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"

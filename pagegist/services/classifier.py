from __future__ import annotations

import json
from typing import Any, Collection, Iterator, Optional

from pagegist.services.document import Element

LD_JSON_MIME_TYPE = "application/ld+json"


def _is_ld_json_script(element: Element) -> bool:
    if element.tag != "script":
        return False
    return (element.attr("type") or "").strip().lower() == LD_JSON_MIME_TYPE


def _parse_payload(raw: str) -> Optional[Any]:
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _iter_nodes(payload: Any) -> Iterator[dict]:
    """Yield the top-level JSON-LD nodes, including ``@graph`` members."""
    if isinstance(payload, list):
        for entry in payload:
            yield from _iter_nodes(entry)
    elif isinstance(payload, dict):
        yield payload
        graph = payload.get("@graph")
        if isinstance(graph, list):
            for entry in graph:
                if isinstance(entry, dict):
                    yield entry


def _node_types(node: dict) -> list[str]:
    declared = node.get("@type")
    if isinstance(declared, str):
        return [declared]
    if isinstance(declared, list):
        return [value for value in declared if isinstance(value, str)]
    return []


def _matches(payload: Any, article_types: Collection[str]) -> bool:
    return any(
        node_type in article_types
        for node in _iter_nodes(payload)
        for node_type in _node_types(node)
    )


def is_article(document_element: Element, article_types: Collection[str]) -> bool:
    """True when any JSON-LD block declares one of ``article_types``."""
    payloads = (
        _parse_payload(script.text())
        for script in document_element.find_all(_is_ld_json_script)
    )
    return any(
        payload is not None and _matches(payload, article_types) for payload in payloads
    )

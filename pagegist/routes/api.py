from __future__ import annotations

from typing import Any, Optional

import structlog
from flask import Blueprint, current_app, jsonify, request

from pagegist.extensions import limiter
from pagegist.services.document import SoupDocument
from pagegist.services.exceptions import ExtractionFailure
from pagegist.services.extraction import extract
from pagegist.utils.correlation import bind_request_context

bp = Blueprint("api", __name__, url_prefix="/api/v1")

logger = structlog.get_logger(__name__)


def _string_field_error(
    payload: dict[str, Any], field: str, required: bool = True
) -> Optional[str]:
    value = payload.get(field)
    if value is None or value == "":
        return f"Missing {field}" if required else None
    if not isinstance(value, str):
        return f"Field '{field}' has to be of type string"
    return None


@bp.route("/", methods=["POST"])
@limiter.limit(lambda: current_app.config["EXTRACT_RATE_LIMIT"])
def extract_content():
    """Extract article data from a rendered page submitted as JSON."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    for field, required in (("url", True), ("html", True), ("lastModified", False)):
        error = _string_field_error(payload, field, required=required)
        if error:
            return jsonify({"error": error}), 400

    url: str = payload["url"]
    html: str = payload["html"]
    bind_request_context(url=url)

    try:
        encoded = html.encode("utf-8")
    except UnicodeEncodeError:
        return jsonify({"error": "html must be valid UTF-8"}), 400

    max_bytes = current_app.config["MAX_DOCUMENT_BYTES"]
    if len(encoded) > max_bytes:
        return (
            jsonify({"error": f"Document exceeds the {max_bytes} byte limit"}),
            413,
        )

    document = SoupDocument.from_html(html, url, payload.get("lastModified"))
    try:
        result = extract(document, current_app.config["EXTRACTION_CONFIG"])
    except ExtractionFailure as exc:
        # structlog treats the first positional argument as the ``event`` field; keep it keyword-only.
        logger.warning(
            event="extraction_request_failed",
            operation="api.extract",
            url=url,
            status="failure",
            error=str(exc),
        )
        return jsonify({"error": str(exc)}), 422

    return jsonify(result.to_dict()), 200

import logging
import os
import time

import structlog
from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from flask_cors import CORS

from pagegist.config import ApiConfig, ExtractionConfig
from pagegist.extensions import limiter
from pagegist.utils.correlation import (
    bind_request_context,
    clear_correlation_context,
    ensure_correlation_id,
    update_context,
)
from pagegist.utils.logging_config import setup_logging


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    load_dotenv()

    # Set up logging as early as possible
    setup_logging()
    logger = logging.getLogger(__name__)

    api_config = ApiConfig.from_env()
    extraction_config = ExtractionConfig.from_env()

    logger.info("Application starting with configuration:")
    logger.info(f"  ENV: {os.getenv('ENV')}")
    logger.info(f"  REQUEST_ORIGIN: {', '.join(api_config.allowed_origins) or '-'}")
    logger.info(f"  ARTICLE_TYPES: {len(extraction_config.article_types)} recognised")

    app = Flask(__name__)
    app.config.from_mapping(
        EXTRACTION_CONFIG=extraction_config,
        MAX_DOCUMENT_BYTES=api_config.max_document_bytes,
        EXTRACT_RATE_LIMIT=api_config.extract_rate_limit,
        RATELIMIT_STORAGE_URI=api_config.ratelimit_storage_uri,
        ALLOWED_ORIGINS=list(api_config.allowed_origins),
    )
    if test_config:
        app.config.update(test_config)

    limiter.init_app(app)
    app.logger.info(
        "Rate limiter storage: %s", app.config["RATELIMIT_STORAGE_URI"]
    )

    if app.config["ALLOWED_ORIGINS"]:
        CORS(app, supports_credentials=True, origins=app.config["ALLOWED_ORIGINS"])

    @app.before_request
    def bind_logging_context():
        g.request_started = time.perf_counter()
        ensure_correlation_id(request.headers.get("X-Correlation-ID"))
        bind_request_context(path=request.path)

    @app.after_request
    def log_response(response):
        update_context(status_code=response.status_code)
        started = getattr(g, "request_started", None)
        elapsed_ms = (
            int((time.perf_counter() - started) * 1000) if started is not None else None
        )
        # structlog treats the first positional argument as the ``event`` field; keep it keyword-only.
        structlog.get_logger(__name__).info(
            event="http.response",
            operation="http.request",
            method=request.method,
            elapsed_ms=elapsed_ms,
        )
        return response

    @app.teardown_request
    def reset_logging_context(_exc=None):
        clear_correlation_context()

    from .routes import api, utility

    app.register_blueprint(api.bp)
    app.register_blueprint(utility.bp)

    def too_many_requests(e):
        return jsonify({"error": f"Rate limit exceeded: {e.description}"}), 429

    def internal_server_error(e):
        logger = logging.getLogger(__name__)
        logger.error("An internal server error occurred: %s", e, exc_info=True)
        return jsonify({"error": "internal server error"}), 500

    app.register_error_handler(429, too_many_requests)
    app.register_error_handler(500, internal_server_error)

    return app

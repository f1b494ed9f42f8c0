"""Flask application factory for the shrink backend."""

from __future__ import annotations

import logging
import sys

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from shrink_compressor import CodecError, CompressionEngine
from shrink_shared import IdentityAllocator, ValidationError

from .config import Config
from .routes import uploads_bp
from .services import DerivativeStore, StorageError, UploadService

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = [
    "Origin", "Content-Type", "Content-Length", "Accept-Encoding",
    "X-CSRF-Token", "Authorization",
]


def create_app(config: Config | None = None) -> Flask:
    """Create and configure the Flask application."""
    if config is None:
        config = Config.load()

    config.ensure_directories()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_upload_size
    CORS(app, origins="*", methods=CORS_METHODS, allow_headers=CORS_HEADERS)

    store = DerivativeStore(config.upload_dir)
    app.config["derivative_store"] = store
    app.config["upload_service"] = UploadService(
        store=store,
        engine=CompressionEngine(target=config.target_size),
        allocator=IdentityAllocator(),
        public_url=config.public_url,
    )

    app.register_blueprint(uploads_bp)
    register_error_handlers(app)

    @app.get("/ping")
    def ping():
        return {"message": "pong"}

    logger.info("Shrink backend initialized, serving %s", store.root)
    return app


def register_error_handlers(app: Flask) -> None:
    """Map domain errors and HTTP errors to JSON bodies."""

    @app.errorhandler(ValidationError)
    def validation_error(error: ValidationError):
        logger.warning("Rejected upload: %s", error)
        return jsonify({"error": str(error)}), 400

    @app.errorhandler(CodecError)
    def codec_error(error: CodecError):
        logger.error("Compression failed: %s", error)
        return jsonify({"error": f"Failed to compress image: {error}"}), 500

    @app.errorhandler(StorageError)
    def storage_error(error: StorageError):
        logger.error("Storage failed: %s", error)
        return jsonify({"error": "Failed to save compressed image"}), 500

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(500)
    def internal_server_error(error):
        logger.exception("Internal server error: %s", getattr(error, "original_exception", error))
        return jsonify({"error": "Internal server error"}), 500

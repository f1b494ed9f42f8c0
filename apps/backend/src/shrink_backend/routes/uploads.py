"""Upload and file serving routes."""

from __future__ import annotations

import logging

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory

from shrink_shared.files import ValidationError

logger = logging.getLogger(__name__)

uploads_bp = Blueprint("uploads", __name__)


@uploads_bp.post("/upload")
def upload_image():
    """Upload a single image, compress it and store the derivative."""
    upload_service = current_app.config["upload_service"]

    f = request.files.get("image")
    if f is None:
        raise ValidationError("Failed to get image file from request")

    data = f.read()
    result = upload_service.handle(f.filename or "", data)

    return jsonify(result.to_dict())


@uploads_bp.get("/uploads/<path:filename>")
def serve_derivative(filename: str):
    """Serve a stored derivative."""
    store = current_app.config["derivative_store"]

    try:
        path = store.path_for(filename)
    except FileNotFoundError:
        abort(404, description="File not found")

    return send_from_directory(store.root, path.name)

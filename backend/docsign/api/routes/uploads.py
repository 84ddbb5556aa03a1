from flask import Blueprint, send_file
from werkzeug.exceptions import NotFound

from docsign.api.routes.sign import get_signing_service

# Registered under settings.uploads_url_prefix by the app factory
bp = Blueprint("uploads", __name__)


@bp.route("/<path:filename>", methods=["GET"])
def get_upload(filename: str):
    """Serve a previously signed PDF"""
    path = get_signing_service().storage.resolve(filename)
    if path is None:
        raise NotFound(f"File not found: {filename}")
    return send_file(path, mimetype="application/pdf", download_name=path.name)

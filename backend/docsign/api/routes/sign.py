from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from docsign.schemas.field import SignPdfRequest, SignPdfResponse
from docsign.services.signing_service import SigningService
from docsign.utils.exceptions import MissingInputError, ValidationError

bp = Blueprint("sign", __name__, url_prefix="/api")

SIGNING_SERVICE_KEY = "docsign.signing_service"


def get_signing_service() -> SigningService:
    return current_app.extensions[SIGNING_SERVICE_KEY]


@bp.route("/sign-pdf", methods=["POST"])
def sign_pdf():
    """Flatten the submitted fields into the PDF and return where to fetch it"""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    if not data.get("pdfData"):
        raise MissingInputError("pdfData", "No PDF data provided")

    try:
        req = SignPdfRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(
            "Invalid sign request",
            details={"errors": exc.errors(include_url=False, include_context=False, include_input=False)}
        )

    result = get_signing_service().sign(req)
    response = SignPdfResponse(url=result.url, field_errors=result.field_errors)
    return jsonify(response.model_dump())

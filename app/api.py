"""
API Blueprint - contact form mail and report summaries
"""
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from app.services.mail_service import build_contact_acknowledgement
from app.services.openai_service import SummaryError
from app.services.pdf_service import ExtractionError, assemble_keywords, extract_fragments

api_bp = Blueprint('api', __name__)


def _service(name: str):
    return current_app.extensions["mediclarity"][name]


def _text_field(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else ""


# ============ API Routes ============

@api_bp.route("/api/send-email", methods=["POST"])
def send_email():
    try:
        payload: Dict[str, Any] = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            payload = {}
        name = _text_field(payload, "name")
        email = _text_field(payload, "email")
        if not name or not email:
            return jsonify({"error": "Missing name or email"}), 400

        cfg = current_app.config
        message = build_contact_acknowledgement(
            name,
            email,
            sender_name=cfg.get("MAIL_SENDER_NAME", "MediClarity"),
            sender_address=cfg.get("GMAIL_USER", ""),
        )
        result = _service("mailer").send(message)
        if not result.ok:
            return jsonify({"error": result.error}), 400

        current_app.logger.info("Contact acknowledgement sent to %s", email)
        return jsonify({"message": "Email sent successfully", "data": result.info}), 200
    except Exception:
        current_app.logger.exception("send-email failed")
        return jsonify({"error": "An error occurred while sending the email"}), 500


@api_bp.route("/api/upload-file", methods=["POST"])
def upload_file():
    current_app.logger.debug("Upload headers: %s", dict(request.headers))
    try:
        file = request.files.get("file")
        if not file:
            return jsonify({"error": "No file uploaded"}), 400

        store = _service("uploads")
        upload = store.save(file)
        current_app.logger.debug("Stored upload %s as %s (%s)",
                                 upload.original_name, upload.temporary_path, upload.mime_type)
        try:
            fragments = extract_fragments(upload.temporary_path)
            keywords = assemble_keywords(fragments)
            summary = _service("summarizer").summarize(keywords)
        finally:
            store.discard(upload)

        return jsonify({"summary": summary}), 200
    except ExtractionError as e:
        current_app.logger.error("Extraction failed: %s", e)
        return jsonify({"error": "Could not extract text from the uploaded file"}), 422
    except SummaryError:
        current_app.logger.exception("Summary generation failed")
        return jsonify({"error": "An error occurred while uploading the file"}), 500
    except HTTPException:
        raise
    except Exception:
        current_app.logger.exception("upload-file failed")
        return jsonify({"error": "An error occurred while uploading the file"}), 500

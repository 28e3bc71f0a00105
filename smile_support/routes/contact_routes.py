"""
Contact form API: validate the submission, run the anti-spam checks, email operator + submitter.
"""

import logging
from flask import Blueprint, current_app, jsonify, request

from smile_support.services.contact_email import SEND_FAILED_MESSAGE

logger = logging.getLogger(__name__)

contact_bp = Blueprint("contact", __name__)

EXTENSION_KEY = "smile_support.contact"


def client_ip() -> str | None:
    """Client address, honouring the first X-Forwarded-For hop behind a proxy."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr


@contact_bp.post("/api/contact")
def submit_contact():
    """Accept a contact form submission; 200 when both emails were sent."""
    data = request.get_json(silent=True)
    deps = current_app.extensions[EXTENSION_KEY]
    try:
        status, resp = deps.process(data, remote_ip=client_ip())
    except Exception:
        # Never leak internals to the browser; just log server-side.
        logger.exception("Unexpected error while handling contact submission")
        return jsonify({"success": False, "error": SEND_FAILED_MESSAGE}), 500
    return jsonify(resp), status

from flask import Blueprint, jsonify

from smile_support.utils.security_quiz import SECURITY_QUESTION

core = Blueprint("core", __name__)


@core.get("/")
def root():
    return jsonify({"service": "smile-support-contact", "ok": True})


@core.get("/api")
def api_index():
    return jsonify(
        {
            "endpoints": {"contact": ["/api/contact (POST)"]},
            "security_question": SECURITY_QUESTION,
        }
    )


@core.get("/__ping")
def ping():
    return {"ok": True}, 200

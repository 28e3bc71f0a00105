"""
AWS Lambda entry point for POST /api/contact (API Gateway proxy integration).

Deploy with handler "smile_support.serverless.lambda_handler". Settings are read
from the function's environment once per cold start.
"""

from __future__ import annotations
import base64
import binascii
import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from smile_support import configure_logging
from smile_support.config import Settings
from smile_support.services.contact_email import SEND_FAILED_MESSAGE
from smile_support.services.contact_service import (
    SERVER_CONFIG_ERROR,
    ContactDependencies,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}


def _response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(body, ensure_ascii=False),
    }


def _method(event: Dict[str, Any]) -> str:
    # REST API (v1) events carry httpMethod; HTTP API (v2) events carry requestContext.http.
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "").upper()


def _source_ip(event: Dict[str, Any]) -> Optional[str]:
    ctx = event.get("requestContext") or {}
    return (ctx.get("identity") or {}).get("sourceIp") or (ctx.get("http") or {}).get(
        "sourceIp"
    )


def parse_body(event: Dict[str, Any]) -> Any:
    """Decoded JSON body, or None when it is missing or malformed."""
    raw = event.get("body")
    if not raw:
        return None
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None


def build_handler(deps: ContactDependencies):
    """Lambda handler bound to explicit collaborators."""

    def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
        if _method(event) != "POST":
            return _response(405, {"error": "Method not allowed"})
        try:
            status, resp = deps.process(parse_body(event), remote_ip=_source_ip(event))
        except Exception:
            logger.exception("Unexpected error while handling contact submission")
            return _response(500, {"success": False, "error": SEND_FAILED_MESSAGE})
        return _response(status, resp)

    return handler


@lru_cache
def get_handler_dependencies() -> ContactDependencies:
    load_dotenv()
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return ContactDependencies.from_settings(settings)


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    try:
        deps = get_handler_dependencies()
    except Exception:
        logger.exception("Failed to build contact handler from the environment")
        return _response(500, {"success": False, "error": SERVER_CONFIG_ERROR})
    return build_handler(deps)(event, context)

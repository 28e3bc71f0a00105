"""
reCAPTCHA v2/v3 token verification against Google's siteverify endpoint.

Without a secret key verification is skipped (local/dev); any error while calling
Google counts as a failed verification.
"""

from __future__ import annotations
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
DEFAULT_TIMEOUT = 10  # seconds


class RecaptchaVerifier:
    def __init__(
        self,
        secret_key: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.secret_key = secret_key or None
        # None means a plain requests.post per call, so nothing is shared between requests.
        self.session = session
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return self.secret_key is not None

    def verify(self, token: str, remote_ip: Optional[str] = None) -> bool:
        if not self.enabled:
            logger.warning("RECAPTCHA_SECRET_KEY not set, skipping verification")
            return True

        params = {"secret": self.secret_key, "response": token}
        if remote_ip:
            params["remoteip"] = remote_ip

        try:
            post = self.session.post if self.session is not None else requests.post
            resp = post(RECAPTCHA_VERIFY_URL, data=params, timeout=self.timeout)
            result = resp.json()
            success = result.get("success") is True
        except Exception as e:
            logger.error("reCAPTCHA verification error: %s", e)
            return False

        if not success:
            logger.error(
                "reCAPTCHA verification failed: %s", result.get("error-codes")
            )
        return success


def verify_recaptcha(token: str, secret_key: Optional[str] = None) -> bool:
    """One-off verification; see RecaptchaVerifier."""
    return RecaptchaVerifier(secret_key).verify(token)

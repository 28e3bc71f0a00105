"""
Contact submission pipeline shared by the Flask route and the serverless handler.

Gates run in order and stop at the first failure:
shape -> security quiz -> reCAPTCHA token present -> reCAPTCHA valid -> send emails.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from smile_support.config import Settings
from smile_support.errors import MailConfigError
from smile_support.services.contact_email import send_contact_email
from smile_support.utils.contact_validators import (
    ContactSubmission,
    validate_contact_form,
)
from smile_support.utils.email_sender import Mailer, create_mailer
from smile_support.utils.recaptcha import RecaptchaVerifier
from smile_support.utils.security_quiz import validate_security_answer

logger = logging.getLogger(__name__)

INVALID_FORM_ERROR = (
    "必須項目（お名前、メールアドレス、お問い合わせ内容、セキュリティ回答）を入力してください"
)
SECURITY_ANSWER_ERROR = (
    "セキュリティの質問に正しくお答えください。"
    "（ヒント：日本一高い山の名前を日本語で入力してください）"
)
RECAPTCHA_MISSING_ERROR = "reCAPTCHAの認証を完了してください。"
RECAPTCHA_FAILED_ERROR = "reCAPTCHAの認証に失敗しました。もう一度お試しください。"
SERVER_CONFIG_ERROR = "サーバーの設定に問題があります。管理者にお問い合わせください。"

Response = Tuple[int, Dict[str, Any]]


def _error(status: int, message: str) -> Response:
    return status, {"success": False, "error": message}


def process_contact_submission(
    body: Any,
    *,
    verifier: RecaptchaVerifier,
    mailer_factory: Callable[[], Mailer],
    operator_address: Optional[str],
    sender_address: Optional[str] = None,
    remote_ip: Optional[str] = None,
) -> Response:
    """
    Return (status, payload).

    mailer_factory is only called once the anti-spam gates pass, so missing mail
    configuration never hides a user-correctable 400.
    """
    if not validate_contact_form(body):
        return _error(400, INVALID_FORM_ERROR)

    submission = ContactSubmission.from_dict(body)

    if not validate_security_answer(submission.security_answer):
        return _error(400, SECURITY_ANSWER_ERROR)

    if not submission.recaptcha_token:
        return _error(400, RECAPTCHA_MISSING_ERROR)

    if not verifier.verify(submission.recaptcha_token, remote_ip=remote_ip):
        return _error(400, RECAPTCHA_FAILED_ERROR)

    if not operator_address:
        logger.error("Operator address not configured (CONTACT_TO_EMAIL / GMAIL_USER)")
        return _error(500, SERVER_CONFIG_ERROR)
    try:
        mailer = mailer_factory()
    except MailConfigError as e:
        logger.error("Mail transport not configured: %s", e)
        return _error(500, SERVER_CONFIG_ERROR)

    result = send_contact_email(submission, mailer, operator_address, sender_address)
    if not result.success:
        return _error(500, result.error)
    return 200, {"success": True, "message": result.message}


@dataclass
class ContactDependencies:
    """Collaborators of the pipeline, built once per process."""

    verifier: RecaptchaVerifier
    mailer_factory: Callable[[], Mailer]
    operator_address: Optional[str]
    sender_address: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        mailer_factory: Optional[Callable[[], Mailer]] = None,
        verifier: Optional[RecaptchaVerifier] = None,
    ) -> "ContactDependencies":
        return cls(
            verifier=verifier or RecaptchaVerifier(settings.recaptcha_secret_key),
            mailer_factory=mailer_factory or (lambda: create_mailer(settings)),
            operator_address=settings.operator_address,
            sender_address=settings.sender_address,
        )

    def process(self, body: Any, remote_ip: Optional[str] = None) -> Response:
        return process_contact_submission(
            body,
            verifier=self.verifier,
            mailer_factory=self.mailer_factory,
            operator_address=self.operator_address,
            sender_address=self.sender_address,
            remote_ip=remote_ip,
        )

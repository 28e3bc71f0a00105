"""
Environment-driven settings for the contact API.

Configure via env (a .env file is loaded by create_app / the serverless handler):
- GMAIL_USER, GMAIL_APP_PASSWORD: Gmail account used for the default SMTP transport
- CONTACT_TO_EMAIL: operator address that receives notifications (default: GMAIL_USER)
- RECAPTCHA_SECRET_KEY: reCAPTCHA secret; when unset verification is skipped
- EMAIL_PROVIDER: "gmail" | "ses" | "sendgrid" (default: "gmail")
- FROM_EMAIL: sender for ses/sendgrid (default: the operator address)
- AWS_REGION, SENDGRID_API_KEY: provider credentials
- PORT, LOG_LEVEL
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

PRODUCTION_PORT = 3000
DEVELOPMENT_PORT = 3001


def _env(environ: Mapping[str, str], key: str) -> Optional[str]:
    value = (environ.get(key) or "").strip()
    return value or None


def _port(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value else default
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    gmail_user: Optional[str] = None
    gmail_app_password: Optional[str] = None
    recaptcha_secret_key: Optional[str] = None
    email_provider: str = "gmail"
    contact_to_email: Optional[str] = None
    from_email: Optional[str] = None
    aws_region: Optional[str] = None
    sendgrid_api_key: Optional[str] = None
    port: int = DEVELOPMENT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        production = (
            _env(env, "APP_ENV") == "production"
            or _env(env, "FLASK_ENV") == "production"
        )
        default_port = PRODUCTION_PORT if production else DEVELOPMENT_PORT
        return cls(
            gmail_user=_env(env, "GMAIL_USER"),
            gmail_app_password=_env(env, "GMAIL_APP_PASSWORD"),
            recaptcha_secret_key=_env(env, "RECAPTCHA_SECRET_KEY"),
            email_provider=(_env(env, "EMAIL_PROVIDER") or "gmail").lower(),
            contact_to_email=_env(env, "CONTACT_TO_EMAIL"),
            from_email=_env(env, "FROM_EMAIL"),
            aws_region=_env(env, "AWS_REGION"),
            sendgrid_api_key=_env(env, "SENDGRID_API_KEY"),
            port=_port(_env(env, "PORT"), default_port),
            log_level=(_env(env, "LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def operator_address(self) -> Optional[str]:
        """Address that receives notifications and sends both messages."""
        return self.contact_to_email or self.gmail_user

    @property
    def sender_address(self) -> Optional[str]:
        if self.email_provider == "gmail":
            # Gmail rewrites any other From to the authenticated account.
            return self.gmail_user
        return self.from_email or self.operator_address

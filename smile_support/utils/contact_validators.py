"""
Contact form validation: required fields and the submission record built from them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

REQUIRED_FIELDS = ("name", "email", "message", "securityAnswer")


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def validate_contact_form(data: Any) -> bool:
    """
    Check the shape of a submitted body.

    name and message must be non-blank strings, email a string containing "@",
    securityAnswer a string (its content is checked by the security quiz).
    company, phone and recaptchaToken are optional and not type-checked here.
    """
    if not isinstance(data, dict):
        return False
    email = data.get("email")
    return (
        _non_blank(data.get("name"))
        and isinstance(email, str)
        and "@" in email
        and _non_blank(data.get("message"))
        and isinstance(data.get("securityAnswer"), str)
    )


def _optional(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class ContactSubmission:
    name: str
    email: str
    message: str
    security_answer: str
    company: Optional[str] = None
    phone: Optional[str] = None
    recaptcha_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ContactSubmission":
        """Build from a body already accepted by validate_contact_form."""
        return cls(
            name=data["name"],
            email=data["email"],
            message=data["message"],
            security_answer=data["securityAnswer"],
            company=_optional(data.get("company")),
            phone=_optional(data.get("phone")),
            recaptcha_token=_optional(data.get("recaptchaToken")),
        )

"""
Gmail SMTP / SES / SendGrid email sending wrappers.

Configure via env (see smile_support.config):
- EMAIL_PROVIDER: "gmail" | "ses" | "sendgrid" (default: "gmail")
- For Gmail: GMAIL_USER, GMAIL_APP_PASSWORD (an app password, not the account password)
- For SES: AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY (or use default creds)
- For SendGrid: SENDGRID_API_KEY

Every transport exposes send(message) and raises MailSendError on failure.
"""

from __future__ import annotations
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.header import decode_header, make_header
from email.utils import formataddr, parseaddr
from typing import Optional, Protocol

from smile_support.config import Settings
from smile_support.errors import MailConfigError, MailSendError

GMAIL_SMTP_HOST = "smtp.gmail.com"
GMAIL_SMTP_PORT = 465


@dataclass(frozen=True)
class MailMessage:
    from_addr: str
    to: str
    subject: str
    html: str
    text: str
    reply_to: Optional[str] = None


class Mailer(Protocol):
    def send(self, message: MailMessage) -> None: ...


def header_value(value: str) -> str:
    """Collapse CR/LF so user input can be used as a header value."""
    return " ".join(value.splitlines())


def format_address(display_name: str, address: str) -> str:
    """'"Display" <addr>' with non-ASCII names RFC 2047 encoded."""
    return formataddr((display_name, address))


class SmtpMailer:
    def __init__(
        self,
        username: str,
        password: str,
        host: str = GMAIL_SMTP_HOST,
        port: int = GMAIL_SMTP_PORT,
        timeout: float = 30,
    ):
        self.username = username
        self.password = password
        self.host = host
        self.port = port
        self.timeout = timeout

    def _build(self, message: MailMessage) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = header_value(message.from_addr)
        msg["To"] = header_value(message.to)
        msg["Subject"] = header_value(message.subject)
        if message.reply_to:
            msg["Reply-To"] = header_value(message.reply_to)
        msg.set_content(message.text)
        msg.add_alternative(message.html, subtype="html")
        return msg

    def send(self, message: MailMessage) -> None:
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                server.login(self.username, self.password)
                server.send_message(self._build(message))
        except (smtplib.SMTPException, OSError) as e:
            raise MailSendError(str(e)) from e


class SesMailer:
    def __init__(self, region_name: str, client=None):
        if client is None:
            import boto3

            client = boto3.client("ses", region_name=region_name)
        self.client = client

    def send(self, message: MailMessage) -> None:
        from botocore.exceptions import BotoCoreError, ClientError

        kwargs = {
            "Source": message.from_addr,
            "Destination": {"ToAddresses": [message.to]},
            "Message": {
                "Subject": {"Data": message.subject, "Charset": "UTF-8"},
                "Body": {
                    "Text": {"Data": message.text, "Charset": "UTF-8"},
                    "Html": {"Data": message.html, "Charset": "UTF-8"},
                },
            },
        }
        if message.reply_to:
            kwargs["ReplyToAddresses"] = [message.reply_to]
        try:
            self.client.send_email(**kwargs)
        except ClientError as e:
            raise MailSendError(
                str(e.response.get("Error", {}).get("Message", str(e)))
            ) from e
        except BotoCoreError as e:
            raise MailSendError(str(e)) from e


class SendGridMailer:
    def __init__(self, api_key: str, client=None):
        if client is None:
            from sendgrid import SendGridAPIClient

            client = SendGridAPIClient(api_key)
        self.client = client

    def send(self, message: MailMessage) -> None:
        from sendgrid.helpers.mail import Content, Email, Mail, ReplyTo, To

        # SendGrid takes the display name unencoded.
        name, addr = parseaddr(message.from_addr)
        name = str(make_header(decode_header(name))) if name else None
        mail = Mail(
            from_email=Email(addr, name),
            to_emails=To(message.to),
            subject=message.subject,
            plain_text_content=Content("text/plain", message.text),
            html_content=Content("text/html", message.html),
        )
        if message.reply_to:
            mail.reply_to = ReplyTo(message.reply_to)
        try:
            response = self.client.send(mail)
        except Exception as e:
            raise MailSendError(str(e)) from e
        if response.status_code >= 400:
            raise MailSendError(f"SendGrid responded {response.status_code}")


def create_mailer(settings: Settings) -> Mailer:
    """
    Build the transport selected by EMAIL_PROVIDER.
    Raises MailConfigError when its credentials are missing.
    """
    provider = settings.email_provider
    if provider == "gmail":
        if not settings.gmail_user or not settings.gmail_app_password:
            raise MailConfigError("GMAIL_USER or GMAIL_APP_PASSWORD not configured")
        return SmtpMailer(settings.gmail_user, settings.gmail_app_password)
    if provider == "ses":
        if not settings.aws_region:
            raise MailConfigError("AWS_REGION not configured")
        return SesMailer(settings.aws_region)
    if provider == "sendgrid":
        if not settings.sendgrid_api_key:
            raise MailConfigError("SENDGRID_API_KEY not configured")
        return SendGridMailer(settings.sendgrid_api_key)
    raise MailConfigError(f"Unknown EMAIL_PROVIDER: {provider}")

"""
Contact form emails: operator notification + customer auto-reply.

Both messages are sent through an injected Mailer, notification first.
Every user-supplied value goes through escape_html before it reaches the HTML body.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from smile_support.utils.contact_validators import ContactSubmission
from smile_support.utils.email_sender import (
    Mailer,
    MailMessage,
    format_address,
    header_value,
)
from smile_support.utils.html_escape import escape_html

logger = logging.getLogger(__name__)

BRAND_NAME = "すまいるサポート"
BRAND_ADDRESS = "〒142-0042 東京都品川区豊町6-18-15 ミュージションテラス品川豊町"
NOT_PROVIDED = "（未入力）"
RESPONSE_TIME = "2営業日以内"

NOTIFICATION_FROM_NAME = f"{BRAND_NAME} お問い合わせ"
AUTO_REPLY_SUBJECT = f"【{BRAND_NAME}】お問い合わせを受け付けました"

SUCCESS_MESSAGE = (
    f"お問い合わせを受け付けました。担当者より{RESPONSE_TIME}にご連絡いたします。"
)
SEND_FAILED_MESSAGE = "メールの送信に失敗しました。しばらく経ってから再度お試しください。"

_TH_STYLE = "background-color: #f5f5f5; text-align: left;"
_P_STYLE = "margin: 0 0 10px 0;"
_RULE = "━" * 30
_THIN_RULE = "─" * 29


@dataclass(frozen=True)
class SendContactEmailResult:
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


def _escaped_or_placeholder(value: Optional[str]) -> str:
    return escape_html(value) if value else NOT_PROVIDED


def notification_subject(name: str) -> str:
    return f"【お問い合わせ】{header_value(name)}様より"


def build_notification(
    submission: ContactSubmission,
    operator_address: str,
    sender_address: Optional[str] = None,
) -> MailMessage:
    s = submission
    email = escape_html(s.email)
    rows = [
        ("お名前", escape_html(s.name), ""),
        ("会社名", _escaped_or_placeholder(s.company), ""),
        ("メールアドレス", f'<a href="mailto:{email}">{email}</a>', ""),
        ("電話番号", _escaped_or_placeholder(s.phone), ""),
        ("お問い合わせ内容", escape_html(s.message), ' style="white-space: pre-wrap;"'),
    ]
    table_rows = "\n".join(
        f'    <tr>\n      <th style="{_TH_STYLE}">{label}</th>\n'
        f"      <td{td_attrs}>{value}</td>\n    </tr>"
        for label, value, td_attrs in rows
    )
    html = (
        "<h2>お問い合わせがありました</h2>\n"
        '<table border="1" cellpadding="10" cellspacing="0" style="border-collapse: collapse;">\n'
        f"{table_rows}\n"
        "</table>\n"
        '<p style="margin-top: 20px; color: #666; font-size: 12px;">\n'
        f"  このメールは{BRAND_NAME}のお問い合わせフォームから送信されました。\n"
        "</p>\n"
    )
    text = (
        "お問い合わせがありました\n\n"
        f"お名前: {s.name}\n"
        f"会社名: {s.company or NOT_PROVIDED}\n"
        f"メールアドレス: {s.email}\n"
        f"電話番号: {s.phone or NOT_PROVIDED}\n\n"
        "お問い合わせ内容:\n"
        f"{s.message}"
    )
    return MailMessage(
        from_addr=format_address(
            NOTIFICATION_FROM_NAME, sender_address or operator_address
        ),
        to=operator_address,
        reply_to=s.email,
        subject=notification_subject(s.name),
        html=html,
        text=text,
    )


def build_auto_reply(
    submission: ContactSubmission,
    operator_address: str,
    sender_address: Optional[str] = None,
) -> MailMessage:
    s = submission
    name = escape_html(s.name)

    details = [f'<p style="{_P_STYLE}"><strong>お名前:</strong> {name}</p>']
    if s.company:
        details.append(
            f'<p style="{_P_STYLE}"><strong>会社名:</strong> {escape_html(s.company)}</p>'
        )
    details.append(
        f'<p style="{_P_STYLE}"><strong>メールアドレス:</strong> {escape_html(s.email)}</p>'
    )
    if s.phone:
        details.append(
            f'<p style="{_P_STYLE}"><strong>電話番号:</strong> {escape_html(s.phone)}</p>'
        )
    details.append('<p style="margin: 0;"><strong>お問い合わせ内容:</strong></p>')
    details.append(
        '<p style="margin: 5px 0 0 0; white-space: pre-wrap;">'
        f"{escape_html(s.message)}</p>"
    )
    details_html = "\n    ".join(details)

    html = (
        '<div style="font-family: sans-serif; max-width: 600px; margin: 0 auto;">\n'
        '  <h2 style="color: #D2691E;">お問い合わせありがとうございます</h2>\n'
        f"  <p>{name} 様</p>\n"
        "  <p>\n"
        f"    この度は、{BRAND_NAME}にお問い合わせいただき、誠にありがとうございます。<br>\n"
        "    以下の内容でお問い合わせを受け付けました。\n"
        "  </p>\n"
        '  <div style="background-color: #FFF8F0; padding: 20px; border-radius: 8px; margin: 20px 0;">\n'
        f"    {details_html}\n"
        "  </div>\n"
        "  <p>\n"
        f"    担当者より<strong>{RESPONSE_TIME}</strong>にご連絡いたしますので、<br>\n"
        "    今しばらくお待ちくださいませ。\n"
        "  </p>\n"
        '  <hr style="border: none; border-top: 1px solid #ddd; margin: 30px 0;">\n'
        '  <p style="color: #666; font-size: 12px;">\n'
        f"    {BRAND_NAME}<br>\n"
        f"    {BRAND_ADDRESS}<br>\n"
        "    <br>\n"
        "    ※このメールは自動送信されています。<br>\n"
        "    ※このメールに心当たりがない場合は、お手数ですが削除してください。\n"
        "  </p>\n"
        "</div>\n"
    )

    lines = [f"お名前: {s.name}"]
    if s.company:
        lines.append(f"会社名: {s.company}")
    lines.append(f"メールアドレス: {s.email}")
    if s.phone:
        lines.append(f"電話番号: {s.phone}")
    text = (
        f"{s.name} 様\n\n"
        f"この度は、{BRAND_NAME}にお問い合わせいただき、誠にありがとうございます。\n"
        "以下の内容でお問い合わせを受け付けました。\n\n"
        f"{_RULE}\n"
        + "\n".join(lines)
        + "\n\nお問い合わせ内容:\n"
        f"{s.message}\n"
        f"{_RULE}\n\n"
        f"担当者より{RESPONSE_TIME}にご連絡いたしますので、\n"
        "今しばらくお待ちくださいませ。\n\n"
        f"{_THIN_RULE}\n"
        f"{BRAND_NAME}\n"
        f"{BRAND_ADDRESS}\n\n"
        "※このメールは自動送信されています。\n"
        "※このメールに心当たりがない場合は、お手数ですが削除してください。"
    )
    return MailMessage(
        from_addr=format_address(BRAND_NAME, sender_address or operator_address),
        to=s.email,
        subject=AUTO_REPLY_SUBJECT,
        html=html,
        text=text,
    )


def send_contact_email(
    submission: ContactSubmission,
    mailer: Mailer,
    operator_address: str,
    sender_address: Optional[str] = None,
) -> SendContactEmailResult:
    """
    Send the notification to the operator, then the auto-reply to the submitter.
    Either send failing reports the whole operation as failed; nothing is retried.
    """
    try:
        mailer.send(build_notification(submission, operator_address, sender_address))
        mailer.send(build_auto_reply(submission, operator_address, sender_address))
    except Exception:
        logger.exception("Failed to send contact email")
        return SendContactEmailResult(success=False, error=SEND_FAILED_MESSAGE)

    logger.info("Contact form submitted successfully from: %s", submission.email)
    return SendContactEmailResult(success=True, message=SUCCESS_MESSAGE)

class ContactError(Exception):
    """Base error for the contact form backend."""


class MailConfigError(ContactError):
    """Mail transport credentials are missing or the provider is unknown."""


class MailSendError(ContactError):
    """A mail transport failed to hand off a message."""

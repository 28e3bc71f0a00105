import pytest

from smile_support import create_app
from smile_support.config import Settings
from smile_support.errors import MailSendError

OPERATOR = "owner@smile-support.example"


class FakeMailer:
    """Records sent messages; fails every send when fail=True."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []
        self.attempts = 0

    def send(self, message):
        self.attempts += 1
        if self.fail:
            raise MailSendError("smtp: 535 authentication failed")
        self.sent.append(message)


class StubVerifier:
    def __init__(self, result: bool = True):
        self.result = result
        self.calls = []

    def verify(self, token, remote_ip=None):
        self.calls.append((token, remote_ip))
        return self.result


@pytest.fixture
def valid_body():
    return {
        "name": "山田太郎",
        "email": "test@example.com",
        "message": "お問い合わせ内容です",
        "securityAnswer": "富士山",
        "recaptchaToken": "token-123",
    }


@pytest.fixture
def settings():
    return Settings(gmail_user=OPERATOR, gmail_app_password="app-password")


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def app(settings, mailer, verifier):
    app = create_app(settings, mailer_factory=lambda: mailer, verifier=verifier)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()

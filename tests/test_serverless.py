import base64
import json

from smile_support.config import Settings
from smile_support.services.contact_service import (
    INVALID_FORM_ERROR,
    ContactDependencies,
)
from smile_support.serverless import build_handler, parse_body

from conftest import OPERATOR, FakeMailer, StubVerifier


def _handler(mailer=None, verifier=None):
    mailer = mailer or FakeMailer()
    deps = ContactDependencies.from_settings(
        Settings(gmail_user=OPERATOR, gmail_app_password="pw"),
        mailer_factory=lambda: mailer,
        verifier=verifier or StubVerifier(),
    )
    return build_handler(deps), mailer


def _event(body, method="POST", **extra):
    return {"httpMethod": method, "body": body, **extra}


def test_post_valid_submission(valid_body):
    handler, mailer = _handler()
    resp = handler(_event(json.dumps(valid_body)))
    assert resp["statusCode"] == 200
    assert json.loads(resp["body"])["success"] is True
    assert [m.to for m in mailer.sent] == [OPERATOR, "test@example.com"]


def test_non_post_is_405():
    handler, _ = _handler()
    resp = handler(_event(None, method="GET"))
    assert resp["statusCode"] == 405
    assert json.loads(resp["body"]) == {"error": "Method not allowed"}


def test_http_api_v2_event_method(valid_body):
    event = {
        "body": json.dumps(valid_body),
        "requestContext": {"http": {"method": "POST", "sourceIp": "198.51.100.7"}},
    }
    verifier = StubVerifier()
    handler, _ = _handler(verifier=verifier)
    assert handler(event)["statusCode"] == 200
    assert verifier.calls == [("token-123", "198.51.100.7")]


def test_base64_body(valid_body):
    handler, _ = _handler()
    raw = base64.b64encode(json.dumps(valid_body).encode("utf-8")).decode("ascii")
    resp = handler(_event(raw, isBase64Encoded=True))
    assert resp["statusCode"] == 200


def test_malformed_json_is_400():
    handler, _ = _handler()
    resp = handler(_event("{not json"))
    assert resp["statusCode"] == 400
    assert json.loads(resp["body"])["error"] == INVALID_FORM_ERROR


def test_send_failure_is_500(valid_body):
    handler, _ = _handler(mailer=FakeMailer(fail=True))
    resp = handler(_event(json.dumps(valid_body)))
    assert resp["statusCode"] == 500
    body = json.loads(resp["body"])
    assert body["success"] is False
    assert "535" not in resp["body"]


def test_parse_body_missing():
    assert parse_body({}) is None
    assert parse_body({"body": ""}) is None


def test_lambda_handler_reports_broken_environment_as_json_500(monkeypatch):
    from smile_support import serverless
    from smile_support.services.contact_service import SERVER_CONFIG_ERROR

    def broken():
        raise ValueError("bad environment")

    monkeypatch.setattr(serverless, "get_handler_dependencies", broken)
    resp = serverless.lambda_handler(_event("{}"), None)
    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"success": False, "error": SERVER_CONFIG_ERROR}

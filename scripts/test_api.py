#!/usr/bin/env python3
"""
Manual API smoke script for the contact backend.

Usage:
  poetry run python scripts/test_api.py [--base URL] [--send you@example.com]

  Ensure the server is running first:
    poetry run python run.py

  Only the rejecting gates are exercised by default; --send submits a real
  form (with RECAPTCHA_SECRET_KEY unset on the server) and emails both parties.
"""
import argparse
import json
import sys
from urllib.request import Request, urlopen
from urllib.error import HTTPError, URLError

BASE = "http://127.0.0.1:3001"

VALID = {
    "name": "山田太郎",
    "email": "test@example.com",
    "message": "スモークテストです",
    "securityAnswer": "富士山",
    "recaptchaToken": "smoke-test-token",
}


def req(method: str, path: str, data=None) -> tuple[dict | None, int]:
    url = f"{BASE.rstrip('/')}{path}"
    headers = {"Content-Type": "application/json"}
    body = json.dumps(data).encode() if data is not None else None
    try:
        r = urlopen(Request(url, data=body, headers=headers, method=method), timeout=30)
        out = json.loads(r.read().decode()) if r.length and r.length > 0 else {}
        return out, r.status
    except HTTPError as e:
        body = e.read().decode() if e.fp else ""
        try:
            out = json.loads(body) if body else {}
        except json.JSONDecodeError:
            out = {"error": body or str(e)}
        return out, e.code
    except URLError as e:
        print(f"Connection error: {e}")
        return None, 0


def main():
    global BASE
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--base", default=BASE, help="Base URL (default: http://127.0.0.1:3001)"
    )
    ap.add_argument(
        "--send", metavar="EMAIL", help="submit a valid form using this address"
    )
    args = ap.parse_args()
    BASE = args.base.rstrip("/")

    checks = [
        ("Ping", "GET", "/__ping", None, 200),
        ("GET /api/contact is rejected", "GET", "/api/contact", None, 405),
        ("Empty body", "POST", "/api/contact", {}, 400),
        ("Email without @", "POST", "/api/contact", {**VALID, "email": "x"}, 400),
        (
            "Wrong security answer",
            "POST",
            "/api/contact",
            {**VALID, "securityAnswer": "エベレスト"},
            400,
        ),
        (
            "Missing reCAPTCHA token",
            "POST",
            "/api/contact",
            {k: v for k, v in VALID.items() if k != "recaptchaToken"},
            400,
        ),
    ]
    if args.send:
        checks.append(
            ("Real submission", "POST", "/api/contact", {**VALID, "email": args.send}, 200)
        )

    ok = 0
    fail = 0
    for i, (label, method, path, data, expected) in enumerate(checks, start=1):
        print(f"{i}. {label} ...")
        resp, code = req(method, path, data)
        if code == 0:
            sys.exit(1)
        if code != expected:
            print(f"   FAIL expected {expected}, got {code} {resp}")
            fail += 1
        else:
            print(f"   OK {code} {(resp or {}).get('error') or (resp or {}).get('message') or ''}")
            ok += 1

    # Summary
    print(f"\n--- {ok} passed, {fail} failed ---")
    sys.exit(1 if fail else 0)


if __name__ == "__main__":
    main()

"""Helpers for building signed requests in tests."""

import hashlib
import hmac

from jsonrpc_sign.models import SignatureRequest

NOW = 1_700_000_000
APP_ID = "test-app"
APP_SECRET = "test-secret"
BODY = b'{"test":"data"}'
NONCE = "test-nonce"


def hmac_sha1(message: bytes, key: str) -> str:
    return hmac.new(key.encode(), message, hashlib.sha1).hexdigest()


def md5(message: bytes) -> str:
    return hashlib.md5(message).hexdigest()


def make_request(
    body: bytes = BODY,
    timestamp: int | str | None = NOW,
    nonce: str | None = NONCE,
    app_id: str | None = APP_ID,
    secret: str = APP_SECRET,
    method: str | None = None,
    version: str | None = None,
    signature: str | None = "auto",
    query: dict | None = None,
) -> SignatureRequest:
    """Build a request signed with HMAC-SHA1 unless told otherwise."""
    headers: dict[str, str] = {}
    if app_id is not None:
        headers["Signature-AppID"] = app_id
    if nonce is not None:
        headers["Signature-Nonce"] = nonce
    if timestamp is not None:
        headers["Signature-Timestamp"] = str(timestamp)
    if method is not None:
        headers["Signature-Method"] = method
    if version is not None:
        headers["Signature-Version"] = version

    if signature == "auto":
        raw = body + str(timestamp or "").encode() + (nonce or "").encode()
        if method == "md5":
            signature = md5(raw + secret.encode())
        else:
            signature = hmac_sha1(raw, secret)
    if signature is not None:
        headers["Signature"] = signature

    return SignatureRequest(body=body, headers=headers, query=query or {})



"""
Signature algorithms.

Two families are supported, selected by the exact `(method, version)` pair:

    ("md5", "1.0")        md5(body + timestamp + nonce + secret)
    ("HMAC-SHA1", "1.0")  hmac_sha1(key=secret, msg=body + timestamp + nonce)
    ("sha1", "1.0")       alias of HMAC-SHA1

Matching is case-sensitive. Note that the md5 variant mixes the secret into
the message, while the HMAC variant only uses it as the key.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time
from typing import Callable

from .headers import (
    APP_ID_HEADER,
    DEFAULT_SIGNATURE_METHOD,
    DEFAULT_SIGNATURE_VERSION,
    METHOD_HEADER,
    NONCE_HEADER,
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    VERSION_HEADER,
)
from .models import SignatureType

SignFunction = Callable[[bytes, str, str, str], str]


def build_raw_text(body: bytes, timestamp: str, nonce: str) -> bytes:
    """Concatenate the signed material (secret not included)."""
    return body + timestamp.encode("utf-8") + nonce.encode("utf-8")


def sign_md5(body: bytes, timestamp: str, nonce: str, app_secret: str) -> str:
    raw_text = build_raw_text(body, timestamp, nonce) + app_secret.encode("utf-8")
    return hashlib.md5(raw_text).hexdigest()


def sign_hmac_sha1(body: bytes, timestamp: str, nonce: str, app_secret: str) -> str:
    raw_text = build_raw_text(body, timestamp, nonce)
    return hmac.new(app_secret.encode("utf-8"), raw_text, hashlib.sha1).hexdigest()


SIGN_FUNCTIONS: dict[SignatureType, SignFunction] = {
    SignatureType("md5", "1.0"): sign_md5,
    SignatureType("HMAC-SHA1", "1.0"): sign_hmac_sha1,
    SignatureType("sha1", "1.0"): sign_hmac_sha1,
}


def get_sign_function(sign_type: SignatureType) -> SignFunction | None:
    """Return the signing function for `sign_type`, or None if unsupported."""
    return SIGN_FUNCTIONS.get(sign_type)


def compute_signature(
    sign_type: SignatureType,
    body: bytes,
    timestamp: str,
    nonce: str,
    app_secret: str | None,
) -> str:
    """
    Compute the hex signature for a request.

    Args:
        sign_type: Algorithm selector
        body: Raw request body
        timestamp: Timestamp exactly as sent in the header
        nonce: Nonce exactly as sent in the header
        app_secret: Shared secret (None is treated as "")

    Returns:
        Lowercase hex digest

    Raises:
        ValueError: If `sign_type` is not supported
    """
    sign = get_sign_function(sign_type)
    if sign is None:
        raise ValueError(f"Unsupported signature type: {sign_type}")
    return sign(body, timestamp, nonce, app_secret or "")


def generate_nonce() -> str:
    """Generate a random 32-character nonce."""
    return secrets.token_hex(16)


def build_signature_headers(
    app_id: str,
    app_secret: str | None,
    body: bytes,
    *,
    method: str = DEFAULT_SIGNATURE_METHOD,
    version: str = DEFAULT_SIGNATURE_VERSION,
    nonce: str | None = None,
    timestamp: int | str | None = None,
) -> dict[str, str]:
    """
    Build the headers a client sends along with a signed request.

    Example:
        >>> headers = build_signature_headers("app1", "secret", b'{"id":1}')
        >>> sorted(headers)
        ['Signature', 'Signature-AppID', 'Signature-Method', 'Signature-Nonce', 'Signature-Timestamp', 'Signature-Version']
    """
    if nonce is None:
        nonce = generate_nonce()
    if timestamp is None:
        timestamp = int(time.time())
    timestamp = str(timestamp)

    signature = compute_signature(
        SignatureType(method, version), body, timestamp, nonce, app_secret,
    )
    return {
        APP_ID_HEADER: app_id,
        NONCE_HEADER: nonce,
        TIMESTAMP_HEADER: timestamp,
        METHOD_HEADER: method,
        VERSION_HEADER: version,
        SIGNATURE_HEADER: signature,
    }

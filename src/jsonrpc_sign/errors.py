"""
Signature check failures.

Every failure is a single exception type, `SignatureError`, tagged with a
`SignatureErrorKind`. All kinds carry the JSON-RPC "Invalid Request" code so
the RPC framework can render them directly as error responses.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# JSON-RPC 2.0 "Invalid Request"
INVALID_REQUEST_CODE = -32600


class SignatureErrorKind(str, Enum):
    """
    Why a signature check rejected a request.

    Attributes:
        APP_ID_MISSING: Signature-AppID header absent or empty.
        APP_ID_NOT_FOUND: No active credential for the AppID.
        NONCE_MISSING: Signature-Nonce header absent or empty.
        REQUIRED: Signature header absent or empty.
        TIMEOUT: Timestamp absent, malformed or outside the skew tolerance.
        ERROR: Signature mismatch or unsupported (method, version).
        REQUEST_NOT_AVAILABLE: No current request to check (environment fault).
    """

    APP_ID_MISSING = "APP_ID_MISSING"
    APP_ID_NOT_FOUND = "APP_ID_NOT_FOUND"
    NONCE_MISSING = "NONCE_MISSING"
    REQUIRED = "REQUIRED"
    TIMEOUT = "TIMEOUT"
    ERROR = "ERROR"
    REQUEST_NOT_AVAILABLE = "REQUEST_NOT_AVAILABLE"


DEFAULT_MESSAGES: dict[SignatureErrorKind, str] = {
    SignatureErrorKind.APP_ID_MISSING: "Missing signature AppID",
    SignatureErrorKind.APP_ID_NOT_FOUND: "AppID not found",
    SignatureErrorKind.NONCE_MISSING: "Missing signature nonce",
    SignatureErrorKind.REQUIRED: "Missing signature",
    SignatureErrorKind.TIMEOUT: "Signature expired",
    SignatureErrorKind.ERROR: "Signature error",
    SignatureErrorKind.REQUEST_NOT_AVAILABLE: "Request is not available",
}


class SignatureError(Exception):
    """Raised when a request fails the signature check."""

    def __init__(
        self,
        kind: SignatureErrorKind,
        message: str | None = None,
        data: dict[str, Any] | None = None,
        code: int = INVALID_REQUEST_CODE,
    ):
        self.kind = kind
        self.message = message or DEFAULT_MESSAGES[kind]
        self.data = data or {}
        self.code = code
        super().__init__(self.message)

    @property
    def is_signature_failure(self) -> bool:
        """False for framework/environment faults, True for rejected signatures."""
        return self.kind is not SignatureErrorKind.REQUEST_NOT_AVAILABLE

    def to_jsonrpc(self) -> dict[str, Any]:
        """Render as a JSON-RPC 2.0 error object."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data:
            error["data"] = self.data
        return error

    def __repr__(self) -> str:
        return f"SignatureError(kind={self.kind.value}, message={self.message!r})"

"""
Data models for JSON-RPC signature verification.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, NamedTuple


@dataclass(frozen=True)
class SignatureRequest:
    """
    Read-only view of an inbound request, as seen by the signer.

    Attributes:
        body: Raw request payload, signed byte-for-byte
        headers: Request headers (looked up case-insensitively)
        query: Query string parameters
        method: HTTP method, for audit logging only
        path: Request path, for audit logging only
    """
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    method: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        # Normalize header names once so lookups don't depend on transport casing
        normalized = {key.lower(): value for key, value in self.headers.items()}
        object.__setattr__(self, "headers", normalized)
        object.__setattr__(self, "query", dict(self.query))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return a header value by case-insensitive name."""
        return self.headers.get(name.lower(), default)

    def __repr__(self) -> str:
        return (
            f"SignatureRequest(method={self.method!r}, path={self.path!r}, "
            f"body_len={len(self.body)}, headers={sorted(self.headers)!r})"
        )


@dataclass(frozen=True)
class CallerCredential:
    """
    A registered caller, as returned by the credential store.

    Attributes:
        app_id: Public caller identifier (lookup key)
        app_secret: Shared secret; None is treated as an empty secret
        sign_timeout_second: Allowed clock skew; None means use the default
        active: Only active credentials are resolvable
    """
    app_id: str
    app_secret: str | None = field(default=None, repr=False)
    sign_timeout_second: int | None = None
    active: bool = True


class SignatureType(NamedTuple):
    """A `(method, version)` pair selecting the signing algorithm."""
    method: str
    version: str

    def __str__(self) -> str:
        return f"{self.method}-{self.version}"

"""
Ambient request context.

Transport adapters bind the current `SignatureRequest` here; the interceptor
reads it back when an RPC method is about to run. Backed by a ContextVar, so
threads and asyncio tasks each see their own request.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator

from .models import SignatureRequest

_current_request: ContextVar[SignatureRequest | None] = ContextVar(
    "jsonrpc_sign_current_request", default=None
)


def get_current_request() -> SignatureRequest | None:
    """Return the request bound to the current context, if any."""
    return _current_request.get()


def set_current_request(request: SignatureRequest | None) -> Token:
    """Bind `request` and return a token for `reset_current_request`."""
    return _current_request.set(request)


def reset_current_request(token: Token) -> None:
    _current_request.reset(token)


@contextmanager
def request_context(request: SignatureRequest) -> Iterator[SignatureRequest]:
    """
    Bind `request` for the duration of the block.

    Example:
        >>> with request_context(SignatureRequest(body=b"{}")):
        ...     assert get_current_request() is not None
    """
    token = set_current_request(request)
    try:
        yield request
    finally:
        reset_current_request(token)

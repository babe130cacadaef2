"""
WSGI middleware that binds the signature request context (Flask).
"""

from __future__ import annotations

from io import BytesIO
from typing import Any, Callable, Iterable
from urllib.parse import parse_qsl

from ..context import reset_current_request, set_current_request
from ..models import SignatureRequest

ENVIRON_KEY = "jsonrpc_sign.request"


def _extract_headers(environ: dict[str, Any]) -> dict[str, str]:
    """Extract HTTP headers from WSGI environ."""
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("HTTP_"):
            # HTTP_SIGNATURE_APPID -> signature-appid
            header_name = key[5:].replace("_", "-").lower()
            headers[header_name] = value
        elif key == "CONTENT_TYPE":
            headers["content-type"] = value
        elif key == "CONTENT_LENGTH":
            headers["content-length"] = value
    return headers


def _read_body(environ: dict[str, Any]) -> bytes:
    """Read the request body and reset wsgi.input for downstream apps."""
    content_length = environ.get("CONTENT_LENGTH")
    if not content_length:
        return b""
    try:
        length = int(content_length)
    except ValueError:
        return b""
    stream = environ.get("wsgi.input")
    if stream is None or length <= 0:
        return b""

    body = stream.read(length)
    environ["wsgi.input"] = BytesIO(body)
    return body


def build_signature_request(environ: dict[str, Any]) -> SignatureRequest:
    """Build a SignatureRequest from a WSGI environ."""
    query = dict(parse_qsl(environ.get("QUERY_STRING", ""), keep_blank_values=True))
    return SignatureRequest(
        body=_read_body(environ),
        headers=_extract_headers(environ),
        query=query,
        method=environ.get("REQUEST_METHOD", "GET"),
        path=environ.get("PATH_INFO", "/"),
    )


class SignContextWSGIMiddleware:
    """
    WSGI middleware making the current request available to the interceptor.

    Attaches the `SignatureRequest` to `environ["jsonrpc_sign.request"]` and
    binds it as the current request while the wrapped app runs.

    Args:
        app: WSGI application

    Example (Flask):
        >>> from flask import Flask, request
        >>> from jsonrpc_sign.middleware.wsgi import SignContextWSGIMiddleware
        >>>
        >>> app = Flask(__name__)
        >>> app.wsgi_app = SignContextWSGIMiddleware(app.wsgi_app)
        >>>
        >>> @app.post("/json-rpc")
        >>> def json_rpc():
        ...     call = request.get_json()
        ...     interceptor.before_method_apply(call["method"])
        ...     ...
    """

    def __init__(self, app: Callable[..., Iterable[bytes]]):
        self.app = app

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[..., Any],
    ) -> Iterable[bytes]:
        signature_request = build_signature_request(environ)
        environ[ENVIRON_KEY] = signature_request

        token = set_current_request(signature_request)
        try:
            return self.app(environ, start_response)
        finally:
            reset_current_request(token)

"""
ASGI middleware that binds the signature request context (FastAPI/Starlette).
"""

from typing import Any, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import reset_current_request, set_current_request
from ..models import SignatureRequest


async def build_signature_request(request: Request) -> SignatureRequest:
    """Build a SignatureRequest from a Starlette request."""
    body = await request.body()
    return SignatureRequest(
        body=body,
        headers={key.lower(): value for key, value in request.headers.items()},
        query=dict(request.query_params),
        method=request.method,
        path=request.url.path,
    )


class SignContextASGIMiddleware(BaseHTTPMiddleware):
    """
    ASGI middleware making the current request available to the interceptor.

    For every HTTP request a `SignatureRequest` (raw body, headers, query) is
    built and bound as the current request while the downstream app runs. It
    is also attached to `request.state.signature_request`.

    Args:
        app: ASGI application

    Example (FastAPI):
        >>> from fastapi import FastAPI
        >>> from jsonrpc_sign import SignContextASGIMiddleware
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(SignContextASGIMiddleware)
        >>>
        >>> @app.post("/json-rpc")
        >>> async def json_rpc(request: Request):
        ...     call = await request.json()
        ...     interceptor.before_method_apply(call["method"])
        ...     ...
    """

    def __init__(self, app: Any):
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        signature_request = await build_signature_request(request)
        request.state.signature_request = signature_request

        token = set_current_request(signature_request)
        try:
            return await call_next(request)
        finally:
            reset_current_request(token)

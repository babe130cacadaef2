"""
Per-method signature enforcement for an RPC dispatcher.

The dispatcher calls `CheckSignInterceptor.before_method_apply(name)` right
before running a method. Methods opt in through a `MethodRegistry`.
"""

from __future__ import annotations

import hmac
import logging
from typing import Any, Callable, TypeVar

from .config import SignConfig
from .context import get_current_request
from .errors import SignatureError, SignatureErrorKind
from .headers import BYPASS_QUERY_PARAM, extract_signature_headers
from .models import SignatureRequest
from .verifier import Signer

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class MethodRegistry:
    """
    Maps RPC method names to their handler and whether they need a signature.

    Example:
        >>> registry = MethodRegistry()
        >>> @registry.method("order.create", check_sign=True)
        ... def create_order(params):
        ...     return {"ok": True}
        >>> registry.requires_signature("order.create")
        True
    """

    def __init__(self) -> None:
        self._check_sign: dict[str, bool] = {}
        self._handlers: dict[str, Callable[..., Any]] = {}

    def register(
        self,
        name: str,
        handler: Callable[..., Any] | None = None,
        check_sign: bool = False,
    ) -> None:
        self._check_sign[name] = check_sign
        if handler is not None:
            self._handlers[name] = handler
        logger.debug(f"RPC method registered: {name} (check_sign={check_sign})")

    def method(self, name: str, check_sign: bool = False) -> Callable[[F], F]:
        """Decorator form of `register`."""
        def decorator(func: F) -> F:
            self.register(name, func, check_sign=check_sign)
            return func
        return decorator

    def requires_signature(self, name: str) -> bool:
        return self._check_sign.get(name, False)

    def handler(self, name: str) -> Callable[..., Any] | None:
        return self._handlers.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._check_sign


class CheckSignInterceptor:
    """
    Gates method execution behind the signer.

    Args:
        signer: Performs the actual signature check
        registry: Declares which methods require a signature
        config: Supplies the bypass token. Default: SignConfig()
        request_provider: Returns the current request. Default: the
            ambient request context
    """

    def __init__(
        self,
        signer: Signer,
        registry: MethodRegistry,
        config: SignConfig | None = None,
        request_provider: Callable[[], SignatureRequest | None] = get_current_request,
    ):
        self.signer = signer
        self.registry = registry
        self.bypass_token = (config or signer.config).bypass_token
        self.request_provider = request_provider

    def before_method_apply(self, method_name: str) -> None:
        """
        Check the current request's signature if `method_name` requires one.

        Raises:
            SignatureError: REQUEST_NOT_AVAILABLE when there is no current
                request, otherwise whatever the signer raises
        """
        if not self.registry.requires_signature(method_name):
            return

        request = self.request_provider()
        if request is None:
            raise SignatureError(SignatureErrorKind.REQUEST_NOT_AVAILABLE)

        if self._is_bypassed(request):
            logger.info(f"Signature check bypassed for {method_name}")
            return

        self.signer.check_request(request)

        logger.info(
            f"Signature accepted, calling {method_name}",
            extra={
                "rpc_method": method_name,
                "request": repr(request),
                "signature_headers": extract_signature_headers(request.headers),
            },
        )

    def _is_bypassed(self, request: SignatureRequest) -> bool:
        if self.bypass_token is None:
            return False
        submitted = request.query.get(BYPASS_QUERY_PARAM)
        if submitted is None:
            return False
        return hmac.compare_digest(
            submitted.encode("utf-8"), self.bypass_token.encode("utf-8")
        )

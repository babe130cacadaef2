"""Tests for MethodRegistry and CheckSignInterceptor."""

import logging

import pytest

from jsonrpc_sign import CheckSignInterceptor, MethodRegistry, SignConfig
from jsonrpc_sign.context import request_context
from jsonrpc_sign.errors import SignatureError, SignatureErrorKind

from helpers import make_request


class SpySigner:
    """Signer stand-in that records calls and optionally fails."""

    def __init__(self, error=None):
        self.config = SignConfig()
        self.calls = []
        self.error = error

    def check_request(self, request):
        self.calls.append(request)
        if self.error is not None:
            raise self.error


@pytest.fixture
def registry():
    registry = MethodRegistry()
    registry.register("public.ping")
    registry.register("order.create", check_sign=True)
    return registry


class TestMethodRegistry:
    """Tests for MethodRegistry."""

    def test_decorator_registers_handler(self):
        registry = MethodRegistry()

        @registry.method("order.create", check_sign=True)
        def create_order(params):
            return params

        assert registry.requires_signature("order.create") is True
        assert registry.handler("order.create") is create_order
        assert "order.create" in registry

    def test_default_does_not_require_signature(self):
        registry = MethodRegistry()
        registry.register("public.ping")

        assert registry.requires_signature("public.ping") is False

    def test_unknown_method(self):
        registry = MethodRegistry()

        assert registry.requires_signature("nope") is False
        assert registry.handler("nope") is None
        assert "nope" not in registry


class TestCheckSignInterceptor:
    """Tests for CheckSignInterceptor."""

    def test_method_without_check_sign_skips_everything(self, registry):
        signer = SpySigner()
        provider_calls = []

        def provider():
            provider_calls.append(True)
            return None

        interceptor = CheckSignInterceptor(signer, registry, request_provider=provider)
        interceptor.before_method_apply("public.ping")

        assert signer.calls == []
        assert provider_calls == []

    def test_unregistered_method_skips(self, registry):
        signer = SpySigner()
        interceptor = CheckSignInterceptor(signer, registry, request_provider=lambda: None)

        interceptor.before_method_apply("not.registered")

        assert signer.calls == []

    def test_no_request_available(self, registry):
        signer = SpySigner()
        interceptor = CheckSignInterceptor(signer, registry, request_provider=lambda: None)

        with pytest.raises(SignatureError) as exc_info:
            interceptor.before_method_apply("order.create")

        assert exc_info.value.kind is SignatureErrorKind.REQUEST_NOT_AVAILABLE
        assert exc_info.value.is_signature_failure is False
        assert signer.calls == []

    def test_uses_ambient_request_context(self, registry):
        signer = SpySigner()
        interceptor = CheckSignInterceptor(signer, registry)
        request = make_request()

        with request_context(request):
            interceptor.before_method_apply("order.create")

        assert signer.calls == [request]

    def test_no_ambient_request(self, registry):
        interceptor = CheckSignInterceptor(SpySigner(), registry)

        with pytest.raises(SignatureError) as exc_info:
            interceptor.before_method_apply("order.create")
        assert exc_info.value.kind is SignatureErrorKind.REQUEST_NOT_AVAILABLE

    def test_bypass_token_skips_signer(self, registry):
        """Matching bypass token skips the signer even with a bad signature."""
        signer = SpySigner(error=SignatureError(SignatureErrorKind.ERROR))
        request = make_request(signature="bogus", query={"__ignoreSign": "god"})
        interceptor = CheckSignInterceptor(signer, registry, request_provider=lambda: request)

        interceptor.before_method_apply("order.create")

        assert signer.calls == []

    def test_wrong_bypass_token_calls_signer(self, registry):
        signer = SpySigner()
        request = make_request(query={"__ignoreSign": "goddess"})
        interceptor = CheckSignInterceptor(signer, registry, request_provider=lambda: request)

        interceptor.before_method_apply("order.create")

        assert signer.calls == [request]

    def test_custom_bypass_token(self, registry):
        signer = SpySigner()
        config = SignConfig(bypass_token="let-me-in")
        interceptor = CheckSignInterceptor(
            signer, registry, config=config,
            request_provider=lambda: make_request(query={"__ignoreSign": "let-me-in"}),
        )
        interceptor.before_method_apply("order.create")
        assert signer.calls == []

        interceptor.request_provider = lambda: make_request(query={"__ignoreSign": "god"})
        interceptor.before_method_apply("order.create")
        assert len(signer.calls) == 1

    def test_disabled_bypass(self, registry):
        signer = SpySigner()
        request = make_request(query={"__ignoreSign": "god"})
        interceptor = CheckSignInterceptor(
            signer, registry,
            config=SignConfig(bypass_token=None),
            request_provider=lambda: request,
        )

        interceptor.before_method_apply("order.create")

        assert signer.calls == [request]

    def test_signer_errors_propagate_unchanged(self, registry):
        error = SignatureError(SignatureErrorKind.TIMEOUT)
        signer = SpySigner(error=error)
        interceptor = CheckSignInterceptor(signer, registry, request_provider=make_request)

        with pytest.raises(SignatureError) as exc_info:
            interceptor.before_method_apply("order.create")

        assert exc_info.value is error

    def test_success_logs_audit_entry(self, registry, caplog):
        interceptor = CheckSignInterceptor(SpySigner(), registry, request_provider=make_request)

        with caplog.at_level(logging.INFO, logger="jsonrpc_sign.interceptor"):
            interceptor.before_method_apply("order.create")

        records = [r for r in caplog.records if getattr(r, "rpc_method", None) == "order.create"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert records[0].signature_headers["signature-appid"] == "test-app"

    def test_end_to_end_with_real_signer(self, registry, signer):
        interceptor = CheckSignInterceptor(signer, registry)

        with request_context(make_request()):
            interceptor.before_method_apply("order.create")

        with request_context(make_request(signature="0" * 40)):
            with pytest.raises(SignatureError) as exc_info:
                interceptor.before_method_apply("order.create")
        assert exc_info.value.kind is SignatureErrorKind.ERROR

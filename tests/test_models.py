"""Tests for SignatureRequest, CallerCredential and SignatureType."""

from jsonrpc_sign.models import CallerCredential, SignatureRequest, SignatureType


class TestSignatureRequest:
    """Tests for SignatureRequest."""

    def test_headers_normalized(self):
        request = SignatureRequest(headers={"Signature-AppID": "app1"})

        assert request.headers == {"signature-appid": "app1"}
        assert request.header("SIGNATURE-APPID") == "app1"
        assert request.header("Signature", "fallback") == "fallback"

    def test_empty_header_is_not_replaced_by_default(self):
        request = SignatureRequest(headers={"Signature-Method": ""})
        assert request.header("Signature-Method", "HMAC-SHA1") == ""

    def test_repr_hides_values(self):
        request = SignatureRequest(
            body=b'{"password":"hunter2"}',
            headers={"Signature": "abc"},
            method="POST",
            path="/json-rpc",
        )
        assert "hunter2" not in repr(request)
        assert "body_len=22" in repr(request)


class TestCallerCredential:
    """Tests for CallerCredential."""

    def test_repr_hides_secret(self):
        credential = CallerCredential("app1", "s3cret")
        assert "s3cret" not in repr(credential)

    def test_defaults(self):
        credential = CallerCredential("app1")
        assert credential.app_secret is None
        assert credential.sign_timeout_second is None
        assert credential.active is True


class TestSignatureType:
    """Tests for SignatureType."""

    def test_str(self):
        assert str(SignatureType("HMAC-SHA1", "1.0")) == "HMAC-SHA1-1.0"

    def test_is_tuple(self):
        assert SignatureType("md5", "1.0") == ("md5", "1.0")

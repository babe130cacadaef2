"""
Signature verification for inbound JSON-RPC requests.

Callers sign every request with headers:

1. Signature-AppID: the caller's AppID
2. Signature-Nonce: a random string of up to 32 characters
3. Signature-Timestamp: current unix time in seconds
4. Signature: hex digest of body + timestamp + nonce, using HMAC-SHA1 keyed
   with the AppSecret (see `signing` for the other supported algorithms)

Optional Signature-Method / Signature-Version headers select the algorithm.
"""

from __future__ import annotations

import hmac
import logging
import time
from typing import Callable

from .config import SignConfig
from .credentials import CredentialStore
from .errors import SignatureError, SignatureErrorKind
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
from .models import CallerCredential, SignatureRequest, SignatureType
from .signing import build_raw_text, get_sign_function

logger = logging.getLogger(__name__)


class Signer:
    """
    Checks that a request was signed by a known, active caller.

    Args:
        credential_store: Lookup for caller credentials
        config: Defaults such as the skew tolerance. Default: SignConfig()
        clock: Returns the current unix time. Default: time.time

    Example:
        >>> store = InMemoryCredentialStore([CallerCredential("app1", "s3cret")])
        >>> signer = Signer(store)
        >>> signer.check_request(request)  # raises SignatureError on failure
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        config: SignConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.credential_store = credential_store
        self.config = config or SignConfig()
        self.clock = clock

    def extract_nonce(self, request: SignatureRequest) -> str:
        nonce = request.header(NONCE_HEADER)
        if not nonce:
            raise SignatureError(SignatureErrorKind.NONCE_MISSING)
        return nonce

    def extract_method(self, request: SignatureRequest) -> str:
        return request.header(METHOD_HEADER, DEFAULT_SIGNATURE_METHOD)

    def extract_version(self, request: SignatureRequest) -> str:
        return request.header(VERSION_HEADER, DEFAULT_SIGNATURE_VERSION)

    def extract_app_id(self, request: SignatureRequest) -> str:
        app_id = request.header(APP_ID_HEADER)
        if not app_id:
            raise SignatureError(SignatureErrorKind.APP_ID_MISSING)
        return app_id

    def check_request(self, request: SignatureRequest) -> None:
        """
        Verify the request's signature.

        Stages run in order and the first failure aborts the check:
        caller lookup, timestamp freshness, signature presence, signature
        comparison.

        Raises:
            SignatureError: With the kind of the failing stage
        """
        caller = self._resolve_caller(request)
        self._validate_timestamp(request, caller)
        self._validate_signature(request, caller)
        logger.debug(f"Signature accepted: app_id={caller.app_id}")

    def _resolve_caller(self, request: SignatureRequest) -> CallerCredential:
        app_id = self.extract_app_id(request)
        caller = self.credential_store.find_active_credential_by_app_id(app_id)
        if caller is None:
            raise SignatureError(SignatureErrorKind.APP_ID_NOT_FOUND)
        return caller

    def _validate_timestamp(self, request: SignatureRequest, caller: CallerCredential) -> None:
        timestamp = request.header(TIMESTAMP_HEADER)
        if not timestamp:
            raise SignatureError(SignatureErrorKind.TIMEOUT)

        # Plain ASCII integer with an optional leading minus sign
        if not (timestamp.isascii() and timestamp.removeprefix("-").isdigit()):
            raise SignatureError(SignatureErrorKind.TIMEOUT)
        submitted = int(timestamp)

        tolerance = caller.sign_timeout_second
        if tolerance is None:
            tolerance = self.config.default_timeout_seconds

        if abs(int(self.clock()) - submitted) > tolerance:
            raise SignatureError(SignatureErrorKind.TIMEOUT)

    def _validate_signature(self, request: SignatureRequest, caller: CallerCredential) -> None:
        submitted = request.header(SIGNATURE_HEADER)
        if not submitted:
            raise SignatureError(SignatureErrorKind.REQUIRED)

        nonce = self.extract_nonce(request)
        sign_type = SignatureType(self.extract_method(request), self.extract_version(request))
        timestamp = request.header(TIMESTAMP_HEADER) or ""

        sign = get_sign_function(sign_type)
        if sign is None:
            raise SignatureError(
                SignatureErrorKind.ERROR,
                data={"method": sign_type.method, "version": sign_type.version},
            )

        expected = sign(request.body, timestamp, nonce, caller.app_secret or "")
        if not hmac.compare_digest(expected.encode("utf-8"), submitted.encode("utf-8")):
            raw_text = build_raw_text(request.body, timestamp, nonce)
            logger.warning(
                f"JSON-RPC signature mismatch: server_sign={expected}, submit_sign={submitted}",
                extra={
                    "server_sign": expected,
                    "submit_sign": submitted,
                    "raw_text": raw_text.decode("utf-8", errors="replace"),
                },
            )
            raise SignatureError(SignatureErrorKind.ERROR)

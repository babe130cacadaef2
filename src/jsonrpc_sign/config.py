"""
Configuration for signature enforcement.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_BYPASS_TOKEN = "god"
DEFAULT_SIGN_TIMEOUT_SECONDS = 180

BYPASS_TOKEN_ENV = "JSON_RPC_GOD_SIGN"
SIGN_TIMEOUT_ENV = "JSON_RPC_SIGN_TIMEOUT_SECONDS"


@dataclass
class SignConfig:
    """
    Settings shared by the signer and the interceptor.

    Attributes:
        bypass_token: Value of the `__ignoreSign` query parameter that skips
            verification. None disables the bypass; rotate or disable it in
            production.
        default_timeout_seconds: Clock skew allowed for callers whose
            credential doesn't set its own.
    """

    bypass_token: str | None = DEFAULT_BYPASS_TOKEN
    default_timeout_seconds: int = DEFAULT_SIGN_TIMEOUT_SECONDS

    def __post_init__(self):
        if self.default_timeout_seconds < 0:
            raise ValueError("default_timeout_seconds must not be negative")
        if self.bypass_token == "":
            self.bypass_token = None

        if self.bypass_token is None:
            logger.debug("Signature bypass disabled")
        elif self.bypass_token == DEFAULT_BYPASS_TOKEN:
            logger.warning(
                "Signature bypass uses the default token; "
                f"set {BYPASS_TOKEN_ENV} to rotate or disable it"
            )
        logger.debug(f"Default signature timeout: {self.default_timeout_seconds}s")

    @classmethod
    def from_env(cls) -> "SignConfig":
        """
        Build a config from environment variables.

        JSON_RPC_GOD_SIGN - bypass token (empty string disables the bypass)
        JSON_RPC_SIGN_TIMEOUT_SECONDS - default skew tolerance in seconds
        """
        timeout = os.getenv(SIGN_TIMEOUT_ENV)
        return cls(
            bypass_token=os.getenv(BYPASS_TOKEN_ENV, DEFAULT_BYPASS_TOKEN),
            default_timeout_seconds=int(timeout) if timeout else DEFAULT_SIGN_TIMEOUT_SECONDS,
        )

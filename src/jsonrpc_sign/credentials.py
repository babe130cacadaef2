"""
Credential lookup.

The signer only needs `find_active_credential_by_app_id`; any store that
provides it (database repository, config file, remote service) can be used.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, runtime_checkable

from .models import CallerCredential

logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialStore(Protocol):
    """Read-only lookup of caller credentials."""

    def find_active_credential_by_app_id(self, app_id: str) -> CallerCredential | None:
        """Return the active credential for `app_id`, or None."""
        ...


class InMemoryCredentialStore:
    """
    Credential store backed by a dict.

    Suitable for tests and small deployments where callers are configured
    statically.

    Example:
        >>> store = InMemoryCredentialStore([CallerCredential("app1", "s3cret")])
        >>> store.find_active_credential_by_app_id("app1").app_id
        'app1'
    """

    def __init__(self, credentials: Iterable[CallerCredential] = ()):
        self._credentials: dict[str, CallerCredential] = {}
        for credential in credentials:
            self.add(credential)

    def add(self, credential: CallerCredential) -> None:
        """Register or replace a credential."""
        self._credentials[credential.app_id] = credential
        logger.debug(
            f"Credential registered: app_id={credential.app_id}, active={credential.active}"
        )

    def remove(self, app_id: str) -> None:
        self._credentials.pop(app_id, None)

    def find_active_credential_by_app_id(self, app_id: str) -> CallerCredential | None:
        credential = self._credentials.get(app_id)
        if credential is None or not credential.active:
            return None
        return credential

    def __len__(self) -> int:
        return len(self._credentials)

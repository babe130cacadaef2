"""Shared fixtures for signature tests."""

import pytest

from jsonrpc_sign import CallerCredential, InMemoryCredentialStore, SignConfig, Signer

from helpers import APP_ID, APP_SECRET, NOW


@pytest.fixture
def store():
    return InMemoryCredentialStore([CallerCredential(APP_ID, APP_SECRET)])


@pytest.fixture
def signer(store):
    return Signer(store, config=SignConfig(), clock=lambda: NOW)

"""
Signature header contract and case-insensitive header helpers.
"""

from typing import Mapping


APP_ID_HEADER = "Signature-AppID"
NONCE_HEADER = "Signature-Nonce"
TIMESTAMP_HEADER = "Signature-Timestamp"
METHOD_HEADER = "Signature-Method"
VERSION_HEADER = "Signature-Version"
SIGNATURE_HEADER = "Signature"

DEFAULT_SIGNATURE_METHOD = "HMAC-SHA1"
DEFAULT_SIGNATURE_VERSION = "1.0"

# Query parameter that lets trusted operators skip verification
BYPASS_QUERY_PARAM = "__ignoreSign"

# All headers that take part in the signature contract (lowercase)
SIGNATURE_HEADERS = frozenset({
    APP_ID_HEADER.lower(),
    NONCE_HEADER.lower(),
    TIMESTAMP_HEADER.lower(),
    METHOD_HEADER.lower(),
    VERSION_HEADER.lower(),
    SIGNATURE_HEADER.lower(),
})


def normalize_headers(all_headers: Mapping[str, str]) -> dict[str, str]:
    """
    Lowercase header names.

    Examples:
        >>> normalize_headers({"Signature-AppID": "app1"})
        {'signature-appid': 'app1'}
    """
    return {key.lower(): value for key, value in all_headers.items()}


def extract_signature_headers(all_headers: Mapping[str, str]) -> dict[str, str]:
    """
    Pick only the signature headers out of a request's headers.

    Useful for audit logging: the returned dict never contains cookies,
    authorization headers or anything else outside the signature contract.

    Args:
        all_headers: All request headers (any casing)

    Returns:
        Dict of signature headers (lowercase keys)
    """
    return {
        key: value
        for key, value in normalize_headers(all_headers).items()
        if key in SIGNATURE_HEADERS
    }

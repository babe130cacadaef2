"""
JSON-RPC request signing for Python

Verify HMAC-SHA1 / MD5 signed JSON-RPC requests from registered callers.
"""

from .models import CallerCredential, SignatureRequest, SignatureType
from .errors import SignatureError, SignatureErrorKind
from .config import SignConfig
from .credentials import CredentialStore, InMemoryCredentialStore
from .context import get_current_request, request_context
from .signing import build_signature_headers, compute_signature
from .verifier import Signer
from .interceptor import CheckSignInterceptor, MethodRegistry
from .client import RpcCallError, SignedRpcClient
from .middleware.wsgi import SignContextWSGIMiddleware

__version__ = "0.1.0"

__all__ = [
    "CallerCredential",
    "SignatureRequest",
    "SignatureType",
    "SignatureError",
    "SignatureErrorKind",
    "SignConfig",
    "CredentialStore",
    "InMemoryCredentialStore",
    "get_current_request",
    "request_context",
    "build_signature_headers",
    "compute_signature",
    "Signer",
    "CheckSignInterceptor",
    "MethodRegistry",
    "RpcCallError",
    "SignedRpcClient",
    "SignContextWSGIMiddleware",
]

# ASGI middleware - optional, requires starlette
try:
    from .middleware.asgi import SignContextASGIMiddleware
    __all__.append("SignContextASGIMiddleware")
except ImportError:
    pass

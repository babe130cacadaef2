"""
Request-context middleware for ASGI and WSGI frameworks.

Re-exports middleware classes for convenient imports:
    from jsonrpc_sign.middleware import SignContextASGIMiddleware
    from jsonrpc_sign.middleware import SignContextWSGIMiddleware
"""

__all__: list[str] = ["SignContextWSGIMiddleware"]

from .wsgi import SignContextWSGIMiddleware

# ASGI middleware (FastAPI, Starlette) - requires the "asgi" extra
try:
    from .asgi import SignContextASGIMiddleware
    __all__.append("SignContextASGIMiddleware")
except ImportError:
    pass

"""
FastAPI demo: a JSON-RPC endpoint with per-method signature checks.

Usage:
    # Install dependencies
    pip install -e ".[asgi,fastapi]"

    # Run the server
    uvicorn examples.fastapi_demo:app --port 8009 --reload

    # Or directly
    python examples/fastapi_demo.py

Call it with the signing client:
    >>> from jsonrpc_sign import SignedRpcClient
    >>> client = SignedRpcClient("http://localhost:8009/json-rpc", "demo-app", "demo-secret")
    >>> client.call("order.create", {"sku": "A-1"})
    {'created': 'A-1'}

Environment variables:
    DEMO_APP_ID / DEMO_APP_SECRET - Credential accepted by the demo
    JSON_RPC_GOD_SIGN - Bypass token for ?__ignoreSign= (empty disables)
    JSON_RPC_SIGN_TIMEOUT_SECONDS - Default clock skew tolerance
"""

import logging
import os

from fastapi import FastAPI, Request

from jsonrpc_sign import (
    CallerCredential,
    CheckSignInterceptor,
    InMemoryCredentialStore,
    MethodRegistry,
    SignConfig,
    SignContextASGIMiddleware,
    Signer,
    SignatureError,
)

logging.basicConfig(level=logging.INFO)

# Configuration from environment
APP_ID = os.getenv("DEMO_APP_ID", "demo-app")
APP_SECRET = os.getenv("DEMO_APP_SECRET", "demo-secret")

config = SignConfig.from_env()
store = InMemoryCredentialStore([CallerCredential(APP_ID, APP_SECRET)])
registry = MethodRegistry()
interceptor = CheckSignInterceptor(Signer(store, config), registry, config)

app = FastAPI(
    title="JSON-RPC Sign Demo API",
    description="Demo JSON-RPC API with signature verification",
    version="0.1.0",
)
app.add_middleware(SignContextASGIMiddleware)


@registry.method("system.ping")
def ping(params):
    """Public method - no signature required."""
    return "pong"


@registry.method("order.create", check_sign=True)
def create_order(params):
    """Protected method - requires a valid signature."""
    return {"created": params["sku"]}


@app.post("/json-rpc")
async def json_rpc(request: Request):
    call = await request.json()
    call_id = call.get("id")

    handler = registry.handler(call.get("method", ""))
    if handler is None:
        return {
            "jsonrpc": "2.0",
            "id": call_id,
            "error": {"code": -32601, "message": "Method not found"},
        }

    try:
        interceptor.before_method_apply(call["method"])
    except SignatureError as e:
        return {"jsonrpc": "2.0", "id": call_id, "error": e.to_jsonrpc()}

    return {"jsonrpc": "2.0", "id": call_id, "result": handler(call.get("params"))}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8009)

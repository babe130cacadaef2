"""
Flask demo: a JSON-RPC endpoint with per-method signature checks.

Usage:
    # Install dependencies
    pip install -e ".[flask]"

    # Run the server
    flask --app examples.flask_demo run --port 8010

    # Or directly
    python examples/flask_demo.py

Environment variables:
    DEMO_APP_ID / DEMO_APP_SECRET - Credential accepted by the demo
    JSON_RPC_GOD_SIGN - Bypass token for ?__ignoreSign= (empty disables)
"""

import logging
import os

from flask import Flask, jsonify, request

from jsonrpc_sign import (
    CallerCredential,
    CheckSignInterceptor,
    InMemoryCredentialStore,
    MethodRegistry,
    SignConfig,
    Signer,
    SignatureError,
)
from jsonrpc_sign.middleware import SignContextWSGIMiddleware

logging.basicConfig(level=logging.INFO)

APP_ID = os.getenv("DEMO_APP_ID", "demo-app")
APP_SECRET = os.getenv("DEMO_APP_SECRET", "demo-secret")

config = SignConfig.from_env()
store = InMemoryCredentialStore([CallerCredential(APP_ID, APP_SECRET)])
registry = MethodRegistry()
interceptor = CheckSignInterceptor(Signer(store, config), registry, config)

app = Flask(__name__)

# Bind each request as the current signature request
app.wsgi_app = SignContextWSGIMiddleware(app.wsgi_app)


@registry.method("system.ping")
def ping(params):
    return "pong"


@registry.method("order.create", check_sign=True)
def create_order(params):
    return {"created": params["sku"]}


@app.errorhandler(SignatureError)
def signature_error(e: SignatureError):
    call = request.get_json(silent=True) or {}
    return jsonify({"jsonrpc": "2.0", "id": call.get("id"), "error": e.to_jsonrpc()})


@app.post("/json-rpc")
def json_rpc():
    call = request.get_json()
    handler = registry.handler(call.get("method", ""))
    if handler is None:
        return jsonify({
            "jsonrpc": "2.0",
            "id": call.get("id"),
            "error": {"code": -32601, "message": "Method not found"},
        })

    interceptor.before_method_apply(call["method"])
    return jsonify({"jsonrpc": "2.0", "id": call.get("id"), "result": handler(call.get("params"))})


@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8010, debug=True)

"""
Serverless-style request/response envelope helpers.

    parse(event)            → dict       decoded JSON body
    ok(body, status_code)   → envelope
    err(message, status)    → envelope   {"error": message}
"""

import json
from typing import Any

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": True,
}


def parse(event: dict | None) -> Any:
    """Decode the event body. Raises json.JSONDecodeError on a malformed string body."""
    if not event:
        return {}
    body = event.get("body")
    if isinstance(body, (str, bytes)):
        return json.loads(body or "{}")
    return body or {}


def ok(body: Any, status_code: int = 200) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body if body is not None else {}, ensure_ascii=False),
    }


def err(message: Any = "ERROR", status_code: int = 400) -> dict[str, Any]:
    payload = {"error": message} if isinstance(message, str) else message
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(payload, ensure_ascii=False),
    }

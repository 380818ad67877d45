"""Request body size limit middleware.

Rejects bodies larger than max_bytes (MAX_UPLOAD_SIZE) with 413 and the
standard error envelope. A declared Content-Length is checked up front;
bodies without one (chunked) are buffered and counted before the app runs.
Raw ASGI.
"""

import json
from typing import Callable


def _too_large_body(max_bytes: int) -> bytes:
    return json.dumps(
        {
            "status": "error",
            "message": "Request body is too large.",
            "error": f"Request body must be at most {max_bytes} bytes.",
        }
    ).encode()


async def _reject(send: Callable, max_bytes: int) -> None:
    body = _too_large_body(max_bytes)
    await send(
        {
            "type": "http.response.start",
            "status": 413,
            "headers": [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ],
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})


def _content_length(scope: dict) -> int | None:
    for key, value in scope.get("headers", []):
        if key.lower() == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Enforce max_bytes on HTTP request bodies. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        declared = _content_length(scope)
        if declared is not None:
            if declared > max_bytes:
                await _reject(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        body = bytearray()
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body.extend(message.get("body", b""))
            if len(body) > max_bytes:
                await _reject(send, max_bytes)
                return
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay_receive() -> dict:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": bytes(body), "more_body": False}
            return await receive()

        await app(scope, replay_receive, send)

    return asgi_app

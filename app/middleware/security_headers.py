"""Security headers middleware.

Adds response headers suited to a JSON API. Responses under the auth prefix
also get Cache-Control: no-store since they carry tokens. Raw ASGI.
"""

from typing import Callable

API_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}
NO_STORE = (b"cache-control", b"no-store")


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    no_store_prefix: str = "/api/v1/auth",
) -> Callable:
    """Set security headers without overriding ones the route already set. Raw ASGI."""
    defaults = [
        (name.lower().encode(), value.encode())
        for name, value in (headers or API_HEADERS).items()
    ]

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        extra = list(defaults)
        if scope.get("path", "").startswith(no_store_prefix):
            extra.append(NO_STORE)

        async def send_with_headers(message: dict) -> None:
            if message["type"] == "http.response.start":
                current = list(message.get("headers", []))
                present = {name.lower() for name, _ in current}
                current.extend(h for h in extra if h[0] not in present)
                message["headers"] = current
            await send(message)

        await app(scope, receive, send_with_headers)

    return asgi_app

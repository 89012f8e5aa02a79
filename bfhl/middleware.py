"""ASGI middleware for request body limits."""

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from .exceptions import PayloadTooLargeError


def _too_large_response(exc: PayloadTooLargeError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"is_success": False, "error": exc.message},
    )


def _declared_length(scope: Scope) -> int | None:
    """Content-Length from the request headers, None when absent."""
    for header, value in scope.get("headers", []):
        if header == b"content-length":
            try:
                return int(value)
            except ValueError:
                return -1
    return None


class MaxBodySizeMiddleware:
    """Reject requests that exceed the configured body size limit.

    Declared sizes are checked up front; streamed bodies are counted as they
    are received and the read fails with ``PayloadTooLargeError``.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        """Initialize the middleware with an app and size cap.

        Args:
            app: The downstream ASGI application.
            max_body_size: Maximum allowed request body size in bytes.
        """
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = _declared_length(scope)
        # An unparseable Content-Length is treated as oversized
        if declared is not None and (declared < 0 or declared > self.max_body_size):
            response = _too_large_response(PayloadTooLargeError(max_bytes=self.max_body_size))
            await response(scope, receive, send)
            return

        received = 0

        async def counting_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    raise PayloadTooLargeError(max_bytes=self.max_body_size)
            return message

        try:
            await self.app(scope, counting_receive, send)
        except PayloadTooLargeError as exc:
            # Only reached when the body is read outside the app's exception handlers
            await _too_large_response(exc)(scope, receive, send)

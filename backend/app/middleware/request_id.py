"""
Middleware that tags every request with an X-Request-ID.

A client-supplied X-Request-ID is reused; otherwise one is generated. The id
is bound to the logging context and echoed on the response.
"""

import uuid

from core.logging import bind_context

REQUEST_ID_HEADER = b"x-request-id"


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        raw = headers.get(REQUEST_ID_HEADER)
        request_id = raw.decode("latin-1") if raw else uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id

        bind_context(request_id=request_id)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"] = [
                    *message["headers"],
                    (REQUEST_ID_HEADER, request_id.encode("latin-1")),
                ]
            await send(message)

        await self.app(scope, receive, send_wrapper)

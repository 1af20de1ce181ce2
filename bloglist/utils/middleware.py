import json
import logging
import time

from starlette.datastructures import Headers

logger = logging.getLogger("bloglist.requests")

MASKED_FIELDS = frozenset({"password"})


def mask_body(raw: bytes) -> str:
    """Render a request body for the log line, masking password values."""
    if not raw:
        return "{}"
    try:
        body = json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")
    if isinstance(body, dict):
        body = {k: ("***" if k in MASKED_FIELDS else v) for k, v in body.items()}
    return json.dumps(body, separators=(",", ":"))


def format_request_line(method, url, status, content_length, response_time_ms, body=None):
    result = [
        method,
        url,
        str(status),
        content_length or "-", "-",
        f"{response_time_ms:.3f}", "ms",
    ]
    if method == "POST":
        result.append(body if body is not None else "{}")
    return " ".join(result)


class RequestLoggerMiddleware:
    """ASGI middleware: one log line per request, unhandled errors logged and re-raised."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope["method"]
        start = time.perf_counter()
        chunks = []
        response = {"status": 500, "content_length": None}

        async def receive_wrapper():
            message = await receive()
            if method == "POST" and message["type"] == "http.request":
                chunks.append(message.get("body", b""))
            return message

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                response["status"] = message["status"]
                response["content_length"] = Headers(raw=message.get("headers", [])).get("content-length")
            await send(message)

        url = scope["path"]
        if scope.get("query_string"):
            url += "?" + scope["query_string"].decode("latin-1")

        try:
            await self.app(scope, receive_wrapper, send_wrapper)
        except Exception:
            logger.exception("unhandled error on %s %s", method, url)
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            body = mask_body(b"".join(chunks)) if method == "POST" else None
            logger.info(format_request_line(
                method, url, response["status"], response["content_length"], elapsed_ms, body
            ))

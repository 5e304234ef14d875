# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict

logger = logging.getLogger("header_warden.api.requests")

REQUEST_ID_HEADER = b"x-request-id"

SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key"}


def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of headers with credential values replaced."""
    return {
        key: "<redacted>" if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def describe_request(scope: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the fields of an HTTP scope worth logging for an analysis call."""
    headers = {
        name.decode("latin-1"): value.decode("latin-1")
        for name, value in scope.get("headers", [])
    }
    client = scope.get("client")
    return {
        "method": scope.get("method", "UNKNOWN"),
        "path": scope.get("path", ""),
        "client": client[0] if client else None,
        "content_length": headers.get("content-length"),
        "headers": redact_headers(headers),
    }


class RequestLoggingASGIMiddleware:
    """Tag each analysis request with an id and log its outcome."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = uuid.uuid4().hex
        info = describe_request(scope)
        logger.debug("Request %s: %s", request_id, info)

        status = None
        start = time.perf_counter()

        async def send_with_id(message):
            nonlocal status
            if message["type"] == "http.response.start":
                status = message.get("status")
                message["headers"] = [
                    *message.get("headers", []),
                    (REQUEST_ID_HEADER, request_id.encode("latin-1")),
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_id)
        except Exception:
            logger.exception("Request %s %s failed (id=%s)", info["method"], info["path"], request_id)
            raise

        logger.info(
            "%s %s -> %s in %.1fms (id=%s, bytes=%s)",
            info["method"],
            info["path"],
            status,
            (time.perf_counter() - start) * 1000,
            request_id,
            info["content_length"],
        )

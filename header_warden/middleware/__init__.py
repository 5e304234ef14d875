"""ASGI middleware for the analysis API."""

from .request_logging import RequestLoggingASGIMiddleware, describe_request, redact_headers

__all__ = ["RequestLoggingASGIMiddleware", "describe_request", "redact_headers"]

# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from . import __version__
from .analysis import analyze_text
from .config import get_config
from .middleware import RequestLoggingASGIMiddleware
from .report import ReportOptions, analysis_to_dict

logger = logging.getLogger("header_warden.api")


def _get_api_cfg() -> Dict[str, Any]:
    config = get_config()
    return {
        "enabled": config.api_enabled,
        "host": config.api_host,
        "port": config.api_port,
        "api_key": config.api_key,
        "allowed_ips": config.api_allowed_ips,
        "max_source_bytes": config.api_max_source_bytes,
        "namespace": config.namespace,
        "options": ReportOptions.from_config(config),
    }


def _is_allowed_ip(ip: Optional[str], allowed_ips) -> bool:
    if not ip:
        return False
    allowed = set(allowed_ips or ["127.0.0.1", "::1"])
    return ip in allowed


def _error(error: str, status_code: int, **extra: Any) -> JSONResponse:
    payload: Dict[str, Any] = {"error": error}
    payload.update(extra)
    return JSONResponse(payload, status_code=status_code)


async def require_access(request: Request, cfg: Dict[str, Any]) -> Optional[JSONResponse]:
    """
    Common gate for the analysis endpoints.

    - Reject everything when api.enabled is false
    - Enforce the client IP allow-list (api.allowed_ips)
    - Enforce the X-API-Key header if api.api_key is set
    """
    client = request.client
    client_ip = client.host if client else None

    if not cfg.get("enabled", True):
        logger.warning("Analysis API called but api.enabled=false")
        return _error("api_disabled", 503)

    if not _is_allowed_ip(client_ip, cfg.get("allowed_ips")):
        logger.warning("API access denied from IP %r", client_ip)
        return _error("forbidden", 403, reason="ip_not_allowed")

    api_key = cfg.get("api_key")
    if api_key:
        header_key = request.headers.get("x-api-key")
        if header_key != api_key:
            logger.warning("API access denied due to invalid API key")
            return _error("unauthorized", 401)

    return None


async def healthz(request: Request) -> Response:
    return JSONResponse({"status": "ok", "version": __version__})


async def analyze(request: Request) -> Response:
    cfg = _get_api_cfg()
    if (resp := await require_access(request, cfg)) is not None:
        return resp

    try:
        body = await request.json()
    except ValueError:
        return _error("invalid_json", 400)
    if not isinstance(body, dict):
        return _error("invalid_request", 400, detail="request body must be a JSON object")

    source = body.get("source")
    if not isinstance(source, str):
        return _error("invalid_request", 400, detail="'source' must be a string")
    try:
        encoded = source.encode("utf-8")
    except UnicodeEncodeError:
        return _error("invalid_request", 400, detail="'source' is not valid UTF-8 text")
    if len(encoded) > cfg["max_source_bytes"]:
        return _error("source_too_large", 413, limit=cfg["max_source_bytes"])

    disable = body.get("disable") or []
    if not isinstance(disable, list):
        return _error("invalid_request", 400, detail="'disable' must be a list")
    try:
        options = cfg["options"].without(*disable)
    except (TypeError, ValueError) as exc:
        return _error("invalid_request", 400, detail=str(exc))

    path = str(body.get("path") or "<source>")
    analysis = analyze_text(source, namespace=cfg["namespace"])
    logger.debug("Analyzed %s via API: %s issue(s)", path, analysis.issue_count)

    payload: Dict[str, Any] = {"path": path}
    payload.update(analysis_to_dict(analysis, options))
    return JSONResponse(payload)


routes = [
    Route("/healthz", healthz, methods=["GET"]),
    Route("/analyze", analyze, methods=["POST"]),
]

app = Starlette(debug=False, routes=routes)
app.add_middleware(RequestLoggingASGIMiddleware)

"""
Request echo API.

Handles ``/`` and every path not claimed by another router:

- GET: plain-text summary of the request line, headers, host and peer.
  Headers whose name contains ``hmac`` or ``cookie`` are left out of the
  body but still logged in full.
- other methods: the raw request (line, headers, body) sent back verbatim,
  without any redaction.
"""
from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

router = APIRouter(tags=["echo"])
_LOG = logging.getLogger(__name__)

REDACTED_MARKERS = ("hmac", "cookie")
GREETING = "Hello from httpdiag\n"


def canonical_header(name: str) -> str:
    """Return ``content-type`` style names as ``Content-Type``."""
    return "-".join(part.capitalize() for part in name.split("-"))


def is_redacted(name: str) -> bool:
    """True for header names that must never be echoed back."""
    lowered = name.lower()
    return any(marker in lowered for marker in REDACTED_MARKERS)


def _grouped_headers(request: Request) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for raw_name, raw_value in request.headers.raw:
        name = canonical_header(raw_name.decode("latin-1"))
        grouped.setdefault(name, []).append(raw_value.decode("latin-1"))
    return grouped


def _target(request: Request) -> str:
    """Return the request target as sent, without percent-decoding."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _proto(request: Request) -> str:
    return f"HTTP/{request.scope.get('http_version', '1.1')}"


def _remote(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


def render_summary(request: Request, headers: dict[str, list[str]]) -> str:
    """Build the plain-text body returned for GET requests."""
    lines = [f"{request.method} {_target(request)} {_proto(request)} \n"]
    for name, values in headers.items():
        # Host gets its own line below
        if name == "Host" or is_redacted(name):
            continue
        lines.append(f"Header field {json.dumps(name)}, Value {json.dumps(values)}\n")
    lines.append(f"Host = {json.dumps(request.headers.get('host', ''))}\n")
    lines.append(f"RemoteAddr= {json.dumps(_remote(request))}\n")
    lines.append(f'\n\nFinding value of "Accept" {json.dumps(headers.get("Accept", []))}\n')
    lines.append(GREETING)
    return "".join(lines)


async def render_raw(request: Request) -> bytes:
    """Rebuild the request as it came over the wire."""
    head = [f"{request.method} {_target(request)} {_proto(request)}\r\n"]
    for raw_name, raw_value in request.headers.raw:
        head.append(f"{raw_name.decode('latin-1')}: {raw_value.decode('latin-1')}\r\n")
    head.append("\r\n")
    return "".join(head).encode("latin-1") + await request.body()


async def echo(request: Request):
    """Echo request metadata (GET) or the raw request (other methods)."""
    headers = _grouped_headers(request)
    _LOG.info(
        "%s %s %s %s %s %s",
        request.method,
        _target(request),
        _proto(request),
        request.headers.get("host", ""),
        _remote(request),
        headers,
    )
    if request.method == "GET":
        return PlainTextResponse(render_summary(request, headers))
    return Response(await render_raw(request), media_type="text/plain")


# plain Starlette route: no method matching, every verb reaches the handler
router.add_route("/{path:path}", echo, include_in_schema=False)

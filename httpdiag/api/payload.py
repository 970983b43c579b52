"""
Synthetic payload API.

    * /payload?latency=<int>&size=<N><KB|MB|GB>&format=<json|ndjson>

Responds with ``N`` records as one JSON array (``format=json``) or as
newline-delimited JSON objects streamed record by record
(``format=ndjson``). ``latency`` delays the response by that many seconds
without holding up other requests.

Every failure is answered with HTTP 500 and the error message as plain text,
except an NDJSON encoding failure after streaming started: the message is
appended to the partial body and the 200 status already sent stands.
"""
from __future__ import annotations

import asyncio
import re
from collections.abc import Iterator

from fastapi import APIRouter, Request
from fastapi.responses import Response, StreamingResponse
from starlette.concurrency import run_in_threadpool

from httpdiag.api.errors import log_error
from httpdiag.service.errors import ParameterParseError, SerializationError, SizeFormatError, UnsupportedFormatError
from httpdiag.service.records import Record, encode_record, encode_records, generate_records

router = APIRouter(tags=["payload"])

FORMATS = ("json", "ndjson")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _first(request: Request, name: str, default: str = "") -> str:
    values = request.query_params.getlist(name)
    return values[0] if values else default


def parse_latency(raw: str) -> int:
    """Parse the ``latency`` query value as whole seconds."""
    if not _INT_RE.fullmatch(raw):
        raise ParameterParseError(f"unable to convert latency value, error invalid integer {raw!r}")
    try:
        return int(raw)
    except ValueError as e:
        raise ParameterParseError(f"unable to convert latency value, error {e}") from e


def _ndjson_lines(records: list[Record]) -> Iterator[bytes]:
    for rec in records:
        try:
            line = encode_record(rec)
        except SerializationError as e:
            # headers are already out, so the message can only trail the body
            log_error(str(e))
            yield str(e).encode("utf-8")
            return
        yield line + b"\n"


async def payload(request: Request):
    """Generate a synthetic JSON or NDJSON body."""
    latency = parse_latency(_first(request, "latency")) if "latency" in request.query_params else 0
    size = _first(request, "size")
    fmt = _first(request, "format")

    if latency > 0:
        await asyncio.sleep(latency)

    if fmt not in FORMATS:
        raise UnsupportedFormatError(f"unsupported format {fmt}")

    try:
        records = await run_in_threadpool(generate_records, size)
    except SizeFormatError as e:
        raise SizeFormatError(f"unable to generate records, error {e}") from e

    if fmt == "json":
        body = await run_in_threadpool(encode_records, records)
        return Response(body, media_type="application/json")

    return StreamingResponse(_ndjson_lines(records), media_type="application/x-ndjson")


# plain Starlette route: no method matching, every verb reaches the handler
router.add_route("/payload", payload, include_in_schema=False)

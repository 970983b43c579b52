"""Synthetic record generation for the ``/payload`` endpoint.

``size`` strings look like ``10MB``: the unit suffix is validated but the
numeric prefix is used as a *record count*, not as a byte budget. Clients
already depend on that, so it stays.
"""
from __future__ import annotations

import base64
import re

from pydantic import BaseModel, ConfigDict, TypeAdapter, field_serializer
from pydantic_core import PydanticSerializationError

from httpdiag.service.errors import SerializationError, SizeFormatError

SIZE_UNITS = ("KB", "MB", "GB")
FILLER_SIZE = 1024
FILLER = bytes(i % 256 for i in range(FILLER_SIZE))

_COUNT_RE = re.compile(r"[+-]?[0-9]+")


class Record(BaseModel):
    """One generated record: position in the response and a filler buffer."""

    model_config = ConfigDict(frozen=True)

    id: int
    data: bytes

    @field_serializer("data", when_used="json")
    def _data_as_base64(self, value: bytes) -> str:
        return base64.b64encode(value).decode("ascii")


_RECORDS_ADAPTER = TypeAdapter(list[Record])


def parse_size(size: str) -> tuple[int, str]:
    """Split ``<N><KB|MB|GB>`` into ``(N, unit)``.

    Suffixes are matched case-sensitively in KB, MB, GB order. The count is
    the text before the first occurrence of the suffix.
    """
    unit = next((u for u in SIZE_UNITS if size.endswith(u)), None)
    if unit is None:
        raise SizeFormatError("unsupported size, should be KB, MB or GB units")

    prefix = size.split(unit, 1)[0]
    if not _COUNT_RE.fullmatch(prefix):
        raise SizeFormatError(f"invalid record count {prefix!r} in size {size!r}")
    try:
        return int(prefix), unit
    except ValueError as e:
        raise SizeFormatError(f"record count out of range in size, {e}") from e


def generate_records(size: str) -> list[Record]:
    """Return ``N`` records with ids ``0..N-1`` for a ``<N><unit>`` size string.

    A negative ``N`` yields no records. There is no upper bound: very large
    counts are the caller's problem.
    """
    count, _ = parse_size(size)
    return [Record(id=i, data=FILLER) for i in range(max(count, 0))]


def encode_records(records: list[Record]) -> bytes:
    """Encode all records as one compact JSON array."""
    try:
        return _RECORDS_ADAPTER.dump_json(records)
    except PydanticSerializationError as e:
        raise SerializationError(f"unable to marshal records, error {e}") from e


def encode_record(record: Record) -> bytes:
    """Encode a single record as a compact JSON object."""
    try:
        return record.model_dump_json().encode("utf-8")
    except PydanticSerializationError as e:
        raise SerializationError(f"unable to marshal records, error {e}") from e

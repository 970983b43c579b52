import base64
import json
import sys

import pytest

from httpdiag.service.errors import SizeFormatError
from httpdiag.service.records import (
    FILLER,
    FILLER_SIZE,
    Record,
    encode_record,
    encode_records,
    generate_records,
    parse_size,
)


@pytest.mark.parametrize(
    "size, expected",
    [
        ("3KB", (3, "KB")),
        ("10MB", (10, "MB")),
        ("2GB", (2, "GB")),
        ("0KB", (0, "KB")),
        ("+4MB", (4, "MB")),
        ("3KBKB", (3, "KB")),
    ],
)
def test_parse_size(size, expected):
    assert parse_size(size) == expected


@pytest.mark.parametrize("size", ["abc", "", "10", "10kb", "10Mb", "10TB", "10 B"])
def test_parse_size_rejects_unknown_units(size):
    with pytest.raises(SizeFormatError, match="unsupported size"):
        parse_size(size)


@pytest.mark.parametrize("size", ["KB", "xMB", "1.5GB", "1 KB", "1_000KB", "0x10MB"])
def test_parse_size_rejects_non_integer_counts(size):
    with pytest.raises(SizeFormatError, match="invalid record count"):
        parse_size(size)


@pytest.mark.parametrize("size, count", [("5KB", 5), ("5MB", 5), ("5GB", 5), ("1KB", 1), ("0GB", 0)])
def test_generate_records_count_ignores_unit(size, count):
    records = generate_records(size)
    assert [r.id for r in records] == list(range(count))


def test_generated_records_carry_filler():
    records = generate_records("2KB")
    assert len(FILLER) == FILLER_SIZE
    assert all(r.data == FILLER for r in records)


def test_negative_count_yields_no_records():
    assert generate_records("-3KB") == []


def test_encode_record_is_compact_json_with_base64_data():
    raw = encode_record(Record(id=7, data=b"\x00\x01abc"))
    assert raw == b'{"id":7,"data":"AAFhYmM="}'


def test_encode_records_array():
    body = json.loads(encode_records(generate_records("3KB")))
    assert [item["id"] for item in body] == [0, 1, 2]
    assert base64.b64decode(body[0]["data"]) == FILLER


def test_encode_empty_list():
    assert encode_records([]) == b"[]"


def test_parse_size_rejects_counts_too_long_to_convert():
    limit = getattr(sys, "get_int_max_str_digits", lambda: 0)()
    if not limit:
        pytest.skip("interpreter has no integer string conversion limit")
    with pytest.raises(SizeFormatError, match="record count out of range"):
        parse_size("9" * (limit + 700) + "KB")

import struct

import pytest

from resolvkit.logger_entry import (
    LOGGER_ENTRY_MAX_PAYLOAD,
    LoggerEntry,
    LoggerEntryV2,
)


def test_v1_round_trip():
    entry = LoggerEntry(pid=100, tid=101, sec=1700000000, nsec=5, msg=b"\x04tag\x00hi\x00")
    assert LoggerEntry.unpack(entry.pack()) == entry


def test_v1_layout_length_prefix():
    entry = LoggerEntry(pid=1, tid=2, sec=3, nsec=4, msg=b"hello")
    data = entry.pack()
    assert len(data) == LoggerEntry.HEADER_SIZE + len(entry.msg)
    assert int.from_bytes(data[:2], "little") == len(entry.msg)
    assert data[LoggerEntry.HEADER_SIZE:] == entry.msg


def test_v2_round_trip():
    entry = LoggerEntryV2(pid=7, tid=8, sec=9, nsec=10, euid=1000, msg=b"payload")
    assert LoggerEntryV2.unpack(entry.pack()) == entry


def test_v2_header_records_its_size():
    data = LoggerEntryV2(pid=0, tid=0, sec=0, nsec=0, euid=0).pack()
    assert int.from_bytes(data[2:4], "little") == 24
    assert len(data) == LoggerEntryV2.HEADER_SIZE


def test_v2_payload_follows_declared_header_size():
    body = b"abc"
    header = struct.pack("<HHiiiiI", len(body), 28, 1, 2, 3, 4, 5)
    data = header + b"\xff" * 4 + body
    assert LoggerEntryV2.unpack(data).msg == body


def test_v2_rejects_small_header_size():
    header = struct.pack("<HHiiiiI", 0, 20, 1, 2, 3, 4, 5)
    with pytest.raises(ValueError):
        LoggerEntryV2.unpack(header)


def test_truncated_header_raises():
    with pytest.raises(ValueError):
        LoggerEntry.unpack(b"\x00" * 10)


def test_truncated_payload_raises():
    data = LoggerEntry(pid=1, tid=1, sec=1, nsec=1, msg=b"abcdef").pack()
    with pytest.raises(ValueError):
        LoggerEntry.unpack(data[:-2])


def test_max_payload_accepted_and_larger_rejected():
    ok = LoggerEntry(pid=1, tid=1, sec=1, nsec=1, msg=b"a" * LOGGER_ENTRY_MAX_PAYLOAD)
    assert LoggerEntry.unpack(ok.pack()).msg == ok.msg
    too_big = LoggerEntry(pid=1, tid=1, sec=1, nsec=1, msg=b"a" * (LOGGER_ENTRY_MAX_PAYLOAD + 1))
    with pytest.raises(ValueError):
        too_big.pack()
"""Binary records read from and written to the kernel log devices."""

from __future__ import annotations

import struct
from dataclasses import dataclass

LOGGER_LOG_MAIN = "log/main"
LOGGER_LOG_RADIO = "log/radio"
LOGGER_LOG_EVENTS = "log/events"
LOGGER_LOG_SYSTEM = "log/system"

LOGGER_ENTRY_MAX_PAYLOAD = 4076
LOGGER_ENTRY_MAX_LEN = 5 * 1024

_LOGGERIO = 0xAE


def _io(number: int) -> int:
    return (_LOGGERIO << 8) | number


LOGGER_GET_LOG_BUF_SIZE = _io(1)
LOGGER_GET_LOG_LEN = _io(2)
LOGGER_GET_NEXT_ENTRY_LEN = _io(3)
LOGGER_FLUSH_LOG = _io(4)
LOGGER_GET_VERSION = _io(5)
LOGGER_SET_VERSION = _io(6)

_V1 = struct.Struct("<HHiiii")
_V2 = struct.Struct("<HHiiiiI")


def _check_payload(msg: bytes) -> None:
    if len(msg) > LOGGER_ENTRY_MAX_PAYLOAD:
        raise ValueError(
            f"payload of {len(msg)} bytes exceeds {LOGGER_ENTRY_MAX_PAYLOAD}"
        )


def _payload(data: bytes, start: int, length: int) -> bytes:
    payload = bytes(data[start:start + length])
    if len(payload) != length:
        raise ValueError("log entry payload is truncated")
    return payload


@dataclass(frozen=True)
class LoggerEntry:
    """Version 1 log entry: a 20-byte header followed by the payload."""

    pid: int
    tid: int
    sec: int
    nsec: int
    msg: bytes = b""

    HEADER_SIZE = _V1.size

    def pack(self) -> bytes:
        """Encode the entry header and payload."""
        _check_payload(self.msg)
        header = _V1.pack(len(self.msg), 0, self.pid, self.tid, self.sec, self.nsec)
        return header + self.msg

    @classmethod
    def unpack(cls, data: bytes) -> "LoggerEntry":
        """Decode an entry from the start of ``data``."""
        if len(data) < _V1.size:
            raise ValueError("log entry header is truncated")
        length, _pad, pid, tid, sec, nsec = _V1.unpack_from(data)
        return cls(pid, tid, sec, nsec, _payload(data, _V1.size, length))


@dataclass(frozen=True)
class LoggerEntryV2:
    """Version 2 log entry: header carries its own size and the writer's euid."""

    pid: int
    tid: int
    sec: int
    nsec: int
    euid: int
    msg: bytes = b""

    HEADER_SIZE = _V2.size

    def pack(self) -> bytes:
        """Encode the entry header and payload."""
        _check_payload(self.msg)
        header = _V2.pack(
            len(self.msg), _V2.size, self.pid, self.tid, self.sec, self.nsec, self.euid
        )
        return header + self.msg

    @classmethod
    def unpack(cls, data: bytes) -> "LoggerEntryV2":
        """Decode an entry; the payload starts ``hdr_size`` bytes in."""
        if len(data) < _V2.size:
            raise ValueError("log entry header is truncated")
        length, hdr_size, pid, tid, sec, nsec, euid = _V2.unpack_from(data)
        if hdr_size < _V2.size:
            raise ValueError(f"log entry header size {hdr_size} is too small")
        return cls(pid, tid, sec, nsec, euid, _payload(data, hdr_size, length))
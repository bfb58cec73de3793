"""A small printf-style formatter and encoders for log and event records."""

from __future__ import annotations

import enum
import operator
import struct
from typing import Any, Iterator, List, TextIO, Tuple, Union


class FormatError(ValueError):
    """Raised for format strings the formatter does not support."""


class EventType(enum.IntEnum):
    """Event log payload types."""

    INT = 0
    LONG = 1
    STRING = 2
    LIST = 3


_DIGITS = "0123456789"

# Byte widths of the argument for each length modifier (LP64 sizes).
_ARG_BYTES = {"": 4, "hh": 1, "h": 2, "l": 8, "ll": 8, "z": 8, "t": 8}


class _Args:
    def __init__(self, args: Tuple[Any, ...]) -> None:
        self._it = iter(args)

    def next(self) -> Any:
        try:
            return next(self._it)
        except StopIteration:
            raise FormatError("not enough arguments for format string") from None


def _parse_decimal(fmt: str, pos: int) -> Tuple[int, int]:
    end = pos
    while end < len(fmt) and fmt[end] in _DIGITS:
        end += 1
    return (int(fmt[pos:end]) if end > pos else 0), end


def _integer_text(value: int, conversion: str) -> str:
    signed = conversion in "dio"
    base = {"x": "x", "X": "X", "o": "o"}.get(conversion, "d")
    if signed and value < 0:
        return "-" + format(-value, base)
    return format(value, base)


def _string_arg(arg: Any) -> str:
    if arg is None:
        return "(null)"
    if isinstance(arg, (bytes, bytearray)):
        arg = bytes(arg).decode("latin-1")
    if not isinstance(arg, str):
        raise TypeError(f"%s expects a string, got {type(arg).__name__}")
    return arg.split("\0", 1)[0]


def _char_arg(arg: Any) -> str:
    code = ord(arg) if isinstance(arg, str) and len(arg) == 1 else operator.index(arg)
    code &= 0xFF
    return chr(code) if code else ""


def _render(fmt: str, args: Tuple[Any, ...]) -> Iterator[str]:
    fmt = fmt.split("\0", 1)[0]
    values = _Args(args)

    def at(i: int) -> str:
        return fmt[i] if i < len(fmt) else ""

    pos = 0
    while True:
        pct = fmt.find("%", pos)
        if pct < 0:
            if pos < len(fmt):
                yield fmt[pos:]
            return
        if pct > pos:
            yield fmt[pos:pct]

        i = pct + 1
        pad_zero = pad_left = False
        sign = ""
        width = prec = -1

        while True:
            c = at(i)
            i += 1
            if c == "":
                yield "%"
                return
            if c == "0":
                pad_zero = True
            elif c == "-":
                pad_left = True
            elif c in (" ", "+"):
                sign = c
            else:
                break

        if c in _DIGITS:
            width, i = _parse_decimal(fmt, i - 1)
            c = at(i)
            i += 1

        if c == ".":
            prec, i = _parse_decimal(fmt, i)
            c = at(i)
            i += 1

        modifier = ""
        if c in ("h", "l"):
            modifier = c
            if at(i) == c:
                modifier += c
                i += 1
            c = at(i)
            i += 1
        elif c in ("z", "t"):
            modifier = c
            c = at(i)
            i += 1

        if c == "s":
            text = _string_arg(values.next())
        elif c == "c":
            text = _char_arg(values.next())
        elif c == "p":
            address = operator.index(values.next()) & ((1 << 64) - 1)
            text = "0x" + format(address, "x")
        elif c and c in "dioxX":
            bits = 8 * _ARG_BYTES[modifier]
            value = operator.index(values.next()) & ((1 << bits) - 1)
            if c in "dio" and value >> (bits - 1):
                value -= 1 << bits
            text = _integer_text(value, c)
        elif c == "%":
            text = "%"
        else:
            raise FormatError("conversion specifier unsupported")

        if sign or prec != -1:
            raise FormatError("sign/precision unsupported")

        padding = ""
        if len(text) < width:
            padding = ("0" if pad_zero else " ") * (width - len(text))
        if padding and not pad_left:
            yield padding
        if text:
            yield text
        if padding and pad_left:
            yield padding

        pos = i


def format_message(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt``.

    Supports %s %c %p %d %i %o %x %X and %%, the flags ``0`` and ``-``, a
    field width and the hh/h/l/ll/z/t length modifiers. Sign flags,
    precisions and other conversions raise FormatError.
    """
    return "".join(_render(fmt, args))


def format_to_buffer(size: int, fmt: str, *args: Any) -> str:
    """Format into a buffer of ``size`` slots, one kept for the terminator."""
    if size < 1:
        raise ValueError("buffer size must be at least 1")
    return format_message(fmt, *args)[: size - 1]


def write_formatted(stream: TextIO, fmt: str, *args: Any) -> int:
    """Write the formatted text to ``stream`` piece by piece; return its length."""
    total = 0
    for chunk in _render(fmt, args):
        stream.write(chunk)
        total += len(chunk)
    return total


def _as_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


def encode_log_record(priority: int, tag: Union[str, bytes], msg: Union[str, bytes]) -> bytes:
    """Encode a main-log record: priority byte, NUL-ended tag, NUL-ended message."""
    return (
        bytes([priority & 0xFF])
        + _as_bytes(tag).split(b"\0", 1)[0]
        + b"\0"
        + _as_bytes(msg).split(b"\0", 1)[0]
        + b"\0"
    )


def encode_event_int(tag: int, value: int) -> bytes:
    """Encode an integer event: 32-bit tag, type byte, 32-bit value."""
    try:
        return struct.pack("<iBi", tag, EventType.INT, value)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


__all__: List[str] = [
    "EventType",
    "FormatError",
    "encode_event_int",
    "encode_log_record",
    "format_message",
    "format_to_buffer",
    "write_formatted",
]
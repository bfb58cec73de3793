"""Find how long a raw DNS answer may be cached, from the TTLs it carries."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

HEADER_SIZE = 12
NS_MAXCDNAME = 255
NS_INT32SZ = 4
TYPE_SOA = 6

_CMPRSFLGS = 0xC0
_TYPE_ELT = 0x40
_LABELTYPE_BITSTRING = 0x41

_SECTION_QD = 0
_SECTION_NS = 2

_COUNTS = struct.Struct(">4H")
_RR_FIXED = struct.Struct(">HHIH")


@dataclass(frozen=True)
class _Record:
    rtype: int
    ttl: int
    rdata: bytes


def _label_length(data: bytes, pos: int) -> int:
    """Length of the extended label whose type byte is at ``pos``, or -1."""
    kind = data[pos]
    if kind & _CMPRSFLGS == _CMPRSFLGS:
        return -1
    if kind & _CMPRSFLGS == _TYPE_ELT:
        if kind != _LABELTYPE_BITSTRING or pos + 1 >= len(data):
            return -1
        bitlen = data[pos + 1] or 256
        return (bitlen + 7) // 8 + 1
    return kind


def skip_name(data: bytes, offset: int = 0) -> int:
    """Return the number of bytes taken by the (possibly compressed) name at ``offset``.

    Raises ValueError when the name uses a reserved label type or runs past
    the end of ``data``.
    """
    data = bytes(data)
    end = len(data)
    if not 0 <= offset <= end:
        raise ValueError(f"offset {offset} outside the data")
    pos = offset
    while pos < end:
        n = data[pos]
        pos += 1
        if n == 0:
            break
        kind = n & _CMPRSFLGS
        if kind == 0:
            pos += n
            continue
        if kind == _TYPE_ELT:
            length = _label_length(data, pos - 1)
            if length < 0:
                raise ValueError("unsupported extended label type")
            pos += length
            continue
        if kind == _CMPRSFLGS:
            pos += 1
            break
        raise ValueError("reserved label type")
    if pos > end:
        raise ValueError("name runs past the end of the data")
    return pos - offset


def _check_name_expands(data: bytes, offset: int) -> None:
    """Raise ValueError unless the name at ``offset`` expands to a valid name."""
    size = len(data)
    pos = offset
    if not 0 <= pos < size:
        raise ValueError("name starts outside the message")
    out = 0
    checked = 0
    while True:
        n = data[pos]
        pos += 1
        if n == 0:
            return
        kind = n & _CMPRSFLGS
        if kind in (0, _TYPE_ELT):
            length = n if kind == 0 else _label_length(data, pos - 1)
            if length < 0:
                raise ValueError("unsupported extended label type")
            if out + length + 1 >= NS_MAXCDNAME or pos + length >= size:
                raise ValueError("name is too long or truncated")
            checked += length + 1
            out += length + 1
            pos += length
        elif kind == _CMPRSFLGS:
            if pos >= size:
                raise ValueError("truncated compression pointer")
            pos = ((n & 0x3F) << 8) | data[pos]
            if pos >= size:
                raise ValueError("compression pointer outside the message")
            checked += 2
            if checked >= size:
                raise ValueError("compression pointer loop")
        else:
            raise ValueError("reserved label type")


def _parse_message(data: bytes) -> List[List[int]]:
    """Return the start offsets of the records in each of the four sections."""
    size = len(data)
    if size < HEADER_SIZE:
        raise ValueError("message shorter than its header")
    counts = _COUNTS.unpack_from(data, 4)
    pos = HEADER_SIZE
    sections: List[List[int]] = []
    for section, count in enumerate(counts):
        starts = []
        for _ in range(count):
            starts.append(pos)
            pos += skip_name(data, pos) + 4
            if section != _SECTION_QD:
                if pos + NS_INT32SZ + 2 > size:
                    raise ValueError("record header truncated")
                rdlength = int.from_bytes(data[pos + 4:pos + 6], "big")
                pos += 6 + rdlength
        if pos > size:
            raise ValueError("section runs past the end of the message")
        sections.append(starts)
    if pos != size:
        raise ValueError("trailing data after the last record")
    return sections


def _read_record(data: bytes, start: int) -> Optional[_Record]:
    try:
        _check_name_expands(data, start)
        pos = start + skip_name(data, start)
    except ValueError:
        return None
    if pos + _RR_FIXED.size > len(data):
        return None
    rtype, _rclass, ttl, rdlength = _RR_FIXED.unpack_from(data, pos)
    pos += _RR_FIXED.size
    if pos + rdlength > len(data):
        return None
    return _Record(rtype, ttl, data[pos:pos + rdlength])


def _soa_ttl(record: _Record) -> Optional[int]:
    """Smaller of the SOA record's TTL and its MINIMUM field, or None if malformed."""
    rdata = record.rdata
    try:
        pos = skip_name(rdata, 0)
        pos += skip_name(rdata, pos)
    except ValueError:
        return None
    if len(rdata) - pos != 5 * NS_INT32SZ:
        return None
    minimum = int.from_bytes(rdata[pos + 4 * NS_INT32SZ:], "big")
    return min(record.ttl, minimum)


def _negative_ttl(data: bytes, starts: Sequence[int]) -> int:
    result = 0
    for n, start in enumerate(starts):
        record = _read_record(data, start)
        if record is None or record.rtype != TYPE_SOA:
            continue
        ttl = _soa_ttl(record)
        if ttl is None:
            continue
        if n == 0 or ttl < result:
            result = ttl
    return result


def _parse(answer: bytes) -> Tuple[bytes, Optional[List[List[int]]]]:
    data = bytes(answer)
    try:
        return data, _parse_message(data)
    except ValueError:
        return data, None


def negative_ttl(answer: bytes) -> int:
    """TTL for a negative answer: the least of the SOA TTLs and MINIMUM fields.

    Returns 0 when the message cannot be parsed or holds no usable SOA record.
    """
    data, sections = _parse(answer)
    if sections is None:
        return 0
    return _negative_ttl(data, sections[_SECTION_NS])


def answer_ttl(answer: bytes) -> int:
    """Seconds an answer may be cached; 0 means it must not be cached.

    The smallest TTL among the answer records is used; an answer with no
    answer records falls back to ``negative_ttl``.
    """
    data, sections = _parse(answer)
    if sections is None:
        return 0
    answers = sections[1]
    if not answers:
        return _negative_ttl(data, sections[_SECTION_NS])
    result = 0
    for n, start in enumerate(answers):
        record = _read_record(data, start)
        if record is None:
            continue
        if n == 0 or record.ttl < result:
            result = record.ttl
    return result
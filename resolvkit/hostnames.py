"""Checks that domain names use an acceptable character set."""

from __future__ import annotations

from typing import List, Union

_PERIOD = 0x2E
_HYPHEN = 0x2D
_BACKSLASH = 0x5C
_ASTERISK = 0x2A
_UNDERSCORE = 0x5F

Name = Union[str, bytes]


def _codes(dn: Name) -> List[int]:
    codes = list(dn) if isinstance(dn, (bytes, bytearray)) else [ord(c) for c in dn]
    if 0 in codes:
        codes = codes[: codes.index(0)]
    return codes


def _alpha(c: int) -> bool:
    return 0x41 <= c <= 0x5A or 0x61 <= c <= 0x7A


def _digit(c: int) -> bool:
    return 0x30 <= c <= 0x39


def _border(c: int) -> bool:
    return _alpha(c) or _digit(c)


def _middle(c: int) -> bool:
    return _border(c) or c in (_HYPHEN, _UNDERSCORE)


def _domainchar(c: int) -> bool:
    return 0x20 < c < 0x7F


def _hnok(codes: List[int]) -> bool:
    prev = _PERIOD
    for ch, nxt in zip(codes, codes[1:] + [0]):
        if ch == _PERIOD:
            pass
        elif prev == _PERIOD or nxt == _PERIOD or nxt == 0:
            if not _border(ch):
                return False
        elif not _middle(ch):
            return False
        prev = ch
    return True


def is_hostname(dn: Name) -> bool:
    """Labels start and end with a letter or digit; hyphens and underscores inside."""
    return _hnok(_codes(dn))


def is_owner_name(dn: Name) -> bool:
    """Like a host name, but the first label may be ``*``."""
    codes = _codes(dn)
    if codes and codes[0] == _ASTERISK:
        if len(codes) == 1:
            return True
        if codes[1] == _PERIOD:
            return _hnok(codes[2:])
    return _hnok(codes)


def is_mail_name(dn: Name) -> bool:
    """Any printable first label (backslash escapes a period), then a host name."""
    codes = _codes(dn)
    if not codes:
        return True
    escaped = False
    for i, ch in enumerate(codes):
        if not _domainchar(ch):
            return False
        if not escaped and ch == _PERIOD:
            return _hnok(codes[i + 1:])
        if escaped:
            escaped = False
        elif ch == _BACKSLASH:
            escaped = True
    return False


def is_domain_name(dn: Name) -> bool:
    """Every character is printable and not a space."""
    return all(_domainchar(c) for c in _codes(dn))
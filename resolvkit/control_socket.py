"""Look up the descriptor of an init-managed control socket."""

from __future__ import annotations

import enum
import os
from typing import Mapping, Optional

SOCKET_ENV_PREFIX = "ANDROID_SOCKET_"
SOCKET_DIR = "/dev/socket"

# The variable name lives in a 64-byte buffer holding the prefix and a NUL.
_KEY_BUFFER = 64
MAX_NAME_LENGTH = _KEY_BUFFER - (len(SOCKET_ENV_PREFIX) + 1)

_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1


class SocketNamespace(enum.IntEnum):
    """Namespaces a local socket name may live in."""

    ABSTRACT = 0
    RESERVED = 1
    FILESYSTEM = 2


def _parse_long(text: str) -> int:
    """Parse a leading decimal integer the way strtol does in base 10."""
    rest = text.lstrip(" \t\n\v\f\r")
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    digits = ""
    for ch in rest:
        if ch not in "0123456789":
            break
        digits += ch
    if not digits:
        return 0
    value = -int(digits) if negative else int(digits)
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise ValueError(f"control socket value out of range: {text!r}")
    return value


def get_control_socket(name: str, environ: Optional[Mapping[str, str]] = None) -> int:
    """Return the descriptor number published for socket ``name``.

    Raises KeyError when no descriptor is published for the name and
    ValueError when the published number is out of range.
    """
    env = os.environ if environ is None else environ
    key = SOCKET_ENV_PREFIX + name[:MAX_NAME_LENGTH]
    value = env.get(key)
    if value is None:
        raise KeyError(key)
    return _parse_long(value)
"""Messages for resolver host error codes."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

H_ERRLIST = (
    "Resolver Error 0 (no error)",
    "Unknown host",
    "Host name lookup failure",
    "Unknown server error",
    "No address associated with name",
)


def hstrerror(err: int) -> str:
    """Return the message for a host error code."""
    if err < 0:
        return "Resolver internal error"
    if err < len(H_ERRLIST):
        return H_ERRLIST[err]
    return "Unknown resolver error"


def herror(message: Optional[str], err: int, stream: Optional[TextIO] = None) -> None:
    """Write ``message: <error text>`` and a newline to ``stream`` (stderr)."""
    out = sys.stderr if stream is None else stream
    prefix = f"{message}: " if message else ""
    out.write(f"{prefix}{hstrerror(err)}\n")
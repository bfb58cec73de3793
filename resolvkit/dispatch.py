"""Name-service switch dispatching over an ordered list of sources."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple


class NSStatus(enum.IntFlag):
    """Lookup outcomes; FORCEALL is a private flag for source lists."""

    SUCCESS = 1 << 0
    UNAVAIL = 1 << 1
    NOTFOUND = 1 << 2
    TRYAGAIN = 1 << 3
    FORCEALL = 1 << 8


_STATUS_MASK = 0xFF

Callback = Callable[..., Tuple[int, Any]]


@dataclass(frozen=True)
class Source:
    """A source to consult and the statuses that end the search after it."""

    name: str
    flags: int = NSStatus.SUCCESS


@dataclass(frozen=True)
class DispatchEntry:
    """Binds a source name to the callback implementing it.

    The callback is called as ``callback(cb_data, *args)`` and returns a
    ``(status, value)`` pair.
    """

    source: str
    callback: Callback
    cb_data: Any = None


def find_method(
    source: str, table: Optional[Iterable[DispatchEntry]]
) -> Optional[DispatchEntry]:
    """Return the first entry whose source matches ``source`` ignoring case."""
    if table is None:
        return None
    wanted = source.casefold()
    return next((entry for entry in table if entry.source.casefold() == wanted), None)


def nsdispatch(
    table: Optional[Iterable[DispatchEntry]],
    database: Optional[str],
    method: Optional[str],
    defaults: Optional[Sequence[Source]],
    *args: Any,
) -> Tuple[NSStatus, Any]:
    """Consult each source in ``defaults`` in turn.

    Returns the final status and the value produced by the last callback
    that ran (``None`` if none ran).
    """
    if database is None or method is None or defaults is None:
        return NSStatus.UNAVAIL, None

    entries = list(table) if table is not None else None
    force_all = bool(defaults and defaults[0].flags & NSStatus.FORCEALL)
    result = 0
    value: Any = None

    for src in defaults:
        entry = find_method(src.name, entries)
        result = 0
        if entry is None:
            continue
        result, value = entry.callback(entry.cb_data, *args)
        if force_all:
            continue
        if result & src.flags:
            break

    result &= _STATUS_MASK
    return (NSStatus(result) if result else NSStatus.NOTFOUND), value
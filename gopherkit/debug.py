"""Process-wide debug switch and printf-style diagnostics on standard error."""

from __future__ import annotations

import sys

_enabled = False


def set_debug(enabled: bool) -> bool:
    """Turn debugging on or off; return the previous setting."""
    global _enabled
    previous = _enabled
    _enabled = bool(enabled)
    return previous


def is_debug() -> bool:
    """Whether debugging is switched on."""
    return _enabled


def debugf(fmt: str, *args: object) -> None:
    """Write ``fmt % args`` to standard error."""
    sys.stderr.write(fmt % args)
    sys.stderr.flush()
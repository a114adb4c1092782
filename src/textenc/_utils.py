"""Internal shared utilities for textenc."""

from __future__ import annotations

#: Number of leading bytes inspected for ISO-2022-JP escape sequences.
DEFAULT_ESCAPE_WINDOW: int = 8192

#: Number of leading characters scanned for an encoding declaration.
DEFAULT_DECLARATION_SCAN_LENGTH: int = 4096

#: Quiet period, in seconds, before a coalesced compatibility scan runs.
DEFAULT_SCAN_DELAY: float = 0.4


def _validate_positive_int(value: int, name: str) -> None:
    """Raise ValueError if *value* is not a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{name} must be a positive integer"
        raise ValueError(msg)


def _validate_delay(delay: float) -> None:
    """Raise ValueError if *delay* is not a non-negative number."""
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        msg = "delay must be a non-negative number of seconds"
        raise ValueError(msg)

"""
Pre-flight expiry gate.

Runs before any gateway is contacted.  Without a configured expiry date
the gate is open.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

__all__ = ["ToolExpiredError", "check_expiry"]


class ToolExpiredError(Exception):
    """Raised when the configured expiry date has passed."""


def check_expiry(expires: date | None, now: datetime | None = None) -> None:
    """Raise ToolExpiredError if *now* (UTC) is after midnight of *expires*."""
    if expires is None:
        return
    now = now or datetime.now(timezone.utc)
    cutoff = datetime(expires.year, expires.month, expires.day, tzinfo=timezone.utc)
    if now > cutoff:
        raise ToolExpiredError(
            f"This tool expired on {expires.isoformat()}, please contact OpenFaaS Ltd"
        )

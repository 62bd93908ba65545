"""
Utility helpers shared across repositories/services.
"""

from __future__ import annotations

from datetime import datetime, timezone
import secrets
import time

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 only encodes non-negative integers")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Timestamp (ms) plus a random fragment, both base-36.
    Uniqueness is probabilistic; collections re-roll on collision.
    """
    return to_base36(int(time.time() * 1000)) + to_base36(secrets.randbits(52))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize aware datetimes to UTC and treat naive ones as UTC."""
    return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)

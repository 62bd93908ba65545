"""Domain helpers for user bans."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ummah.core.utils import as_utc, utcnow
from ummah.db.models import UserBan

PERMANENT = "permanent"
TEMPORARY = "temporary"


def ban_in_force(ban: UserBan, now: Optional[datetime] = None) -> bool:
    """
    A ban counts when it is active and either permanent or not yet expired.
    Expired temporary bans keep is_active=True on disk; they simply stop counting.
    """
    if not ban.is_active:
        return False
    if ban.ban_type == PERMANENT:
        return True
    if ban.expires_at is None:
        return False
    return as_utc(ban.expires_at) > as_utc(now or utcnow())


def any_ban_in_force(bans: Iterable[UserBan], now: Optional[datetime] = None) -> bool:
    moment = now or utcnow()
    return any(ban_in_force(ban, moment) for ban in bans)

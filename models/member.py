"""
models/member.py
----------------
Domain models for members and points adjustments.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


@dataclass
class Member:
    """
    A registered member, created by the bot's registration command.

    Attributes:
        id: Database primary key.
        username: Internal login name, ``<prefix><telegram_id>``.
        telegram_id: The Telegram user ID the member registered with.
        first_name: Display name captured at registration.
        balance: Current points balance.
        excluded: True when the member may not earn or spend points.
        created_at: Timestamp when the record was created.
    """
    id: int
    username: str
    telegram_id: int
    first_name: Optional[str] = None
    balance: Decimal = Decimal("0")
    excluded: bool = False
    created_at: Optional[datetime] = None


class PointsOperation(str, Enum):
    ADD = "add"
    DEDUCT = "deduct"


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of an admin points adjustment, shown verbatim to the admin."""
    success: bool
    message: str

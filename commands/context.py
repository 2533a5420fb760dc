"""
commands/context.py
--------------------
The application context: collaborators built once at startup and
handed to whatever constructs the dispatcher.
"""

from dataclasses import dataclass, field

from commands.extensions import Extensions
from services.membership_service import MembershipService
from services.points_service import PointsService
from services.telegram_delivery import TelegramDelivery


@dataclass
class AppContext:
    delivery: TelegramDelivery
    membership: MembershipService
    points: PointsService
    extensions: Extensions = field(default_factory=Extensions)

"""
services/qrcode_service.py
---------------------------
Member card QR codes: building the image URL sent to members and
reading back the payload an admin scans from a card.
"""

import re
from typing import Optional
from urllib.parse import urlencode

from config import QR_CODE_API_URL, QR_CODE_SIZE

MEMBER_CARD_PREFIX = "tgvipmem_user_id:"

_PAYLOAD_RE = re.compile(r"^(?:" + re.escape(MEMBER_CARD_PREFIX) + r")?\s*(\d+)$")


def member_card_payload(user_id: int) -> str:
    """The text encoded in a member's QR code."""
    return f"{MEMBER_CARD_PREFIX}{user_id}"


def member_card_url(user_id: int, api_url: str = QR_CODE_API_URL, size: str = QR_CODE_SIZE) -> str:
    """
    URL of a QR code image for the member card.

    The image is rendered by the external QR code service when Telegram
    fetches the URL.
    """
    query = urlencode({"size": size, "data": member_card_payload(user_id)})
    return f"{api_url}?{query}"


def parse_member_payload(scanned: str) -> Optional[int]:
    """
    Extract the Telegram user ID from a scanned card.

    Accepts ``tgvipmem_user_id:<id>`` or a bare id. Returns None for
    anything else, including a zero id.
    """
    match = _PAYLOAD_RE.match((scanned or "").strip())
    if not match:
        return None
    user_id = int(match.group(1))
    return user_id if user_id > 0 else None

"""
handlers/member_handler.py
---------------------------
Built-in chat commands: welcome, registration, points balance,
member card, and a health check.
Every command replies through the delivery transport and never raises;
storage problems are logged and answered with a generic message.
"""

import html

from commands.registry import CommandMap
from services.membership_service import MembershipError, MembershipService
from services.qrcode_service import member_card_url
from services.telegram_delivery import TelegramDelivery
from utils.logger import get_logger

logger = get_logger(__name__)

START_TRIGGER = "/start"
REGISTER_TRIGGER = "註冊"
BALANCE_TRIGGER = "查詢積分"
MEMBER_CARD_TRIGGER = "會員卡"
TEST_TRIGGER = "/test"

MAIN_KEYBOARD = [[REGISTER_TRIGGER, BALANCE_TRIGGER], [MEMBER_CARD_TRIGGER]]

NOT_REGISTERED_TEXT = f"您尚未註冊，請先輸入「{REGISTER_TRIGGER}」。"
SYSTEM_ERROR_TEXT = "系統發生錯誤，請稍後再試或聯絡管理員。"


class MemberCommands:
    """The built-in command set, bound to its collaborators."""

    def __init__(self, delivery: TelegramDelivery, membership: MembershipService):
        self.delivery = delivery
        self.membership = membership

    def as_mapping(self) -> CommandMap:
        """Built-in triggers in the order they are listed to users."""
        return {
            START_TRIGGER: self.start,
            REGISTER_TRIGGER: self.register,
            BALANCE_TRIGGER: self.balance,
            MEMBER_CARD_TRIGGER: self.member_card,
            TEST_TRIGGER: self.test,
        }

    async def start(self, chat_id: int, user_id: int, display_name: str) -> None:
        """Welcome message with the main reply keyboard."""
        await self.delivery.send_text(
            chat_id,
            f"您好，{html.escape(display_name)}！歡迎使用會員整合機器人。\n\n"
            f"請輸入「{REGISTER_TRIGGER}」來綁定您的帳戶。",
            MAIN_KEYBOARD,
        )

    async def register(self, chat_id: int, user_id: int, display_name: str) -> None:
        """Create the member record for this Telegram user, once."""
        try:
            if self.membership.find_identity_by_external_id(user_id):
                await self.delivery.send_text(chat_id, "您已經註冊過了！")
                return
            member = self.membership.create_identity(user_id, display_name)
        except MembershipError as e:
            logger.error(f"Registration failed for Telegram user {user_id}: {e}")
            await self.delivery.send_text(chat_id, "註冊失敗，系統發生錯誤，請聯絡管理員。")
            return

        if member is None:
            # Lost a race with a concurrent registration for the same user.
            await self.delivery.send_text(chat_id, "您已經註冊過了！")
            return

        logger.info(f"User {user_id} ({display_name}) registered as {member.username}.")
        await self.delivery.send_text(chat_id, "✅ 註冊成功！您的帳號已建立。")

    async def balance(self, chat_id: int, user_id: int, display_name: str) -> None:
        """Report the member's points balance."""
        if not self.membership.points_enabled:
            await self.delivery.send_text(chat_id, "錯誤：積分系統未啟用。")
            return
        try:
            member = self.membership.find_identity_by_external_id(user_id)
            if member is None:
                await self.delivery.send_text(chat_id, NOT_REGISTERED_TEXT)
                return
            balance = self.membership.get_balance(member)
        except MembershipError as e:
            logger.error(f"Balance lookup failed for Telegram user {user_id}: {e}")
            await self.delivery.send_text(chat_id, SYSTEM_ERROR_TEXT)
            return

        if balance is None:
            await self.delivery.send_text(chat_id, "錯誤：積分系統未啟用。")
            return
        await self.delivery.send_text(chat_id, f"您的目前積分餘額為：{html.escape(str(balance))}")

    async def member_card(self, chat_id: int, user_id: int, display_name: str) -> None:
        """Send the member's QR code card."""
        try:
            member = self.membership.find_identity_by_external_id(user_id)
        except MembershipError as e:
            logger.error(f"Member card lookup failed for Telegram user {user_id}: {e}")
            await self.delivery.send_text(chat_id, SYSTEM_ERROR_TEXT)
            return
        if member is None:
            await self.delivery.send_text(chat_id, NOT_REGISTERED_TEXT)
            return

        await self.delivery.send_image(chat_id, member_card_url(user_id), "這是您的專屬會員卡 QR Code。")

    async def test(self, chat_id: int, user_id: int, display_name: str) -> None:
        await self.delivery.send_text(chat_id, "✅ 測試指令成功！外掛運作正常。")

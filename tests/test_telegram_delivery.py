"""Tests for the Telegram delivery transport."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

from telegram import ReplyKeyboardMarkup
from telegram.constants import ParseMode
from telegram.error import NetworkError

from services.telegram_delivery import TelegramDelivery


def make_bot():
    bot = MagicMock()
    bot.send_message = AsyncMock(return_value="message")
    bot.send_photo = AsyncMock(return_value="photo")
    return bot


def test_send_text_uses_html_without_keyboard():
    bot = make_bot()

    result = asyncio.run(TelegramDelivery(bot).send_text(10, "hi"))

    assert result == "message"
    bot.send_message.assert_awaited_once_with(
        chat_id=10, text="hi", parse_mode=ParseMode.HTML, reply_markup=None
    )


def test_send_text_builds_reply_keyboard():
    bot = make_bot()

    asyncio.run(TelegramDelivery(bot).send_text(10, "hi", [["註冊", "查詢積分"], ["會員卡"]]))

    markup = bot.send_message.await_args.kwargs["reply_markup"]
    assert isinstance(markup, ReplyKeyboardMarkup)
    assert [[button.text for button in row] for row in markup.keyboard] == [["註冊", "查詢積分"], ["會員卡"]]
    assert markup.resize_keyboard is True


def test_send_text_failure_returns_none():
    bot = make_bot()
    bot.send_message.side_effect = NetworkError("timed out")

    assert asyncio.run(TelegramDelivery(bot).send_text(10, "hi")) is None


def test_send_image():
    bot = make_bot()

    result = asyncio.run(TelegramDelivery(bot).send_image(10, "https://qr.example/x.png", "card"))

    assert result == "photo"
    bot.send_photo.assert_awaited_once_with(chat_id=10, photo="https://qr.example/x.png", caption="card")


def test_send_image_failure_returns_none():
    bot = make_bot()
    bot.send_photo.side_effect = NetworkError("timed out")

    assert asyncio.run(TelegramDelivery(bot).send_image(10, "https://qr.example/x.png")) is None


def test_missing_bot_is_a_logged_noop():
    delivery = TelegramDelivery(None)

    assert asyncio.run(delivery.send_text(10, "hi")) is None
    assert asyncio.run(delivery.send_image(10, "https://qr.example/x.png")) is None

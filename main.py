"""
main.py
-------
Entry point for the MemberBot Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Build the application context and load add-ons.
    - Configure the Telegram bot handlers and serve the webhook
      (or poll, when no public webhook URL is configured).
"""

import sys

from telegram import BotCommand
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
)

from config import (
    ADDONS,
    ADMIN_USER_IDS,
    TELEGRAM_BOT_TOKEN,
    WEBHOOK_LISTEN,
    WEBHOOK_PATH,
    WEBHOOK_PORT,
    WEBHOOK_SECRET_TOKEN,
    WEBHOOK_URL,
)
from commands.context import AppContext
from commands.dispatcher import CommandDispatcher
from commands.extensions import load_addons
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.admin_handler import make_adjust_command
from handlers.member_handler import MemberCommands
from handlers.webhook_handler import make_message_handler
from services.membership_service import MembershipService
from services.points_service import PointsService
from services.telegram_delivery import TelegramDelivery
from utils.logger import get_logger

logger = get_logger(__name__)


async def set_bot_commands(application: Application) -> None:
    """Register the slash commands menu in Telegram on startup."""
    commands = [
        BotCommand("start", "開始使用會員機器人"),
        BotCommand("test", "測試機器人是否正常運作"),
    ]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def build_context(application: Application) -> AppContext:
    """Create the collaborators shared by every dispatch."""
    membership = MembershipService()
    return AppContext(
        delivery=TelegramDelivery(application.bot),
        membership=membership,
        points=PointsService(membership),
    )


def build_dispatcher(context: AppContext) -> CommandDispatcher:
    builtin = MemberCommands(context.delivery, context.membership).as_mapping()
    return CommandDispatcher(builtin, context.extensions, context.delivery)


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Configuration check ────────────────────────────
    if not TELEGRAM_BOT_TOKEN:
        logger.critical("TELEGRAM_BOT_TOKEN is not set. Webhook processing halted.")
        sys.exit(1)

    # ── 2. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 3. Build the Telegram application and context ─────
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()
    context = build_context(app)

    # ── 4. Load add-ons, then lock the extension points ───
    loaded = load_addons(ADDONS, context)
    context.extensions.freeze()
    logger.info(f"Add-ons loaded: {', '.join(loaded) or 'none'}")

    # ── 5. Register handlers ──────────────────────────────
    app.add_handler(CommandHandler("adjust", make_adjust_command(context.points, ADMIN_USER_IDS)))
    app.add_handler(MessageHandler(filters.TEXT, make_message_handler(build_dispatcher(context))))

    # ── 6. Serve ──────────────────────────────────────────
    try:
        if WEBHOOK_URL:
            logger.info(f"MemberBot listening on {WEBHOOK_LISTEN}:{WEBHOOK_PORT}/{WEBHOOK_PATH}")
            if not WEBHOOK_SECRET_TOKEN:
                logger.warning("WEBHOOK_SECRET_TOKEN is empty; webhook requests are not verified.")
            app.run_webhook(
                listen=WEBHOOK_LISTEN,
                port=WEBHOOK_PORT,
                url_path=WEBHOOK_PATH,
                webhook_url=f"{WEBHOOK_URL}/{WEBHOOK_PATH}",
                secret_token=WEBHOOK_SECRET_TOKEN or None,
                allowed_updates=["message"],
                drop_pending_updates=True,
            )
        else:
            logger.info("WEBHOOK_URL not set, polling for updates. Press Ctrl+C to stop.")
            app.run_polling(drop_pending_updates=True, allowed_updates=["message"])
    finally:
        # ── 7. Cleanup on shutdown ────────────────────────
        close_pool()
        logger.info("MemberBot stopped.")


if __name__ == "__main__":
    main()

"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _int_list(raw: str) -> list[int]:
    """Parse a comma-separated list of integer ids."""
    return [int(part.strip()) for part in raw.split(",") if part.strip()]


# ── Telegram ──────────────────────────────────────────────
TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")

# ── Webhook ───────────────────────────────────────────────
# Leave WEBHOOK_URL empty to run with long polling (local development).
WEBHOOK_URL: str = os.getenv("WEBHOOK_URL", "").rstrip("/")
WEBHOOK_PATH: str = os.getenv("WEBHOOK_PATH", "telegram/webhook").strip("/")
WEBHOOK_LISTEN: str = os.getenv("WEBHOOK_LISTEN", "0.0.0.0")
WEBHOOK_PORT: int = int(os.getenv("WEBHOOK_PORT", "8443"))
WEBHOOK_SECRET_TOKEN: str = os.getenv("WEBHOOK_SECRET_TOKEN", "")

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "member_bot")
DB_USER: str = os.getenv("DB_USER", "memberbot_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Membership & Points ───────────────────────────────────
MEMBER_USERNAME_PREFIX: str = os.getenv("MEMBER_USERNAME_PREFIX", "tgvipmem_")
POINTS_ENABLED: bool = os.getenv("POINTS_ENABLED", "true").lower() == "true"

# ── Member card (QR code service) ─────────────────────────
QR_CODE_API_URL: str = os.getenv(
    "QR_CODE_API_URL", "https://api.qrserver.com/v1/create-qr-code/"
)
QR_CODE_SIZE: str = os.getenv("QR_CODE_SIZE", "250x250")

# ── Security ──────────────────────────────────────────────
ADMIN_USER_IDS: list[int] = _int_list(os.getenv("ADMIN_USER_IDS", ""))

# ── Add-ons ───────────────────────────────────────────────
ADDONS: list[str] = [
    name.strip() for name in os.getenv("ADDONS", "addons.ping").split(",") if name.strip()
]

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

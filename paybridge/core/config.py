import os
from typing import List
from dotenv import load_dotenv

# grab env vars from .env file
load_dotenv()


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class Settings:
    # app settings
    APP_ENV: str = os.getenv("APP_ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS stuff
    _origins_raw: str = os.getenv("ALLOWED_ORIGINS", "*")
    ALLOWED_ORIGINS: List[str] = _split_csv(_origins_raw) if _origins_raw else ["*"]

    # PayMongo webhook signing; empty secret means every delivery is rejected
    PAYMONGO_WEBHOOK_SECRET: str = os.getenv("PAYMONGO_WEBHOOK_SECRET", "")
    # max age of a delivery timestamp in seconds, 0 disables the check
    WEBHOOK_TOLERANCE_SECONDS: int = int(os.getenv("WEBHOOK_TOLERANCE_SECONDS", "0"))

    # POS callback
    POS_PROVIDER: str = os.getenv("POS_PROVIDER", "mock")
    POS_CALLBACK_URL: str | None = os.getenv("POS_CALLBACK_URL")
    POS_TIMEOUT_SECONDS: int = int(os.getenv("POS_TIMEOUT_SECONDS", "5"))
    POS_MAX_ATTEMPTS: int = int(os.getenv("POS_MAX_ATTEMPTS", "3"))
    POS_TERMINAL_STATUSES: List[str] = _split_csv(os.getenv("POS_TERMINAL_STATUSES", "paid,failed,cancelled"))

    @property
    def webhook_secret_configured(self) -> bool:
        return bool((self.PAYMONGO_WEBHOOK_SECRET or "").strip())


settings = Settings()

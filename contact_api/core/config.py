import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.app_title = os.getenv("APP_TITLE", "Contact API")
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/app.db")).resolve()
        self.bcrypt_rounds = self._get_int("BCRYPT_ROUNDS", default=10)
        if not 4 <= self.bcrypt_rounds <= 31:
            raise RuntimeError("Environment variable BCRYPT_ROUNDS must be between 4 and 31")
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

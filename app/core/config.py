import secrets
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"

_PROJECT_ROOT = Path(__file__).resolve().parents[2]

# sha256("admin")
_DEFAULT_ADMIN_HASH = "8c6976e5b5410415bde908bd4dee15dfb167a9c873fc4bb8a81f6f2ab448a918"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    STORE_URL: str = ""
    LEGACY_DATA_DIR: str = ""

    OPENAI_ENDPOINT: str = ""
    OPENAI_API_KEY: str = ""
    OPENAI_API_VERSION: str = "2024-10-21"
    OPENAI_CHAT_MODEL: str = "gpt-4o"

    ADMIN_PASSWORD_HASH: str = _DEFAULT_ADMIN_HASH
    SESSION_SECRET: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    SESSION_TTL_MINUTES: int = 8 * 60

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    def resolved_store_url(self) -> str:
        if self.STORE_URL:
            return self.STORE_URL
        return f"sqlite:///{_PROJECT_ROOT / 'chronos.db'}"

    def resolved_legacy_dir(self) -> Path:
        if self.LEGACY_DATA_DIR:
            return Path(self.LEGACY_DATA_DIR)
        return _PROJECT_ROOT / "legacy"

    def resolved_log_level(self) -> str:
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


settings = Settings()

from __future__ import annotations

import logging
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from daylog.cipher import NoteCipher
from daylog.constants import DEFAULT_NOTES_KEY
from daylog.datemath import today_local_string

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str = Field("sqlite+aiosqlite:///./daylog.db", alias="DATABASE_URL")
    backend_session_secret: str = Field(..., alias="BACKEND_SESSION_SECRET")
    notes_encryption_key: str = Field(DEFAULT_NOTES_KEY, alias="NOTES_ENCRYPTION_KEY")

    tracker_timezone: str | None = Field(None, alias="TRACKER_TIMEZONE")
    allowed_user_ids_raw: str = Field("", alias="ALLOWED_USER_IDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def allowed_user_ids(self) -> List[str]:
        return [item.strip() for item in self.allowed_user_ids_raw.split(",") if item.strip()]

    @property
    def uses_default_notes_key(self) -> bool:
        return self.notes_encryption_key == DEFAULT_NOTES_KEY


_settings: Settings | None = None
_note_cipher: NoteCipher | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def local_today() -> str:
    return today_local_string(get_settings().tracker_timezone)


def get_note_cipher() -> NoteCipher:
    global _note_cipher
    if _note_cipher is None:
        settings = get_settings()
        if settings.uses_default_notes_key:
            logger.warning("NOTES_ENCRYPTION_KEY is not set; notes are encrypted with the public default key.")
        _note_cipher = NoteCipher(settings.notes_encryption_key)
    return _note_cipher

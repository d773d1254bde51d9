from __future__ import annotations

import logging
from urllib.parse import urlparse, parse_qsl, urlencode

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

# Sync driver prefixes mapped onto the async drivers daylog ships with.
ASYNC_DRIVERS = {
    "sqlite://": "sqlite+aiosqlite://",
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "postgresql+psycopg2://": "postgresql+asyncpg://",
}
# libpq query options asyncpg does not accept.
LIBPQ_ONLY_OPTIONS = {"sslmode", "channel_binding"}


def _normalize_database_url(database_url: str) -> str:
    url = str(database_url or "").strip()
    for prefix, replacement in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            url = replacement + url[len(prefix) :]
            break
    if not url.startswith("postgresql+asyncpg://"):
        return url

    parsed = urlparse(url)
    options = parse_qsl(parsed.query, keep_blank_values=True)
    wants_ssl = any(key == "sslmode" and value != "disable" for key, value in options)
    kept = [(key, value) for key, value in options if key not in LIBPQ_ONLY_OPTIONS and key != "ssl"]
    if wants_ssl:
        kept.append(("ssl", "true"))
    return parsed._replace(query=urlencode(kept)).geturl()


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        db_url = _normalize_database_url(get_settings().database_url)
        if db_url.startswith("sqlite"):
            _engine = create_async_engine(db_url)
        else:
            _engine = create_async_engine(db_url, pool_pre_ping=True)
        logger.info("Database engine ready (%s)", db_url.split("://", 1)[0])
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None

from __future__ import annotations

from sqlalchemy import text as sql_text

from backend.db import get_engine
from daylog.constants import LOGS_TABLE


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {LOGS_TABLE} (
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    mood INTEGER,
                    worked_out INTEGER DEFAULT 0,
                    exercises_json TEXT,
                    drinks INTEGER DEFAULT 0,
                    notes TEXT,
                    created_at TEXT NOT NULL,
                    updated_at TEXT,
                    PRIMARY KEY (user_id, date)
                )
                """
            )
        )

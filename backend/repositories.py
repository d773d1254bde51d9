from __future__ import annotations

import json
import logging
from datetime import datetime

from sqlalchemy import text as sql_text

from backend.db import get_sessionmaker
from backend.settings import get_note_cipher
from daylog.constants import LOGS_TABLE

logger = logging.getLogger(__name__)

LOG_SELECT_COLUMNS = [
    "user_id",
    "date",
    "mood",
    "worked_out",
    "exercises_json",
    "drinks",
    "notes",
    "created_at",
    "updated_at",
]


def _load_exercises(raw) -> list:
    if not raw:
        return []
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Unreadable exercises payload: %r", raw)
        return []
    if not isinstance(payload, list):
        return []
    return [str(item) for item in payload]


def _row_to_log(row) -> dict:
    if not row:
        return {}
    cipher = get_note_cipher()
    payload = dict(row)
    notes = cipher.decrypt(payload.get("notes"))
    return {
        "date": str(payload["date"]),
        "mood": payload.get("mood"),
        "worked_out": bool(payload.get("worked_out")),
        "exercises": cipher.decrypt_array(_load_exercises(payload.get("exercises_json"))),
        "drinks": int(payload.get("drinks") or 0),
        "notes": notes or None,
        "created_at": payload.get("created_at"),
        "updated_at": payload.get("updated_at"),
    }


def _log_write_payload(user_id: str, day_iso: str, log: dict) -> dict:
    cipher = get_note_cipher()
    now = datetime.utcnow().isoformat()
    return {
        "user_id": user_id,
        "date": day_iso,
        "mood": log.get("mood"),
        "worked_out": int(bool(log.get("worked_out"))),
        "exercises_json": json.dumps(cipher.encrypt_array(log.get("exercises") or [])),
        "drinks": int(log.get("drinks") or 0),
        "notes": cipher.encrypt(log.get("notes")) or None,
        "created_at": now,
        "updated_at": now,
    }


async def fetch_logs(user_id: str, start_iso: str | None = None, end_iso: str | None = None) -> list[dict]:
    """Logs for ``user_id`` in ``[start_iso, end_iso)``, oldest first."""
    clauses = ["user_id = :user_id"]
    params = {"user_id": user_id}
    if start_iso:
        clauses.append("date >= :start_date")
        params["start_date"] = start_iso
    if end_iso:
        clauses.append("date < :end_date")
        params["end_date"] = end_iso
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {', '.join(LOG_SELECT_COLUMNS)}
                FROM {LOGS_TABLE}
                WHERE {' AND '.join(clauses)}
                ORDER BY date
                """
            ),
            params,
        )).mappings().all()
    return [_row_to_log(row) for row in rows]


async def get_log(user_id: str, day_iso: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(
                f"SELECT {', '.join(LOG_SELECT_COLUMNS)} FROM {LOGS_TABLE} "
                "WHERE user_id = :user_id AND date = :date"
            ),
            {"user_id": user_id, "date": day_iso},
        )).mappings().fetchone()
    return _row_to_log(row)


async def upsert_log(user_id: str, day_iso: str, log: dict) -> dict:
    payload = _log_write_payload(user_id, day_iso, log)
    columns = list(payload.keys())
    updates = ", ".join([f"{col}=EXCLUDED.{col}" for col in columns if col not in {"user_id", "date", "created_at"}])
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {LOGS_TABLE} ({', '.join(columns)})
                VALUES ({', '.join([f':{col}' for col in columns])})
                ON CONFLICT(user_id, date) DO UPDATE SET {updates}
                """
            ),
            payload,
        )
        await session.commit()
    return await get_log(user_id, day_iso)


async def delete_log(user_id: str, day_iso: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {LOGS_TABLE} WHERE user_id = :user_id AND date = :date"),
            {"user_id": user_id, "date": day_iso},
        )
        await session.commit()
    return bool(result.rowcount)

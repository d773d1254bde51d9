import asyncio

from sqlalchemy import text as sql_text

from backend import db, repositories
from backend.db_init import init_db
from daylog.constants import LOGS_TABLE


def test_normalize_database_url():
    assert db._normalize_database_url("sqlite:///./x.db") == "sqlite+aiosqlite:///./x.db"
    assert db._normalize_database_url("postgres://u:p@host/db?sslmode=require") == "postgresql+asyncpg://u:p@host/db?ssl=true"
    assert (
        db._normalize_database_url("postgresql://u:p@host/db?sslmode=require&channel_binding=require&application_name=daylog")
        == "postgresql+asyncpg://u:p@host/db?application_name=daylog&ssl=true"
    )
    assert db._normalize_database_url("postgresql://u@localhost/db?sslmode=disable") == "postgresql+asyncpg://u@localhost/db"
    assert db._normalize_database_url("sqlite+aiosqlite:///./x.db") == "sqlite+aiosqlite:///./x.db"
    assert db._normalize_database_url("") == ""


def test_sqlite_round_trip(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'logs.db'}")

    async def scenario():
        try:
            await init_db()
            saved = await repositories.upsert_log(
                "user-1",
                "2025-01-02",
                {"mood": 4, "worked_out": True, "exercises": ["Squats", "Row"], "drinks": 2, "notes": "legs day, felt strong"},
            )
            assert saved["notes"] == "legs day, felt strong"
            assert saved["exercises"] == ["Squats", "Row"]

            await repositories.upsert_log("user-1", "2025-01-02", {"mood": 2, "worked_out": False, "drinks": 0})
            await repositories.upsert_log("user-1", "2024-12-31", {"mood": 5, "drinks": 1})
            await repositories.upsert_log("user-2", "2025-01-02", {"mood": 1})

            session_factory = db.get_sessionmaker()
            async with session_factory() as session:
                await session.execute(
                    sql_text(
                        f"INSERT INTO {LOGS_TABLE} (user_id, date, mood, worked_out, exercises_json, drinks, notes, created_at) "
                        "VALUES ('user-1', '2025-01-03', 3, 0, '[\"Yoga\"]', 0, 'old note', '2024-01-01')"
                    )
                )
                await session.commit()
                raw = (await session.execute(sql_text(f"SELECT notes FROM {LOGS_TABLE} WHERE date = '2024-12-31'"))).fetchone()

            logs = await repositories.fetch_logs("user-1")
            assert [log["date"] for log in logs] == ["2024-12-31", "2025-01-02", "2025-01-03"]
            assert logs[1]["mood"] == 2
            assert logs[1]["exercises"] == []
            assert logs[1]["notes"] is None
            assert logs[2]["notes"] == "old note"
            assert logs[2]["exercises"] == ["Yoga"]
            assert raw[0] is None

            window = await repositories.fetch_logs("user-1", "2025-01-01", "2025-01-03")
            assert [log["date"] for log in window] == ["2025-01-02"]

            assert await repositories.delete_log("user-1", "2025-01-02") is True
            assert await repositories.delete_log("user-1", "2025-01-02") is False
            assert await repositories.get_log("user-1", "2025-01-02") == {}
            assert len(await repositories.fetch_logs("user-2")) == 1
        finally:
            await db.dispose_engine()

    asyncio.run(scenario())


def test_notes_are_stored_encrypted(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'enc.db'}")

    async def scenario():
        try:
            await init_db()
            await repositories.upsert_log("user-1", "2025-01-02", {"mood": 3, "exercises": ["Run"], "notes": "private"})
            async with db.get_sessionmaker()() as session:
                row = (await session.execute(sql_text(f"SELECT notes, exercises_json FROM {LOGS_TABLE}"))).fetchone()
            assert row[0] != "private"
            assert row[0].startswith("U2FsdGVkX1")
            assert "Run" not in row[1]
        finally:
            await db.dispose_engine()

    asyncio.run(scenario())

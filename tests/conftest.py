import pytest

from backend import db, settings


@pytest.fixture(autouse=True)
def backend_env(monkeypatch):
    monkeypatch.setenv("BACKEND_SESSION_SECRET", "test-secret")
    monkeypatch.setenv("NOTES_ENCRYPTION_KEY", "test-notes-key")
    monkeypatch.delenv("TRACKER_TIMEZONE", raising=False)
    monkeypatch.delenv("ALLOWED_USER_IDS", raising=False)
    monkeypatch.setattr(settings, "_settings", None)
    monkeypatch.setattr(settings, "_note_cipher", None)
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.setattr(db, "_session_factory", None)
    yield


@pytest.fixture
def make_log():
    def _make_log(day, mood=3, worked_out=False, drinks=0, exercises=None, notes=None):
        return {
            "date": day,
            "mood": mood,
            "worked_out": worked_out,
            "exercises": list(exercises or []),
            "drinks": drinks,
            "notes": notes,
        }

    return _make_log

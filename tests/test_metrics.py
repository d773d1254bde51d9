from daylog.grid import index_logs
from daylog.metrics import compute_streaks, logging_streak, sober_streak, workout_streak


def test_streaks_count_back_from_today(make_log):
    logs = index_logs(
        [
            make_log("2025-03-10", worked_out=True, drinks=2),
            make_log("2025-03-11", worked_out=True),
            make_log("2025-03-12", worked_out=True),
            make_log("2025-03-13", worked_out=False),
            make_log("2025-03-14", worked_out=True),
            make_log("2025-03-15", worked_out=True),
        ]
    )
    assert workout_streak(logs, "2025-03-15") == 2
    assert sober_streak(logs, "2025-03-15") == 5
    assert logging_streak(logs, "2025-03-15") == 6


def test_unlogged_today_keeps_yesterdays_streak(make_log):
    logs = index_logs([make_log("2025-02-28", worked_out=True), make_log("2025-03-01", worked_out=True)])
    assert workout_streak(logs, "2025-03-02") == 2
    assert logging_streak(logs, "2025-03-03") == 0


def test_compute_streaks_empty():
    assert compute_streaks({}, "2025-01-01") == {"workout": 0, "sober": 0, "logging": 0}

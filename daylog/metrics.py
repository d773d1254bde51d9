from __future__ import annotations

from daylog.datemath import add_days, today_local_string


def _streak(logs_by_date, today, predicate):
    today = today or today_local_string()
    current = today
    # An unlogged today does not break a streak that ran through yesterday.
    if current not in logs_by_date:
        current = add_days(current, -1)
    count = 0
    while True:
        log = logs_by_date.get(current)
        if log is None or not predicate(log):
            break
        count += 1
        current = add_days(current, -1)
    return count


def workout_streak(logs_by_date, today=None):
    return _streak(logs_by_date, today, lambda log: bool(log.get("worked_out")))


def sober_streak(logs_by_date, today=None):
    return _streak(logs_by_date, today, lambda log: int(log.get("drinks") or 0) == 0)


def logging_streak(logs_by_date, today=None):
    return _streak(logs_by_date, today, lambda log: True)


def compute_streaks(logs_by_date, today=None) -> dict:
    return {
        "workout": workout_streak(logs_by_date, today),
        "sober": sober_streak(logs_by_date, today),
        "logging": logging_streak(logs_by_date, today),
    }

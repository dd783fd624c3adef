import math
from datetime import timedelta

import pandas as pd

from app_utils.days import day_key, parse_day, previous_day, resolve_as_of, today


def compute_streak(habit, as_of=None) -> int:
    # consecutive completed days ending at as_of
    completions = habit["completions"]
    day = resolve_as_of(as_of)
    streak = 0
    while day_key(day) in completions:
        streak += 1
        day = previous_day(day)
    return streak


def compute_best_streak(habit) -> int:
    days = sorted(parse_day(k) for k in habit["completions"])
    best = current = 0
    prev = None
    for d in days:
        current = current + 1 if prev is not None and (d - prev).days == 1 else 1
        best = max(best, current)
        prev = d
    return best


def compute_total_completions(habit) -> int:
    return len(habit["completions"])


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def compute_success_rate(habit, as_of=None) -> int:
    """
    Percent of days completed since the first completion, as_of inclusive.
    The span starts at the first completion, not at habit creation.
    """
    completions = habit["completions"]
    if not completions:
        return 0

    as_of_day = resolve_as_of(as_of)
    earliest = min(parse_day(k) for k in completions)
    days_since_start = max(1, (as_of_day - earliest).days + 1)
    return _round_half_up(100 * len(completions) / days_since_start)


def completion_window(habit, window_days, as_of=None):
    end = resolve_as_of(as_of)
    completions = habit["completions"]
    out = []
    for i in range(window_days - 1, -1, -1):
        d = end - timedelta(days=i)
        out.append((d, day_key(d) in completions))
    return out


def window_frame(habit, window_days, as_of=None) -> pd.DataFrame:
    window = completion_window(habit, window_days, as_of)
    df = pd.DataFrame(window, columns=["day", "completed"])
    df["day"] = pd.to_datetime(df["day"])
    return df


def today_progress(habits, as_of=None) -> float:
    # share of habits done on as_of
    if not habits:
        return 0.0
    key = day_key(today() if as_of is None else as_of)
    done = sum(1 for h in habits if key in h["completions"])
    return done / len(habits)


def habit_summary(habit, as_of=None) -> dict:
    as_of_day = resolve_as_of(as_of)
    last7 = completion_window(habit, 7, as_of_day)
    completed_days = [parse_day(k) for k in habit["completions"]]
    past = [d for d in completed_days if d <= as_of_day]

    return {
        "streak": compute_streak(habit, as_of_day),
        "best_streak": compute_best_streak(habit),
        "total": compute_total_completions(habit),
        "success_rate": compute_success_rate(habit, as_of_day),
        "last_7_days": sum(1 for _, done in last7 if done),
        "last_completed": max(past) if past else None,
    }

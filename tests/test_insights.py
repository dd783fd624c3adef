"""Tests for streaks, totals, success rate and the windowed view."""

from datetime import date, timedelta

import pytest

from features.insights import (
    compute_best_streak,
    compute_streak,
    compute_success_rate,
    compute_total_completions,
    completion_window,
    habit_summary,
    today_progress,
    window_frame,
)

pytestmark = pytest.mark.unit

D = date(2024, 1, 1)


def habit_on(*days):
    return {"id": 1, "name": "Exercise", "completions": {d.isoformat(): True for d in days}}


def run(start, length):
    return [start + timedelta(days=i) for i in range(length)]


class TestStreak:
    def test_three_consecutive_days(self):
        habit = habit_on(*run(D, 3))
        assert compute_streak(habit, D + timedelta(days=2)) == 3
        assert compute_streak(habit, D + timedelta(days=3)) == 0

    @pytest.mark.parametrize("k", [1, 2, 7, 45])
    def test_streak_of_k_days(self, k):
        as_of = date(2024, 3, 10)
        habit = habit_on(*run(as_of - timedelta(days=k - 1), k), as_of - timedelta(days=k + 1))
        assert compute_streak(habit, as_of) == k

    def test_zero_when_as_of_missing(self):
        habit = habit_on(D - timedelta(days=1), D - timedelta(days=2), D + timedelta(days=1))
        assert compute_streak(habit, D) == 0

    def test_empty(self):
        assert compute_streak(habit_on(), D) == 0

    def test_accepts_legacy_day(self):
        assert compute_streak(habit_on(D), "Mon Jan 01 2024") == 1

    def test_defaults_to_today(self):
        today = date.today()
        habit = habit_on(today, today - timedelta(days=1))
        assert compute_streak(habit) == 2

    def test_across_year_boundary(self):
        habit = habit_on(*run(date(2023, 12, 30), 4))
        assert compute_streak(habit, date(2024, 1, 2)) == 4


class TestBestStreak:
    def test_longest_run(self):
        habit = habit_on(*run(D, 2), *run(D + timedelta(days=5), 4), D + timedelta(days=20))
        assert compute_best_streak(habit) == 4

    def test_empty(self):
        assert compute_best_streak(habit_on()) == 0


def test_total_completions():
    assert compute_total_completions(habit_on()) == 0
    assert compute_total_completions(habit_on(*run(D, 5))) == 5


class TestSuccessRate:
    def test_empty_is_zero(self):
        assert compute_success_rate(habit_on(), D) == 0

    def test_every_day_is_100(self):
        habit = habit_on(*run(D, 10))
        assert compute_success_rate(habit, D + timedelta(days=9)) == 100

    def test_single_completion_today(self):
        assert compute_success_rate(habit_on(D), D) == 100

    def test_span_since_first_completion(self):
        # 2 completions across a 4 day span
        habit = habit_on(D, D + timedelta(days=3))
        assert compute_success_rate(habit, D + timedelta(days=3)) == 50

    def test_rounds_half_up(self):
        # 1 of 8 days = 12.5%
        assert compute_success_rate(habit_on(D), D + timedelta(days=7)) == 13

    def test_earliest_by_date_not_string(self):
        habit = {"id": 1, "name": "x", "completions": {"2024-01-10": True, "2023-12-31": True}}
        # span 2023-12-31 .. 2024-01-10 is 11 days
        assert compute_success_rate(habit, date(2024, 1, 10)) == 18

    def test_future_completions_only(self):
        habit = habit_on(D + timedelta(days=5))
        assert compute_success_rate(habit, D) == 100


class TestWindow:
    def test_length_and_order(self):
        window = completion_window(habit_on(D), 30, D)
        assert len(window) == 30
        assert window[0][0] == D - timedelta(days=29)
        assert window[-1] == (D, True)
        assert [d for d, _ in window] == sorted(d for d, _ in window)

    def test_flags(self):
        habit = habit_on(D - timedelta(days=1))
        window = completion_window(habit, 3, D)
        assert [done for _, done in window] == [False, True, False]

    def test_restartable(self):
        habit = habit_on(*run(D, 3))
        assert completion_window(habit, 5, D) == completion_window(habit, 5, D)

    def test_zero_size(self):
        assert completion_window(habit_on(D), 0, D) == []

    def test_frame(self):
        df = window_frame(habit_on(D), 7, D)
        assert list(df.columns) == ["day", "completed"]
        assert len(df) == 7
        assert df["completed"].sum() == 1
        assert df["day"].iloc[-1].date() == D


def test_today_progress():
    habits = [habit_on(D), habit_on(), habit_on(D), habit_on(D - timedelta(days=1))]
    assert today_progress(habits, D) == 0.5
    assert today_progress([], D) == 0.0


def test_habit_summary():
    habit = habit_on(*run(D, 3), D + timedelta(days=10))
    summary = habit_summary(habit, D + timedelta(days=4))

    assert summary == {
        "streak": 0,
        "best_streak": 3,
        "total": 4,
        "success_rate": 80,
        "last_7_days": 3,
        "last_completed": D + timedelta(days=2),
    }

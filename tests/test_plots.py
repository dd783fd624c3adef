from datetime import date, timedelta

import matplotlib.pyplot as plt
import pytest

from app_utils.plots import calendar_strip, weekly_completions_chart
from features.insights import completion_window, window_frame

pytestmark = pytest.mark.unit

D = date(2024, 1, 31)
HABIT = {
    "id": 1,
    "name": "Exercise",
    "completions": {(D - timedelta(days=i)).isoformat(): True for i in range(0, 30, 3)},
}


def test_calendar_strip_has_thirty_cells():
    fig = calendar_strip(completion_window(HABIT, 30, D))
    ax = fig.axes[0]
    mesh = ax.collections[0]
    assert mesh.get_array().size == 30
    assert ax.get_title(loc="left") == "Last 30 Days"
    plt.close(fig)


def test_calendar_strip_partial_row():
    fig = calendar_strip(completion_window(HABIT, 12, D))
    assert fig.axes[0].collections[0].get_array().size == 20
    plt.close(fig)


def test_weekly_chart_counts_completions():
    fig = weekly_completions_chart(window_frame(HABIT, 30, D))
    assert fig is not None
    assert sum(fig.data[0].y) == 10


def test_weekly_chart_empty():
    assert weekly_completions_chart(window_frame(HABIT, 0, D)) is None

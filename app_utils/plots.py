import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import plotly.express as px
import seaborn as sns
from matplotlib.colors import ListedColormap

sns.set_theme(style="white")

STRIP_COLUMNS = 10
DONE_COLOR = "#22c55e"
MISSED_COLOR = "#e5e7eb"


def clean_axes(ax):
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_xlabel("")
    ax.set_ylabel("")


def calendar_strip(window, title="Last 30 Days"):
    """
    Grid of squares, oldest day top-left, newest bottom-right.
    window: [(date, completed), ...] as produced by completion_window().
    """
    n = len(window)
    rows = max(1, -(-n // STRIP_COLUMNS))
    cells = np.full(rows * STRIP_COLUMNS, np.nan)
    cells[:n] = [1.0 if done else 0.0 for _, done in window]
    grid = cells.reshape(rows, STRIP_COLUMNS)

    labels = np.full(rows * STRIP_COLUMNS, "", dtype=object)
    labels[:n] = [d.strftime("%d") for d, _ in window]

    fig, ax = plt.subplots(figsize=(6, 0.7 * rows + 0.6), dpi=150)
    sns.heatmap(
        grid,
        ax=ax,
        cmap=ListedColormap([MISSED_COLOR, DONE_COLOR]),
        vmin=0,
        vmax=1,
        cbar=False,
        linewidths=2,
        linecolor="white",
        square=True,
        annot=labels.reshape(rows, STRIP_COLUMNS),
        fmt="",
        annot_kws={"fontsize": 7, "color": "#374151"},
    )
    ax.set_title(title, fontsize=11, loc="left")
    clean_axes(ax)
    fig.tight_layout()
    return fig


def weekly_completions_chart(frame: pd.DataFrame, title="Completions per week"):
    if frame is None or frame.empty:
        return None

    use = frame.copy()
    use["week"] = use["day"].dt.to_period("W-SUN").dt.start_time
    weekly = use.groupby("week")["completed"].sum().reset_index()

    fig = px.bar(weekly, x="week", y="completed", title=title)
    fig.update_layout(
        height=280,
        margin=dict(l=10, r=10, t=40, b=10),
        title=dict(x=0.02),
        yaxis=dict(title="days", dtick=1),
        xaxis=dict(title=""),
    )
    fig.update_traces(marker_color=DONE_COLOR)
    return fig

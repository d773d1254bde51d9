import math

from daylog.constants import MOOD_COLORS
from daylog.grid import build_year_grid, index_logs
from daylog.periods import build_series
from daylog.visualizations import (
    discrete_colorscale,
    drinks_bar_chart,
    grid_heatmap,
    mood_trend_chart,
    year_grid_matrix,
)


def test_year_grid_matrix(make_log):
    logs = index_logs([make_log("2023-03-05", mood=4)])
    columns = build_year_grid(2023, logs, today="2023-12-31")
    z, text = year_grid_matrix(columns, "mood")
    assert z.shape == (31, 12)
    assert z[4, 2] == 4
    assert text[4][2] == "2023-03-05: Good"
    assert z[0, 0] == 0
    assert math.isnan(z[28, 1])
    assert math.isnan(z[30, 3])


def test_discrete_colorscale_covers_palette():
    scale = discrete_colorscale("mood")
    assert scale[0] == (0.0, MOOD_COLORS[0])
    assert scale[-1] == (1.0, MOOD_COLORS[5])
    assert len(scale) == 2 * len(MOOD_COLORS)


def test_grid_heatmap():
    fig = grid_heatmap(build_year_grid(2024, {}, today="2024-12-31"), "alcohol", title="Alcohol")
    heatmap = fig.data[0]
    assert heatmap.zmax == 5
    assert list(fig.layout.xaxis.ticktext)[0] == "Jan"


def test_period_charts(make_log):
    series = build_series([make_log("2025-01-05", mood=2, drinks=1), make_log("2025-01-06", mood=4)], "week")
    trend = mood_trend_chart(series)
    assert list(trend.data[0].y) == [2, 4]
    assert list(trend.data[0].x) == ["Sun, Jan 5", "Mon, Jan 6"]
    bars = drinks_bar_chart(series, "week")
    assert list(bars.data[0].y) == [1, 0]

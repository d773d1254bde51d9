from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from daylog.constants import METRIC_PALETTES, MOOD_LABELS, YEAR_GRID_ROWS
from daylog.grid import cell_bucket, cell_tooltip

PLOT_THEME = {
    "text_main": "#18181B",
    "text_soft": "#94A3B8",
    "plot_grid": "#E2E8F0",
    "border": "#E4E4E7",
    "mood_line": "#6366F1",
    "drinks_bar": "#F59E0B",
    "marker_line": "#FFFFFF",
}


def apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=True):
    fig.update_layout(
        title=title,
        title_font=dict(color=PLOT_THEME["text_main"], size=16),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=PLOT_THEME["text_main"]),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=PLOT_THEME["plot_grid"],
            tickfont=dict(color=PLOT_THEME["text_soft"], size=10),
            zeroline=False,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=PLOT_THEME["plot_grid"],
            tickfont=dict(color=PLOT_THEME["text_soft"], size=10),
            zeroline=False,
        ),
    )
    return fig


def discrete_colorscale(metric):
    palette = METRIC_PALETTES[metric]
    colorscale = []
    n = len(palette)
    for i, bucket in enumerate(sorted(palette)):
        start = i / n
        end = (i + 1) / n
        colorscale.append((start, palette[bucket]))
        colorscale.append((end - 1e-6, palette[bucket]))
    colorscale[-1] = (1.0, colorscale[-1][1])
    return colorscale


def year_grid_matrix(columns, metric):
    z = np.full((YEAR_GRID_ROWS, len(columns)), np.nan)
    text = [["" for _ in columns] for _ in range(YEAR_GRID_ROWS)]
    for col, column in enumerate(columns):
        for row, cell in enumerate(column.cells):
            if not cell.is_valid:
                continue
            z[row, col] = cell_bucket(metric, cell.log)
            text[row][col] = cell_tooltip(metric, cell) or ""
    return z, text


def grid_heatmap(columns, metric, title=""):
    z, hover_text = year_grid_matrix(columns, metric)
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            text=hover_text,
            hoverinfo="text",
            colorscale=discrete_colorscale(metric),
            showscale=False,
            zmin=0,
            zmax=len(METRIC_PALETTES[metric]) - 1,
            xgap=2,
            ygap=2,
        )
    )
    fig.update_layout(
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=20, r=20, t=40, b=20),
        xaxis=dict(
            showgrid=False,
            zeroline=False,
            tickmode="array",
            tickvals=list(range(len(columns))),
            ticktext=[column.label for column in columns],
            side="top",
        ),
        yaxis=dict(
            showgrid=False,
            zeroline=False,
            tickmode="array",
            tickvals=list(range(YEAR_GRID_ROWS)),
            ticktext=[str(day) for day in range(1, YEAR_GRID_ROWS + 1)],
            autorange="reversed",
        ),
    )
    return fig


def mood_trend_chart(series, title="Mood Trend", height=260):
    fig = go.Figure(
        data=go.Scatter(
            x=[row["display_date"] for row in series],
            y=[row["mood"] for row in series],
            mode="lines+markers",
            line=dict(color=PLOT_THEME["mood_line"], width=4, shape="spline"),
            marker=dict(size=8, color=PLOT_THEME["mood_line"], line=dict(width=2, color=PLOT_THEME["marker_line"])),
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=height)
    fig.update_yaxes(
        range=[0.8, 5.2],
        tickmode="array",
        tickvals=list(MOOD_LABELS),
    )
    return fig


def drinks_bar_chart(series, kind, title="Alcohol Intake", height=260):
    fig = go.Figure(
        data=go.Bar(
            x=[row["display_date"] for row in series],
            y=[row["drinks"] for row in series],
            marker=dict(color=PLOT_THEME["drinks_bar"]),
            width=0.6 if kind == "week" else 0.3,
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=height)
    return fig

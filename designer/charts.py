# designer/charts.py

import plotly.graph_objects as go

from designer.budget import SPENDING_TREND, BudgetSummary

_LAYOUT = dict(
    margin=dict(l=20, r=20, t=40, b=20),
    paper_bgcolor='rgba(0,0,0,0)',
    plot_bgcolor='rgba(0,0,0,0)',
    font=dict(color='#374151'),
)


def budget_pie_chart(summary: BudgetSummary, height=320) -> go.Figure:
    """Donut chart of the category split."""
    fig = go.Figure(go.Pie(
        labels=[line.name for line in summary.lines],
        values=[line.value for line in summary.lines],
        marker=dict(colors=[line.color for line in summary.lines]),
        hole=0.6,
        sort=False,
        hovertemplate='%{label}: $%{value:,.0f}<extra></extra>',
    ))
    fig.update_layout(title="Budget Distribution", height=height, showlegend=True, **_LAYOUT)
    return fig


def spending_trend_chart(height=300) -> go.Figure:
    fig = go.Figure()
    periods = [point['period'] for point in SPENDING_TREND]
    fig.add_trace(go.Scatter(x=periods, y=[p['spent'] for p in SPENDING_TREND],
                             mode='lines+markers', name='Spent', line=dict(color='#3b82f6', width=3)))
    fig.add_trace(go.Scatter(x=periods, y=[p['budget'] for p in SPENDING_TREND],
                             mode='lines+markers', name='Budget', line=dict(color='#10b981', width=3)))
    fig.update_layout(title="Spending Trend", height=height, yaxis_tickprefix='$', **_LAYOUT)
    return fig


def comparison_bar_chart(summary: BudgetSummary, height=300) -> go.Figure:
    rows = summary.category_comparison()
    categories = [row['category'] for row in rows]
    fig = go.Figure(data=[
        go.Bar(name='Actual', x=categories, y=[row['actual'] for row in rows], marker_color='#3b82f6'),
        go.Bar(name='Recommended', x=categories, y=[row['recommended'] for row in rows], marker_color='#10b981'),
    ])
    fig.update_layout(title="Actual vs Recommended", barmode='group', height=height,
                      yaxis_tickprefix='$', **_LAYOUT)
    return fig

"""
Visualization components for the team app
Plotly charts for player statistics
"""
import plotly.graph_objects as go


def create_player_stats_chart(stats_df):
    """
    Create a grouped bar chart of goals and assists per player

    Args:
        stats_df: DataFrame from utils.formatting.players_stats_frame

    Returns:
        Plotly figure object
    """
    fig = go.Figure()

    if stats_df.empty:
        return fig

    ordered = stats_df.sort_values(['Goals', 'Assists'], ascending=False)

    fig.add_trace(go.Bar(
        x=ordered['Player'],
        y=ordered['Goals'],
        name='Goals',
        marker_color='#2563eb',
        hovertemplate='<b>%{x}</b><br>Goals: %{y}<extra></extra>'
    ))
    fig.add_trace(go.Bar(
        x=ordered['Player'],
        y=ordered['Assists'],
        name='Assists',
        marker_color='#9333ea',
        hovertemplate='<b>%{x}</b><br>Assists: %{y}<extra></extra>'
    ))

    fig.update_layout(
        barmode='group',
        showlegend=True,
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="center",
            x=0.5
        ),
        yaxis=dict(title='Count', rangemode='tozero', dtick=1),
        height=400,
        margin=dict(l=40, r=20, t=40, b=80)
    )

    return fig

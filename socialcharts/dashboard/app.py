"""
SocialMediaCharts - Dashboard Application

Dash/Plotly dashboard for social-media engagement.
Renders the Likes box plot per platform, the grouped average-Likes bar chart,
and the average-Likes-over-time line chart, with CSV exports per chart.
"""

import csv
import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import dash
from dash import dcc, html, Input, Output
from dash.exceptions import PreventUpdate
import dash_bootstrap_components as dbc  # type: ignore[import-untyped]
import plotly.graph_objects as go

from socialcharts.dashboard.data_provider import SocialMediaDataProvider
from socialcharts.loaders.csv_exporter import (
    DATE_FILE,
    PLATFORM_POST_TYPE_FILE,
    QUARTILES_FILE,
    export_tables
)
from socialcharts.utils.config import ChartConfig


logger = logging.getLogger(__name__)

# chart id -> export file offered by its card
CHART_EXPORTS = {
    "boxplot": QUARTILES_FILE,
    "barplot": PLATFORM_POST_TYPE_FILE,
    "lineplot": DATE_FILE
}


class SocialMediaDashboard:
    """
    Dashboard for social-media post engagement.

    Features:
    - Box plot of Likes per platform (min, q1, median, q3, max)
    - Grouped bar chart of average Likes per platform and post type
    - Line chart of average Likes per date
    - Reload button to re-read the dataset
    - CSV export of each chart's underlying aggregates
    """

    def __init__(
        self,
        app_name: str = "Social Media Engagement",
        data_provider: Optional[SocialMediaDataProvider] = None,
        chart_config: Optional[ChartConfig] = None
    ):
        """
        Initialize the dashboard.

        Args:
            app_name: Application name for title
            data_provider: Data provider holding the aggregated dataset
            chart_config: Chart geometry and colors (defaults if None)
        """
        self.app_name = app_name
        self.data_provider = data_provider or SocialMediaDataProvider()
        self.chart_config = chart_config or ChartConfig()

        self.app = dash.Dash(
            __name__,
            external_stylesheets=[dbc.themes.BOOTSTRAP],
            title=app_name,
            suppress_callback_exceptions=True
        )

        self.app.layout = self._build_layout()
        self._register_callbacks()

        logger.info(f"[OK] Dashboard initialized: {app_name}")

    def _build_layout(self) -> dbc.Container:
        """
        Build the dashboard layout.

        Returns:
            Dash Bootstrap Container with all components
        """
        return dbc.Container([
            # Header
            dbc.Row([
                dbc.Col([
                    html.H1(self.app_name, className="text-primary"),
                    html.P(
                        "Likes by platform, post type and date",
                        className="text-muted"
                    )
                ], width=8),
                dbc.Col([
                    dbc.Button("Reload Data", id="reload-btn", color="primary", size="sm", className="mb-2"),
                    html.Div(id="last-updated", className="text-muted"),
                    html.Div(id="load-status", className="text-danger")
                ], width=4, className="text-end")
            ], className="mb-4 mt-3"),

            dbc.Row([
                dbc.Col(self._build_chart_card("boxplot", "Likes Distribution by Platform"), width=6),
                dbc.Col(self._build_chart_card("barplot", "Average Likes by Platform and Post Type"), width=6)
            ], className="mb-4"),

            dbc.Row([
                dbc.Col(self._build_chart_card("lineplot", "Average Likes over Time"), width=6)
            ], className="mb-4")
        ], fluid=True)

    def _build_chart_card(self, chart_id: str, title: str) -> dbc.Card:
        """Build a card holding one chart and its CSV export button."""
        return dbc.Card([
            dbc.CardHeader([
                html.Span(title),
                dbc.Button(
                    "Export CSV",
                    id=f"export-{chart_id}-btn",
                    color="secondary",
                    size="sm",
                    className="float-end"
                ),
                dcc.Download(id=f"download-{chart_id}-csv")
            ]),
            dbc.CardBody([
                dcc.Graph(id=chart_id, config={"displayModeBar": False})
            ])
        ])

    def _register_callbacks(self):
        """Register chart refresh and export callbacks."""

        @self.app.callback(
            [
                Output("last-updated", "children"),
                Output("load-status", "children"),
                Output("boxplot", "figure"),
                Output("barplot", "figure"),
                Output("lineplot", "figure")
            ],
            [Input("reload-btn", "n_clicks")]
        )
        def update_charts(n_clicks):
            """Reload data on demand and redraw all charts."""
            if n_clicks:
                self.data_provider.refresh()
            return self._render_charts()

        for chart_id, file_name in CHART_EXPORTS.items():
            self._register_export_callback(chart_id, file_name)

    def _register_export_callback(self, chart_id: str, file_name: str):
        """Register the CSV download callback for one chart card."""

        @self.app.callback(
            Output(f"download-{chart_id}-csv", "data"),
            [Input(f"export-{chart_id}-btn", "n_clicks")],
            prevent_initial_call=True
        )
        def export_chart_csv(n_clicks):
            """Export the chart's underlying table to CSV."""
            if not n_clicks:
                raise PreventUpdate

            columns, rows = export_tables(self.data_provider.result)[file_name]
            return self._generate_csv_download(rows, file_name, columns)

    def _render_charts(self) -> List[Any]:
        """Build the header status and all three figures from one data snapshot."""
        data = self.data_provider.chart_data()
        summary = data["summary"]
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")

        status = ""
        if summary["last_error"]:
            status = f"Last reload failed: {summary['last_error']}"

        return [
            f"{summary['record_count']} posts from {summary['source']} | Rendered: {timestamp}",
            status,
            self._build_box_chart(data["box"]),
            self._build_bar_chart(data["bar"]),
            self._build_line_chart(data["line"])
        ]

    def _generate_csv_download(
        self,
        data: List[Dict],
        filename: str,
        columns: List[str]
    ) -> Dict:
        """
        Generate CSV download data.

        Args:
            data: List of dictionaries to export
            filename: Output filename
            columns: Column names to include

        Returns:
            Dictionary for dcc.Download component
        """
        if not data:
            return {"content": "", "filename": filename}

        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(data)

        return {
            "content": output.getvalue(),
            "filename": filename,
            "type": "text/csv"
        }

    def _apply_layout(
        self,
        fig: go.Figure,
        x_title: str,
        y_title: str,
        y_domain: tuple
    ) -> go.Figure:
        """Apply shared size, margins, axis titles and y-range to a figure."""
        config = self.chart_config
        fig.update_layout(
            template="plotly_white",
            width=config.width,
            height=config.height,
            margin=config.margin,
            xaxis_title=x_title,
            yaxis_title=y_title
        )
        if y_domain and y_domain[1] > 0:
            fig.update_yaxes(range=list(y_domain))
        return fig

    def _build_box_chart(self, box_data: Dict) -> go.Figure:
        """Build the Likes box plot from precomputed quartiles."""
        fig = go.Figure()

        for platform in box_data.get("platforms", []):
            quartiles = box_data["quartiles"][platform]
            fig.add_trace(go.Box(
                x=[platform],
                lowerfence=[quartiles["min"]],
                q1=[quartiles["q1"]],
                median=[quartiles["median"]],
                q3=[quartiles["q3"]],
                upperfence=[quartiles["max"]],
                name=platform,
                fillcolor=self.chart_config.box_fill,
                line=dict(color=self.chart_config.box_line),
                showlegend=False
            ))

        fig.update_layout(boxgap=0.4)
        return self._apply_layout(fig, "Platform", "Number of Likes", box_data.get("y_domain", (0, 0)))

    def _build_bar_chart(self, bar_data: Dict) -> go.Figure:
        """Build the grouped bar chart with one trace per post type."""
        fig = go.Figure()
        averages = bar_data.get("averages", [])
        colors = bar_data.get("colors", {})

        for post_type in bar_data.get("post_types", []):
            rows = [row for row in averages if row["PostType"] == post_type]
            fig.add_trace(go.Bar(
                x=[row["Platform"] for row in rows],
                y=[row["AvgLikes"] for row in rows],
                name=post_type,
                marker_color=colors.get(post_type),
                hovertemplate="<b>%{x}</b><br>" + post_type + ": %{y:.1f} likes<extra></extra>"
            ))

        fig.update_layout(
            barmode="group",
            bargap=0.2,
            bargroupgap=0.05,
            xaxis=dict(categoryorder="array", categoryarray=bar_data.get("platforms", [])),
            legend=dict(orientation="v", yanchor="top", y=1, xanchor="right", x=1)
        )
        return self._apply_layout(fig, "Platform", "Average Number of Likes", bar_data.get("y_domain", (0, 0)))

    def _build_line_chart(self, line_data: Dict) -> go.Figure:
        """Build the smoothed average-Likes-over-time line chart."""
        fig = go.Figure()

        if line_data.get("dates"):
            fig.add_trace(go.Scatter(
                x=line_data["dates"],
                y=line_data["avg_likes"],
                mode="lines",
                name="Average Likes",
                line=dict(
                    color=self.chart_config.line_color,
                    width=self.chart_config.line_width,
                    shape="spline"
                )
            ))

        x_domain = line_data.get("x_domain")
        if x_domain:
            fig.update_xaxes(range=[x_domain[0].isoformat(), x_domain[1].isoformat()])

        return self._apply_layout(fig, "Date", "Average Number of Likes", line_data.get("y_domain", (0, 0)))

    def run(self, host: str = "127.0.0.1", port: int = 8050, debug: bool = False):
        """
        Run the dashboard server.

        Args:
            host: Host address to bind
            port: Port number
            debug: Enable debug mode
        """
        logger.info(f"[...] Starting dashboard on http://{host}:{port}")
        self.app.run(host=host, port=port, debug=debug, use_reloader=False)

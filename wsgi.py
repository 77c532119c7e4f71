"""
WSGI entry point for the SocialMediaCharts Dashboard.

This module creates the Dash application and exposes its Flask server
for use with production WSGI servers like Gunicorn.

Usage with Gunicorn:
    gunicorn wsgi:server
"""

import logging
from typing import Optional

from socialcharts.dashboard.app import SocialMediaDashboard
from socialcharts.dashboard.data_provider import SocialMediaDataProvider
from socialcharts.models.errors import SocialChartsError
from socialcharts.utils.config import Config
from socialcharts.utils.logging_config import setup_logging


logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None):
    """
    Create and configure the Dash application.

    A dataset that fails to load is logged; the dashboard still starts with
    empty charts and can be reloaded from the UI.

    Returns:
        Flask server instance (for WSGI)
    """
    config = config or Config()
    setup_logging(log_dir=config.log_dir, log_config=config.logs)

    logger.info("=" * 60)
    logger.info("SocialMediaCharts - Dashboard (WSGI)")
    logger.info("=" * 60)

    provider = SocialMediaDataProvider(
        data_config=config.data,
        operational_config=config.operational,
        palette=config.charts.palette
    )

    try:
        provider.load()
    except SocialChartsError as error:
        provider.last_error = str(error)
        logger.error(f"[ERROR] Initial load from {provider.source} failed: {error}")

    dashboard = SocialMediaDashboard(
        app_name=config.dashboard.title,
        data_provider=provider,
        chart_config=config.charts
    )
    return dashboard.app.server


if __name__ == "__main__":
    server = create_app()
    server.run(host="0.0.0.0", port=8050)
else:
    server = create_app()

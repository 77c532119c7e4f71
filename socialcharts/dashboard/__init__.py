"""
SocialMediaCharts - Dashboard Package

Dash/Plotly dashboard for post engagement charts.
"""

from socialcharts.dashboard.app import SocialMediaDashboard
from socialcharts.dashboard.data_provider import SocialMediaDataProvider

__all__ = [
    "SocialMediaDashboard",
    "SocialMediaDataProvider"
]

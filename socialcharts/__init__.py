"""
SocialMediaCharts - Engagement Statistics & Charts for Social-Media Posts

This package loads social-media post datasets from CSV, computes engagement
aggregates (quartiles, averages per platform/post type/date), and renders them
as Dash/Plotly charts.
"""

__version__ = "26.10.19"
__author__ = "Social Analytics"

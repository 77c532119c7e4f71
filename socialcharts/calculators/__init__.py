"""
SocialMediaCharts - Calculators Package

Summary statistics and chart scale calculation modules.
"""

from socialcharts.calculators.stats_calculator import StatsCalculator
from socialcharts.calculators.scale_calculator import (
    DEFAULT_PALETTE,
    ScaleCalculator
)

__all__ = [
    "StatsCalculator",
    "DEFAULT_PALETTE",
    "ScaleCalculator"
]

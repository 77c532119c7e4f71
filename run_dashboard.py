"""
SocialMediaCharts - Dashboard Launcher

Run this script to start the engagement dashboard web interface.

Usage:
    python run_dashboard.py
    python run_dashboard.py --port 8080
    python run_dashboard.py --file data/socialMedia.csv --debug
"""

import sys

from socialcharts.main import main


if __name__ == "__main__":
    sys.exit(main(["--serve", *sys.argv[1:]]))

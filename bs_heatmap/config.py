"""
Global configuration for the pricer and heatmap generator.

Keeps all magic numbers in one place. Override via CLI args in main.py
or by editing this file directly for persistent changes.
"""

from pathlib import Path


# ── paths ────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
OUTPUT_DIR = PROJECT_ROOT / "output"
HEATMAP_FILENAME = "heatmap.png"  # OUTPUT_DIR is created on first write


# ── default inputs ───────────────────────────────────────────────────────
DEFAULT_SPOT = 100.0
DEFAULT_STRIKE = 100.0
DEFAULT_MATURITY = 1.0          # years
DEFAULT_RATE = 0.05             # continuously compounded
DEFAULT_VOLATILITY = 0.20       # annualized
DEFAULT_OPTION_TYPE = "call"


# ── surface grid ─────────────────────────────────────────────────────────
GRID_S_POINTS = 100             # resolution along spot axis
GRID_SIGMA_POINTS = 100         # resolution along volatility axis
SPAN_LOW = 0.5                  # grid runs from 0.5x ...
SPAN_HIGH = 1.5                 # ... to 1.5x the base spot / vol


# ── visualization ────────────────────────────────────────────────────────
COLORMAP = "viridis"
DPI = 100                       # FIG_WIDTH x FIG_HEIGHT inches -> 800 x 600 px
FIG_WIDTH = 8
FIG_HEIGHT = 6
XLABEL = "Stock Price (S)"
YLABEL = "Volatility (σ)"
TITLE_TEMPLATE = "Option Price Heatmap ({} Option)"
PRICE_FORMAT = "Option Price: ${:.4f}"
LOAD_ERROR_MESSAGE = "Failed to load heatmap image."

# interactive window
APP_TITLE = "Option Pricing - Black-Scholes Model"
APP_WIDTH = 11
APP_HEIGHT = 6


# ── logging ──────────────────────────────────────────────────────────────
LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-22s | %(message)s"
LOG_DATEFMT = "%H:%M:%S"

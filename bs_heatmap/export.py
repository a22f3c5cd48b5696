"""
Extra outputs for a price grid: tidy CSV and interactive HTML.

The PNG from surface.generate_heatmap is what the app displays.
These are for poking at the numbers afterwards: the CSV loads
straight into a notebook, the HTML has hover tooltips with the
exact (S, sigma, price) under the cursor.
"""

import numpy as np
import pandas as pd

import plotly.graph_objects as go

from . import config
from .surface import HeatmapGrid, heatmap_title


def grid_to_frame(grid: HeatmapGrid) -> pd.DataFrame:
    """
    Flatten a grid to long format.

    Returns
    -------
    DataFrame with columns [spot, volatility, price], one row per
    cell, spot-major (all vols for spots[0] first).
    """
    S_mesh, V_mesh = np.meshgrid(grid.spots, grid.volatilities, indexing="ij")
    return pd.DataFrame({
        "spot": S_mesh.ravel(),
        "volatility": V_mesh.ravel(),
        "price": grid.prices.ravel(),
    })


def save_grid_csv(grid: HeatmapGrid, output_path) -> None:
    grid_to_frame(grid).to_csv(output_path, index=False)


def plot_heatmap_plotly(grid: HeatmapGrid, output_path) -> None:
    """Render the grid as a standalone interactive HTML heatmap."""
    title = heatmap_title(grid.pricing_input.option_type)

    fig = go.Figure(data=[go.Heatmap(
        x=grid.spots, y=grid.volatilities, z=grid.prices.T,
        colorscale=config.COLORMAP.capitalize(),
        colorbar=dict(title=dict(text="Price")),
        hovertemplate="S: %{x:.2f}<br>σ: %{y:.4f}<br>Price: %{z:.4f}<extra></extra>",
    )])

    fig.update_layout(
        title=dict(text=f"<b>{title}</b>", x=0.5),
        xaxis=dict(title=dict(text=config.XLABEL)),
        yaxis=dict(title=dict(text=config.YLABEL)),
        width=config.FIG_WIDTH * config.DPI,
        height=config.FIG_HEIGHT * config.DPI,
    )

    fig.write_html(output_path)

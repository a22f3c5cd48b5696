"""
Tests for CSV / HTML exports of a price grid.
"""

import numpy as np
import pandas as pd
from bs_heatmap.export import grid_to_frame, plot_heatmap_plotly, save_grid_csv
from bs_heatmap.surface import build_price_grid


class TestGridToFrame:

    def test_long_format(self, call_input):
        grid = build_price_grid(call_input, s_steps=4, sigma_steps=3)
        df = grid_to_frame(grid)
        assert list(df.columns) == ["spot", "volatility", "price"]
        assert len(df) == 12

    def test_spot_major_order(self, call_input):
        grid = build_price_grid(call_input, s_steps=4, sigma_steps=3)
        df = grid_to_frame(grid)
        assert df["spot"].iloc[:3].nunique() == 1
        np.testing.assert_allclose(df["volatility"].iloc[:3], grid.volatilities)
        assert df["price"].iloc[4] == grid.prices[1, 1]

    def test_csv_round_trip(self, put_input, tmp_path):
        grid = build_price_grid(put_input, s_steps=5, sigma_steps=5)
        path = tmp_path / "grid.csv"
        save_grid_csv(grid, path)
        df = pd.read_csv(path)
        assert df.shape == (25, 3)
        np.testing.assert_allclose(df["price"].values, grid.prices.ravel(), rtol=1e-6)


class TestPlotly:

    def test_writes_html(self, put_input, tmp_path):
        grid = build_price_grid(put_input, s_steps=10, sigma_steps=10)
        path = tmp_path / "heatmap.html"
        plot_heatmap_plotly(grid, str(path))
        html = path.read_text(encoding="utf-8")
        assert "Option Price Heatmap (Put Option)" in html
        assert "Stock Price (S)" in html

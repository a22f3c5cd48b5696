"""
Tests for decoding the heatmap file and the display panel state.
"""

import pytest
import numpy as np
import matplotlib.image as mpimg
from bs_heatmap.display import HeatmapDisplay, HeatmapLoadError, load_heatmap_image
from bs_heatmap.surface import generate_heatmap


@pytest.fixture
def small_png(tmp_path):
    path = tmp_path / "small.png"
    rgb = np.zeros((4, 5, 3), dtype=np.float32)
    rgb[..., 0] = 1.0
    mpimg.imsave(path, rgb)
    return path


class TestLoadImage:

    def test_rgba_uint8(self, small_png):
        img = load_heatmap_image(small_png)
        assert img.shape == (4, 5, 4)
        assert img.dtype == np.uint8
        assert np.all(img[..., 0] == 255)
        assert np.all(img[..., 3] == 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(HeatmapLoadError):
            load_heatmap_image(tmp_path / "nope.png")

    def test_corrupt_file(self, tmp_path):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"definitely not a png")
        with pytest.raises(HeatmapLoadError):
            load_heatmap_image(bad)

    def test_is_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_heatmap_image(tmp_path / "nope.png")


class TestHeatmapDisplay:

    def test_starts_empty(self):
        display = HeatmapDisplay()
        assert not display.has_image
        assert display.error is None

    def test_refresh_success(self, call_input, heatmap_path):
        generate_heatmap(call_input, heatmap_path)
        display = HeatmapDisplay()
        assert display.refresh(heatmap_path)
        assert display.image.shape == (600, 800, 4)
        assert display.error is None

    def test_refresh_failure_clears_previous(self, small_png, tmp_path):
        """A failed reload never leaves the old raster next to an error."""
        display = HeatmapDisplay()
        display.refresh(small_png)
        assert display.has_image

        assert not display.refresh(tmp_path / "missing.png")
        assert not display.has_image
        assert display.error == "Failed to load heatmap image."

    def test_success_after_failure_clears_error(self, small_png, tmp_path):
        display = HeatmapDisplay()
        display.refresh(tmp_path / "missing.png")
        display.refresh(small_png)
        assert display.has_image
        assert display.error is None

    def test_fail_and_dismiss(self, small_png):
        display = HeatmapDisplay()
        display.refresh(small_png)
        display.fail("heatmap render failed")
        assert not display.has_image
        assert display.error == "heatmap render failed"
        display.dismiss_error()
        assert display.error is None

"""
Tests for the command-line entry point.
"""

import pytest
from main import main


class TestMain:

    def test_price_only(self, capsys):
        main(["--no-heatmap"])
        out = capsys.readouterr().out
        assert "Option Price: $10.4506" in out
        assert "Skipping heatmap" in out

    def test_put(self, capsys):
        main(["--put", "--no-heatmap"])
        assert "Option Price: $5.5735" in capsys.readouterr().out

    def test_heatmap_and_exports(self, tmp_path, capsys):
        png = tmp_path / "h.png"
        csv = tmp_path / "h.csv"
        html = tmp_path / "h.html"
        main(["--output", str(png), "--csv", str(csv), "--html", str(html)])
        assert png.exists() and csv.exists() and html.exists()
        assert "Grid: 100 x 100" in capsys.readouterr().out

    def test_degenerate_input_passes_through(self, capsys):
        main(["--maturity", "0", "--no-heatmap"])
        assert "Option Price: $nan" in capsys.readouterr().out

    def test_validate_rejects(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--maturity", "0", "--validate", "--no-heatmap"])
        assert exc.value.code == 1
        assert "maturity" in capsys.readouterr().out

    def test_unwritable_output_exits(self, tmp_path, capsys):
        target = tmp_path / "adir"
        target.mkdir()
        with pytest.raises(SystemExit) as exc:
            main(["--output", str(target)])
        assert exc.value.code == 1
        assert "cannot write" in capsys.readouterr().out

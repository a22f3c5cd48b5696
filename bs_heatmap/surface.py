"""
Price surface construction and heatmap rendering.

The surface holds strike, maturity, rate and option type fixed and
varies the two inputs a trader cares about most day to day:

    spot        0.5x .. 1.5x the base spot
    volatility  0.5x .. 1.5x the base vol

The pipeline:
    1. Lay out both axes (inclusive endpoints, default 100 points each)
    2. Price every (spot, vol) pair with the closed form
    3. Narrow to float32 (plenty for a picture)
    4. Hand the grid to a SurfaceRenderer, which returns encoded image bytes
    5. Write the bytes to the output path in one atomic replace

The renderer is a narrow interface so the plotting backend can be
swapped without touching pricing or grid construction. The default
MatplotlibRenderer draws an imshow heatmap with a colorbar.
"""

import io
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from matplotlib.figure import Figure

from . import config
from .black_scholes import OptionType, PricingInput, bs_price


logger = logging.getLogger(__name__)

Extent = Tuple[float, float, float, float]


class HeatmapRenderError(RuntimeError):
    """The rendering backend could not produce a valid image."""


# ════════════════════════════════════════════════════════════════════════
#  GRID
# ════════════════════════════════════════════════════════════════════════

def axis_values(
    center: float,
    steps: int,
    low: float = None,
    high: float = None,
) -> np.ndarray:
    """
    Evenly spaced values from low*center to high*center, both inclusive.

    Parameters
    ----------
    center : base value (current spot or vol)
    steps : number of points, >= 1. A single step yields just the
            low end instead of dividing by zero.
    low, high : span multipliers (default: config.SPAN_LOW / SPAN_HIGH)

    Returns
    -------
    1D float64 array of length steps
    """
    if low is None:
        low = config.SPAN_LOW
    if high is None:
        high = config.SPAN_HIGH
    steps = int(steps)
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps}")

    v_min = center * low
    v_max = center * high
    denom = steps - 1 if steps > 1 else 1
    return v_min + (v_max - v_min) * np.arange(steps, dtype=np.float64) / denom


@dataclass(eq=False)
class HeatmapGrid:
    """
    Prices over a spot x vol grid.

    prices[i, j] is the price at spots[i], volatilities[j].
    """

    pricing_input: PricingInput
    spots: np.ndarray
    volatilities: np.ndarray
    prices: np.ndarray = field(repr=False)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.prices.shape

    @property
    def extent(self) -> Extent:
        """(S_min, S_max, sigma_min, sigma_max), imshow ordering."""
        return (float(self.spots[0]), float(self.spots[-1]),
                float(self.volatilities[0]), float(self.volatilities[-1]))


def build_price_grid(
    inp: PricingInput,
    s_steps: int = None,
    sigma_steps: int = None,
) -> HeatmapGrid:
    """
    Price every (spot, vol) pair around the base input.

    Parameters
    ----------
    inp : base pricing input; strike, maturity, rate and type stay fixed
    s_steps : points along the spot axis (default: config.GRID_S_POINTS)
    sigma_steps : points along the vol axis (default: config.GRID_SIGMA_POINTS)

    Returns
    -------
    HeatmapGrid with float32 prices of shape (s_steps, sigma_steps)
    """
    if s_steps is None:
        s_steps = config.GRID_S_POINTS
    if sigma_steps is None:
        sigma_steps = config.GRID_SIGMA_POINTS

    spots = axis_values(inp.spot, s_steps)
    vols = axis_values(inp.volatility, sigma_steps)
    S_mesh, V_mesh = np.meshgrid(spots, vols, indexing="ij")

    prices = bs_price(inp.option_type, S_mesh, inp.strike, inp.maturity, inp.rate, V_mesh)
    prices = np.asarray(prices, dtype=np.float64).astype(np.float32)

    n_bad = int(np.count_nonzero(~np.isfinite(prices)))
    if n_bad:
        logger.warning("%d of %d grid prices are not finite for %s", n_bad, prices.size, inp)

    return HeatmapGrid(pricing_input=inp, spots=spots, volatilities=vols, prices=prices)


# ════════════════════════════════════════════════════════════════════════
#  RENDERING
# ════════════════════════════════════════════════════════════════════════

class Origin(Enum):
    LOWER = "lower"
    UPPER = "upper"


class Aspect(Enum):
    AUTO = "auto"
    EQUAL = "equal"


@dataclass(frozen=True)
class RenderConfig:
    """Styling options understood by the heatmap renderers."""

    cmap: str = config.COLORMAP
    origin: Origin = Origin.LOWER
    aspect: Aspect = Aspect.AUTO
    extent: Optional[Extent] = None

    @classmethod
    def for_grid(cls, grid: HeatmapGrid, **overrides) -> "RenderConfig":
        overrides.setdefault("extent", grid.extent)
        return cls(**overrides)

    def imshow_kwargs(self) -> dict:
        kwargs = dict(cmap=self.cmap, origin=self.origin.value, aspect=self.aspect.value)
        if self.extent is not None:
            kwargs["extent"] = list(self.extent)
        return kwargs


def heatmap_title(option_type) -> str:
    """'Option Price Heatmap (Call Option)' etc."""
    return config.TITLE_TEMPLATE.format(OptionType.parse(option_type).label)


class SurfaceRenderer(ABC):
    """Turns a price grid into encoded image bytes."""

    @abstractmethod
    def render(
        self,
        grid: HeatmapGrid,
        render_config: RenderConfig,
        xlabel: str,
        ylabel: str,
        title: str,
    ) -> bytes:
        ...


class MatplotlibRenderer(SurfaceRenderer):
    """
    imshow heatmap + colorbar on a standalone matplotlib Figure.

    Spot runs along x and vol along y, so the grid is transposed
    before plotting (imshow puts the first array axis on y).
    """

    def __init__(self, figsize: Tuple[float, float] = None, dpi: int = None, fmt: str = "png"):
        self.figsize = figsize or (config.FIG_WIDTH, config.FIG_HEIGHT)
        self.dpi = dpi or config.DPI
        self.fmt = fmt

    def _plot_image(self, ax, grid: HeatmapGrid, render_config: RenderConfig):
        return ax.imshow(grid.prices.T, **render_config.imshow_kwargs())

    def render(self, grid, render_config, xlabel, ylabel, title) -> bytes:
        # standalone Figure, no pyplot state, works under any backend
        fig = Figure(figsize=self.figsize, dpi=self.dpi)
        try:
            ax = fig.add_subplot(111)
            img = self._plot_image(ax, grid, render_config)
            if img is None:
                raise HeatmapRenderError("Failed to create image for heatmap.")
            fig.colorbar(img, ax=ax)

            ax.set_xlabel(xlabel)
            ax.set_ylabel(ylabel)
            ax.set_title(title)

            buf = io.BytesIO()
            fig.savefig(buf, format=self.fmt, dpi=self.dpi)
            data = buf.getvalue()
        except HeatmapRenderError:
            raise
        except Exception as e:
            raise HeatmapRenderError(f"heatmap render failed: {e}") from e

        if not data:
            raise HeatmapRenderError("heatmap render failed: backend produced no data")
        return data


# ════════════════════════════════════════════════════════════════════════
#  GENERATION
# ════════════════════════════════════════════════════════════════════════

def _write_atomic(path: Path, data: bytes) -> None:
    """Write via a temp file in the same dir + os.replace, so readers never see half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def generate_heatmap(
    inp: PricingInput,
    output_path=None,
    renderer: SurfaceRenderer = None,
    s_steps: int = None,
    sigma_steps: int = None,
    render_config: RenderConfig = None,
) -> HeatmapGrid:
    """
    Build the spot x vol price grid, render it and write the image.

    Parameters
    ----------
    inp : base pricing input
    output_path : image path, overwritten if present
                  (default: config.OUTPUT_DIR / config.HEATMAP_FILENAME)
    renderer : SurfaceRenderer (default: MatplotlibRenderer())
    s_steps, sigma_steps : grid resolution (default: 100 x 100)
    render_config : styling; extent is filled from the grid when missing

    Returns
    -------
    HeatmapGrid that was rendered

    Raises
    ------
    HeatmapRenderError : rendering or writing failed; output_path is left untouched
    """
    if output_path is None:
        output_path = config.OUTPUT_DIR / config.HEATMAP_FILENAME
    output_path = Path(output_path)
    if renderer is None:
        renderer = MatplotlibRenderer()

    grid = build_price_grid(inp, s_steps=s_steps, sigma_steps=sigma_steps)

    if render_config is None:
        render_config = RenderConfig.for_grid(grid)
    elif render_config.extent is None:
        render_config = replace(render_config, extent=grid.extent)

    data = renderer.render(grid, render_config, config.XLABEL, config.YLABEL,
                           heatmap_title(inp.option_type))
    if not data:
        raise HeatmapRenderError("heatmap render failed: renderer returned no data")

    try:
        _write_atomic(output_path, data)
    except OSError as e:
        raise HeatmapRenderError(f"heatmap render failed: cannot write {output_path}: {e}") from e
    logger.info("Wrote %dx%d heatmap to %s", grid.shape[0], grid.shape[1], output_path)
    return grid

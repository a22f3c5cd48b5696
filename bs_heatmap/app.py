"""
Interactive front-end: one matplotlib window with the input form on
the left and the latest heatmap on the right.

Every button press rebuilds an immutable PricingInput from the form
and runs one synchronous computation; nothing else is shared between
the widgets and the pricer.
"""

import logging
from dataclasses import replace
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.widgets import Button, RadioButtons, TextBox

from . import config, surface
from .black_scholes import OptionType, PricingInput, price
from .display import HeatmapDisplay


logger = logging.getLogger(__name__)

# (PricingInput field, label, display format)
FIELDS = [
    ("spot", "Stock Price (S)", "{:.2f}"),
    ("strike", "Strike Price (K)", "{:.2f}"),
    ("maturity", "Time to Maturity (T in years)", "{:.2f}"),
    ("rate", "Risk-Free Rate (r)", "{:.4f}"),
    ("volatility", "Volatility (σ)", "{:.4f}"),
]


class OptionPricerApp:
    """
    Parameters
    ----------
    pricing_input : initial form values (default: config defaults, call)
    output_path : where the heatmap PNG is written
                  (default: config.OUTPUT_DIR / config.HEATMAP_FILENAME)
    renderer : SurfaceRenderer passed through to generate_heatmap
    """

    def __init__(self, pricing_input: PricingInput = None, output_path=None, renderer=None):
        self.pricing_input = pricing_input or PricingInput()
        if output_path is None:
            output_path = config.OUTPUT_DIR / config.HEATMAP_FILENAME
        self.output_path = Path(output_path)
        self.renderer = renderer
        self.option_price = 0.0
        self.display = HeatmapDisplay()

        self.fig = plt.figure(figsize=(config.APP_WIDTH, config.APP_HEIGHT))
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(config.APP_TITLE)
        self.fig.text(0.02, 0.95, config.APP_TITLE, fontsize=13, fontweight="bold")
        self.fig.text(0.02, 0.89, "Enter Option Parameters:")

        self.text_boxes = {}
        for row, (name, label, fmt) in enumerate(FIELDS):
            ax = self.fig.add_axes([0.24, 0.80 - row * 0.07, 0.14, 0.05])
            box = TextBox(ax, label, initial=fmt.format(getattr(self.pricing_input, name)))
            box.on_submit(lambda text, name=name: self.set_field(name, text))
            self.text_boxes[name] = box

        ax_radio = self.fig.add_axes([0.24, 0.36, 0.14, 0.09])
        self.type_radio = RadioButtons(
            ax_radio, ("Call", "Put"), active=0 if self.pricing_input.is_call else 1,
        )
        self.type_radio.on_clicked(self.set_option_type)

        ax_calc = self.fig.add_axes([0.02, 0.26, 0.17, 0.06])
        self.calc_button = Button(ax_calc, "Calculate Price")
        self.calc_button.on_clicked(lambda event: self.calculate_price())

        ax_heat = self.fig.add_axes([0.21, 0.26, 0.17, 0.06])
        self.heatmap_button = Button(ax_heat, "Generate Heatmap")
        self.heatmap_button.on_clicked(lambda event: self.generate_heatmap())

        self.price_text = self.fig.text(0.02, 0.18, config.PRICE_FORMAT.format(self.option_price))
        self.status_text = self.fig.text(0.02, 0.10, "", color="crimson")

        ax_ok = self.fig.add_axes([0.02, 0.02, 0.06, 0.05])
        self.ok_button = Button(ax_ok, "OK")
        self.ok_button.on_clicked(lambda event: self.dismiss_error())

        self.ax_heatmap = self.fig.add_axes([0.44, 0.05, 0.54, 0.85])
        self.ax_heatmap.axis("off")

    # ── form ──────────────────────────────────────────────────────────────

    def set_field(self, name: str, text: str) -> None:
        """Update one numeric field; unparseable text keeps the old value."""
        try:
            value = float(text)
        except ValueError:
            logger.warning("Ignoring non-numeric %s: %r", name, text)
            self._set_status(f"Not a number: {text!r}")
            return
        self.pricing_input = replace(self.pricing_input, **{name: value})
        self._set_status("")

    def set_option_type(self, label: str) -> None:
        self.pricing_input = replace(self.pricing_input, option_type=OptionType.parse(label))

    # ── actions ───────────────────────────────────────────────────────────

    def calculate_price(self) -> float:
        self.option_price = price(self.pricing_input)
        self.price_text.set_text(config.PRICE_FORMAT.format(self.option_price))
        self._set_status("")
        return self.option_price

    def generate_heatmap(self) -> bool:
        """Render to output_path and load it into the panel. Returns success."""
        try:
            surface.generate_heatmap(self.pricing_input, self.output_path, renderer=self.renderer)
        except surface.HeatmapRenderError as e:
            logger.error("%s", e)
            self.display.fail(str(e))
        else:
            self.display.refresh(self.output_path)
        self._show_heatmap()
        return self.display.has_image

    def dismiss_error(self) -> None:
        """Close the error notification, like the OK button of a popup."""
        self.display.dismiss_error()
        self._set_status("")

    # ── drawing ───────────────────────────────────────────────────────────

    def _show_heatmap(self) -> None:
        self.ax_heatmap.clear()
        self.ax_heatmap.axis("off")
        if self.display.has_image:
            self.ax_heatmap.imshow(self.display.image)
            self.ax_heatmap.set_title("Heatmap (Stock Price vs. Volatility):", fontsize=10)
        self._set_status(self.display.error or "")

    def _set_status(self, message: str) -> None:
        self.status_text.set_text(message)
        self._redraw()

    def _redraw(self) -> None:
        self.fig.canvas.draw_idle()

    def show(self) -> None:
        plt.show()

    def close(self) -> None:
        plt.close(self.fig)


def run(pricing_input: PricingInput = None, output_path=None) -> None:
    app = OptionPricerApp(pricing_input, output_path)
    app.show()

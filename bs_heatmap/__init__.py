"""
bs-heatmap
==========
Black-Scholes option pricing with a spot/volatility price heatmap.

Modules:
    black_scholes      - Closed-form European pricing
    surface            - Spot x vol price grid and heatmap rendering
    export             - CSV / interactive HTML exports of a price grid
    display            - Decoding the rendered heatmap for on-screen display
    app                - Interactive matplotlib front-end
    config             - Global constants and defaults
"""

__version__ = "0.1.0"
__author__ = "Leo"

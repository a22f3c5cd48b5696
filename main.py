#!/usr/bin/env python3
"""
main.py — Price a European option and render its spot/vol heatmap.

Usage:
    python main.py                                  # defaults, call
    python main.py --spot 120 --vol 0.35 --put      # custom inputs
    python main.py --csv grid.csv --html grid.html  # extra exports
    python main.py --gui                            # interactive window
"""

import argparse
import logging
import sys
import time

from bs_heatmap import config
from bs_heatmap.black_scholes import InvalidInputError, OptionType, PricingInput, price
from bs_heatmap.surface import HeatmapRenderError, generate_heatmap


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Black-Scholes price and spot/vol heatmap.")
    p.add_argument("--spot", type=float, default=config.DEFAULT_SPOT)
    p.add_argument("--strike", type=float, default=config.DEFAULT_STRIKE)
    p.add_argument("--maturity", type=float, default=config.DEFAULT_MATURITY,
                   help="time to maturity in years")
    p.add_argument("--rate", type=float, default=config.DEFAULT_RATE)
    p.add_argument("--vol", type=float, default=config.DEFAULT_VOLATILITY)
    p.add_argument("--put", action="store_true", help="price a put instead of a call")
    p.add_argument("--output", type=str, default=None, help="heatmap PNG path")
    p.add_argument("--no-heatmap", action="store_true")
    p.add_argument("--csv", type=str, default=None, help="also save the grid as CSV")
    p.add_argument("--html", type=str, default=None, help="also save an interactive HTML heatmap")
    p.add_argument("--validate", action="store_true",
                   help="reject non-positive S/K/T/sigma instead of printing NaN")
    p.add_argument("--gui", action="store_true", help="open the interactive window")
    p.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    return p.parse_args(argv)


def setup_logging(level: str = None) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL).upper(), logging.WARNING),
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATEFMT,
    )


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    inp = PricingInput(
        option_type=OptionType.PUT if args.put else OptionType.CALL,
        spot=args.spot, strike=args.strike, maturity=args.maturity,
        rate=args.rate, volatility=args.vol,
    )

    if args.validate:
        try:
            inp.validate()
        except InvalidInputError as e:
            print(f"\n  ERROR: {e}")
            sys.exit(1)

    if args.gui:
        from bs_heatmap.app import run
        run(inp, args.output)
        return

    print(f"\n{'='*60}")
    print(f"  Black-Scholes Option Pricer")
    print(f"  {inp.option_type.label}  |  S={inp.spot:g}  K={inp.strike:g}  "
          f"T={inp.maturity:g}  r={inp.rate:g}  sigma={inp.volatility:g}")
    print(f"{'='*60}\n")

    t0 = time.time()
    print("[1/2] Pricing...")
    print(f"       {config.PRICE_FORMAT.format(price(inp))}")

    if args.no_heatmap:
        print("\n[2/2] Skipping heatmap (--no-heatmap flag)")
    else:
        print("\n[2/2] Generating heatmap...")
        output = args.output or str(config.OUTPUT_DIR / config.HEATMAP_FILENAME)
        try:
            grid = generate_heatmap(inp, output)
        except HeatmapRenderError as e:
            print(f"\n  ERROR: {e}")
            sys.exit(1)
        print(f"       Grid: {grid.shape[0]} x {grid.shape[1]}")
        print(f"       -> {output}")

        if args.csv:
            from bs_heatmap.export import save_grid_csv
            save_grid_csv(grid, args.csv)
            print(f"       -> {args.csv}")
        if args.html:
            from bs_heatmap.export import plot_heatmap_plotly
            plot_heatmap_plotly(grid, args.html)
            print(f"       -> {args.html}")

    elapsed = time.time() - t0
    print(f"\n  Done in {elapsed:.1f}s.\n")


if __name__ == "__main__":
    main()

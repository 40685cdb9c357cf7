#!/usr/bin/env python3
"""
Run a Gray-Scott reaction-diffusion simulation and export frames.

With no arguments this reproduces the reference run: a 600x600 grid seeded
with a disc of radius 20, 10000 iterations, a BMP frame every 200
iterations (Output0.bmp, Output200.bmp, ..., Output10000.bmp).

Usage:
    python scripts/run_simulation.py
    python scripts/run_simulation.py --width 200 --height 200 --iterations 2000 -o output/small
    python scripts/run_simulation.py --pattern maze --extension .png
    python scripts/run_simulation.py --feed-gradient 0.01 0.1 --kill-gradient 0.045 0.07
    python scripts/run_simulation.py --config output/run/config.json
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import time
from pathlib import Path

from src.simulation import (
    SimulationConfig,
    GrayScottParams,
    RateGradient,
    PatternType,
    Simulation,
)
from src.visualization.frames import FrameExporter


def build_config(args) -> SimulationConfig:
    """Build the run config from a JSON file and/or command line flags."""
    if args.config:
        config = SimulationConfig.from_json(args.config)
    else:
        params = GrayScottParams.for_pattern(PatternType(args.pattern))
        if args.feed is not None:
            params.feed = args.feed
        if args.kill is not None:
            params.kill = args.kill
        config = SimulationConfig(
            width=args.width,
            height=args.height,
            iterations=args.iterations,
            snapshot_interval=args.snapshot_interval,
            seed_radius=args.seed_radius,
            params=params,
            feed_gradient=RateGradient(*args.feed_gradient, axis='y') if args.feed_gradient else None,
            kill_gradient=RateGradient(*args.kill_gradient, axis='x') if args.kill_gradient else None,
            output_dir=args.output_dir,
            prefix=args.prefix,
            extension=args.extension,
            template=args.template,
        )
    return config


def main():
    parser = argparse.ArgumentParser(
        description="Gray-Scott reaction-diffusion simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('--config', '-c', type=str, default=None,
                        help='Load the run configuration from a JSON file (other run flags are ignored)')
    parser.add_argument('--width', type=int, default=600, help='Grid width')
    parser.add_argument('--height', type=int, default=600, help='Grid height')
    parser.add_argument('--iterations', '-n', type=int, default=10000,
                        help='Total number of iterations')
    parser.add_argument('--snapshot-interval', type=int, default=200,
                        help='Export a frame every N iterations')
    parser.add_argument('--seed-radius', type=int, default=20,
                        help='Radius of the activated seed disc')
    parser.add_argument('--pattern', type=str, default='default',
                        choices=[p.value for p in PatternType],
                        help='Feed/kill preset')
    parser.add_argument('--feed', type=float, default=None, help='Override the feed rate')
    parser.add_argument('--kill', type=float, default=None, help='Override the kill rate')
    parser.add_argument('--feed-gradient', type=float, nargs=2, metavar=('MIN', 'MAX'),
                        default=None, help='Vary the feed rate linearly along y')
    parser.add_argument('--kill-gradient', type=float, nargs=2, metavar=('MIN', 'MAX'),
                        default=None, help='Vary the kill rate linearly along x')
    parser.add_argument('--output-dir', '-o', type=str, default='.',
                        help='Directory for exported frames')
    parser.add_argument('--prefix', type=str, default='Output', help='Frame file name prefix')
    parser.add_argument('--extension', type=str, default='.bmp',
                        help='Frame file extension (selects the image format)')
    parser.add_argument('--template', type=str, default=None,
                        help='Image used as the initial canvas, must match the grid size')
    parser.add_argument('--engine', type=str, default='vectorized',
                        choices=['vectorized', 'reference'],
                        help='Whole-grid numpy step or per-cell reference step')
    parser.add_argument('--save-config', action='store_true',
                        help='Write config.json into the output directory')
    parser.add_argument('--continue-on-export-error', action='store_true',
                        help='Warn and keep going when a frame cannot be written')
    parser.add_argument('--quiet', '-q', action='store_true', help='No progress output')

    args = parser.parse_args()
    verbose = not args.quiet

    config = build_config(args)
    if args.save_config:
        path = config.save_json(Path(config.output_dir) / 'config.json')
        if verbose:
            print(f"Saved config to {path}")

    exporter = FrameExporter.from_config(config, verbose=False)
    sim = Simulation(config, exporter,
                     engine=args.engine,
                     continue_on_export_error=args.continue_on_export_error,
                     verbose=verbose)

    start = time.time()
    sim.run()
    elapsed = time.time() - start

    if verbose:
        print(f"Exported {len(sim.exported)} frames to {Path(config.output_dir).resolve()} "
              f"in {elapsed:.1f}s")
        if sim.failed_exports:
            print(f"{len(sim.failed_exports)} frames failed to export")
    print("Simulation finished!")


if __name__ == "__main__":
    main()

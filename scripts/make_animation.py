#!/usr/bin/env python3
"""
Assemble exported simulation frames into an animated GIF.

Usage:
    python scripts/make_animation.py output/run
    python scripts/make_animation.py output/run --prefix Output --extension .bmp -o run.gif
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
from pathlib import Path

from src.visualization.animation import collect_frames, frames_to_gif


def main():
    parser = argparse.ArgumentParser(
        description="Build a GIF from exported frames",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('frames_dir', type=str, help='Directory holding the frames')
    parser.add_argument('--prefix', type=str, default='Output', help='Frame file name prefix')
    parser.add_argument('--extension', type=str, default='.bmp', help='Frame file extension')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='GIF path (default: <frames_dir>/animation.gif)')
    parser.add_argument('--duration', type=int, default=100, help='Milliseconds per frame')
    args = parser.parse_args()

    paths = collect_frames(args.frames_dir, args.prefix, args.extension)
    if not paths:
        print(f"No frames matching {args.prefix}*{args.extension} in {args.frames_dir}")
        sys.exit(1)

    output = args.output or Path(args.frames_dir) / 'animation.gif'
    print(f"Animating {len(paths)} frames ({paths[0].name} .. {paths[-1].name})")
    path = frames_to_gif(paths, output, duration_ms=args.duration)
    print(f"Saved animation to {path}")


if __name__ == "__main__":
    main()

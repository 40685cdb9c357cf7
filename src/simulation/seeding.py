"""
Initial state: background (a, b) = (1, 0) with a disc of (0, 1) at the center.
"""

import numpy as np

from .errors import ConfigurationError
from .grid import Grid


def within_distance_of_center(grid: Grid, radius: int) -> np.ndarray:
    """
    Boolean mask of cells strictly closer than `radius` to the grid center.

    The center is (width // 2, height // 2). Squared integer distances are
    compared, so cells exactly on the circle are outside.
    """
    cx, cy = grid.width // 2, grid.height // 2
    y, x = np.ogrid[:grid.height, :grid.width]
    return (x - cx)**2 + (y - cy)**2 < radius**2


def seed_grid(grid: Grid, radius: int):
    """Reset `grid` to the background state and plant the central seed."""
    if radius < 0:
        raise ConfigurationError(f"Seed radius must be >= 0, got {radius}")
    mask = within_distance_of_center(grid, radius)
    grid.fill(1.0, 0.0)
    grid.a[mask] = 0.0
    grid.b[mask] = 1.0

"""
Gray-Scott reaction-diffusion update.

Equations (forward Euler, one step of size dt):
    a' = a + (Da * lap(a) - a*b*b + f * (1 - a)) * dt
    b' = b + (Db * lap(b) + a*b*b - (k + f) * b) * dt

where lap() is the neighbor stencil from `stencil.py`, f the feed rate and
k the kill rate at the cell's position. Concentrations are not clamped.

The step is stable only for small enough dt relative to the rates; the
default parameters are stable at dt = 1.
"""

from typing import Optional

import numpy as np

from .config import GrayScottParams
from .grid import Grid, Cell
from .rates import RatePolicy, ConstantRate
from .stencil import difference_from_neighbors, weighted_laplacian


class GrayScottStep:
    """
    Applies one Gray-Scott step, per cell or over a whole grid.

    Rate fields and scratch arrays are built lazily for a given grid shape
    and reused across steps.
    """

    def __init__(self,
                 params: GrayScottParams,
                 feed_rate: Optional[RatePolicy] = None,
                 kill_rate: Optional[RatePolicy] = None):
        self.params = params
        self.feed_rate = feed_rate if feed_rate is not None else ConstantRate(params.feed)
        self.kill_rate = kill_rate if kill_rate is not None else ConstantRate(params.kill)
        self._shape = None
        self._feed_field = None
        self._kill_field = None
        self._lap_a = None
        self._lap_b = None

    def next_value(self, grid: Grid, x: int, y: int) -> Cell:
        """New state of cell (x, y), computed only from `grid`."""
        p = self.params
        cell = grid.cell(x, y)
        difference = difference_from_neighbors(grid, x, y, p.adjacent_weight, p.diagonal_weight)
        reaction = cell.a * cell.b * cell.b
        feed = self.feed_rate(x, y)
        kill = self.kill_rate(x, y)

        return Cell(
            cell.a + (p.diffusion_a * difference.a - reaction + feed * (1 - cell.a)) * p.time_step,
            cell.b + (p.diffusion_b * difference.b + reaction - (kill + feed) * cell.b) * p.time_step,
        )

    def update_grid(self, source: Grid, destination: Grid):
        """Write the next state of every cell of `source` into `destination`."""
        _check_pair(source, destination)
        self._prepare(source.shape)
        p = self.params
        a, b = source.a, source.b

        lap_a = weighted_laplacian(a, p.adjacent_weight, p.diagonal_weight, out=self._lap_a)
        lap_b = weighted_laplacian(b, p.adjacent_weight, p.diagonal_weight, out=self._lap_b)
        reaction = a * b * b

        da = p.diffusion_a * lap_a - reaction + self._feed_field * (1 - a)
        db = p.diffusion_b * lap_b + reaction - (self._kill_field + self._feed_field) * b

        np.add(a, da * p.time_step, out=destination.a)
        np.add(b, db * p.time_step, out=destination.b)

    def update_grid_reference(self, source: Grid, destination: Grid):
        """Same as `update_grid`, one `next_value` call per cell."""
        _check_pair(source, destination)
        for x in range(source.width):
            for y in range(source.height):
                destination.set_cell(x, y, self.next_value(source, x, y))

    def _prepare(self, shape):
        if shape == self._shape:
            return
        height, width = shape
        self._feed_field = self.feed_rate.as_field(width, height)
        self._kill_field = self.kill_rate.as_field(width, height)
        self._lap_a = np.empty(shape)
        self._lap_b = np.empty(shape)
        self._shape = shape


def _check_pair(source: Grid, destination: Grid):
    if source is destination:
        raise ValueError("Source and destination must be different grids")
    if source.shape != destination.shape:
        raise ValueError(f"Shape mismatch: {source.shape} vs {destination.shape}")


def next_value(grid: Grid,
               x: int,
               y: int,
               params: Optional[GrayScottParams] = None,
               feed_rate: Optional[RatePolicy] = None,
               kill_rate: Optional[RatePolicy] = None) -> Cell:
    """
    Convenience function computing the next state of a single cell.

    Args:
        grid: Current (read-only) grid
        x, y: Cell position
        params: Model parameters, reference values if omitted
        feed_rate: Feed rate policy, constant `params.feed` if omitted
        kill_rate: Kill rate policy, constant `params.kill` if omitted

    Returns:
        The new Cell
    """
    step = GrayScottStep(params or GrayScottParams(), feed_rate, kill_rate)
    return step.next_value(grid, x, y)

"""
Cell grid for the reaction-diffusion simulation.

A Grid stores the two concentrations as separate float arrays of shape
(height, width). Arrays are row-major, so the flat position of cell (x, y)
is x + y * width; `Grid.index` is the single definition of that mapping and
`array.flat[index]` always addresses the same cell as `array[y, x]`.
"""

from dataclasses import dataclass

import numpy as np

from .errors import ConfigurationError


@dataclass
class Cell:
    """Concentrations of substrate `a` and activator `b` at one position."""
    a: float = 0.0
    b: float = 0.0


class Grid:
    """Fixed-size 2D field of cells."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.a = np.zeros((height, width))
        self.b = np.zeros((height, width))

    @property
    def shape(self):
        return (self.height, self.width)

    def __len__(self):
        return self.width * self.height

    def index(self, x: int, y: int) -> int:
        return x + y * self.width

    def is_within_grid(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        i = self.index(x, y)
        return Cell(float(self.a.flat[i]), float(self.b.flat[i]))

    def set_cell(self, x: int, y: int, cell: Cell):
        i = self.index(x, y)
        self.a.flat[i] = cell.a
        self.b.flat[i] = cell.b

    def fill(self, a: float, b: float):
        self.a.fill(a)
        self.b.fill(b)

    def copy_from(self, other: 'Grid'):
        if other.shape != self.shape:
            raise ValueError(f"Shape mismatch: {other.shape} vs {self.shape}")
        np.copyto(self.a, other.a)
        np.copyto(self.b, other.b)

    def __repr__(self):
        return f"Grid({self.width}x{self.height})"

"""
Discrete Laplacian by weighted neighbor sampling.

For a cell (x, y) the stencil sums the 8 surrounding cells, orthogonal ones
weighted by `adjacent_weight` and diagonal ones by `diagonal_weight`, and
subtracts the cell itself:

    [ d  w  d ]
    [ w -1  w ]
    [ d  w  d ]

Neighbors outside the grid are omitted from the sum. With the reference
weights (w=0.2, d=0.05) the weights of an interior cell sum to zero, but at
edges and corners they do not, so the boundary is not a true zero-flux
(Neumann) boundary. Simulations depend on this exact behavior.

Two forms are provided: `difference_from_neighbors` for a single cell, and
`weighted_laplacian` for a whole field. The whole-field form uses a
convolution with zero padding, which contributes nothing for out-of-grid
neighbors and therefore matches the per-cell form exactly.
"""

from typing import List, Optional, Tuple

import numpy as np
from scipy.ndimage import convolve

from .grid import Grid, Cell


NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def is_adjacent(dx: int, dy: int) -> bool:
    """True for orthogonal offsets, False for diagonal ones."""
    return dx == 0 or dy == 0


def neighbor_offsets(grid: Grid, x: int, y: int) -> List[Tuple[int, int]]:
    """Offsets of the neighbors of (x, y) that lie inside the grid."""
    return [(dx, dy) for dx, dy in NEIGHBOR_OFFSETS
            if grid.is_within_grid(x + dx, y + dy)]


def difference_from_neighbors(grid: Grid,
                              x: int,
                              y: int,
                              adjacent_weight: float,
                              diagonal_weight: float) -> Cell:
    """
    Weighted sum of the in-grid neighbors of (x, y) minus the cell itself.

    The result is not yet scaled by a diffusion coefficient.
    """
    center = grid.cell(x, y)
    difference = Cell(-center.a, -center.b)

    for dx, dy in neighbor_offsets(grid, x, y):
        neighbor = grid.cell(x + dx, y + dy)
        weight = adjacent_weight if is_adjacent(dx, dy) else diagonal_weight
        difference.a += weight * neighbor.a
        difference.b += weight * neighbor.b

    return difference


def stencil_kernel(adjacent_weight: float, diagonal_weight: float) -> np.ndarray:
    """3x3 convolution kernel of the stencil."""
    w, d = adjacent_weight, diagonal_weight
    return np.array([
        [d, w, d],
        [w, -1.0, w],
        [d, w, d]
    ])


def weighted_laplacian(field: np.ndarray,
                       adjacent_weight: float,
                       diagonal_weight: float,
                       out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Apply the stencil to every cell of a 2D field.

    Args:
        field: Concentration array of shape (height, width)
        adjacent_weight: Weight of orthogonal neighbors
        diagonal_weight: Weight of diagonal neighbors
        out: Optional preallocated output array of the same shape

    Returns:
        Array of per-cell neighbor differences
    """
    kernel = stencil_kernel(adjacent_weight, diagonal_weight)
    if out is None:
        return convolve(field, kernel, mode='constant', cval=0.0)
    convolve(field, kernel, output=out, mode='constant', cval=0.0)
    return out

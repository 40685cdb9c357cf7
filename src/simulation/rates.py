"""
Position-dependent feed and kill rates.

The reaction step asks a policy for the rate at each (x, y). The reference
run uses the same constant everywhere; a linear gradient across one axis
sweeps the (feed, kill) plane over the image, which is a cheap way to see
many pattern regimes in a single frame.
"""

import numpy as np


class RatePolicy:
    """Rate as a pure function of grid position."""

    def __call__(self, x: int, y: int) -> float:
        raise NotImplementedError

    def as_field(self, width: int, height: int) -> np.ndarray:
        """Evaluate the policy for every cell, shape (height, width)."""
        field = np.empty((height, width))
        for y in range(height):
            for x in range(width):
                field[y, x] = self(x, y)
        return field


class ConstantRate(RatePolicy):
    """Same rate at every position."""

    def __init__(self, value: float):
        self.value = float(value)

    def __call__(self, x: int, y: int) -> float:
        return self.value

    def as_field(self, width: int, height: int) -> np.ndarray:
        return np.full((height, width), self.value)

    def __repr__(self):
        return f"ConstantRate({self.value})"


class LinearGradientRate(RatePolicy):
    """
    Rate growing linearly from `minimum` at coordinate 0 along `axis`
    towards `maximum` at coordinate `extent`.
    """

    def __init__(self, minimum: float, maximum: float, axis: str, extent: int):
        if axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        self.minimum = float(minimum)
        self.maximum = float(maximum)
        self.axis = axis
        self.extent = extent

    def __call__(self, x: int, y: int) -> float:
        coord = x if self.axis == "x" else y
        return (coord / self.extent) * (self.maximum - self.minimum) + self.minimum

    def as_field(self, width: int, height: int) -> np.ndarray:
        if self.axis == "x":
            coords = np.arange(width)[np.newaxis, :] * np.ones((height, 1))
        else:
            coords = np.arange(height)[:, np.newaxis] * np.ones((1, width))
        return (coords / self.extent) * (self.maximum - self.minimum) + self.minimum

    def __repr__(self):
        return (f"LinearGradientRate({self.minimum}, {self.maximum}, "
                f"axis={self.axis!r}, extent={self.extent})")

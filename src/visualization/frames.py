"""
Color mapping and frame export.

Each cell is colored by the fraction of activator t = b / (a + b), linearly
interpolated between two endpoint colors:

    channel = color_a.channel + trunc((color_b.channel - color_a.channel) * t)

The interpolation term is truncated toward zero, not rounded, and the result
is stored as a byte. Cells with a + b == 0 have no defined ratio and are not
drawn at all: the pixel keeps whatever the canvas held before (the template
image, a fill value, or the previous frame).

Frames are written with Pillow. The canvas is indexed [row, column] with
row = y and column = x.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image

from src.simulation.errors import ConfigurationError, ExportError
from src.simulation.grid import Grid, Cell


Color = Tuple[int, int, int]


def to_color(cell: Cell, color_a: Color, color_b: Color) -> Optional[Color]:
    """
    Color of a single cell, or None when a + b == 0.
    """
    denominator = cell.a + cell.b
    if denominator == 0:
        return None
    t = cell.b / denominator
    return tuple((ca + int((cb - ca) * t)) % 256 for ca, cb in zip(color_a, color_b))


def render_frame(grid: Grid, canvas: np.ndarray, color_a: Color, color_b: Color) -> np.ndarray:
    """
    Draw every cell with a defined ratio onto `canvas` in place.

    Args:
        grid: Grid to render
        canvas: uint8 array of shape (height, width, 3)
        color_a: Color at t = 0 (pure substrate)
        color_b: Color at t = 1 (pure activator)

    Returns:
        The canvas
    """
    if canvas.shape != (grid.height, grid.width, 3):
        raise ValueError(f"Canvas shape {canvas.shape} does not match {grid}")

    denominator = grid.a + grid.b
    drawn = denominator != 0
    t = np.divide(grid.b, denominator, out=np.zeros_like(denominator), where=drawn)

    ca = np.asarray(color_a, dtype=np.int64)
    cb = np.asarray(color_b, dtype=np.int64)
    channels = ca + np.trunc((cb - ca) * t[..., np.newaxis]).astype(np.int64)
    canvas[drawn] = (channels[drawn] % 256).astype(np.uint8)
    return canvas


def frame_filename(prefix: str, label: int, extension: str) -> str:
    """File name of a frame: prefix + label + extension, e.g. Output200.bmp."""
    return f"{prefix}{label}{extension}"


def load_template(path: Union[str, Path]) -> np.ndarray:
    """Load an image as an RGB uint8 array of shape (height, width, 3)."""
    with Image.open(path) as img:
        return np.array(img.convert('RGB'), dtype=np.uint8)


class FrameExporter:
    """
    Renders grids onto a persistent canvas and writes them as image files.

    The canvas is created once and reused, so pixels that are skipped in one
    frame keep the content of the template or an earlier frame.
    """

    def __init__(self,
                 width: int,
                 height: int,
                 color_a: Color = (0, 0, 0),
                 color_b: Color = (50, 230, 255),
                 output_dir: Union[str, Path] = ".",
                 prefix: str = "Output",
                 extension: str = ".bmp",
                 template: Optional[Union[str, Path]] = None,
                 fill_value: int = 0,
                 verbose: bool = False):
        """
        Args:
            width, height: Grid size, the authority on frame dimensions
            color_a, color_b: Interpolation endpoints
            output_dir: Directory frames are written to
            prefix: File name prefix
            extension: File extension, also selects the image format
            template: Optional image providing the initial canvas
            fill_value: Initial canvas value when no template is given
            verbose: Print a line per written frame
        """
        self.width = width
        self.height = height
        self.color_a = tuple(color_a)
        self.color_b = tuple(color_b)
        self.output_dir = Path(output_dir)
        self.prefix = prefix
        self.extension = extension
        self.verbose = verbose

        if template is not None:
            canvas = load_template(template)
            if canvas.shape[:2] != (height, width):
                raise ConfigurationError(
                    f"Template {template} is {canvas.shape[1]}x{canvas.shape[0]}, "
                    f"expected {width}x{height}")
            self.canvas = canvas
        else:
            self.canvas = np.full((height, width, 3), fill_value, dtype=np.uint8)

    @classmethod
    def from_config(cls, config, verbose: bool = False) -> 'FrameExporter':
        return cls(config.width, config.height,
                   color_a=config.color_a,
                   color_b=config.color_b,
                   output_dir=config.output_dir,
                   prefix=config.prefix,
                   extension=config.extension,
                   template=config.template,
                   verbose=verbose)

    def path_for(self, label: int) -> Path:
        return self.output_dir / frame_filename(self.prefix, label, self.extension)

    def render(self, grid: Grid) -> np.ndarray:
        return render_frame(grid, self.canvas, self.color_a, self.color_b)

    def export(self, grid: Grid, label: int) -> Path:
        """Render `grid` and write it to `<output_dir>/<prefix><label><extension>`."""
        self.render(grid)
        path = self.path_for(label)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(self.canvas).save(path)
        except (OSError, ValueError) as e:
            raise ExportError(path, e) from e
        if self.verbose:
            print(f"  Saved frame {label} to {path}")
        return path

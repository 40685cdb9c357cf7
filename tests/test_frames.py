#!/usr/bin/env python3
"""
Tests for color mapping, frame export and frame sequence tooling.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import numpy as np
from PIL import Image

from src.simulation.errors import ConfigurationError, ExportError
from src.simulation.grid import Grid, Cell
from src.visualization.frames import (
    FrameExporter,
    to_color,
    render_frame,
    frame_filename,
    load_template,
)
from src.visualization.animation import collect_frames, frames_to_gif, frame_label


COLOR_A = (0, 0, 0)
COLOR_B = (50, 230, 255)
SENTINEL = 77


@pytest.fixture
def canvas():
    return np.full((3, 4, 3), SENTINEL, dtype=np.uint8)


@pytest.fixture
def background_grid():
    grid = Grid(4, 3)
    grid.fill(1.0, 0.0)
    return grid


class TestColorMapping:

    def test_endpoints(self):
        assert to_color(Cell(0.0, 1.0), COLOR_A, COLOR_B) == COLOR_B
        assert to_color(Cell(1.0, 0.0), COLOR_A, COLOR_B) == COLOR_A

    def test_zero_denominator(self):
        assert to_color(Cell(0.0, 0.0), COLOR_A, COLOR_B) is None

    def test_truncates(self):
        # t = 0.5 -> 25, 115, 127.5
        assert to_color(Cell(0.5, 0.5), COLOR_A, COLOR_B) == (25, 115, 127)
        # t = 0.25 -> 12.5, 57.5, 63.75
        assert to_color(Cell(3.0, 1.0), COLOR_A, COLOR_B) == (12, 57, 63)

    def test_descending_channels_truncate_toward_zero(self):
        # (0 - 255) * 0.5 = -127.5 -> -127
        assert to_color(Cell(1.0, 1.0), (255, 255, 255), (0, 0, 0)) == (128, 128, 128)

    def test_drifted_values_wrap_to_a_byte(self):
        # t = 2 -> 100, 460, 510
        assert to_color(Cell(-1.0, 2.0), COLOR_A, COLOR_B) == (100, 460 % 256, 510 % 256)


class TestRenderFrame:

    def test_background(self, background_grid, canvas):
        render_frame(background_grid, canvas, COLOR_A, COLOR_B)
        assert np.all(canvas == 0)

    def test_row_is_y_column_is_x(self, background_grid, canvas):
        background_grid.set_cell(3, 1, Cell(0.0, 1.0))
        render_frame(background_grid, canvas, COLOR_A, COLOR_B)
        assert tuple(canvas[1, 3]) == COLOR_B
        assert tuple(canvas[0, 1]) == COLOR_A
        assert np.count_nonzero(canvas.any(axis=2)) == 1

    def test_zero_denominator_left_unwritten(self, background_grid, canvas):
        background_grid.set_cell(2, 0, Cell(0.0, 0.0))
        render_frame(background_grid, canvas, COLOR_A, COLOR_B)
        assert tuple(canvas[0, 2]) == (SENTINEL,) * 3
        assert tuple(canvas[0, 1]) == COLOR_A

    def test_matches_per_cell_mapping(self, canvas):
        rng = np.random.default_rng(7)
        grid = Grid(4, 3)
        grid.a[:] = rng.uniform(-0.2, 1.2, grid.shape)
        grid.b[:] = rng.uniform(-0.2, 1.2, grid.shape)
        grid.set_cell(0, 0, Cell(0.0, 0.0))
        render_frame(grid, canvas, COLOR_A, COLOR_B)

        for x in range(4):
            for y in range(3):
                color = to_color(grid.cell(x, y), COLOR_A, COLOR_B)
                if color is None:
                    assert tuple(canvas[y, x]) == (SENTINEL,) * 3
                else:
                    assert tuple(canvas[y, x]) == color

    def test_canvas_shape_checked(self, background_grid):
        with pytest.raises(ValueError):
            render_frame(background_grid, np.zeros((4, 3, 3), dtype=np.uint8), COLOR_A, COLOR_B)


class TestFrameExporter:

    def test_filename(self):
        assert frame_filename("Output", 0, ".bmp") == "Output0.bmp"
        assert frame_filename("Output", 200, ".bmp") == "Output200.bmp"
        assert frame_filename("run_", 10000, ".png") == "run_10000.png"

    def test_export_writes_image(self, tmp_path, background_grid):
        background_grid.set_cell(3, 1, Cell(0.0, 1.0))
        exporter = FrameExporter(4, 3, COLOR_A, COLOR_B, output_dir=tmp_path)
        path = exporter.export(background_grid, 200)

        assert path == tmp_path / "Output200.bmp"
        with Image.open(path) as img:
            assert img.size == (4, 3)
            assert img.getpixel((3, 1)) == COLOR_B
            assert img.getpixel((0, 0)) == COLOR_A

    def test_canvas_persists_between_frames(self, tmp_path, background_grid):
        exporter = FrameExporter(4, 3, COLOR_A, COLOR_B, output_dir=tmp_path, extension=".png")
        background_grid.set_cell(1, 1, Cell(0.0, 1.0))
        exporter.export(background_grid, 0)

        background_grid.set_cell(1, 1, Cell(0.0, 0.0))
        path = exporter.export(background_grid, 1)
        with Image.open(path) as img:
            assert img.getpixel((1, 1)) == COLOR_B

    def test_template_is_initial_canvas(self, tmp_path, background_grid):
        template = tmp_path / "blank.bmp"
        Image.new("RGB", (4, 3), (7, 7, 7)).save(template)
        np.testing.assert_array_equal(load_template(template), np.full((3, 4, 3), 7))

        background_grid.set_cell(0, 2, Cell(0.0, 0.0))
        exporter = FrameExporter(4, 3, COLOR_A, COLOR_B, output_dir=tmp_path, template=template)
        path = exporter.export(background_grid, 0)
        with Image.open(path) as img:
            assert img.getpixel((0, 2)) == (7, 7, 7)
            assert img.getpixel((1, 2)) == COLOR_A

    def test_template_size_mismatch(self, tmp_path):
        template = tmp_path / "blank.bmp"
        Image.new("RGB", (5, 3)).save(template)
        with pytest.raises(ConfigurationError):
            FrameExporter(4, 3, template=template)

    def test_write_failure_raises_export_error(self, tmp_path, background_grid):
        exporter = FrameExporter(4, 3, output_dir=tmp_path, extension=".notaformat")
        with pytest.raises(ExportError) as info:
            exporter.export(background_grid, 0)
        assert info.value.path == tmp_path / "Output0.notaformat"


class TestFrameSequence:

    def _write_frames(self, directory, labels):
        for label in labels:
            Image.new("RGB", (4, 3), (label % 256, 0, 0)).save(directory / f"Output{label}.bmp")

    def test_frame_label(self):
        assert frame_label("Output200.bmp") == 200
        assert frame_label("out/Output0.bmp") == 0
        assert frame_label("Output.bmp") is None
        assert frame_label("Output12.png") is None

    def test_collect_frames_numeric_order(self, tmp_path):
        self._write_frames(tmp_path, [1000, 0, 200, 10000, 400])
        (tmp_path / "notes.txt").write_text("not a frame")
        names = [p.name for p in collect_frames(tmp_path)]
        assert names == ["Output0.bmp", "Output200.bmp", "Output400.bmp",
                         "Output1000.bmp", "Output10000.bmp"]

    def test_frames_to_gif(self, tmp_path):
        self._write_frames(tmp_path, [0, 200, 400])
        path = frames_to_gif(collect_frames(tmp_path), tmp_path / "anim" / "run.gif")
        with Image.open(path) as img:
            assert img.n_frames == 3

    def test_frames_to_gif_empty(self, tmp_path):
        with pytest.raises(ValueError):
            frames_to_gif([], tmp_path / "run.gif")

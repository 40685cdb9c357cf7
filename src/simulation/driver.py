"""
Simulation driver: ping-pong buffering, iteration loop and snapshots.

Every cell's update reads its neighbors' previous values, so a step can
never write into the grid it reads. The driver owns exactly two grids and
alternates their roles by iteration parity:

    even iteration: read slot 0, write slot 1
    odd iteration:  read slot 1, write slot 0

Each iteration performs one full step. When the iteration number is a
multiple of the snapshot interval, the grid just written is exported with
the iteration number as label. After the last iteration the grid that is
current under the final parity is exported with the total iteration count
as label, so a 10000-iteration run with interval 200 writes frames
0, 200, ..., 9800 and 10000.
"""

import threading
from enum import Enum
from typing import Optional, Tuple, List

from tqdm import tqdm

from .config import SimulationConfig
from .errors import ExportError, SimulationStateError
from .grid import Grid
from .reaction import GrayScottStep
from .seeding import seed_grid


class SimulationState(Enum):
    SEEDED = "seeded"
    STEPPING = "stepping"
    FINISHED = "finished"
    CANCELLED = "cancelled"


ENGINES = ('vectorized', 'reference')


def slots_for(iteration: int) -> Tuple[int, int]:
    """(read, write) buffer slots for a raw iteration number."""
    return (0, 1) if iteration % 2 == 0 else (1, 0)


class Simulation:
    """
    Runs a Gray-Scott simulation and hands snapshots to an exporter.

    The exporter is any object with an `export(grid, label)` method, usually
    a `src.visualization.frames.FrameExporter`. Passing None runs the
    simulation without writing anything.
    """

    def __init__(self,
                 config: SimulationConfig,
                 exporter=None,
                 engine: str = 'vectorized',
                 cancel_event: Optional[threading.Event] = None,
                 continue_on_export_error: bool = False,
                 verbose: bool = False):
        """
        Args:
            config: Run configuration
            exporter: Receives snapshots via export(grid, label)
            engine: 'vectorized' (whole-grid numpy) or 'reference' (per cell)
            cancel_event: Checked between iterations, stops the run when set
            continue_on_export_error: Print and record failed exports instead
                of raising
            verbose: Print progress information
        """
        if engine not in ENGINES:
            raise ValueError(f"Unknown engine: {engine}. Valid: {ENGINES}")

        self.config = config
        self.exporter = exporter
        self.engine = engine
        self.cancel_event = cancel_event
        self.continue_on_export_error = continue_on_export_error
        self.verbose = verbose

        self.step = GrayScottStep(config.params, config.feed_policy(), config.kill_policy())
        self.buffers: List[Grid] = [Grid(config.width, config.height),
                                    Grid(config.width, config.height)]
        seed_grid(self.buffers[0], config.seed_radius)

        self.iteration = 0
        self.state = SimulationState.SEEDED
        self.exported: List[int] = []
        self.failed_exports: List[ExportError] = []

    @property
    def current_grid(self) -> Grid:
        """Grid holding the most recently computed state."""
        read, _ = slots_for(self.iteration)
        return self.buffers[read]

    def advance(self):
        """Perform one iteration: step, then snapshot if due."""
        read, write = slots_for(self.iteration)
        source, destination = self.buffers[read], self.buffers[write]

        if self.engine == 'vectorized':
            self.step.update_grid(source, destination)
        else:
            self.step.update_grid_reference(source, destination)

        if self.iteration % self.config.snapshot_interval == 0:
            self._export(destination, self.iteration)
        self.iteration += 1

    def run(self) -> Grid:
        """
        Run all configured iterations and the final export.

        Returns:
            The final grid
        """
        if self.state != SimulationState.SEEDED:
            raise SimulationStateError(f"Simulation already {self.state.value}")

        total = self.config.iterations
        if self.verbose:
            print(f"Simulating {self.config.width}x{self.config.height} grid "
                  f"for {total} iterations ({self.engine})...")

        self.state = SimulationState.STEPPING
        for _ in tqdm(range(total), desc="Simulating", disable=not self.verbose):
            if self.cancel_event is not None and self.cancel_event.is_set():
                self.state = SimulationState.CANCELLED
                if self.verbose:
                    print(f"  Cancelled at iteration {self.iteration}/{total}")
                return self.current_grid
            self.advance()

        final = self.buffers[total % 2]
        self._export(final, total)
        self.state = SimulationState.FINISHED
        return final

    def _export(self, grid: Grid, label: int):
        if self.exporter is None:
            return
        try:
            self.exporter.export(grid, label)
        except ExportError as e:
            if not self.continue_on_export_error:
                raise
            print(f"  Warning: {e}")
            self.failed_exports.append(e)
            return
        self.exported.append(label)


def run_simulation(config: SimulationConfig,
                   exporter=None,
                   engine: str = 'vectorized',
                   verbose: bool = False,
                   **kwargs) -> Grid:
    """
    Convenience function to run a whole simulation.

    When no exporter is given, frames are written with a FrameExporter built
    from the config.

    Returns:
        The final grid
    """
    if exporter is None:
        from src.visualization.frames import FrameExporter
        exporter = FrameExporter.from_config(config, verbose=verbose)
    sim = Simulation(config, exporter, engine=engine, verbose=verbose, **kwargs)
    return sim.run()

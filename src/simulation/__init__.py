from .config import GrayScottParams, SimulationConfig, RateGradient, PatternType
from .errors import SimulationError, ConfigurationError, SimulationStateError, ExportError
from .grid import Grid, Cell
from .rates import RatePolicy, ConstantRate, LinearGradientRate
from .stencil import difference_from_neighbors, neighbor_offsets, weighted_laplacian
from .reaction import GrayScottStep, next_value
from .seeding import seed_grid, within_distance_of_center
from .driver import Simulation, SimulationState, run_simulation, slots_for

__all__ = [
    # Configuration
    'GrayScottParams',
    'SimulationConfig',
    'RateGradient',
    'PatternType',
    # Errors
    'SimulationError',
    'ConfigurationError',
    'SimulationStateError',
    'ExportError',
    # Grid and rates
    'Grid',
    'Cell',
    'RatePolicy',
    'ConstantRate',
    'LinearGradientRate',
    # Numerics
    'difference_from_neighbors',
    'neighbor_offsets',
    'weighted_laplacian',
    'GrayScottStep',
    'next_value',
    'seed_grid',
    'within_distance_of_center',
    # Driver
    'Simulation',
    'SimulationState',
    'run_simulation',
    'slots_for',
]

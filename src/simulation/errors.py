"""
Exceptions raised by the reaction-diffusion engine and its exporters.
"""


class SimulationError(Exception):
    """Base class for all simulation errors."""


class ConfigurationError(SimulationError, ValueError):
    """Raised when a grid, parameter bundle or template is invalid."""


class SimulationStateError(SimulationError, RuntimeError):
    """Raised when the driver is used outside its allowed lifecycle."""


class ExportError(SimulationError):
    """Raised when a frame could not be written to disk."""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to export frame to {path}: {cause}")

"""huntsim exception hierarchy.

Centralised base classes so callers can catch narrowly and failures in the
generational loop stay easy to diagnose.
"""


class HuntSimError(Exception):
    """Root of all huntsim domain exceptions."""


class SimulationError(HuntSimError):
    """Errors during simulation execution (scheduler, populations, agents)."""


class InvalidStateError(SimulationError, ValueError):
    """A control-surface call or transition is not valid in the current state."""


class DecisionError(SimulationError):
    """The per-tick decision cycle received inputs it cannot act on."""


class GeneticsError(SimulationError):
    """Genome encoding, decoding, or mutation failure."""


class PersistenceError(HuntSimError):
    """Errors while saving or loading genome artifacts."""


class ConfigurationError(HuntSimError):
    """Invalid or missing configuration."""

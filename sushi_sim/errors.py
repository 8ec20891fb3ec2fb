"""
Error types raised by the simulation engine.

None of these are recovered from inside the engine: a game is one unit of
work and any of them aborts it.
"""


class SushiSimError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(SushiSimError, ValueError):
    """Unsupported seat count, round, menu or card payload."""


class StrategyContractViolation(SushiSimError, RuntimeError):
    """A player returned a card that is not in its hand."""


class InternalInvariantViolation(SushiSimError, RuntimeError):
    """Engine state broke one of its own invariants."""

# rundom/errors.py


class RundomError(Exception):
    """Base class for all errors raised by the rundom core."""


class InvalidArgument(RundomError, ValueError):
    """Raised synchronously for malformed input (radius, batch, coordinates)."""


class InvalidState(RundomError):
    """Raised when a session operation is not allowed in the current state."""


class SamplingExhausted(RundomError):
    """Raised when the rejection sampler could not find a point inside the bubble."""

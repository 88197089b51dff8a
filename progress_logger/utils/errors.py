# progress_logger/utils/errors.py
class ProgressLoggerError(RuntimeError):
    """Base class for all progress_logger errors."""


class PreconditionError(ProgressLoggerError, ValueError):
    """
    Raised when a caller violates an input contract
    (negative number to pretty(), negative increment, NaN ...).
    Fail fast, never render misleading output.
    """


class TrackerStoppedError(ProgressLoggerError):
    """ProgressLogger was already stopped; it must not be used again."""

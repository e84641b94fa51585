"""Common error types for meanforce."""


class MeanForceError(Exception):
    """Base exception class for all meanforce errors."""
    pass


class DegenerateWeightError(MeanForceError, ValueError):
    """Raised when a set of weights sums to zero or less."""
    pass


class EmptyAccumulatorError(MeanForceError):
    """Raised when statistics are requested from an accumulator with no samples."""
    pass


class CorruptedMassTableError(MeanForceError):
    """Raised when a topology file does not hold enough atom records."""
    pass


class TrajectoryFormatError(MeanForceError):
    """Raised when an atom line of a force trajectory cannot be parsed."""
    pass


class TruncatedFrameError(TrajectoryFormatError):
    """Raised when the input ends in the middle of a frame."""
    pass

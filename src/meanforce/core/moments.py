"""
Single-pass mean and variance of scalar quantities over a frame stream.
"""
from dataclasses import dataclass, field
import numpy as np
from typing import Dict, Tuple

from ..errors import EmptyAccumulatorError


@dataclass
class MomentAccumulator:
    """
    Running count, mean and population variance of a scalar.

    Uses Welford's update, so the variance stays accurate after millions of
    samples with a large mean. The plain sum and sum of squares are derived
    on demand.
    """
    count: int = 0
    mean_: float = 0.0
    m2: float = 0.0

    def accumulate(self, value: float) -> None:
        self.count += 1
        delta = value - self.mean_
        self.mean_ += delta / self.count
        self.m2 += delta * (value - self.mean_)

    @property
    def sum(self) -> float:
        return self.mean_ * self.count

    @property
    def sum_squares(self) -> float:
        return self.m2 + self.count * self.mean_**2

    def finalize(self) -> Tuple[float, float]:
        """
        Mean and population variance of the values seen so far.

        Raises:
            EmptyAccumulatorError: If no value has been accumulated
        """
        if self.count == 0:
            raise EmptyAccumulatorError("Cannot compute statistics of an empty accumulator.")
        return self.mean_, max(self.m2 / self.count, 0.0)

    def summary(self) -> Tuple[float, float, int]:
        """(mean, standard deviation, count); NaN statistics when empty."""
        if self.count == 0:
            return float('nan'), float('nan'), 0
        mean, var = self.finalize()
        return mean, float(np.sqrt(var)), self.count

    def merge(self, other: 'MomentAccumulator') -> None:
        """Pool the samples of `other` into this accumulator."""
        if other.count == 0:
            return
        n = self.count + other.count
        delta = other.mean_ - self.mean_
        self.m2 += other.m2 + delta**2 * self.count * other.count / n
        self.mean_ += delta * other.count / n
        self.count = n

    def reset(self) -> None:
        self.count, self.mean_, self.m2 = 0, 0.0, 0.0


QUANTITIES = ('radial_force', 'torque', 'symmetric_torque')


@dataclass
class ForceStatistics:
    radial_force: MomentAccumulator = field(default_factory=MomentAccumulator)
    torque: MomentAccumulator = field(default_factory=MomentAccumulator)
    symmetric_torque: MomentAccumulator = field(default_factory=MomentAccumulator)

    @property
    def count(self) -> int:
        return self.radial_force.count

    def add(self, radial: float, torq: float, symmetric: float) -> None:
        self.radial_force.accumulate(radial)
        self.torque.accumulate(torq)
        self.symmetric_torque.accumulate(symmetric)

    def merge(self, other: 'ForceStatistics') -> None:
        for name in QUANTITIES:
            getattr(self, name).merge(getattr(other, name))

    def reset(self) -> None:
        for name in QUANTITIES:
            getattr(self, name).reset()

    def summary(self) -> Dict[str, Dict[str, float]]:
        out = {}
        for name in QUANTITIES:
            mean, std, count = getattr(self, name).summary()
            out[name] = {'mean': mean, 'std': std, 'count': count}
        return out

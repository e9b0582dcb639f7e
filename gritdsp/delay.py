"""Fractional delay line over a fixed-size circular buffer."""

from __future__ import annotations

import enum
from typing import Sequence


class Interpolation(enum.Enum):
    """How a delay line reads between two stored samples."""

    NONE = "none"
    LINEAR = "linear"
    HERMITE = "hermite"

    def read(self, buffer: Sequence[float], index: int, frac: float) -> float:
        """Read ``buffer`` at ``index + frac``, wrapping around its end."""
        size = len(buffer)
        y0 = buffer[index % size]
        if self is Interpolation.NONE:
            return y0

        y1 = buffer[(index + 1) % size]
        if self is Interpolation.LINEAR:
            return y0 + frac * (y1 - y0)

        ym1 = buffer[(index - 1) % size]
        y2 = buffer[(index + 2) % size]
        c0 = y0
        c1 = 0.5 * (y1 - ym1)
        c2 = ym1 - 2.5 * y0 + 2.0 * y1 - 0.5 * y2
        c3 = 0.5 * (y2 - ym1) + 1.5 * (y0 - y1)
        return ((c3 * frac + c2) * frac + c1) * frac + c0


class DelayLine:
    """Delay line holding up to ``max_delay`` samples.

    A delay of 1 returns the most recently pushed sample.
    """

    def __init__(
        self,
        max_delay: int,
        interpolation: Interpolation = Interpolation.HERMITE,
    ) -> None:
        if max_delay < 1:
            raise ValueError(f"max_delay must be at least 1, got {max_delay}")
        self._buffer = [0.0] * max_delay
        self._interpolation = interpolation
        self._write_pos = 0
        self._delay = 0
        self._frac = 0.0

    @property
    def delay(self) -> float:
        """Current delay in samples, including its fractional part."""
        return self._delay + self._frac

    @delay.setter
    def delay(self, delay_in_samples: float) -> None:
        if delay_in_samples < 0:
            raise ValueError(f"delay must not be negative, got {delay_in_samples}")
        whole = int(delay_in_samples)
        self._frac = delay_in_samples - whole
        self._delay = min(whole, len(self._buffer) - 1)

    def push(self, sample: float) -> None:
        """Write one sample into the line."""
        size = len(self._buffer)
        self._buffer[self._write_pos] = sample
        self._write_pos = (self._write_pos - 1) % size

    def pop(self) -> float:
        """Read the sample at the current delay."""
        read_pos = self._write_pos + self._delay
        return self._interpolation.read(self._buffer, read_pos, self._frac)

    def reset(self) -> None:
        """Clear the stored samples."""
        self._write_pos = 0
        self._buffer = [0.0] * len(self._buffer)
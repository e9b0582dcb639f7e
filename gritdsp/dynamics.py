"""Gain computers, level detection, compressors and a transient shaper."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

from .envelope import EnvelopeFollower, FollowerParameter

MINUS_INFINITY_DB = -100.0


def to_decibels(gain: float) -> float:
    """Convert a linear gain to decibels, flooring silence at MINUS_INFINITY_DB."""
    if gain <= 0.0:
        return MINUS_INFINITY_DB
    return max(MINUS_INFINITY_DB, 20.0 * math.log10(gain))


def from_decibels(db: float) -> float:
    """Convert decibels to a linear gain."""
    return 10.0 ** (db / 20.0)


@dataclass(frozen=True)
class GainComputerParameter:
    """Threshold and knee in decibels, plus a compression ratio."""

    threshold: float = 0.0
    knee: float = 0.0
    ratio: float = 1.0


class HardKneeGainComputer:
    """Static gain curve with an abrupt transition at the threshold."""

    def __init__(self) -> None:
        self._threshold = 0.0
        self._ratio = 1.0

    def set_parameter(self, parameter: GainComputerParameter) -> None:
        self._threshold = parameter.threshold
        self._ratio = parameter.ratio

    def __call__(self, x: float) -> float:
        t = self._threshold
        return x if x < t else t + (x - t) / self._ratio


class SoftKneeGainComputer:
    """Static gain curve with a quadratic knee around the threshold."""

    def __init__(self) -> None:
        self._parameter = GainComputerParameter()

    def set_parameter(self, parameter: GainComputerParameter) -> None:
        self._parameter = parameter

    def __call__(self, x: float) -> float:
        t = self._parameter.threshold
        w = self._parameter.knee
        r = self._parameter.ratio

        if w < 2.0 * t - 2.0 * x:
            return x
        if w > 2.0 * abs(t - x):
            tmp = -t + 0.5 * w + x
            return x + 0.5 * (-1.0 + 1.0 / r) * (tmp * tmp) / w
        return t + (x - t) / r


class PeakLevelDetector:
    """Reports the level of a sample in decibels."""

    def __call__(self, x: float) -> float:
        return to_decibels(x)


@dataclass(frozen=True)
class DynamicParameter:
    """Compressor settings; levels in decibels, times in milliseconds."""

    threshold: float = 0.0
    knee: float = 0.0
    ratio: float = 1.0
    attack: float = 50.0
    release: float = 50.0


class Dynamic:
    """Feed-forward dynamics processor built from a gain computer."""

    _MAKE_UP_GAIN = 0.0

    def __init__(self, gain_computer: Callable[[float], float]) -> None:
        self._level_detector = PeakLevelDetector()
        self._gain_computer = gain_computer
        self._ballistics = EnvelopeFollower()

    def set_parameter(self, parameter: DynamicParameter) -> None:
        self._gain_computer.set_parameter(
            GainComputerParameter(parameter.threshold, parameter.knee, parameter.ratio)
        )
        self._ballistics.set_parameter(FollowerParameter(parameter.attack, parameter.release))

    def set_sample_rate(self, sample_rate: float) -> None:
        self._ballistics.set_sample_rate(sample_rate)

    def __call__(self, x: float, sidechain: Optional[float] = None) -> float:
        if sidechain is None:
            sidechain = x
        xg = self._level_detector(sidechain)
        yg = self._gain_computer(xg)
        yl = self._ballistics(xg - yg)
        return x * from_decibels(self._MAKE_UP_GAIN - yl)


def hard_knee_compressor() -> Dynamic:
    """A compressor with a hard-knee gain curve."""
    return Dynamic(HardKneeGainComputer())


def soft_knee_compressor() -> Dynamic:
    """A compressor with a soft-knee gain curve."""
    return Dynamic(SoftKneeGainComputer())


@dataclass(frozen=True)
class TransientShaperParameter:
    """Attack and sustain emphasis, each from -1 to +1."""

    attack: float = 0.0
    sustain: float = 0.0


class TransientShaper:
    """Boosts or cuts attack and sustain portions of a signal."""

    _DB_OFFSET = 1e-6
    _MAX_GAIN = 32.0

    def __init__(self) -> None:
        self._parameter = TransientShaperParameter()
        self._sample_rate = 0.0
        self._attack1 = EnvelopeFollower()
        self._attack2 = EnvelopeFollower()
        self._sustain1 = EnvelopeFollower()
        self._sustain2 = EnvelopeFollower()

    def set_parameter(self, parameter: TransientShaperParameter) -> None:
        self._parameter = parameter

        self._attack1.set_parameter(FollowerParameter(1.0, 1000.0))
        self._attack2.set_parameter(FollowerParameter(50.0, 1000.0))

        sustain = 1000.0 * parameter.sustain
        self._sustain1.set_parameter(FollowerParameter(1.0, sustain))
        self._sustain2.set_parameter(FollowerParameter(1.0, sustain / 20.0))

    def set_sample_rate(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        for follower in self._followers():
            follower.set_sample_rate(sample_rate)
        self.reset()

    def reset(self) -> None:
        for follower in self._followers():
            follower.reset()

    def __call__(self, x: float) -> float:
        abs_x = abs(x)
        limit = self._MAX_GAIN

        aenv1 = to_decibels(self._attack1(abs_x) + self._DB_OFFSET)
        aenv2 = to_decibels(self._attack2(abs_x) + self._DB_OFFSET)
        adiff = max(-limit, min((aenv1 - aenv2) * self._parameter.attack, limit))

        senv1 = to_decibels(self._sustain1(abs_x) + self._DB_OFFSET)
        senv2 = to_decibels(self._sustain2(abs_x) + self._DB_OFFSET)
        sdiff = max(-limit, min((senv1 - senv2) * self._parameter.sustain, limit))

        return x * (from_decibels(adiff) * from_decibels(sdiff))

    def _followers(self):
        return (self._attack1, self._attack2, self._sustain1, self._sustain2)
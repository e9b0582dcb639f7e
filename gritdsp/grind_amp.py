"""Tube amplifier and 4x12 cabinet simulation with a dark, grinding voicing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .cabinet import Undersampler, UltrasonicFilter
from .grind_cabinet import grind_cabinet
from .vinyl_dither import Xoshiro128PlusPlus

_HALF_PI = 1.57079633
_AVERAGERS = 11
_BASS_STAGES = 7
# Ultrasonic filter stage run after the bass stage with the given index.
_FILTER_AFTER_BASS = {0: 2, 1: 3, 3: 4, 5: 5}


def _clamp(value, low, high):
    return max(low, min(value, high))


@dataclass(frozen=True)
class GrindAmpParameter:
    """Normalised controls, each from 0 to 1."""

    gain: float = 0.5
    tone: float = 0.5
    output: float = 0.8
    mix: float = 1.0


@dataclass
class _Averager:
    """Three-sample averaging lowpass weighted by a rectified signal."""

    smooth: float = 0.0
    second: float = 0.0
    third: float = 0.0

    def __call__(self, x: float, weight: float) -> float:
        inverse = (weight + 1.0) * 0.5
        out = self.smooth + self.second * inverse + self.third * weight + x
        self.third = self.second
        self.second = self.smooth
        self.smooth = x
        return out


class AirWindowsGrindAmp:
    """Overdrive with a separate saturated bass path into a speaker cabinet, mono."""

    def __init__(self, seed: int = 42) -> None:
        self._rng = Xoshiro128PlusPlus(seed)
        self._parameter = GrindAmpParameter()
        self._sample_rate = 0.0

        self._input_level = 0.0
        self._eq = 0.0
        self._beq = 0.0
        self._tone_eq = 0.0
        self._output_level = 0.0
        self._bass_drive = 0.0
        self._wet = 0.0

        self._filter = UltrasonicFilter()
        self._cabinet = grind_cabinet()
        self._undersampler = Undersampler()
        self.reset()

    @property
    def parameter(self) -> GrindAmpParameter:
        return self._parameter

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    def set_parameter(self, parameter: GrindAmpParameter) -> None:
        """Store the controls; they take effect once a sample rate is set."""
        self._parameter = parameter
        if self._sample_rate > 0.0:
            self._update()

    def set_sample_rate(self, sample_rate: float) -> None:
        """Set the sample rate, clear the state and apply the controls."""
        if sample_rate <= 0.0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self._sample_rate = sample_rate
        self.reset()
        self.set_parameter(self._parameter)

    def reset(self) -> None:
        """Clear the amp, cabinet and undersampling state.

        The ultrasonic filter keeps its state and coefficients.
        """
        self._averagers = [_Averager() for _ in range(_AVERAGERS)]
        self._iir_a = 0.0
        self._iir_b = 0.0
        self._bass_iir = [0.0] * _BASS_STAGES
        self._store_sample = 0.0
        self._cabinet.reset()
        self._last_cab_sample = 0.0
        self._undersampler.reset()

    def __call__(self, x: float) -> float:
        dry = x
        eq = self._eq
        beq = self._beq
        averagers = iter(self._averagers)

        y = self._filter.stage(0, x) * self._input_level
        self._iir_a = self._iir_a * (1.0 - eq) + y * eq
        y = _clamp(y - self._iir_a * 0.92, -1.0, 1.0)
        y = next(averagers)(y, abs(y))
        bass = y

        y = self._filter.stage(1, y) * self._input_level
        self._iir_b = self._iir_b * (1.0 - eq) + y * eq
        y = _clamp(y - self._iir_b * 0.79, -1.0, 1.0)
        y = next(averagers)(y, abs(y))

        for index, averager in zip(range(_BASS_STAGES), averagers):
            self._bass_iir[index] = self._bass_iir[index] * (1.0 - beq) + bass * beq
            bass = self._bass_iir[index] * self._bass_drive
            shaped = math.sin(min(abs(bass), _HALF_PI))
            bass = shaped if bass > 0.0 else -shaped
            y = averager(_clamp(y, -1.0, 1.0), shaped)
            if index in _FILTER_AFTER_BASS:
                y = self._filter.stage(_FILTER_AFTER_BASS[index], y)

        for averager in averagers:
            y = averager(y, abs(y))

        bass *= 0.5
        y = y * self._tone_eq + bass
        shaped = math.sin(min(abs(y * self._output_level), _HALF_PI))
        y = shaped if y > 0.0 else -shaped
        y += bass
        y /= 1.0 + self._tone_eq

        randy = self._rng.uniform(0.0, 1.0) * 0.061
        y = (y * (1.0 - randy) + self._store_sample * randy) * self._output_level
        self._store_sample = y

        if self._wet != 1.0:
            y = y * self._wet + dry * (1.0 - self._wet)

        return self._undersampler.process(y, lambda s: self._render_cabinet(s, dry))

    def _render_cabinet(self, x: float, dry: float) -> float:
        cab = self._cabinet(x)
        randy = self._rng.uniform(0.0, 1.0) * 0.044
        wet = self._wet
        out = ((cab * (1.0 - randy) + self._last_cab_sample * randy) * wet + dry * (1.0 - wet)) * self._output_level
        self._last_cab_sample = cab
        return out

    def _update(self) -> None:
        sample_rate = self._sample_rate
        gain = self._parameter.gain
        tone = self._parameter.tone

        overall_scale = sample_rate / 44100.0
        self._undersampler.set_cycle_end(_clamp(int(math.floor(overall_scale)), 1, 4))

        self._input_level = gain ** 2
        trim_eq = 1.1 - tone
        self._tone_eq = trim_eq / 1.2
        trim_eq = trim_eq / 50.0 + 0.165
        self._eq = ((trim_eq - self._tone_eq / 6.1) / sample_rate) * 22050.0
        self._beq = ((trim_eq + self._tone_eq / 2.1) / sample_rate) * 22050.0
        self._output_level = self._parameter.output
        self._wet = self._parameter.mix
        self._bass_drive = _HALF_PI * (2.5 - self._tone_eq)

        cutoff = _clamp((18000.0 + tone * 1000.0) / sample_rate, 0.001, 0.49)
        self._filter.set_cutoff(cutoff)
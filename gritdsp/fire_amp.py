"""Tube amplifier and 4x12 cabinet simulation with a bright, fiery voicing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .cabinet import Undersampler, UltrasonicFilter, fire_cabinet
from .vinyl_dither import Xoshiro128PlusPlus

_HALF_PI = 1.57079633
_GAIN_STAGES = 12
_SPEAKER_SPAN = 128


def _clamp(value, low, high):
    return max(low, min(value, high))


@dataclass(frozen=True)
class FireAmpParameter:
    """Normalised controls, each from 0 to 1."""

    gain: float = 0.5
    tone: float = 0.5
    output: float = 0.8
    mix: float = 1.0


@dataclass
class _GainStage:
    iir: float = 0.0
    smooth: float = 0.0


class AirWindowsFireAmp:
    """Twelve-stage overdrive into a speaker cabinet, mono."""

    def __init__(self, seed: int = 42) -> None:
        self._rng = Xoshiro128PlusPlus(seed)
        self._parameter = FireAmpParameter()
        self._sample_rate = 0.0

        self._start_level = 0.0
        self._bass_fill = 0.0
        self._output_level = 0.0
        self._tone_eq = 0.0
        self._eq = 0.0
        self._bleed = 0.0
        self._bass_factor = 0.0
        self._beq = 0.0
        self._wet = 0.0
        self._diagonal = 0
        self._side = 0
        self._down = 0

        self._cabinet = fire_cabinet()
        self._undersampler = Undersampler()
        self.reset()

    @property
    def parameter(self) -> FireAmpParameter:
        return self._parameter

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    def set_parameter(self, parameter: FireAmpParameter) -> None:
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
        """Clear the signal state, including the ultrasonic filter coefficients."""
        self._filter = UltrasonicFilter()
        self._stages = [_GainStage() for _ in range(_GAIN_STAGES)]
        self._iir_lowpass = 0.0
        self._iir_spk_a = 0.0
        self._iir_spk_b = 0.0
        self._iir_sub = 0.0
        self._store_sample = 0.0
        self._odd = [0.0] * (2 * _SPEAKER_SPAN + 1)
        self._even = [0.0] * (2 * _SPEAKER_SPAN + 1)
        self._count = 0
        self._flip = False
        self._cabinet.reset()
        self._last_cab_sample = 0.0
        self._undersampler.reset()

    def __call__(self, x: float) -> float:
        dry = x
        y = _clamp(self._filter.stage(0, x), -1.0, 1.0)

        eq = self._eq
        bass_factor = self._bass_factor
        level = self._start_level
        basscut = 0.98
        for index, stage in enumerate(self._stages):
            if index and index % 2 == 0:
                y = self._filter.stage(index // 2, y)
            y *= level
            level = (level * 7.0 + 1.0) * 0.125
            stage.iir = stage.iir * (1.0 - eq) + y * eq
            basscut *= bass_factor
            y -= stage.iir * basscut
            drive = abs(y) * 0.654
            y -= y * drive * drive
            stage.smooth, y = y, stage.smooth + y

        self._iir_lowpass = self._iir_lowpass * (1.0 - self._tone_eq) + y * self._tone_eq
        y = self._iir_lowpass

        beq = self._beq
        self._iir_spk_a = self._iir_spk_a * (1.0 - beq) + y * beq
        y += self._speaker_resonance() * self._bleed

        shaped = math.sin(min(abs(y * self._output_level), _HALF_PI))
        y = shaped if y > 0.0 else -shaped

        self._iir_sub = self._iir_sub * (1.0 - beq) + y * beq
        y += self._iir_sub * self._bass_fill * self._output_level

        randy = self._rng.uniform(0.0, 1.0) * 0.053
        y = (y * (1.0 - randy) + self._store_sample * randy) * self._output_level
        self._store_sample = y
        self._rng.uniform(0.0, 1.0)

        self._flip = not self._flip

        if self._wet != 1.0:
            y = y * self._wet + dry * (1.0 - self._wet)

        return self._undersampler.process(y, lambda s: self._render_cabinet(s, dry))

    def _speaker_resonance(self) -> float:
        if self._count < 0 or self._count > _SPEAKER_SPAN:
            self._count = _SPEAKER_SPAN
        count = self._count
        buffer = self._odd if self._flip else self._even
        buffer[count + _SPEAKER_SPAN] = buffer[count] = self._iir_spk_a
        result = buffer[count + self._down] + buffer[count + self._side] + buffer[count + self._diagonal]
        self._count -= 1

        self._iir_spk_b = self._iir_spk_b * (1.0 - self._beq) + result * self._beq
        return self._iir_spk_b

    def _render_cabinet(self, x: float, dry: float) -> float:
        cab = self._cabinet(x)
        randy = self._rng.uniform(0.0, 1.0) * 0.057
        wet = self._wet
        out = ((cab * (1.0 - randy) + self._last_cab_sample * randy) * wet + dry * (1.0 - wet)) * self._output_level
        self._last_cab_sample = cab
        return out

    def _update(self) -> None:
        sample_rate = self._sample_rate
        gain = self._parameter.gain
        tone = self._parameter.tone

        self._bass_fill = gain
        self._output_level = self._parameter.output
        self._wet = self._parameter.mix

        overall_scale = sample_rate / 44100.0
        self._undersampler.set_cycle_end(_clamp(int(math.floor(overall_scale)), 1, 4))

        self._start_level = gain
        bass_trim = gain / 16.0
        self._tone_eq = (tone / sample_rate) * 22050.0
        self._eq = (bass_trim / sample_rate) * 22050.0
        self._bleed = self._output_level / 16.0
        self._bass_factor = 1.0 - bass_trim * bass_trim
        self._beq = (self._bleed / sample_rate) * 22050.0

        self._diagonal = _clamp(int(0.000861678 * sample_rate), 0, 127)
        self._side = int(self._diagonal / 1.4142135623730951)
        self._down = (self._side + self._diagonal) // 2

        cutoff = _clamp((15000.0 + tone * 10000.0) / sample_rate, 0.001, 0.49)
        self._filter.set_cutoff(cutoff)
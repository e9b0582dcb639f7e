"""Envelope follower and ADSR envelope generator."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

_LOG_001 = math.log(0.01)


def _follower_coef(time_ms: float, sample_rate: float) -> float:
    denominator = time_ms * sample_rate * 0.001
    if denominator == 0.0:
        return math.inf if math.copysign(1.0, denominator) < 0 else 0.0
    return math.exp(_LOG_001 / denominator)


@dataclass(frozen=True)
class FollowerParameter:
    """Attack and release times in milliseconds."""

    attack: float = 50.0
    release: float = 50.0


class EnvelopeFollower:
    """Peak envelope follower with separate attack and release."""

    def __init__(self) -> None:
        self._parameter = FollowerParameter()
        self._sample_rate = 0.0
        self._attack_coef = 0.0
        self._release_coef = 0.0
        self._envelope = 0.0

    def set_parameter(self, parameter: FollowerParameter) -> None:
        self._parameter = parameter
        self._update()

    def set_sample_rate(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self._update()
        self.reset()

    def reset(self) -> None:
        self._envelope = 0.0

    def __call__(self, x: float) -> float:
        env = abs(x)
        coef = self._attack_coef if env > self._envelope else self._release_coef
        self._envelope = coef * (self._envelope - env) + env
        return self._envelope

    def _update(self) -> None:
        self._attack_coef = _follower_coef(self._parameter.attack, self._sample_rate)
        self._release_coef = _follower_coef(self._parameter.release, self._sample_rate)


@dataclass(frozen=True)
class ADSRParameter:
    """Attack, decay and release in milliseconds; sustain as a level."""

    attack: float = 0.0
    decay: float = 0.0
    sustain: float = 1.0
    release: float = 0.0


class _State(enum.Enum):
    IDLE = enum.auto()
    ATTACK = enum.auto()
    DECAY = enum.auto()
    SUSTAIN = enum.auto()
    RELEASE = enum.auto()


def _calc_coef(rate: float, target_ratio: float) -> float:
    if rate == 0.0:
        return 0.0
    return math.exp(-math.log((1.0 + target_ratio) / target_ratio) / rate)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


class EnvelopeADSR:
    """Exponential-segment ADSR envelope generator."""

    _TARGET_RATIO_A = 0.3
    _TARGET_RATIO_DR = 0.0001

    def __init__(self) -> None:
        self._state = _State.IDLE
        self._output = 0.0
        self._attack_coef = self._attack_base = 0.0
        self._decay_coef = self._decay_base = 0.0
        self._release_coef = self._release_base = 0.0
        self._sustain_level = 0.0
        self._target_ratio_a = 0.0
        self._target_ratio_dr = 0.0
        self._parameter = ADSRParameter()
        self._sample_rate = 0.0

        self._set_target_ratio_a(self._TARGET_RATIO_A)
        self._set_target_ratio_dr(self._TARGET_RATIO_DR)
        self._set_attack(0.0)
        self._set_decay(0.0)
        self._set_release(0.0)
        self._set_sustain(1.0)

    def set_parameter(self, parameter: ADSRParameter) -> None:
        self._parameter = parameter
        self._set_attack(parameter.attack * 0.001 * self._sample_rate)
        self._set_decay(parameter.decay * 0.001 * self._sample_rate)
        self._set_sustain(parameter.sustain)
        self._set_release(parameter.release * 0.001 * self._sample_rate)
        self._set_target_ratio_a(self._TARGET_RATIO_A)
        self._set_target_ratio_dr(self._TARGET_RATIO_DR)

    def set_sample_rate(self, sample_rate: float) -> None:
        self._sample_rate = sample_rate
        self.set_parameter(self._parameter)
        self.reset()

    def gate(self, is_on: bool) -> None:
        if is_on:
            self._state = _State.ATTACK
        elif self._state is not _State.IDLE:
            self._state = _State.RELEASE

    def reset(self) -> None:
        self._state = _State.IDLE
        self._output = 0.0

    def __call__(self) -> float:
        if self._state is _State.ATTACK:
            self._output = self._attack_base + self._output * self._attack_coef
            if self._output >= 1.0:
                self._output = 1.0
                self._state = _State.DECAY
        elif self._state is _State.DECAY:
            self._output = self._decay_base + self._output * self._decay_coef
            if self._output <= self._sustain_level:
                self._output = self._sustain_level
                self._state = _State.SUSTAIN
        elif self._state is _State.RELEASE:
            self._output = self._release_base + self._output * self._release_coef
            if self._output <= 0.0:
                self._output = 0.0
                self._state = _State.IDLE
        return self._output

    def _set_attack(self, rate: float) -> None:
        self._attack_coef = _calc_coef(rate, self._target_ratio_a)
        self._attack_base = (1.0 + self._target_ratio_a) * (1.0 - self._attack_coef)

    def _set_decay(self, rate: float) -> None:
        self._decay_coef = _calc_coef(rate, self._target_ratio_dr)
        self._decay_base = (self._sustain_level - self._target_ratio_dr) * (1.0 - self._decay_coef)

    def _set_sustain(self, level: float) -> None:
        self._sustain_level = level
        self._decay_base = (self._sustain_level - self._target_ratio_dr) * (1.0 - self._decay_coef)

    def _set_release(self, rate: float) -> None:
        self._release_coef = _calc_coef(rate, self._target_ratio_dr)
        self._release_base = -self._target_ratio_dr * (1.0 - self._release_coef)

    def _set_target_ratio_a(self, ratio: float) -> None:
        self._target_ratio_a = _clamp(ratio, 0.000000001, 1.0)
        self._attack_base = (1.0 + self._target_ratio_a) * (1.0 - self._attack_coef)

    def _set_target_ratio_dr(self, ratio: float) -> None:
        self._target_ratio_dr = _clamp(ratio, 0.000000001, 1.0)
        self._decay_base = (self._sustain_level - self._target_ratio_dr) * (1.0 - self._decay_coef)
        self._release_base = -self._target_ratio_dr * (1.0 - self._release_coef)
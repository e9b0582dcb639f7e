"""Vinyl-style noise-shaped dither and the random generator it draws from."""

from __future__ import annotations

import math

_MASK32 = 0xFFFFFFFF


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def _splitmix32(state: int):
    """Yield an endless stream of well-mixed 32-bit words from a seed."""
    while True:
        state = (state + 0x9E3779B9) & _MASK32
        z = state
        z = ((z ^ (z >> 16)) * 0x85EBCA6B) & _MASK32
        z = ((z ^ (z >> 13)) * 0xC2B2AE35) & _MASK32
        yield z ^ (z >> 16)


class Xoshiro128PlusPlus:
    """The xoshiro128++ generator producing unsigned 32-bit integers."""

    def __init__(self, seed: int = 42) -> None:
        words = _splitmix32(seed & _MASK32)
        self._state = [next(words) for _ in range(4)]
        if not any(self._state):
            self._state[0] = 1

    def __call__(self) -> int:
        s0, s1, s2, s3 = self._state
        result = (_rotl((s0 + s3) & _MASK32, 7) + s0) & _MASK32
        t = (s1 << 9) & _MASK32
        s2 ^= s0
        s3 ^= s1
        s1 ^= s2
        s0 ^= s3
        s2 ^= t
        s3 = _rotl(s3, 11)
        self._state = [s0, s1, s2, s3]
        return result

    def uniform(self, low: float, high: float) -> float:
        """Return a float drawn uniformly from [low, high)."""
        return low + (high - low) * (self() / 4294967296.0)


class AirWindowsVinylDither:
    """Noise-shaped dither that reduces the signal's resolution."""

    _NOISE_STAGES = 16

    def __init__(self, seed: int = 42) -> None:
        self._rng = Xoshiro128PlusPlus(seed)
        self._de_rez = 0.0
        self._in_scale = 0.0
        self._out_scale = 0.0
        self._ns_odd = 0.0
        self._prev = 0.0
        self._ns = [0.0] * self._NOISE_STAGES

    @property
    def de_rez(self) -> float:
        """Amount of resolution reduction, 0 meaning 16-bit."""
        return self._de_rez

    @de_rez.setter
    def de_rez(self, value: float) -> None:
        self._de_rez = value

        scale_factor = 32768.0
        if value > 0.0:
            scale_factor *= (1.0 - value) ** 6
        scale_factor = max(scale_factor, 0.0001)

        self._in_scale = scale_factor
        self._out_scale = 1.0 / max(scale_factor, 8.0)

    def __call__(self, x: float) -> float:
        y = x * self._in_scale
        abs_sample = self._advance_noise() + y

        if self._ns_odd > 0.0:
            self._ns_odd -= 0.97
        if self._ns_odd < 0.0:
            self._ns_odd += 0.97

        self._ns_odd -= self._ns_odd * self._ns_odd * self._ns_odd * 0.475
        self._ns_odd += self._prev

        abs_sample += self._ns_odd * 0.475
        floored = math.floor(abs_sample)

        self._prev = floored - y
        return floored * self._out_scale

    def reset(self) -> None:
        self._ns_odd = 0.0
        self._prev = 0.0
        self._ns = [0.0] * self._NOISE_STAGES

    def _advance_noise(self) -> float:
        abs_sample = 0.0
        for stage, held in enumerate(self._ns):
            abs_sample += self._rng.uniform(-0.5, 0.5)
            held = (held + abs_sample) * 0.5
            self._ns[stage] = held
            abs_sample -= held
        return abs_sample
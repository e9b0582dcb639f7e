import math
import random

import pytest

from gritdsp.cabinet import fire_cabinet
from gritdsp.grind_cabinet import grind_cabinet


def _run(cabinet, samples):
    return [cabinet(x) for x in samples]


def _signal(seed, count=300):
    rng = random.Random(seed)
    return [rng.uniform(-1.0, 1.0) for _ in range(count)]


def test_has_eighty_three_taps():
    assert len(grind_cabinet()) == 83


def test_silence_in_silence_out():
    cabinet = grind_cabinet()
    assert all(y == 0.0 for y in _run(cabinet, [0.0] * 200))


def test_first_impulse_sample():
    cabinet = grind_cabinet()
    assert cabinet(1.0) == pytest.approx(1.0 / 36.0)


def test_odd_symmetry():
    signal = _signal(7)
    positive = _run(grind_cabinet(), signal)
    negative = _run(grind_cabinet(), [-x for x in signal])
    for p, n in zip(positive, negative):
        assert p == pytest.approx(-n, abs=1e-12)


def test_reset_restores_fresh_state():
    signal = _signal(11)
    cabinet = grind_cabinet()
    _run(cabinet, _signal(3))
    cabinet.reset()
    assert _run(cabinet, signal) == pytest.approx(_run(grind_cabinet(), signal))


def test_instances_are_independent():
    first = grind_cabinet()
    second = grind_cabinet()
    _run(first, _signal(5))
    assert second(0.5) == pytest.approx(grind_cabinet()(0.5))


def test_output_finite_and_bounded_for_bounded_input():
    outputs = _run(grind_cabinet(), _signal(13, 2000))
    assert all(math.isfinite(y) for y in outputs)
    assert max(abs(y) for y in outputs) < 10.0


def test_voicing_differs_from_fire_cabinet():
    signal = _signal(17, 120)
    grind = _run(grind_cabinet(), signal)
    fire = _run(fire_cabinet(), signal)
    assert grind[0] == pytest.approx(fire[0])
    assert max(abs(g - f) for g, f in zip(grind, fire)) > 1e-6
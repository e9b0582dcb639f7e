import math

import pytest

from gritdsp.fire_amp import AirWindowsFireAmp, FireAmpParameter
from gritdsp.vinyl_dither import Xoshiro128PlusPlus

SAMPLE_RATES = [
    22050.0,
    24000.0,
    44100.0,
    48000.0,
    88200.0,
    96000.0,
    132300.0,
    144000.0,
    176400.0,
    192000.0,
]


def _clamp(value, low, high):
    return max(low, min(value, high))


@pytest.mark.parametrize("sample_rate", SAMPLE_RATES)
def test_random_parameters_and_signal_stay_finite(sample_rate):
    rng = Xoshiro128PlusPlus(1234)
    proc = AirWindowsFireAmp(rng())
    proc.set_sample_rate(sample_rate)

    offset = 0.15
    outputs = []
    for _ in range(2):
        proc.reset()
        gain = _clamp(rng.uniform(0.0, 1.0) - offset, 0.0, 1.0)
        proc.set_parameter(
            FireAmpParameter(gain, rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0), rng.uniform(0.0, 1.0))
        )
        outputs.extend(proc(rng.uniform(-1.0, 1.0)) for _ in range(1500))
    not_finite = [out for out in outputs if not math.isfinite(out)]
    assert len(outputs) == 3000
    assert not_finite == []


@pytest.mark.parametrize("sample_rate", [44100.0, 96000.0, 192000.0])
def test_silence_in_gives_silence_out(sample_rate):
    proc = AirWindowsFireAmp(7)
    proc.set_sample_rate(sample_rate)
    proc.set_parameter(FireAmpParameter(gain=0.9, tone=0.3, output=1.0, mix=1.0))
    assert all(proc(0.0) == 0.0 for _ in range(500))


def test_same_seed_gives_identical_output():
    first = AirWindowsFireAmp(99)
    second = AirWindowsFireAmp(99)
    for proc in (first, second):
        proc.set_sample_rate(48000.0)
        proc.set_parameter(FireAmpParameter())
    signal = [math.sin(0.05 * n) * 0.7 for n in range(400)]
    assert [first(s) for s in signal] == [second(s) for s in signal]


def test_dry_mix_passes_input_scaled_by_output():
    proc = AirWindowsFireAmp(3)
    proc.set_sample_rate(44100.0)
    proc.set_parameter(FireAmpParameter(gain=0.7, tone=0.4, output=0.8, mix=0.0))
    for n in range(200):
        sample = math.sin(0.1 * n) * 0.5
        assert proc(sample) == pytest.approx(sample * 0.8, abs=1e-12)


def test_driven_signal_produces_output():
    proc = AirWindowsFireAmp(5)
    proc.set_sample_rate(44100.0)
    proc.set_parameter(FireAmpParameter(gain=1.0, tone=0.5, output=1.0, mix=1.0))
    outputs = [proc(math.sin(0.05 * n) * 0.8) for n in range(2000)]
    assert max(abs(out) for out in outputs) > 1e-3


def test_reset_without_parameters_silences_the_amp():
    proc = AirWindowsFireAmp(11)
    proc.set_sample_rate(44100.0)
    proc.set_parameter(FireAmpParameter(mix=1.0))
    for n in range(300):
        proc(math.sin(0.1 * n))
    proc.reset()
    assert all(proc(0.5) == 0.0 for _ in range(100))


def test_set_parameter_is_remembered():
    proc = AirWindowsFireAmp()
    parameter = FireAmpParameter(gain=0.2, tone=0.1, output=0.3, mix=0.4)
    proc.set_parameter(parameter)
    proc.set_sample_rate(48000.0)
    assert proc.parameter == parameter
    assert proc.sample_rate == 48000.0


@pytest.mark.parametrize("sample_rate", [0.0, -44100.0])
def test_invalid_sample_rate_raises(sample_rate):
    proc = AirWindowsFireAmp()
    with pytest.raises(ValueError):
        proc.set_sample_rate(sample_rate)


def test_default_parameter_values():
    parameter = FireAmpParameter()
    assert (parameter.gain, parameter.tone, parameter.output, parameter.mix) == (0.5, 0.5, 0.8, 1.0)
    assert AirWindowsFireAmp().parameter == parameter
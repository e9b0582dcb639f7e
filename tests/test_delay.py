import pytest

from gritdsp.delay import DelayLine, Interpolation


@pytest.mark.parametrize("interpolation", list(Interpolation))
def test_static_delay_line(interpolation):
    delay = DelayLine(64, interpolation)

    delay.delay = 1.0
    assert delay.pop() == pytest.approx(0.0, abs=1e-8)
    delay.push(1.0)
    assert delay.pop() == pytest.approx(1.0, abs=1e-8)

    delay.push(1.0)
    delay.reset()
    assert delay.pop() == pytest.approx(0.0, abs=1e-8)


@pytest.mark.parametrize("interpolation", list(Interpolation))
def test_integer_delay_returns_older_sample(interpolation):
    delay = DelayLine(64, interpolation)
    for value in range(1, 11):
        delay.push(float(value))
    delay.delay = 3.0
    assert delay.pop() == pytest.approx(8.0)


@pytest.mark.parametrize(
    "interpolation, expected",
    [
        (Interpolation.NONE, 9.0),
        (Interpolation.LINEAR, 8.5),
        (Interpolation.HERMITE, 8.5),
    ],
)
def test_fractional_delay_on_ramp(interpolation, expected):
    delay = DelayLine(64, interpolation)
    for value in range(1, 11):
        delay.push(float(value))
    delay.delay = 2.5
    assert delay.pop() == pytest.approx(expected)


def test_delay_property_reports_value():
    delay = DelayLine(16)
    delay.delay = 4.25
    assert delay.delay == pytest.approx(4.25)


def test_delay_is_clamped_to_buffer():
    delay = DelayLine(8)
    delay.delay = 100.0
    assert delay.delay == pytest.approx(7.0)


def test_negative_delay_raises_and_keeps_previous_delay():
    delay = DelayLine(8)
    delay.delay = 2.0
    with pytest.raises(ValueError):
        delay.delay = -1.0
    assert delay.delay == pytest.approx(2.0)


def test_zero_size_raises():
    with pytest.raises(ValueError):
        DelayLine(0)


def test_reset_clears_all_history():
    delay = DelayLine(8, Interpolation.NONE)
    for value in range(1, 9):
        delay.push(float(value))
    delay.reset()
    outputs = []
    for d in range(8):
        delay.delay = float(d)
        outputs.append(delay.pop())
    assert outputs == [0.0] * 8
import pytest

from gritdsp.envelope import ADSRParameter, EnvelopeADSR, EnvelopeFollower, FollowerParameter


def test_envelope_follower():
    follower = EnvelopeFollower()
    follower.set_sample_rate(44_100.0)
    assert follower(0.0) == pytest.approx(0.0)
    assert follower(0.0) == pytest.approx(0.0)

    x1 = follower(0.25)
    assert 0.0 < x1 < 0.25

    x2 = follower(0.25)
    assert x1 < x2 < 0.25

    x3 = follower(x1)
    assert x3 < x2
    assert x3 < 0.25
    assert x3 > x1

    follower.reset()
    follower.set_parameter(FollowerParameter(attack=12.0))
    assert follower(0.0) == pytest.approx(0.0)

    y1 = follower(0.25)
    assert 0.0 < y1 < 0.25
    assert y1 > x1

    y2 = follower(0.25)
    assert y1 < y2 < 0.25
    assert y2 > x2

    y3 = follower(y1)
    assert y3 < y2
    assert y3 < 0.25
    assert y3 > y1


def test_envelope_follower_tracks_negative_input_as_magnitude():
    follower = EnvelopeFollower()
    follower.set_sample_rate(48_000.0)
    positive = [follower(0.5) for _ in range(10)]
    follower.reset()
    negative = [follower(-0.5) for _ in range(10)]
    assert positive == pytest.approx(negative)


def test_envelope_follower_without_sample_rate_is_instant():
    follower = EnvelopeFollower()
    assert follower(0.7) == pytest.approx(0.7)
    assert follower(-0.2) == pytest.approx(0.2)


def _advance(env, seconds, sample_rate):
    count = int(seconds * sample_rate)
    for _ in range(count - 1):
        env()
    return env()


@pytest.mark.parametrize("sample_rate", [24000.0, 48000.0, 96000.0])
@pytest.mark.parametrize("attack_ms", [125.0, 1000.0])
@pytest.mark.parametrize("sustain", [0.75, 0.9])
def test_envelope_adsr(sample_rate, attack_ms, sustain):
    tolerance = 1e-6
    adsr = EnvelopeADSR()
    adsr.set_sample_rate(sample_rate)
    adsr.set_parameter(
        ADSRParameter(attack=attack_ms, decay=attack_ms, sustain=sustain, release=attack_ms)
    )
    seconds = attack_ms / 1000.0

    for _ in range(100):
        assert adsr() == pytest.approx(0.0, abs=tolerance)

    adsr.gate(True)
    assert _advance(adsr, seconds, sample_rate) == pytest.approx(1.0, abs=tolerance)
    assert _advance(adsr, seconds, sample_rate) == pytest.approx(sustain, abs=tolerance)
    assert _advance(adsr, seconds, sample_rate) == pytest.approx(sustain, abs=tolerance)

    adsr.gate(False)
    assert _advance(adsr, seconds, sample_rate) == pytest.approx(0.0, abs=tolerance)


def test_adsr_gate_off_while_idle_stays_silent():
    adsr = EnvelopeADSR()
    adsr.set_sample_rate(48000.0)
    adsr.gate(False)
    assert [adsr() for _ in range(5)] == [0.0] * 5


def test_adsr_default_jumps_to_full_level():
    adsr = EnvelopeADSR()
    adsr.set_sample_rate(48000.0)
    adsr.gate(True)
    assert adsr() == pytest.approx(1.0)
    adsr.reset()
    assert adsr() == 0.0
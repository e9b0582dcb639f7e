# gritdsp

A small library of audio processors that work on one mono sample at a time.
It needs nothing outside the standard library.

## What is in it

- `gritdsp.fire_amp` holds `AirWindowsFireAmp`, a guitar amplifier and
  speaker cabinet simulation. It is set with `FireAmpParameter`, which has
  `gain`, `tone`, `output` and `mix`, each from 0 to 1.
- `gritdsp.grind_amp` holds `AirWindowsGrindAmp`, a second amp voicing with
  its own saturated bass path. It is set with `GrindAmpParameter`, which has
  the same four fields.
- `gritdsp.vinyl_dither` holds two classes:
  - `AirWindowsVinylDither` is a noise-shaped dither. Its `de_rez` property
    sets how far the resolution is reduced, where 0 keeps 16-bit steps.
  - `Xoshiro128PlusPlus` is the seeded 32-bit random number generator that
    the dither and both amps draw from. It also has `uniform(low, high)`.
- `gritdsp.delay` holds `DelayLine`, a fixed-size delay line:
  - `push(sample)` writes a sample and `pop()` reads one;
  - the `delay` property is the delay in samples and may be fractional;
  - a delay of 1 returns the sample pushed last;
  - reads between samples follow the `Interpolation` mode: `NONE`, `LINEAR`
    or `HERMITE`, which is the default.
- `gritdsp.dynamics` holds the level and dynamics processors:
  - `to_decibels()` and `from_decibels()`; silence maps to -100 dB;
  - `HardKneeGainComputer` and `SoftKneeGainComputer`, set with
    `GainComputerParameter`;
  - `PeakLevelDetector`;
  - `Dynamic`, a feed-forward compressor set with `DynamicParameter`; use
    `hard_knee_compressor()` or `soft_knee_compressor()` to build one, and
    call it as `comp(x)` or `comp(x, sidechain)`;
  - `TransientShaper`, set with `TransientShaperParameter`, whose `attack` and
    `sustain` each run from -1 to +1.
- `gritdsp.envelope` holds two envelopes:
  - `EnvelopeFollower`, set with `FollowerParameter`;
  - `EnvelopeADSR`, an exponential ADSR generator set with `ADSRParameter`
    and driven by `gate(True)` and `gate(False)`.

  All times in both are in milliseconds.
- `gritdsp.cabinet` and `gritdsp.grind_cabinet` hold the parts the amps are
  built from:
  - `UltrasonicFilter`, a bank of six lowpass biquads;
  - `CabinetFilter`, the nonlinear cabinet filter, with `fire_cabinet()` and
    `grind_cabinet()` to build each amp's voicing;
  - `Undersampler`, which runs the cabinet once every 1 to 4 samples,
    depending on the sample rate.

## Installing

```
pip install .
```

To run the tests, install the `test` extra and then run pytest:

```
pip install .[test]
pytest
```

## Example

```python
from gritdsp.envelope import ADSRParameter, EnvelopeADSR, EnvelopeFollower
from gritdsp.fire_amp import AirWindowsFireAmp, FireAmpParameter

amp = AirWindowsFireAmp(seed=42)
amp.set_sample_rate(48_000.0)
amp.set_parameter(FireAmpParameter(gain=0.6, tone=0.4, output=0.8, mix=1.0))

follower = EnvelopeFollower()
follower.set_sample_rate(48_000.0)

for sample in (0.0, 0.25, -0.5, 0.1):
    level = follower(amp(sample))

adsr = EnvelopeADSR()
adsr.set_sample_rate(48_000.0)
adsr.set_parameter(ADSRParameter(attack=10.0, decay=50.0, sustain=0.7, release=200.0))
adsr.gate(True)
value = adsr()
```

## Sample rate and state

Give the amps, envelopes, compressors and the transient shaper a sample rate
before you use them. Calling `set_sample_rate` clears their internal state.
The amps raise `ValueError` if the rate is not positive. They store the
parameters you give them, but those settings take effect only once a sample
rate is set.

## What it does not do

The package has processors only. It does not do any of these things:

- read or write audio files;
- play or record sound;
- process stereo buffers or whole blocks;
- offer a command-line tool.

To process a signal, you feed each sample to a processor in your own loop.
"""Building blocks shared by the amp simulations: ultrasonic filtering,
speaker cabinet convolution and undersampled processing."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, Tuple

_RESONANCES = (
    4.46570214,
    1.51387132,
    0.93979296,
    0.70710678,
    0.52972649,
    0.50316379,
)


@dataclass
class _BiquadStage:
    resonance: float
    a0: float = 0.0
    a1: float = 0.0
    a2: float = 0.0
    b1: float = 0.0
    b2: float = 0.0
    s1: float = 0.0
    s2: float = 0.0

    def set_cutoff(self, cutoff: float) -> None:
        k = math.tan(math.pi * cutoff)
        norm = 1.0 / (1.0 + k / self.resonance + k * k)
        self.a0 = k * k * norm
        self.a1 = 2.0 * self.a0
        self.a2 = self.a0
        self.b1 = 2.0 * (k * k - 1.0) * norm
        self.b2 = (1.0 - k / self.resonance + k * k) * norm

    def __call__(self, x: float) -> float:
        out = x * self.a0 + self.s1
        self.s1 = x * self.a1 - out * self.b1 + self.s2
        self.s2 = x * self.a2 - out * self.b2
        return out


class UltrasonicFilter:
    """Six fixed-resonance lowpass biquads, applied one stage at a time.

    Until ``set_cutoff`` is called every stage outputs silence.
    """

    def __init__(self) -> None:
        self._stages = [_BiquadStage(resonance) for resonance in _RESONANCES]

    def __len__(self) -> int:
        return len(self._stages)

    def set_cutoff(self, cutoff: float) -> None:
        """Set every stage's cutoff as a fraction of the sample rate."""
        if not 0.0 < cutoff < 0.5:
            raise ValueError(f"cutoff must lie strictly between 0 and 0.5, got {cutoff}")
        for stage in self._stages:
            stage.set_cutoff(cutoff)

    def stage(self, index: int, x: float) -> float:
        """Run one sample through the stage numbered ``index``."""
        if not 0 <= index < len(self._stages):
            raise IndexError(f"stage index {index} out of range")
        return self._stages[index](x)

    def reset(self) -> None:
        """Clear the filter state, keeping the coefficients."""
        for stage in self._stages:
            stage.s1 = 0.0
            stage.s2 = 0.0


class CabinetFilter:
    """Nonlinear FIR speaker cabinet between two smoothing averages.

    Each coefficient pair ``(a, b)`` adds ``h * (a + b * |h|)`` for the
    history sample ``h`` at that tap.
    """

    def __init__(self, coefficients: Iterable[Tuple[float, float]]) -> None:
        self._coefficients: Sequence[Tuple[float, float]] = tuple(coefficients)
        self._history: deque = deque([0.0] * (len(self._coefficients) + 1),
                                     maxlen=len(self._coefficients) + 1)
        self._smooth_a = 0.0
        self._smooth_b = 0.0

    def __len__(self) -> int:
        return len(self._coefficients)

    def reset(self) -> None:
        self._history.extend([0.0] * self._history.maxlen)
        self._smooth_a = 0.0
        self._smooth_b = 0.0

    def __call__(self, x: float) -> float:
        smoothed = (x + self._smooth_a) / 3.0
        self._smooth_a = x

        self._history.appendleft(smoothed)
        history = iter(self._history)
        y = next(history)
        for h, (a, b) in zip(history, self._coefficients):
            y += h * (a + b * abs(h))

        out = (y + self._smooth_b) / 3.0
        self._smooth_b = y
        return out * 0.25


_FIRE_COEFFICIENTS = (
    (1.31698250313308396, -0.08140616497621633),
    (1.47229016949915326, -0.27680278993637253),
    (1.30410109086044956, -0.35629113432046489),
    (0.81766210474551260, -0.26808782337659753),
    (0.19868872545506663, -0.11105517193919669),
    (-0.39115909132567039, 0.12630622002682679),
    (-0.76881891559343574, 0.40879849500403143),
    (-0.87146861782680340, 0.59529560488000599),
    (-0.79504575932563670, 0.60877047551611796),
    (-0.61653017622406314, 0.47662851438557335),
    (-0.40718195794382067, 0.24955839378539713),
    (-0.31794900040616203, 0.04169792259600613),
    (-0.41075032540217843, -0.00368483996076280),
    (-0.56901352922170667, 0.11027360805893105),
    (-0.62443222391889264, 0.22198075154245228),
    (-0.53462856723129204, 0.22933544545324852),
    (-0.34441703361995046, 0.12956809502269492),
    (-0.13947052337867882, -0.00339775055962799),
    (0.03771252648928484, -0.10863931549251718),
    (0.18280210770271693, -0.17413646599296417),
    (0.24621986701761467, -0.14547053270435095),
    (0.22347075142737360, -0.02493869490104031),
    (0.14346348482123716, 0.11284054747963246),
    (0.00834364862916028, 0.24284684053733926),
    (-0.11559740296078347, 0.32623054435304538),
    (-0.18067604561283060, 0.32311481551122478),
    (-0.22927997789035612, 0.26991539052832925),
    (-0.28487666578669446, 0.22437227250279349),
    (-0.31992973037153838, 0.15289876100963865),
    (-0.35174606303520733, 0.05656293023086628),
    (-0.36894898011375254, -0.04333925421463558),
    (-0.32567576055307507, -0.14594589410921388),
    (-0.27440135050585784, -0.15529667398122521),
    (-0.21998973785078091, -0.05083553737157104),
    (-0.10323624876862457, 0.04651829594199963),
    (0.02091603687851074, 0.12000046818439322),
    (0.11344930914138468, 0.17697142512225839),
    (0.22766779627643968, 0.13645102964003858),
    (0.38378309953638229, -0.01997653307333791),
    (0.52789400804568076, -0.21409137428422448),
    (0.55444630296938280, -0.32331980931576626),
    (0.42333237669264601, -0.26855847463044280),
    (0.21942831522035078, -0.12051365248820624),
    (-0.00584169427830633, 0.03706970171280329),
    (-0.24279799124660351, 0.17296440491477982),
    (-0.40173760787507085, 0.21717989835163351),
    (-0.43930035724188155, 0.16425928481378199),
    (-0.41067765934041811, 0.10390115786636855),
    (-0.34409235547165967, 0.07268159377411920),
    (-0.26542883122568151, 0.05483457497365785),
    (-0.22024754776138800, 0.06484897950087598),
    (-0.20394367993632415, 0.08746309731952180),
    (-0.17565242431124092, 0.07611309538078760),
    (-0.10116623231246825, 0.00642818706295112),
    (-0.00782648272053632, -0.08004141267685004),
    (0.05059046006747323, -0.12436676387548490),
    (0.06241531553254467, -0.11530779547021434),
    (0.04952694587101836, -0.08340945324333944),
    (0.00843873294401687, -0.03279659052562903),
    (-0.05161338949440241, 0.03428181149163798),
    (-0.08165520146902012, 0.08196746092283110),
    (-0.06639532849935320, 0.09797462781896329),
    (-0.02953430910661621, 0.09175612938515763),
    (0.00741058547442938, 0.05442091048731967),
    (0.01832866125391727, 0.00306243693643687),
    (0.00526964230373573, -0.04364102661136410),
    (-0.00300984373848200, -0.09742737841278880),
    (-0.00413616769576694, -0.14380661694523073),
    (-0.00588769034931419, -0.16012843578892538),
    (-0.00688588239450581, -0.14074464279305798),
    (-0.02277307992926315, -0.07914752191801366),
    (-0.04627166091180877, 0.00192787268067208),
    (-0.05562045897455786, 0.05932868727665747),
    (-0.05134243784922165, 0.08245334798868090),
    (-0.04719409472239919, 0.07498680629253825),
    (-0.05889738914266415, 0.06116127018043697),
    (-0.09428363535111127, 0.06535868867863834),
    (-0.15181756953225126, 0.08982979655234427),
    (-0.20878969456036670, 0.10761070891499538),
    (-0.22647885581813790, 0.08462542510349125),
    (-0.19723482443646323, 0.02665160920736287),
    (-0.16441643451155163, -0.02314691954338197),
    (-0.15201914054931515, -0.04424903493886839),
    (-0.15454370641307855, -0.04223203797913008),
)


def fire_cabinet() -> CabinetFilter:
    """The 4x12 speaker cabinet used by the fire amp."""
    return CabinetFilter(_FIRE_COEFFICIENTS)


_AVERAGE_SLOTS = {1: (), 2: (5,), 3: (6, 5), 4: (7, 6, 5)}


class Undersampler:
    """Runs an expensive stage once every ``cycle_end`` samples.

    Between renders the output is interpolated from reference points,
    then smoothed by a multi-pole average whose order grows with the
    cycle length.
    """

    def __init__(self) -> None:
        self._cycle_end = 1
        self._cycle = 0
        self._refs = [0.0] * 9

    @property
    def cycle_end(self) -> int:
        return self._cycle_end

    def set_cycle_end(self, cycle_end: int) -> None:
        """Render once every ``cycle_end`` samples, from 1 to 4."""
        if cycle_end not in _AVERAGE_SLOTS:
            raise ValueError(f"cycle_end must be 1 to 4, got {cycle_end}")
        self._cycle_end = cycle_end
        self._cycle = min(self._cycle, cycle_end - 1)

    def reset(self) -> None:
        self._refs = [0.0] * 9
        self._cycle = 0

    def process(self, x: float, render: Callable[[float], float]) -> float:
        """Take one sample, calling ``render`` on it when a cycle completes."""
        refs = self._refs
        self._cycle += 1
        if self._cycle == self._cycle_end:
            y = render(x)
            end = self._cycle_end
            if end == 4:
                refs[0] = refs[4]
                refs[2] = (refs[0] + y) / 2
                refs[1] = (refs[0] + refs[2]) / 2
                refs[3] = (refs[2] + y) / 2
                refs[4] = y
            elif end == 3:
                refs[0] = refs[3]
                refs[2] = (refs[0] + refs[0] + y) / 3
                refs[1] = (refs[0] + y + y) / 3
                refs[3] = y
            elif end == 2:
                refs[0] = refs[2]
                refs[1] = (refs[0] + y) / 2
                refs[2] = y
            else:
                refs[0] = y
            self._cycle = 0
        out = refs[self._cycle]

        for slot in _AVERAGE_SLOTS[self._cycle_end]:
            previous = refs[slot]
            refs[slot] = out
            out = (out + previous) * 0.5
        return out
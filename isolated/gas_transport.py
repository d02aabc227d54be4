"""Gas transport pathologies: CO poisoning, narcosis, O2 toxicity and DCS."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from enum import IntEnum

_AIR_N2_FRACTION = 0.79
_HALDANE_M = 230.0
_NARCOSIS_THRESHOLD_PN2 = 3.16

# Simplified Buhlmann ZHL-16C compartment half-times, in minutes.
HALF_TIMES: tuple[float, ...] = (5.0, 12.5, 27.0, 54.3, 109.0, 180.0)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class BubbleLocation(IntEnum):
    """Where decompression sickness bubbles have formed."""

    NONE = 0
    JOINTS = 1
    SPINAL = 2
    PULMONARY = 3
    CEREBRAL = 4
    CUTANEOUS = 5


@dataclass
class GasTransportState:
    """Snapshot of all gas transport pathologies."""

    cohb_percent: float = 0.5
    co_exposure_ppm: float = 0.0
    effective_o2_capacity: float = 1.0

    pn2_ata: float = 0.79
    narcosis_severity: float = 0.0
    cognitive_impairment: float = 0.0
    depth_meters: float = 0.0

    po2_ata: float = 0.21
    cns_o2_toxicity: float = 0.0
    pulmonary_o2_toxicity: float = 0.0
    seizure_risk: bool = False

    tissue_n2_loading: float = 1.0
    bubble_formation: float = 0.0
    ascent_rate_m_min: float = 0.0
    dcs_location: BubbleLocation = BubbleLocation.NONE
    requires_recompression: bool = False


@dataclass
class GasTransportSystem:
    """Gas transport pathology model driven by ambient pressure and gas mix."""

    _state: GasTransportState = field(default_factory=GasTransportState)
    _tissue_n2: list[float] = field(
        default_factory=lambda: [_AIR_N2_FRACTION] * len(HALF_TIMES)
    )

    @property
    def state(self) -> GasTransportState:
        return self._state

    # --- CO poisoning ---

    def expose_to_co(self, ppm: float) -> None:
        self._state.co_exposure_ppm = ppm

    def compute_cohb_equilibrium(self, co_ppm: float, o2_fraction: float) -> float:
        """Equilibrium carboxyhaemoglobin percentage from the Haldane equation."""
        pco = co_ppm / 1e6
        ratio = _HALDANE_M * (pco / max(0.01, o2_fraction))
        return 100.0 * ratio / (1.0 + ratio)

    def compute_o2_delivery_impairment(self) -> float:
        """Fraction of haemoglobin oxygen delivery still available."""
        capacity_loss = self._state.cohb_percent / 100.0
        left_shift = 1.0 + self._state.cohb_percent * 0.02
        return _clamp(1.0 - capacity_loss * left_shift, 0.0, 1.0)

    # --- Nitrogen narcosis ---

    def update_depth(self, depth_m: float, ambient_pressure: float) -> None:
        self._state.depth_meters = depth_m
        self._state.pn2_ata = _AIR_N2_FRACTION * ambient_pressure

    def compute_narcosis_equivalent_depth(self, pn2: float) -> float:
        """Equivalent depth in metres beyond the ~30 m narcosis threshold."""
        if pn2 < _NARCOSIS_THRESHOLD_PN2:
            return 0.0
        return (pn2 - _NARCOSIS_THRESHOLD_PN2) / _AIR_N2_FRACTION * 10.0

    def compute_cognitive_effect(self) -> float:
        ead = self.compute_narcosis_equivalent_depth(self._state.pn2_ata)
        return _clamp(ead / 40.0, 0.0, 1.0)

    # --- Oxygen toxicity ---

    def update_po2(self, po2_ata: float) -> None:
        self._state.po2_ata = po2_ata

    def compute_cns_clock_rate(self, po2: float) -> float:
        """CNS oxygen clock fraction consumed per minute."""
        if po2 < 1.0:
            return 0.0
        if po2 < 1.2:
            return 1.0 / 300.0
        if po2 < 1.4:
            return 1.0 / 150.0
        if po2 < 1.6:
            return 1.0 / 45.0
        return 1.0 / 10.0

    def compute_uptd_rate(self, po2: float) -> float:
        """Unit pulmonary toxicity dose accumulated per minute."""
        if po2 <= 0.5:
            return 0.0
        return ((po2 - 0.5) / 0.5) ** 0.83

    def check_seizure_risk(self) -> bool:
        return self._state.cns_o2_toxicity > 0.8 or self._state.po2_ata > 1.6

    # --- Decompression sickness ---

    def simulate_ascent(self, start_depth: float, end_depth: float, time_min: float) -> None:
        self._state.ascent_rate_m_min = (start_depth - end_depth) / max(0.1, time_min)

    def compute_supersaturation(self, tissue_pn2: float, ambient_pn2: float) -> float:
        if ambient_pn2 < 0.01:
            return 0.0
        return (tissue_pn2 - ambient_pn2) / ambient_pn2

    def compute_bubble_formation(self) -> None:
        """Update the bubble score and DCS classification from tissue loading."""
        ambient = self._state.pn2_ata
        max_super = max(
            [0.0] + [self.compute_supersaturation(t, ambient) for t in self._tissue_n2]
        )
        bubbles = max(0.0, (max_super - 1.6) / 0.5)
        self._state.bubble_formation = bubbles
        if bubbles > 0.3:
            self._state.dcs_location = BubbleLocation.JOINTS
        if bubbles > 0.6:
            self._state.dcs_location = BubbleLocation.SPINAL
        if bubbles > 0.8:
            self._state.requires_recompression = True

    def needs_decompression_stop(self, current_depth: float) -> bool:
        """True when the tissue ceiling lies below ``current_depth``."""
        ambient_p = 1.0 + current_depth / 10.0
        m_value = 1.6 + 0.5 * (ambient_p - 1.0)
        ceiling = max(
            [0.0] + [(t / m_value - 1.0) * 10.0 for t in self._tissue_n2]
        )
        return current_depth < ceiling

    # --- Integration ---

    def step(self, dt: float, ambient_pressure_ata: float, fio2: float,
             fico: float) -> GasTransportState:
        """Advance all pathologies by ``dt`` seconds and return a snapshot."""
        s = self._state
        dt_min = dt / 60.0

        if s.co_exposure_ppm > 0 or fico > 0:
            co_ppm = s.co_exposure_ppm + fico * 1e6
            target = self.compute_cohb_equilibrium(co_ppm, fio2)
            s.cohb_percent += (target - s.cohb_percent) * dt_min / 270.0
        else:
            elimination = 30.0 if fio2 > 0.9 else 270.0
            s.cohb_percent *= math.exp(-dt_min / elimination)
        s.cohb_percent = _clamp(s.cohb_percent, 0.0, 80.0)
        s.effective_o2_capacity = self.compute_o2_delivery_impairment()

        s.pn2_ata = _AIR_N2_FRACTION * ambient_pressure_ata
        s.narcosis_severity = self.compute_cognitive_effect()
        s.cognitive_impairment = s.narcosis_severity

        s.po2_ata = fio2 * ambient_pressure_ata
        s.cns_o2_toxicity += self.compute_cns_clock_rate(s.po2_ata) * dt_min
        if s.po2_ata < 0.5:
            s.cns_o2_toxicity -= 0.01 * dt_min
        s.cns_o2_toxicity = _clamp(s.cns_o2_toxicity, 0.0, 1.5)
        s.pulmonary_o2_toxicity += self.compute_uptd_rate(s.po2_ata) * dt_min
        s.seizure_risk = self.check_seizure_risk()

        self._tissue_n2 = [
            tissue + (s.pn2_ata - tissue) * (1.0 - math.exp(-math.log(2.0) / half * dt_min))
            for tissue, half in zip(self._tissue_n2, HALF_TIMES)
        ]
        s.tissue_n2_loading = max(
            [0.0] + [t / _AIR_N2_FRACTION for t in self._tissue_n2]
        )

        self.compute_bubble_formation()
        return dataclasses.replace(s)
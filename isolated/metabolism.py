"""Metabolic energy balance and substrate utilisation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum

_COMFORT_TEMP_C = 22.0
_KJ_PER_GRAM_GLUCOSE = 16.7


class Substrate(Enum):
    GLUCOSE = "glucose"
    FATTY_ACIDS = "fatty_acids"
    AMINO_ACIDS = "amino_acids"
    GLYCOGEN = "glycogen"
    ATP = "atp"


@dataclass
class MetabolismConfig:
    basal_metabolic_rate: float = 80.0  # W
    body_mass_kg: float = 70.0
    muscle_mass_fraction: float = 0.4


@dataclass
class MetabolismState:
    blood_glucose: float = 90.0  # mg/dL
    liver_glycogen: float = 100.0  # g
    muscle_glycogen: float = 400.0  # g
    free_fatty_acids: float = 0.5  # mmol/L
    blood_lactate: float = 1.0  # mmol/L
    atp_rate: float = 80.0  # W
    respiratory_quotient: float = 0.85
    metabolic_rate: float = 1.0


@dataclass
class MetabolismSystem:
    """Energy production with glucose, glycogen and lactate bookkeeping."""

    config: MetabolismConfig = field(default_factory=MetabolismConfig)
    _state: MetabolismState = field(default_factory=MetabolismState)

    def __post_init__(self) -> None:
        self._state.atp_rate = self.config.basal_metabolic_rate

    @property
    def state(self) -> MetabolismState:
        return self._state

    def compute_total_energy_expenditure(self, activity_level: float) -> float:
        """Total energy expenditure in watts."""
        return self.config.basal_metabolic_rate * activity_level

    def compute_thermic_effect(self, ambient_temp: float) -> float:
        """Metabolic multiplier from cold exposure."""
        if ambient_temp < _COMFORT_TEMP_C:
            return 1.0 + 0.05 * (_COMFORT_TEMP_C - ambient_temp)
        return 1.0

    @staticmethod
    def _carbohydrate_fraction(intensity: float) -> float:
        return max(0.0, min(1.0, 0.3 + 0.5 * (intensity - 1.0)))

    def consume_glucose(self, amount_mg: float) -> None:
        self._state.blood_glucose = max(40.0, self._state.blood_glucose - amount_mg / 50.0)

    def consume_glycogen(self, amount_g: float, muscle: bool = True) -> None:
        if muscle:
            self._state.muscle_glycogen = max(0.0, self._state.muscle_glycogen - amount_g)
        else:
            self._state.liver_glycogen = max(0.0, self._state.liver_glycogen - amount_g)

    def add_glucose(self, amount_mg: float) -> None:
        self._state.blood_glucose = min(300.0, self._state.blood_glucose + amount_mg / 50.0)

    def step(self, dt: float, activity_level: float = 1.0,
             ambient_temp_c: float = 20.0) -> MetabolismState:
        """Advance metabolism by ``dt`` seconds and return a snapshot."""
        s = self._state
        s.metabolic_rate = activity_level * self.compute_thermic_effect(ambient_temp_c)
        tee = self.compute_total_energy_expenditure(s.metabolic_rate)
        s.atp_rate = tee

        carb_fraction = self._carbohydrate_fraction(activity_level)
        s.respiratory_quotient = 0.7 + 0.3 * carb_fraction

        energy_kj = tee * dt / 1000.0
        glucose_used_g = energy_kj * carb_fraction / _KJ_PER_GRAM_GLUCOSE
        glucose_used_mg = glucose_used_g * 1000.0

        if s.blood_glucose > 70.0:
            self.consume_glucose(glucose_used_mg * 0.3)
        if activity_level > 1.5 and s.muscle_glycogen > 0:
            self.consume_glycogen(glucose_used_g * 0.7, muscle=True)

        if s.blood_glucose < 80.0 and s.liver_glycogen > 0:
            release = min(s.liver_glycogen * 0.01 * dt, (80.0 - s.blood_glucose) * 0.5)
            s.liver_glycogen -= release
            s.blood_glucose += release * 20.0

        if activity_level > 1.8:
            s.blood_lactate += (activity_level - 1.8) * 0.5 * dt
        s.blood_lactate = max(0.5, s.blood_lactate - 0.1 * dt)

        return dataclasses.replace(s)
"""Autonomic nervous system regulation."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass
class NervousState:
    sympathetic_tone: float = 0.3
    parasympathetic_tone: float = 0.5
    stress_level: float = 0.2
    pain_level: float = 0.0
    consciousness: float = 1.0
    fatigue: float = 0.0


@dataclass(frozen=True)
class AutonomicResponse:
    heart_rate_modifier: float
    respiratory_rate_modifier: float
    vasoconstriction: float
    sweat_rate: float


@dataclass
class AutonomicNervousSystem:
    """Sympathetic/parasympathetic balance driven by physiological reflexes."""

    _state: NervousState = field(default_factory=NervousState)

    @property
    def state(self) -> NervousState:
        return self._state

    def add_pain(self, amount: float) -> None:
        self._state.pain_level = min(1.0, self._state.pain_level + amount)

    def add_stress(self, amount: float) -> None:
        self._state.stress_level = min(1.0, self._state.stress_level + amount)

    def add_fatigue(self, amount: float) -> None:
        self._state.fatigue = min(1.0, self._state.fatigue + amount)

    def _baroreceptor_reflex(self, mean_arterial_pressure: float) -> None:
        deviation = (mean_arterial_pressure - 93.0) / 93.0
        self._state.sympathetic_tone -= deviation * 0.1
        self._state.parasympathetic_tone += deviation * 0.1

    def _chemoreceptor_reflex(self, sao2: float) -> None:
        if sao2 < 0.90:
            self._state.sympathetic_tone += (0.90 - sao2) * 2.0

    def _thermoregulation_reflex(self, temp: float) -> None:
        if temp > 38.0:
            self._state.sympathetic_tone += (temp - 38.0) * 0.1
        elif temp < 36.0:
            self._state.sympathetic_tone += (36.0 - temp) * 0.15

    def _glucoregulation(self, glucose: float) -> None:
        if glucose < 70.0:
            self._state.sympathetic_tone += (70.0 - glucose) * 0.01
            self._state.stress_level += 0.01

    def step(self, dt: float, blood_pressure_map: float, blood_o2_sat: float,
             core_temp_c: float, blood_glucose: float) -> NervousState:
        """Apply reflexes for ``dt`` seconds and return a snapshot."""
        s = self._state
        self._baroreceptor_reflex(blood_pressure_map)
        self._chemoreceptor_reflex(blood_o2_sat)
        self._thermoregulation_reflex(core_temp_c)
        self._glucoregulation(blood_glucose)

        s.sympathetic_tone += s.pain_level * 0.3
        s.sympathetic_tone += s.stress_level * 0.2

        s.pain_level = max(0.0, s.pain_level - 0.01 * dt)
        s.stress_level = max(0.0, s.stress_level - 0.005 * dt)
        s.fatigue = max(0.0, s.fatigue - 0.001 * dt)

        s.sympathetic_tone = _clamp(s.sympathetic_tone, 0.0, 1.0)
        s.parasympathetic_tone = _clamp(s.parasympathetic_tone, 0.0, 1.0)

        if blood_o2_sat < 0.70:
            s.consciousness -= (0.70 - blood_o2_sat) * dt
        else:
            s.consciousness = min(1.0, s.consciousness + 0.1 * dt)
        s.consciousness = _clamp(s.consciousness, 0.0, 1.0)

        return dataclasses.replace(s)

    def compute_response(self) -> AutonomicResponse:
        """Effector response implied by the current autonomic balance."""
        s = self._state
        balance = s.sympathetic_tone - s.parasympathetic_tone
        return AutonomicResponse(
            heart_rate_modifier=1.0 + balance * 0.5,
            respiratory_rate_modifier=1.0 + s.sympathetic_tone * 0.3,
            vasoconstriction=s.sympathetic_tone,
            sweat_rate=max(0.0, s.sympathetic_tone - 0.4),
        )
"""Compartment breaches and atmospheric propagation between them."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

R_AIR = 287.05
GAMMA = 1.4
CRITICAL_RATIO = 0.528
ATM_PRESSURE = 101325.0
SPACE_PRESSURE = 0.0

_VACUUM_TEMPERATURE = 293.0


@dataclass
class Compartment:
    """A sealed volume of air."""

    id: str
    volume: float = 100.0
    pressure: float = ATM_PRESSURE
    temperature: float = 293.0
    o2_fraction: float = 0.21
    n2_fraction: float = 0.78
    co2_fraction: float = 0.0004
    h2o_fraction: float = 0.01

    def density(self) -> float:
        return self.pressure / (R_AIR * self.temperature)

    def mass(self) -> float:
        return self.density() * self.volume

    def o2_partial_pressure(self) -> float:
        return self.pressure * self.o2_fraction


class BreachType(Enum):
    DOOR = "door"
    VENT = "vent"
    HULL_BREACH = "hull_breach"
    WINDOW = "window"
    CRACK = "crack"


@dataclass
class Breach:
    """An opening between two compartments, or to vacuum when one side is empty."""

    id: str
    kind: BreachType = BreachType.CRACK
    compartment_a: str = ""
    compartment_b: str = ""
    area: float = 0.01
    discharge_coeff: float = 0.65
    is_open: bool = True
    is_growing: bool = False
    growth_rate: float = 0.0
    mass_flow_rate: float = 0.0
    velocity: float = 0.0
    is_choked: bool = False

    @property
    def to_vacuum(self) -> bool:
        return not self.compartment_b


def calculate_mass_flow(p_upstream: float, p_downstream: float, t_upstream: float,
                        area: float, cd: float) -> float:
    """Isentropic orifice mass flow in kg/s, choked below the critical ratio."""
    if p_upstream <= p_downstream or area <= 0.0:
        return 0.0

    ratio = p_downstream / p_upstream
    if ratio <= CRITICAL_RATIO:
        choke_factor = (2.0 / (GAMMA + 1.0)) ** ((GAMMA + 1.0) / (2.0 * (GAMMA - 1.0)))
        return cd * area * p_upstream * math.sqrt(GAMMA / (R_AIR * t_upstream)) * choke_factor

    rho_upstream = p_upstream / (R_AIR * t_upstream)
    term1 = ratio ** (2.0 / GAMMA)
    term2 = ratio ** ((GAMMA + 1.0) / GAMMA)
    flow_term = math.sqrt(2.0 * GAMMA / (GAMMA - 1.0) * (term1 - term2))
    return cd * area * rho_upstream * math.sqrt(2.0 * p_upstream / rho_upstream) * flow_term


def calculate_velocity(mass_flow: float, density: float, area: float) -> float:
    """Mean velocity through an opening; zero for empty flow sections."""
    if density <= 0.0 or area <= 0.0:
        return 0.0
    return mass_flow / (density * area)


def sonic_velocity(temperature: float) -> float:
    """Speed of sound in air at ``temperature`` kelvin."""
    return math.sqrt(GAMMA * R_AIR * temperature)


class BreachPropagationSystem:
    """Network of compartments exchanging air through breaches."""

    def __init__(self) -> None:
        self._compartments: dict[str, Compartment] = {}
        self._breaches: list[Breach] = []

    def add_compartment(self, compartment: Compartment) -> None:
        self._compartments[compartment.id] = compartment

    def add_breach(self, breach: Breach) -> None:
        self._breaches.append(breach)

    def create_hull_breach(self, compartment_id: str, area: float) -> Breach:
        """Open a sharp-edged hole from a compartment to vacuum."""
        breach = Breach(
            id=f"{compartment_id}_hull",
            kind=BreachType.HULL_BREACH,
            compartment_a=compartment_id,
            compartment_b="",
            area=area,
            discharge_coeff=0.8,
            is_open=True,
        )
        self._breaches.append(breach)
        return breach

    def _set_open(self, breach_id: str, is_open: bool) -> None:
        for breach in self._breaches:
            if breach.id == breach_id:
                breach.is_open = is_open

    def open_door(self, breach_id: str) -> None:
        self._set_open(breach_id, True)

    def close_door(self, breach_id: str) -> None:
        self._set_open(breach_id, False)

    def get_compartment(self, compartment_id: str) -> Compartment | None:
        """The compartment with this id, or None for vacuum or unknown ids."""
        if not compartment_id:
            return None
        return self._compartments.get(compartment_id)

    @property
    def breaches(self) -> list[Breach]:
        return self._breaches

    def step(self, dt: float) -> None:
        """Advance breach growth, flows and compartment pressures by ``dt`` seconds."""
        for breach in self._breaches:
            if breach.is_growing and breach.growth_rate > 0.0:
                breach.area += breach.growth_rate * dt

        for breach in self._breaches:
            self._update_flow(breach)

        for breach in self._breaches:
            if not breach.is_open or breach.mass_flow_rate == 0.0:
                continue
            dm = breach.mass_flow_rate * dt
            comp_a = self.get_compartment(breach.compartment_a)
            comp_b = self.get_compartment(breach.compartment_b)
            if comp_a is not None:
                self._change_mass(comp_a, -dm)
            if comp_b is not None:
                self._change_mass(comp_b, dm)

    def _update_flow(self, breach: Breach) -> None:
        if not breach.is_open:
            breach.mass_flow_rate = 0.0
            breach.velocity = 0.0
            breach.is_choked = False
            return

        comp_a = self.get_compartment(breach.compartment_a)
        comp_b = self.get_compartment(breach.compartment_b)
        p_a = comp_a.pressure if comp_a else SPACE_PRESSURE
        p_b = comp_b.pressure if comp_b else SPACE_PRESSURE
        t_a = comp_a.temperature if comp_a else _VACUUM_TEMPERATURE
        t_b = comp_b.temperature if comp_b else _VACUUM_TEMPERATURE

        if p_a >= p_b:
            p_up, p_down, t_up, direction = p_a, p_b, t_a, 1
        else:
            p_up, p_down, t_up, direction = p_b, p_a, t_b, -1

        mass_flow = calculate_mass_flow(p_up, p_down, t_up, breach.area, breach.discharge_coeff)
        breach.mass_flow_rate = mass_flow * direction
        breach.is_choked = p_up > 0 and (p_down / p_up) <= CRITICAL_RATIO
        rho_up = p_up / (R_AIR * t_up)
        breach.velocity = calculate_velocity(mass_flow, rho_up, breach.area)

    @staticmethod
    def _change_mass(compartment: Compartment, dm: float) -> None:
        new_mass = max(0.001, compartment.mass() + dm)
        pressure = new_mass * R_AIR * compartment.temperature / compartment.volume
        compartment.pressure = max(0.0, pressure)

    def total_leak_rate(self) -> float:
        """Total mass flow to vacuum in kg/s."""
        return sum(abs(b.mass_flow_rate) for b in self._breaches if b.to_vacuum)

    def time_to_critical_pressure(self, compartment_id: str,
                                  critical_pressure: float = 50000.0) -> float:
        """Linear estimate of seconds until a compartment drops to ``critical_pressure``."""
        comp = self.get_compartment(compartment_id)
        if comp is None:
            return 0.0

        leak_rate = sum(
            abs(b.mass_flow_rate)
            for b in self._breaches
            if b.compartment_a == compartment_id and b.to_vacuum
        )
        if leak_rate <= 0.0:
            return math.inf

        critical_mass = critical_pressure * comp.volume / (R_AIR * comp.temperature)
        return (comp.mass() - critical_mass) / leak_rate
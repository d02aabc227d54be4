"""Kelvin-Helmholtz and Rayleigh-Taylor instability models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

_TINY = 1e-10
_HUGE = 1e10


def richardson_number(g: float, rho: float, drho_dz: float, du_dz: float) -> float:
    """Gradient Richardson number ``(g/rho)(drho/dz) / (du/dz)^2``.

    Below 0.25 Kelvin-Helmholtz instability is likely; above 1 the
    stratification is stable. Without shear the limit is +/-1e10.
    """
    if abs(du_dz) < _TINY:
        return _HUGE if drho_dz > 0 else -_HUGE
    return (g / rho) * drho_dz / (du_dz * du_dz)


def kh_growth_rate(k: float, rho1: float, rho2: float, delta_u: float) -> float:
    """Inviscid Kelvin-Helmholtz growth rate for wavenumber ``k``."""
    rho_sum = rho1 + rho2
    if rho_sum < _TINY:
        return 0.0
    return k * math.sqrt(rho1 * rho2) / rho_sum * abs(delta_u)


def kh_critical_wavenumber(g: float, rho1: float, rho2: float, delta_u: float) -> float:
    """Wavenumber above which a stratified shear layer becomes unstable."""
    if abs(delta_u) < _TINY:
        return _HUGE
    return g * abs(rho1 - rho2) / (rho1 * rho2 * delta_u * delta_u)


def rt_growth_rate(g: float, rho_heavy: float, rho_light: float, wavenumber: float) -> float:
    """Rayleigh-Taylor growth rate ``sqrt(A g k)``; zero when stable."""
    atwood = (rho_heavy - rho_light) / (rho_heavy + rho_light)
    if atwood <= 0:
        return 0.0
    return math.sqrt(atwood * g * wavenumber)


@dataclass
class KHConfig:
    """Parameters of the Kelvin-Helmholtz model."""

    wavelength: float = 1.0
    initial_amplitude: float = 0.01
    viscosity: float = 1e-5
    gravity: float = 9.81


@dataclass
class KHInstabilityModel:
    """Kelvin-Helmholtz instability of a shear interface."""

    config: KHConfig = field(default_factory=KHConfig)

    @property
    def _wavenumber(self) -> float:
        return 2.0 * math.pi / self.config.wavelength

    def is_unstable(self, rho_upper: float, rho_lower: float,
                    u_upper: float, u_lower: float) -> bool:
        """True when KH waves will grow on the interface."""
        wavelength = self.config.wavelength
        ri = richardson_number(
            self.config.gravity,
            (rho_upper + rho_lower) / 2.0,
            (rho_lower - rho_upper) / wavelength,
            (u_upper - u_lower) / wavelength,
        )
        return ri < 0.25

    def evolve_amplitude(self, amplitude: float, dt: float, rho1: float,
                         rho2: float, delta_u: float) -> float:
        """Advance a perturbation amplitude by ``dt`` with viscous damping."""
        k = self._wavenumber
        sigma = kh_growth_rate(k, rho1, rho2, delta_u)
        damping = 2.0 * self.config.viscosity * k * k
        return amplitude * math.exp((sigma - damping) * dt)

    def mixing_enhancement(self, base_diffusivity: float, rho1: float,
                           rho2: float, delta_u: float) -> float:
        """Effective diffusivity enhanced by KH mixing."""
        sigma = kh_growth_rate(self._wavenumber, rho1, rho2, delta_u)
        enhancement = 1.0 + sigma * self.config.wavelength
        return base_diffusivity * max(1.0, enhancement)


@dataclass
class RTConfig:
    """Parameters of the Rayleigh-Taylor model."""

    gravity: float = 9.81
    surface_tension: float = 0.0
    viscosity: float = 1e-5


@dataclass
class RTInstabilityModel:
    """Rayleigh-Taylor instability of a density interface."""

    config: RTConfig = field(default_factory=RTConfig)

    def is_unstable(self, rho_upper: float, rho_lower: float) -> bool:
        """Heavy fluid on top of light fluid is unstable."""
        return rho_upper > rho_lower

    def critical_wavelength(self, rho_heavy: float, rho_light: float) -> float:
        """Wavelength below which surface tension stabilises the interface."""
        if self.config.surface_tension <= 0:
            return 0.0
        drho = rho_heavy - rho_light
        if drho <= 0:
            return _HUGE
        return 2.0 * math.pi * math.sqrt(
            self.config.surface_tension / (self.config.gravity * drho)
        )

    def growth_rate(self, rho_heavy: float, rho_light: float, wavelength: float) -> float:
        """Growth rate of a perturbation of the given wavelength."""
        k = 2.0 * math.pi / wavelength
        return rt_growth_rate(self.config.gravity, rho_heavy, rho_light, k)
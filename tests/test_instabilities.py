import math

import pytest

from isolated.instabilities import (
    KHConfig,
    KHInstabilityModel,
    RTConfig,
    RTInstabilityModel,
    kh_critical_wavenumber,
    kh_growth_rate,
    richardson_number,
    rt_growth_rate,
)


def test_richardson_without_shear_hits_limits():
    assert richardson_number(9.81, 1.0, 0.5, 0.0) == 1e10
    assert richardson_number(9.81, 1.0, -0.5, 0.0) == -1e10


def test_richardson_zero_stratification_is_zero():
    assert richardson_number(9.81, 1.2, 0.0, 2.0) == 0.0


def test_richardson_sign_follows_density_gradient():
    assert richardson_number(9.81, 1.0, 1.0, 1.0) > 0
    assert richardson_number(9.81, 1.0, -1.0, 1.0) < 0


def test_kh_growth_rate_zero_density():
    assert kh_growth_rate(1.0, 0.0, 0.0, 5.0) == 0.0


def test_kh_growth_rate_symmetric_and_linear_in_shear():
    a = kh_growth_rate(2.0, 1.0, 3.0, 1.5)
    assert kh_growth_rate(2.0, 3.0, 1.0, 1.5) == pytest.approx(a)
    assert kh_growth_rate(2.0, 1.0, 3.0, -1.5) == pytest.approx(a)
    assert kh_growth_rate(2.0, 1.0, 3.0, 3.0) == pytest.approx(2 * a)


def test_kh_critical_wavenumber_without_shear():
    assert kh_critical_wavenumber(9.81, 1.0, 2.0, 0.0) == 1e10


def test_kh_critical_wavenumber_decreases_with_shear():
    slow = kh_critical_wavenumber(9.81, 1.0, 2.0, 1.0)
    fast = kh_critical_wavenumber(9.81, 1.0, 2.0, 2.0)
    assert fast < slow
    assert kh_critical_wavenumber(9.81, 1.0, 1.0, 1.0) == 0.0


def test_rt_growth_rate_stable_is_zero():
    assert rt_growth_rate(9.81, 1.0, 3.0, 1.0) == 0.0
    assert rt_growth_rate(9.81, 2.0, 2.0, 1.0) == 0.0


def test_rt_growth_rate_unstable_value():
    assert rt_growth_rate(2.0, 3.0, 1.0, 1.0) == pytest.approx(1.0)


def test_kh_model_unstable_with_shear_and_no_stratification():
    model = KHInstabilityModel()
    assert model.is_unstable(1.0, 1.0, 5.0, 0.0) is True


def test_kh_model_stable_without_shear():
    model = KHInstabilityModel()
    assert model.is_unstable(1.0, 1000.0, 2.0, 2.0) is False


def test_kh_evolve_amplitude_decays_without_shear():
    model = KHInstabilityModel(KHConfig(viscosity=1e-3))
    result = model.evolve_amplitude(0.01, 10.0, 1.0, 1.0, 0.0)
    assert 0 < result < 0.01


def test_kh_evolve_amplitude_grows_with_shear():
    model = KHInstabilityModel()
    assert model.evolve_amplitude(0.01, 1.0, 1.0, 1.0, 10.0) > 0.01
    assert model.evolve_amplitude(0.0, 1.0, 1.0, 1.0, 10.0) == 0.0


def test_kh_mixing_enhancement():
    model = KHInstabilityModel()
    assert model.mixing_enhancement(0.5, 1.0, 1.0, 0.0) == pytest.approx(0.5)
    assert model.mixing_enhancement(0.5, 1.0, 1.0, 4.0) > 0.5


def test_rt_model_is_unstable():
    model = RTInstabilityModel()
    assert model.is_unstable(1000.0, 1.0) is True
    assert model.is_unstable(1.0, 1000.0) is False


def test_rt_critical_wavelength_cases():
    assert RTInstabilityModel().critical_wavelength(1000.0, 1.0) == 0.0
    tense = RTInstabilityModel(RTConfig(surface_tension=0.07))
    assert tense.critical_wavelength(1.0, 1000.0) == 1e10
    lam = tense.critical_wavelength(1000.0, 1.0)
    assert 0 < lam < 1.0
    assert tense.critical_wavelength(2000.0, 1.0) < lam


def test_rt_model_growth_rate_matches_function():
    model = RTInstabilityModel(RTConfig(gravity=3.0))
    expected = rt_growth_rate(3.0, 5.0, 1.0, 2.0 * math.pi / 0.5)
    assert model.growth_rate(5.0, 1.0, 0.5) == pytest.approx(expected)
    assert model.growth_rate(1.0, 5.0, 0.5) == 0.0
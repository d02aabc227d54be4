import pytest

from isolated.nervous import AutonomicNervousSystem


def test_add_pain_stress_fatigue_capped():
    system = AutonomicNervousSystem()
    system.add_pain(5.0)
    system.add_stress(5.0)
    system.add_fatigue(5.0)
    assert system.state.pain_level == 1.0
    assert system.state.stress_level == 1.0
    assert system.state.fatigue == 1.0


def test_tones_stay_in_range():
    system = AutonomicNervousSystem()
    system.add_pain(1.0)
    for _ in range(20):
        snap = system.step(1.0, 40.0, 0.5, 41.0, 30.0)
    assert 0.0 <= snap.sympathetic_tone <= 1.0
    assert 0.0 <= snap.parasympathetic_tone <= 1.0


def test_low_pressure_raises_sympathetic_tone():
    normal = AutonomicNervousSystem()
    hypotensive = AutonomicNervousSystem()
    a = normal.step(1.0, 93.0, 0.98, 37.0, 90.0)
    b = hypotensive.step(1.0, 60.0, 0.98, 37.0, 90.0)
    assert b.sympathetic_tone > a.sympathetic_tone
    assert b.parasympathetic_tone < a.parasympathetic_tone


def test_hypoglycemia_adds_stress():
    normal = AutonomicNervousSystem()
    low = AutonomicNervousSystem()
    a = normal.step(1.0, 93.0, 0.98, 37.0, 90.0)
    b = low.step(1.0, 93.0, 0.98, 37.0, 50.0)
    assert b.stress_level > a.stress_level


def test_hypoxia_reduces_consciousness_then_recovers():
    system = AutonomicNervousSystem()
    snap = system.step(1.0, 93.0, 0.5, 37.0, 90.0)
    assert snap.consciousness < 1.0
    for _ in range(50):
        snap = system.step(1.0, 93.0, 0.98, 37.0, 90.0)
    assert snap.consciousness == 1.0


def test_pain_recovers_over_time():
    system = AutonomicNervousSystem()
    system.add_pain(0.5)
    snap = system.step(10.0, 93.0, 0.98, 37.0, 90.0)
    assert snap.pain_level < 0.5
    assert snap.pain_level >= 0.0


def test_step_returns_snapshot():
    system = AutonomicNervousSystem()
    snap = system.step(1.0, 93.0, 0.98, 37.0, 90.0)
    snap.sympathetic_tone = 42.0
    assert system.state.sympathetic_tone <= 1.0


def test_response_tracks_sympathetic_tone():
    system = AutonomicNervousSystem()
    calm = system.compute_response()
    assert calm.sweat_rate == 0.0
    assert calm.vasoconstriction == system.state.sympathetic_tone
    system.add_pain(1.0)
    system.step(1.0, 60.0, 0.6, 39.0, 50.0)
    aroused = system.compute_response()
    assert aroused.heart_rate_modifier > calm.heart_rate_modifier
    assert aroused.respiratory_rate_modifier > calm.respiratory_rate_modifier
    assert aroused.sweat_rate > 0.0
    assert aroused.vasoconstriction == pytest.approx(system.state.sympathetic_tone)
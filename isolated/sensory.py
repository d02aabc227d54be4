"""Vision, hearing, balance and proprioception models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# --- Vision ---


@dataclass
class VisionState:
    """Visual function, each quantity on a 0-1 scale."""

    acuity: float = 1.0
    peripheral: float = 1.0
    dark_adaptation: float = 1.0
    flash_blindness: float = 0.0
    blur: float = 0.0
    corneal_damage: float = 0.0
    retinal_damage: float = 0.0
    eye_closed_left: bool = False
    eye_closed_right: bool = False

    def effective_vision(self) -> float:
        """Overall usable vision in [0, 1]."""
        if self.eye_closed_left and self.eye_closed_right:
            return 0.0
        base = self.acuity * (1.0 - self.blur) * (1.0 - self.flash_blindness)
        base *= (1.0 - self.corneal_damage * 0.5) * (1.0 - self.retinal_damage)
        if self.eye_closed_left or self.eye_closed_right:
            base *= 0.7
        return _clamp(base, 0.0, 1.0)


@dataclass
class VisionSystem:
    """Vision impaired by hypoxia, glucose, intracranial pressure and injury."""

    state: VisionState = field(default_factory=VisionState)

    def step(self, dt: float, pao2: float, blood_glucose: float, icp: float) -> None:
        """Apply one time step of physiological effects and flash recovery."""
        self._hypoxic_effects(pao2)
        self._metabolic_effects(blood_glucose)
        self._icp_effects(icp)
        self.state.flash_blindness *= math.exp(-dt / 30.0)
        self.state.blur = _clamp(self.state.blur, 0.0, 1.0)

    def apply_flash(self, intensity: float) -> None:
        """Flash of intensity 0-1; above 0.8 it also damages the retina."""
        s = self.state
        s.flash_blindness = min(1.0, s.flash_blindness + intensity)
        if intensity > 0.8:
            s.retinal_damage += (intensity - 0.8) * 0.5

    def apply_debris(self, severity: float) -> None:
        self.state.corneal_damage += severity * 0.3
        self.state.blur += severity * 0.2

    def apply_chemical_exposure(self, severity: float) -> None:
        s = self.state
        s.corneal_damage += severity * 0.5
        s.blur += severity * 0.4
        if severity > 0.5:
            s.eye_closed_left = True
            s.eye_closed_right = True

    def _hypoxic_effects(self, pao2: float) -> None:
        s = self.state
        if pao2 < 60.0:
            deficit = (60.0 - pao2) / 60.0
            s.peripheral *= 1.0 - deficit * 0.5
            s.acuity *= 1.0 - deficit * 0.3
        if pao2 < 30.0:
            s.acuity *= 0.5
            s.peripheral *= 0.3

    def _metabolic_effects(self, glucose: float) -> None:
        if glucose < 70.0:
            self.state.blur += (70.0 - glucose) / 140.0

    def _icp_effects(self, icp: float) -> None:
        if icp > 20.0:
            excess = (icp - 20.0) / 20.0
            self.state.acuity *= 1.0 - excess * 0.3
            self.state.peripheral *= 1.0 - excess * 0.4


# --- Hearing ---


@dataclass
class HearingState:
    """Hearing thresholds in dB of loss and eardrum status."""

    threshold_left: float = 0.0
    threshold_right: float = 0.0
    tinnitus: float = 0.0
    temporary_shift: float = 0.0
    high_freq_loss: float = 0.0
    low_freq_loss: float = 0.0
    ruptured_left: bool = False
    ruptured_right: bool = False

    def effective_hearing(self) -> float:
        """Overall hearing ability in [0, 1]."""
        avg_loss = (self.threshold_left + self.threshold_right) / 2.0 + self.temporary_shift
        ability = max(0.0, 1.0 - avg_loss / 80.0)
        if self.ruptured_left and self.ruptured_right:
            return ability * 0.2
        if self.ruptured_left or self.ruptured_right:
            return ability * 0.6
        return ability


@dataclass
class HearingSystem:
    """Noise- and blast-induced hearing damage."""

    state: HearingState = field(default_factory=HearingState)

    def step(self, dt: float) -> None:
        """Recover temporary threshold shift and severe tinnitus."""
        s = self.state
        s.temporary_shift *= math.exp(-dt / 3600.0)
        if s.tinnitus > 0.3:
            s.tinnitus *= math.exp(-dt / 86400.0)

    def apply_noise_exposure(self, db_level: float, duration_hours: float) -> None:
        """Noise dose on the 85 dB / 8 h criterion with a 3 dB exchange rate."""
        if db_level < 85.0:
            return
        exposure = 2.0 ** ((db_level - 85.0) / 3.0) * duration_hours / 8.0
        s = self.state
        s.high_freq_loss += exposure * 2.0
        s.threshold_left += exposure
        s.threshold_right += exposure
        s.temporary_shift += exposure * 5.0
        s.tinnitus = min(1.0, s.tinnitus + exposure * 0.1)

    def apply_blast(self, overpressure_psi: float) -> None:
        s = self.state
        if overpressure_psi > 5.0 and (overpressure_psi - 5.0) / 10.0 > 0.5:
            s.ruptured_left = True
            s.ruptured_right = True
        damage = overpressure_psi * 3.0
        s.low_freq_loss += damage
        s.threshold_left += damage
        s.threshold_right += damage
        s.temporary_shift += damage * 2.0
        s.tinnitus = min(1.0, s.tinnitus + overpressure_psi * 0.05)


# --- Vestibular ---


@dataclass
class VestibularState:
    """Balance, vertigo and motion sickness, each on a 0-1 scale."""

    balance: float = 1.0
    vertigo: float = 0.0
    nausea: float = 0.0
    spatial_orientation: float = 1.0
    inner_ear_damage: float = 0.0
    benign_positional: bool = False

    def effective_balance(self) -> float:
        return self.balance * (1.0 - self.vertigo * 0.8) * (1.0 - self.inner_ear_damage * 0.5)


@dataclass
class VestibularSystem:
    """Inner-ear balance with motion sickness and positional vertigo."""

    state: VestibularState = field(default_factory=VestibularState)

    def step(self, dt: float, angular_velocity: float, linear_accel: float) -> None:
        s = self.state
        motion_stress = angular_velocity * 0.1 + abs(linear_accel - 9.81) * 0.05
        if motion_stress > 0.1:
            s.nausea += motion_stress * dt * 0.01
            s.spatial_orientation -= motion_stress * dt * 0.005
        s.nausea = _clamp(s.nausea, 0.0, 1.0)
        s.spatial_orientation = _clamp(s.spatial_orientation, 0.0, 1.0)
        s.vertigo *= math.exp(-dt / 60.0)
        s.nausea *= math.exp(-dt / 300.0)

    def apply_head_trauma(self, severity: float) -> None:
        s = self.state
        s.inner_ear_damage += severity * 0.3
        s.vertigo = min(1.0, s.vertigo + severity * 0.5)
        s.balance *= 1.0 - severity * 0.4
        if severity > 0.5:
            s.benign_positional = True

    def apply_blast(self, overpressure_psi: float) -> None:
        if overpressure_psi > 3.0:
            s = self.state
            s.inner_ear_damage += overpressure_psi * 0.05
            s.vertigo = min(1.0, s.vertigo + overpressure_psi * 0.1)

    def trigger_bppv_episode(self) -> None:
        """Positional vertigo attack; only happens once BPPV has developed."""
        s = self.state
        if s.benign_positional:
            s.vertigo = min(1.0, s.vertigo + 0.6)
            s.nausea = min(1.0, s.nausea + 0.4)


# --- Proprioception ---

_LIMBS = ("arm_left", "arm_right", "leg_left", "leg_right")


@dataclass
class ProprioceptionState:
    """Position, movement and force sense plus per-limb nerve function."""

    position_sense: float = 1.0
    movement_sense: float = 1.0
    force_sense: float = 1.0
    arm_left: float = 1.0
    arm_right: float = 1.0
    leg_left: float = 1.0
    leg_right: float = 1.0

    def effective_coordination(self) -> float:
        limb_avg = (self.arm_left + self.arm_right + self.leg_left + self.leg_right) / 4.0
        return self.position_sense * self.movement_sense * limb_avg


@dataclass
class ProprioceptionSystem:
    """Body position sense degraded by nerve damage and metabolic neuropathy."""

    state: ProprioceptionState = field(default_factory=ProprioceptionState)

    def step(self, dt: float, blood_glucose: float, vitamin_b12: float) -> None:
        s = self.state
        if blood_glucose > 180.0:
            s.position_sense -= (blood_glucose - 180.0) / 200.0 * 0.001
        if vitamin_b12 < 200.0:
            deficit = (200.0 - vitamin_b12) / 200.0
            s.position_sense -= deficit * 0.001
            s.leg_left -= deficit * 0.001
            s.leg_right -= deficit * 0.001

    def apply_nerve_damage(self, region: str, severity: float) -> None:
        """Damage one limb's nerves; unknown regions affect only position sense."""
        s = self.state
        if region in _LIMBS:
            setattr(s, region, getattr(s, region) * (1.0 - severity))
        s.position_sense *= 1.0 - severity * 0.2

    def apply_spinal_injury(self, level_fraction: float, severity: float) -> None:
        """Spinal injury at ``level_fraction`` (0 cervical, 1 lumbar)."""
        s = self.state
        affected = 1.0 - level_fraction
        if affected > 0.5:
            s.arm_left *= 1.0 - severity
            s.arm_right *= 1.0 - severity
        s.leg_left *= 1.0 - severity
        s.leg_right *= 1.0 - severity
        s.position_sense *= 1.0 - severity * affected


# --- Combined ---


@dataclass
class SensorySystem:
    """All sensory subsystems stepped together."""

    vision: VisionSystem = field(default_factory=VisionSystem)
    hearing: HearingSystem = field(default_factory=HearingSystem)
    vestibular: VestibularSystem = field(default_factory=VestibularSystem)
    proprioception: ProprioceptionSystem = field(default_factory=ProprioceptionSystem)

    def step(self, dt: float, pao2: float, glucose: float, icp: float,
             angular_vel: float = 0.0, linear_accel: float = 9.81,
             b12: float = 400.0) -> None:
        self.vision.step(dt, pao2, glucose, icp)
        self.hearing.step(dt)
        self.vestibular.step(dt, angular_vel, linear_accel)
        self.proprioception.step(dt, glucose, b12)

    def overall_sensory_function(self) -> float:
        """Weighted sum of vision, hearing, balance and coordination."""
        return (self.vision.state.effective_vision() * 0.4
                + self.hearing.state.effective_hearing() * 0.2
                + self.vestibular.state.effective_balance() * 0.2
                + self.proprioception.state.effective_coordination() * 0.2)
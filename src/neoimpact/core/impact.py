"""Impact energy and damage radius estimates.

Two models are provided. The angle-aware model scales the kinetic energy by
the sine of the impact angle (measured from the horizontal, floored at
``MIN_DEPOSITION_FACTOR``); the basic model ignores the angle entirely. Damage
radii use the nuclear-blast scaling law R = k * E^(1/3) with E in megatons.

All functions are total: negative or non-finite inputs are clamped to zero
and a non-positive energy yields a radius of exactly 0.
"""
from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass

from neoimpact.utils.constants import (
    DEG_TO_RAD,
    JOULES_PER_MEGATON_TNT,
    LIGHT_K,
    LIGHT_K_BASIC,
    MAX_DAMAGE_RADIUS_BASIC_KM,
    MAX_DAMAGE_RADIUS_KM,
    MAX_RING_RADIUS_BASIC_KM,
    MAX_RING_RADIUS_KM,
    MIN_DAMAGE_RADIUS_KM,
    MIN_DEPOSITION_FACTOR,
    MODERATE_K,
    MODERATE_K_BASIC,
    SEISMIC_OFFSET,
    SEVERE_K,
    SEVERE_K_BASIC,
    THERMAL_K,
    THERMAL_K_BASIC,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImpactParameters:
    """Physical parameters of an impactor.

    Attributes:
        diameter_m: Diameter in meters.
        velocity_km_s: Impact velocity in km/s.
        density_kg_m3: Bulk density in kg/m³.
        angle_deg: Impact angle from the horizontal in degrees, or None to use
            the angle-agnostic model.
    """

    diameter_m: float
    velocity_km_s: float
    density_kg_m3: float
    angle_deg: float | None = None


@dataclass
class ImpactEnergyResult:
    energy_joules: float
    energy_megatons_tnt: float


@dataclass(frozen=True)
class DamageRings:
    """Damage radii in km, from structural collapse outwards."""

    severe: float    # ~5 psi
    moderate: float  # ~3 psi
    light: float     # ~1 psi
    thermal: float   # severe burns

    def as_dict(self) -> dict[str, float]:
        return asdict(self)


_NO_DAMAGE = DamageRings(severe=0.0, moderate=0.0, light=0.0, thermal=0.0)


def _non_negative(value: float) -> float:
    """Clamp to [0, inf); NaN and inf become 0."""
    if not math.isfinite(value) or value < 0:
        return 0.0
    return float(value)


def _clamp_angle(angle_deg: float) -> float:
    if not math.isfinite(angle_deg):
        return 0.0
    return max(0.0, min(90.0, angle_deg))


def _kinetic_energy(diameter_m: float, velocity_km_s: float, density_kg_m3: float) -> float:
    radius = _non_negative(diameter_m) / 2
    volume = (4 / 3) * math.pi * radius * radius * radius
    mass = volume * _non_negative(density_kg_m3)
    v = _non_negative(velocity_km_s) * 1000
    return _non_negative(0.5 * mass * v * v)


def energy_basic(params: ImpactParameters) -> float:
    """Kinetic energy in joules, ignoring the impact angle."""
    return _kinetic_energy(params.diameter_m, params.velocity_km_s, params.density_kg_m3)


def energy_with_angle(params: ImpactParameters) -> float:
    """Deposited energy in joules, scaled by max(sin(angle), 0.3).

    A missing angle is treated as a vertical (90°) impact.
    """
    angle = 90.0 if params.angle_deg is None else _clamp_angle(params.angle_deg)
    deposition = max(math.sin(angle * DEG_TO_RAD), MIN_DEPOSITION_FACTOR)
    return _non_negative(energy_basic(params) * deposition)


def kinetic_energy_joules(
    diameter_m: float,
    velocity_km_s: float,
    density_kg_m3: float,
    angle_deg: float | None = None,
) -> float:
    """Impact energy in joules; angle-aware only when ``angle_deg`` is given."""
    params = ImpactParameters(diameter_m, velocity_km_s, density_kg_m3, angle_deg)
    if angle_deg is None:
        return energy_basic(params)
    return energy_with_angle(params)


def joules_to_megatons_tnt(energy_joules: float) -> float:
    return energy_joules / JOULES_PER_MEGATON_TNT


def impact_energy(params: ImpactParameters) -> ImpactEnergyResult:
    """Energy in joules and megatons, angle-aware when an angle is set."""
    joules = energy_basic(params) if params.angle_deg is None else energy_with_angle(params)
    return ImpactEnergyResult(
        energy_joules=joules,
        energy_megatons_tnt=joules_to_megatons_tnt(joules),
    )


def _scaled_radius(k: float, cube_root_mt: float, ceiling_km: float) -> float:
    return max(MIN_DAMAGE_RADIUS_KM, min(k * cube_root_mt, ceiling_km))


def _cube_root_megatons(energy_joules: float) -> float | None:
    """Cube root of the yield in megatons, or None when there is no usable energy."""
    megatons = joules_to_megatons_tnt(energy_joules)
    if not math.isfinite(megatons) or megatons <= 0:
        return None
    return math.pow(megatons, 1.0 / 3.0)


def damage_radius_with_angle_km(params: ImpactParameters) -> float:
    """Severe damage radius (~5 psi) in km for the angle-aware model."""
    cbrt = _cube_root_megatons(energy_with_angle(params))
    if cbrt is None:
        return 0.0
    return _scaled_radius(SEVERE_K, cbrt, MAX_DAMAGE_RADIUS_KM)


def damage_radius_basic_km(params: ImpactParameters) -> float:
    """Severe damage radius in km for the angle-agnostic model."""
    cbrt = _cube_root_megatons(energy_basic(params))
    if cbrt is None:
        return 0.0
    return _scaled_radius(SEVERE_K_BASIC, cbrt, MAX_DAMAGE_RADIUS_BASIC_KM)


def damage_radius_km(params: ImpactParameters) -> float:
    """Severe damage radius in km, angle-aware only when an angle is set."""
    if params.angle_deg is None:
        return damage_radius_basic_km(params)
    return damage_radius_with_angle_km(params)


def damage_rings_with_angle_km(params: ImpactParameters) -> DamageRings:
    cbrt = _cube_root_megatons(energy_with_angle(params))
    if cbrt is None:
        return _NO_DAMAGE
    return DamageRings(
        severe=_scaled_radius(SEVERE_K, cbrt, MAX_RING_RADIUS_KM),
        moderate=_scaled_radius(MODERATE_K, cbrt, MAX_RING_RADIUS_KM),
        light=_scaled_radius(LIGHT_K, cbrt, MAX_RING_RADIUS_KM),
        thermal=_scaled_radius(THERMAL_K, cbrt, MAX_RING_RADIUS_KM),
    )


def damage_rings_basic_km(params: ImpactParameters) -> DamageRings:
    cbrt = _cube_root_megatons(energy_basic(params))
    if cbrt is None:
        return _NO_DAMAGE
    return DamageRings(
        severe=_scaled_radius(SEVERE_K_BASIC, cbrt, MAX_RING_RADIUS_BASIC_KM),
        moderate=_scaled_radius(MODERATE_K_BASIC, cbrt, MAX_RING_RADIUS_BASIC_KM),
        light=_scaled_radius(LIGHT_K_BASIC, cbrt, MAX_RING_RADIUS_BASIC_KM),
        thermal=_scaled_radius(THERMAL_K_BASIC, cbrt, MAX_RING_RADIUS_BASIC_KM),
    )


def damage_rings_km(params: ImpactParameters) -> DamageRings:
    """Four damage rings in km, angle-aware only when an angle is set."""
    if params.angle_deg is None:
        rings = damage_rings_basic_km(params)
    else:
        rings = damage_rings_with_angle_km(params)
    logger.debug("Damage rings for D=%.1f m, v=%.1f km/s: %s", params.diameter_m, params.velocity_km_s, rings)
    return rings


def area_from_radius_km(radius_km: float) -> float:
    """Area in km² of a circle with the given radius."""
    return math.pi * radius_km * radius_km


def seismic_magnitude(energy_megatons_tnt: float) -> float:
    """Rough Richter-scale equivalent of the impact energy, never negative."""
    joules = energy_megatons_tnt * JOULES_PER_MEGATON_TNT
    if not math.isfinite(joules) or joules <= 0:
        return 0.0
    return max(0.0, math.log10(joules) / 1.5 - SEISMIC_OFFSET)

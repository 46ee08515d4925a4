"""
neoimpact: orbit propagation and impact estimates for near-Earth objects.

Deterministic building blocks for asteroid impact visualisation:
Keplerian propagation, kinetic energy and blast-radius scaling, and
reproducible impact point estimates from NEO feed data.
"""

from __future__ import annotations

__version__ = "0.1.0-dev"

from neoimpact.core.kepler import solve_eccentric_anomaly
from neoimpact.core.orbit import (
    OrbitalElements,
    generate_orbit_points,
    position_at,
    position_at_time,
    trajectory,
)
from neoimpact.core.impact import (
    DamageRings,
    ImpactEnergyResult,
    ImpactParameters,
    damage_radius_km,
    damage_rings_km,
    energy_basic,
    energy_with_angle,
    impact_energy,
    joules_to_megatons_tnt,
    kinetic_energy_joules,
)
from neoimpact.core.impact_point import GeoPoint, ImpactPointMethod, best_impact_point, explain_impact_point
from neoimpact.core.synthetic import generate_orbital_elements
from neoimpact.data.neo import CloseApproach, EstimatedDiameter, NearEarthObject, parse_feed
from neoimpact.data.cache import FeedCache

__all__ = [
    "__version__",
    "solve_eccentric_anomaly",
    "OrbitalElements",
    "position_at",
    "position_at_time",
    "trajectory",
    "generate_orbit_points",
    "ImpactParameters",
    "ImpactEnergyResult",
    "DamageRings",
    "energy_basic",
    "energy_with_angle",
    "kinetic_energy_joules",
    "joules_to_megatons_tnt",
    "impact_energy",
    "damage_radius_km",
    "damage_rings_km",
    "GeoPoint",
    "ImpactPointMethod",
    "best_impact_point",
    "explain_impact_point",
    "generate_orbital_elements",
    "CloseApproach",
    "EstimatedDiameter",
    "NearEarthObject",
    "parse_feed",
    "FeedCache",
]

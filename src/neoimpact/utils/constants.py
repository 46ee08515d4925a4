"""Physical constants and model coefficients for orbit and impact estimates.

Units are noted per constant. Distances in the orbit model are AU, times are
days; the impact model works in meters, km/s and kg/m³.
"""

from __future__ import annotations

import math

# --- Astronomical constants ---
AU_KM: float = 149597870.7
"""Astronomical unit in km."""

DAYS_PER_YEAR: float = 365.25
"""Julian year in days, used with Kepler's third law (P² = a³, P in years)."""

LUNAR_DISTANCE_KM: float = 384400.0
"""Mean Earth-Moon distance in km (one lunar distance)."""

SECONDS_PER_DAY: float = 86400.0

DEG_TO_RAD: float = math.pi / 180.0
RAD_TO_DEG: float = 180.0 / math.pi

# --- Orbit propagation ---
KEPLER_TOLERANCE: float = 1e-8
"""Newton-Raphson stopping tolerance on successive eccentric anomalies (rad)."""

KEPLER_MAX_ITERATIONS: int = 100
"""Hard iteration cap for the Kepler solver."""

VISUAL_SCALE: float = 0.1
"""Scene units per AU for positions handed to the 3D scene."""

DEFAULT_ORBIT_POINTS: int = 100
"""Default number of segments when sampling a full orbit."""

# --- Impact energy ---
JOULES_PER_MEGATON_TNT: float = 4.184e15
"""Energy of one megaton of TNT in joules."""

MIN_DEPOSITION_FACTOR: float = 0.3
"""Floor on sin(impact angle) when scaling deposited energy."""

# Damage radii follow R = k * E^(1/3) with E in megatons and k in km/Mt^(1/3).
SEVERE_K: float = 6.2
"""~5 psi overpressure, angle-aware model."""

MODERATE_K: float = 9.5
"""~3 psi overpressure, angle-aware model."""

LIGHT_K: float = 16.0
"""~1 psi overpressure, angle-aware model."""

THERMAL_K: float = 22.0
"""Severe thermal burns, angle-aware model."""

SEVERE_K_BASIC: float = 7.5
MODERATE_K_BASIC: float = 11.5
LIGHT_K_BASIC: float = 19.0
THERMAL_K_BASIC: float = 26.0

MIN_DAMAGE_RADIUS_KM: float = 0.5
"""Smallest radius reported for any positive energy."""

MAX_DAMAGE_RADIUS_KM: float = 1000.0
"""Ceiling for the single angle-aware damage radius."""

MAX_DAMAGE_RADIUS_BASIC_KM: float = 1500.0
"""Ceiling for the single angle-agnostic damage radius."""

MAX_RING_RADIUS_KM: float = 1500.0
"""Ceiling for angle-aware damage rings."""

MAX_RING_RADIUS_BASIC_KM: float = 2000.0
"""Ceiling for angle-agnostic damage rings."""

SEISMIC_OFFSET: float = 6.07
"""Offset in the energy to Richter-like magnitude conversion."""

# --- Impact point estimation ---
EARTH_AXIAL_TILT_DEG: float = 23.5
"""Obliquity used for the seasonal latitude signal."""

DAYS_PER_ESTIMATOR_YEAR: float = 365.0
"""Year length used for the seasonal phase."""

BASIC_LATITUDE_LIMIT_DEG: float = 80.0
ADVANCED_LATITUDE_LIMIT_DEG: float = 75.0
DIRECTION_LATITUDE_AMPLITUDE_DEG: float = 60.0

REFERENCE_VELOCITY_KM_S: float = 30.0
"""Velocity at which velocity-driven scatter saturates."""

STABLE_DIAMETER_M: float = 1000.0
"""Objects at least this large get no size-driven scatter."""

# --- Synthetic orbits (typical near-Earth asteroids) ---
SYNTHETIC_SEMI_MAJOR_AXIS_AU: tuple[float, float] = (0.8, 2.8)
SYNTHETIC_MAX_ECCENTRICITY: float = 0.6
SYNTHETIC_MAX_INCLINATION_DEG: float = 30.0

"""Plausible impact point estimates for near-Earth objects.

No real impact trajectory is available for feed objects, so a point is
derived from the approach date (seasonal tilt and hour of day), the relative
velocity, the object's size, and a pseudo-random perturbation seeded by the
object id. The same id and approach data always give the same point.

The seeded generator is the ``frac(sin(seed) * 10000)`` construction. It has
poor statistical quality and neighbouring seeds correlate; it is kept because
the exact sequence determines where previously displayed impacts landed.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from neoimpact.data.neo import CloseApproach, NearEarthObject
from neoimpact.utils.constants import (
    ADVANCED_LATITUDE_LIMIT_DEG,
    BASIC_LATITUDE_LIMIT_DEG,
    DAYS_PER_ESTIMATOR_YEAR,
    DIRECTION_LATITUDE_AMPLITUDE_DEG,
    EARTH_AXIAL_TILT_DEG,
    REFERENCE_VELOCITY_KM_S,
    STABLE_DIAMETER_M,
)

logger = logging.getLogger(__name__)

GeoPoint = tuple[float, float]
"""(longitude, latitude) in degrees."""


class ImpactPointMethod(Enum):
    """Impact point estimation methods, from most to least informed."""

    ADVANCED = "advanced"
    DIRECTION = "direction"
    BASIC = "basic"


@dataclass
class ImpactExplanation:
    """Factors behind an estimated impact point.

    Attributes:
        point: Estimated (longitude, latitude).
        method: Method that produced the point.
        velocity_km_s: Relative velocity of the first close approach.
        miss_distance_lunar: Miss distance of the first close approach.
        diameter_m: Minimum estimated diameter (0 if unknown).
        approach_date: Time of the first close approach.
        seasonal_influence_deg: Seasonal latitude term.
        explanation: Human-readable summary.
    """

    point: GeoPoint
    method: ImpactPointMethod
    velocity_km_s: float
    miss_distance_lunar: float
    diameter_m: float
    approach_date: datetime
    seasonal_influence_deg: float
    explanation: str


def hash_string(text: str) -> int:
    """Polynomial rolling hash (base 31) over UTF-16 code units.

    The accumulator wraps to a signed 32-bit integer after each step and the
    absolute value of the final result is returned.
    """
    h = 0
    units = text.encode("utf-16-le", "surrogatepass")
    for k in range(0, len(units), 2):
        code = units[k] | (units[k + 1] << 8)
        h = (h * 31 + code) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def seeded_random(seed: float, low: float = 0.0, high: float = 1.0) -> float:
    """Deterministic value in [low, high) from ``frac(sin(seed) * 10000)``."""
    x = math.sin(seed) * 10000
    return low + (x - math.floor(x)) * (high - low)


def day_of_year(date: datetime) -> int:
    """Day of the year, 1 on January 1st (UTC; naive datetimes taken as UTC)."""
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    date = date.astimezone(timezone.utc)
    start = datetime(date.year - 1, 12, 31, tzinfo=timezone.utc)
    return math.floor((date - start) / timedelta(days=1))


def seasonal_influence(date: datetime) -> float:
    """Latitude offset in degrees following the sub-solar latitude over the year."""
    return math.sin((day_of_year(date) / DAYS_PER_ESTIMATOR_YEAR) * 2 * math.pi) * EARTH_AXIAL_TILT_DEG


def _hour_angle(date: datetime) -> float:
    """Map the UTC hour of day onto a longitude in [-180, 165]."""
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc)
    return (date.hour / 24) * 360 - 180


def _wrap_longitude(longitude: float) -> float:
    return ((longitude + 180) % 360) - 180


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


def basic_impact_point(neo: NearEarthObject, reference_time: datetime | None = None) -> GeoPoint:
    """Seasonal latitude and hour-of-day longitude with seeded scatter.

    Uses the first close approach when present. Without one the velocity
    scatter is zero and the time comes from the orbital element epoch, then
    ``reference_time``, then the current time.
    """
    seed = hash_string(neo.id)
    approach = neo.first_approach

    if approach is not None:
        velocity = approach.relative_velocity_km_s
        date = approach.date
    else:
        velocity = 0.0
        if neo.orbital_elements is not None:
            date = neo.orbital_elements.epoch
        elif reference_time is not None:
            date = reference_time
        else:
            date = datetime.now(timezone.utc)

    velocity_factor = min(velocity / REFERENCE_VELOCITY_KM_S, 2)
    base_latitude = seasonal_influence(date) + (seeded_random(seed) - 0.5) * 60 * velocity_factor
    latitude = _clamp(base_latitude, BASIC_LATITUDE_LIMIT_DEG)

    base_longitude = _hour_angle(date) + (seeded_random(seed + 1) - 0.5) * 120
    longitude = _wrap_longitude(base_longitude)

    return longitude, latitude


def direction_impact_point(neo: NearEarthObject) -> GeoPoint:
    """Point on a band around Earth set by Earth's orbital position and a seeded phase.

    Raises:
        ValueError: If the object has no close approach.
    """
    approach = _require_approach(neo)
    seed = hash_string(neo.id)

    earth_orbital_position = (day_of_year(approach.date) / DAYS_PER_ESTIMATOR_YEAR) * 2 * math.pi
    approach_angle = earth_orbital_position + seeded_random(seed) * math.pi

    latitude = math.sin(approach_angle) * DIRECTION_LATITUDE_AMPLITUDE_DEG
    longitude = math.cos(approach_angle) * 180
    return longitude, latitude


def advanced_impact_point(neo: NearEarthObject) -> GeoPoint:
    """Combine season, velocity, size and hour of day.

    Faster objects get up to ±30° of latitude scatter (saturating through
    tanh). Objects smaller than 1 km get up to ±20° more, the smaller the
    more. Longitude is the hour angle plus up to ±90° of seeded orbital
    direction.

    Raises:
        ValueError: If the object has no close approach.
    """
    approach = _require_approach(neo)
    seed = hash_string(neo.id)

    velocity = approach.relative_velocity_km_s
    diameter = neo.estimated_diameter.min_m if neo.estimated_diameter is not None else 0.0

    velocity_influence = math.tanh(velocity / REFERENCE_VELOCITY_KM_S) * 30
    size_stability = min(diameter / STABLE_DIAMETER_M, 1)
    size_influence = (1 - size_stability) * 20

    base_latitude = seasonal_influence(approach.date) + velocity_influence * seeded_random(seed, -1, 1)
    latitude_variation = size_influence * seeded_random(seed + 1, -1, 1)
    latitude = _clamp(base_latitude + latitude_variation, ADVANCED_LATITUDE_LIMIT_DEG)

    orbital_direction = seeded_random(seed + 2, -1, 1) * 90
    longitude = _wrap_longitude(_hour_angle(approach.date) + orbital_direction)

    return longitude, latitude


def select_method(neo: NearEarthObject) -> ImpactPointMethod:
    """Most informed method the object's data supports."""
    if neo.close_approaches and neo.estimated_diameter is not None:
        return ImpactPointMethod.ADVANCED
    if neo.close_approaches:
        return ImpactPointMethod.DIRECTION
    return ImpactPointMethod.BASIC


def best_impact_point(neo: NearEarthObject, reference_time: datetime | None = None) -> GeoPoint:
    """Estimate an impact point with the most informed applicable method.

    Args:
        neo: The object; ``neo.id`` seeds the perturbations.
        reference_time: Fallback time for objects with neither close
            approaches nor orbital elements.

    Returns:
        (longitude, latitude) in degrees.
    """
    method = select_method(neo)
    if method is ImpactPointMethod.ADVANCED:
        point = advanced_impact_point(neo)
    elif method is ImpactPointMethod.DIRECTION:
        point = direction_impact_point(neo)
    else:
        point = basic_impact_point(neo, reference_time)

    logger.debug("Impact point for NEO %s (%s): lon=%.3f lat=%.3f", neo.id, method.value, *point)
    return point


def explain_impact_point(neo: NearEarthObject) -> ImpactExplanation:
    """Estimated impact point together with the inputs that shaped it.

    Raises:
        ValueError: If the object has no close approach.
    """
    approach = _require_approach(neo)
    method = select_method(neo)
    point = best_impact_point(neo)

    velocity = approach.relative_velocity_km_s
    diameter = neo.estimated_diameter.min_m if neo.estimated_diameter is not None else 0.0
    seasonal = seasonal_influence(approach.date)

    explanation = (
        f"Impact estimated from orbital velocity ({velocity:.1f} km/s), "
        f"size ({diameter:.0f} m), approach date (seasonal influence: {seasonal:.1f}°) "
        f"and approach characteristics of NEO {neo.id}."
    )

    return ImpactExplanation(
        point=point,
        method=method,
        velocity_km_s=velocity,
        miss_distance_lunar=approach.miss_distance_lunar,
        diameter_m=diameter,
        approach_date=approach.date,
        seasonal_influence_deg=seasonal,
        explanation=explanation,
    )


def _require_approach(neo: NearEarthObject) -> CloseApproach:
    approach = neo.first_approach
    if approach is None:
        logger.error("NEO %s has no close approach data", neo.id)
        raise ValueError(f"NEO {neo.id} has no close approach data")
    return approach

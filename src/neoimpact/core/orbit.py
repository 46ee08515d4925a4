"""Keplerian orbit propagation for near-Earth objects.

Positions are heliocentric-ecliptic. By default they are returned in the
scene convention used by the 3D view: scaled by ``VISUAL_SCALE`` and with the
ecliptic axes remapped as (x, z, y), so the scene's y axis points out of the
ecliptic plane. Pass ``visual=False`` to get raw ``[x, y, z]`` in AU.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from neoimpact.core.kepler import solve_eccentric_anomaly
from neoimpact.utils.constants import (
    DAYS_PER_YEAR,
    DEFAULT_ORBIT_POINTS,
    DEG_TO_RAD,
    VISUAL_SCALE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrbitalElements:
    """Six Keplerian elements plus epoch and period.

    Attributes:
        epoch: Time the elements are valid for (UTC).
        semi_major_axis_au: Semi-major axis in AU, > 0.
        eccentricity: Eccentricity, 0 <= e < 1.
        inclination_deg: Inclination in degrees.
        longitude_ascending_node_deg: Longitude of the ascending node in degrees.
        argument_periapsis_deg: Argument of periapsis in degrees.
        mean_anomaly_deg: Mean anomaly at epoch in degrees.
        orbital_period_days: Orbital period in days, > 0.
    """

    epoch: datetime
    semi_major_axis_au: float
    eccentricity: float
    inclination_deg: float
    longitude_ascending_node_deg: float
    argument_periapsis_deg: float
    mean_anomaly_deg: float
    orbital_period_days: float

    @classmethod
    def from_keplerian(
        cls,
        semi_major_axis_au: float,
        eccentricity: float,
        inclination_deg: float,
        longitude_ascending_node_deg: float,
        argument_periapsis_deg: float,
        mean_anomaly_deg: float,
        epoch: datetime | None = None,
    ) -> OrbitalElements:
        """Build elements for a heliocentric orbit, deriving the period from a."""
        if epoch is None:
            epoch = datetime.now(timezone.utc)
        return cls(
            epoch=epoch,
            semi_major_axis_au=semi_major_axis_au,
            eccentricity=eccentricity,
            inclination_deg=inclination_deg,
            longitude_ascending_node_deg=longitude_ascending_node_deg,
            argument_periapsis_deg=argument_periapsis_deg,
            mean_anomaly_deg=mean_anomaly_deg,
            orbital_period_days=orbital_period_days(semi_major_axis_au),
        )


def orbital_period_days(semi_major_axis_au: float) -> float:
    """Heliocentric orbital period in days from Kepler's third law (P² = a³).

    A negative or NaN semi-major axis gives NaN.
    """
    if not semi_major_axis_au >= 0:
        return math.nan
    return math.pow(semi_major_axis_au, 1.5) * DAYS_PER_YEAR


def position_at(
    elements: OrbitalElements,
    time_from_epoch_days: float,
    *,
    visual: bool = True,
) -> NDArray[np.float64]:
    """Position of the object ``time_from_epoch_days`` after the element epoch.

    Malformed elements (period <= 0, e outside [0, 1), non-finite angles)
    are not rejected; the result is a NaN vector.

    Args:
        elements: Orbital elements of the object.
        time_from_epoch_days: Elapsed time since ``elements.epoch`` in days.
        visual: Apply the scene scale and (x, z, y) axis remap.

    Returns:
        Position vector of shape (3,).
    """
    e = elements.eccentricity
    a = elements.semi_major_axis_au
    period = elements.orbital_period_days

    if not (period > 0 and 0 <= e < 1) or not math.isfinite(time_from_epoch_days):
        logger.debug("Elements outside the elliptical domain (P=%s, e=%s); position is NaN", period, e)
        return np.full(3, np.nan, dtype=np.float64)

    i = elements.inclination_deg * DEG_TO_RAD
    Omega = elements.longitude_ascending_node_deg * DEG_TO_RAD
    omega = elements.argument_periapsis_deg * DEG_TO_RAD
    M0 = elements.mean_anomaly_deg * DEG_TO_RAD

    # Mean motion in rad/day
    n = (2 * math.pi) / period
    M = M0 + n * time_from_epoch_days

    E = solve_eccentric_anomaly(M, e)
    if not all(map(math.isfinite, (E, i, Omega, omega))):
        return np.full(3, np.nan, dtype=np.float64)

    nu = 2 * math.atan2(
        math.sqrt(1 + e) * math.sin(E / 2),
        math.sqrt(1 - e) * math.cos(E / 2),
    )
    r = a * (1 - e * math.cos(E))

    x_orb = r * math.cos(nu)
    y_orb = r * math.sin(nu)

    cos_O, sin_O = math.cos(Omega), math.sin(Omega)
    cos_i, sin_i = math.cos(i), math.sin(i)
    cos_w, sin_w = math.cos(omega), math.sin(omega)

    # Perifocal -> ecliptic: R3(-Omega) R1(-i) R3(-omega)
    x = (cos_O * cos_w - sin_O * sin_w * cos_i) * x_orb + \
        (-cos_O * sin_w - sin_O * cos_w * cos_i) * y_orb
    y = (sin_O * cos_w + cos_O * sin_w * cos_i) * x_orb + \
        (-sin_O * sin_w + cos_O * cos_w * cos_i) * y_orb
    z = (sin_w * sin_i) * x_orb + (cos_w * sin_i) * y_orb

    if visual:
        return np.array([x * VISUAL_SCALE, z * VISUAL_SCALE, y * VISUAL_SCALE], dtype=np.float64)
    return np.array([x, y, z], dtype=np.float64)


def trajectory(
    elements: OrbitalElements,
    times_days: Iterable[float],
    *,
    visual: bool = True,
) -> NDArray[np.float64]:
    """Sample positions at several times since epoch.

    Args:
        elements: Orbital elements of the object.
        times_days: Times since epoch in days.
        visual: Apply the scene scale and axis remap.

    Returns:
        Array of shape (n, 3), one row per requested time.
    """
    times = np.asarray(list(times_days), dtype=np.float64)
    result = np.empty((len(times), 3), dtype=np.float64)
    for k, t in enumerate(times):
        result[k] = position_at(elements, float(t), visual=visual)
    return result


def generate_orbit_points(
    elements: OrbitalElements,
    number_of_points: int = DEFAULT_ORBIT_POINTS,
    *,
    visual: bool = True,
) -> NDArray[np.float64]:
    """Sample one full revolution at ``number_of_points + 1`` evenly spaced times.

    The first and last rows are at t=0 and t=period, so the polyline closes.

    Returns:
        Array of shape (number_of_points + 1, 3).
    """
    period = elements.orbital_period_days
    if number_of_points < 1:
        return trajectory(elements, [0.0], visual=visual)
    times = [(k / number_of_points) * period for k in range(number_of_points + 1)]
    points = trajectory(elements, times, visual=visual)
    logger.debug("Sampled %d orbit points over %.2f days", len(points), period)
    return points


def days_between(current_time: datetime, epoch_time: datetime) -> float:
    """Signed elapsed time in days; naive datetimes are taken as UTC."""
    if current_time.tzinfo is None:
        current_time = current_time.replace(tzinfo=timezone.utc)
    if epoch_time.tzinfo is None:
        epoch_time = epoch_time.replace(tzinfo=timezone.utc)
    return (current_time - epoch_time) / timedelta(days=1)


def position_at_time(
    elements: OrbitalElements,
    current_time: datetime,
    epoch_time: datetime | None = None,
    *,
    visual: bool = True,
) -> NDArray[np.float64]:
    """Position at a wall-clock time.

    Args:
        elements: Orbital elements of the object.
        current_time: Time to propagate to.
        epoch_time: Reference epoch; defaults to ``elements.epoch``.
        visual: Apply the scene scale and axis remap.
    """
    if epoch_time is None:
        epoch_time = elements.epoch
    return position_at(elements, days_between(current_time, epoch_time), visual=visual)

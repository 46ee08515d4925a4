"""Synthetic orbital elements for objects without a fetched orbit."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

import numpy as np

from neoimpact.core.orbit import OrbitalElements, orbital_period_days
from neoimpact.utils.constants import (
    SYNTHETIC_MAX_ECCENTRICITY,
    SYNTHETIC_MAX_INCLINATION_DEG,
    SYNTHETIC_SEMI_MAJOR_AXIS_AU,
)

logger = logging.getLogger(__name__)


def generate_orbital_elements(
    rng: np.random.Generator | None = None,
    epoch: datetime | None = None,
) -> OrbitalElements:
    """Draw elements typical of a near-Earth asteroid.

    Semi-major axis is uniform in [0.8, 2.8) AU, eccentricity in [0, 0.6),
    inclination in [0, 30) degrees and the three remaining angles in
    [0, 360). The period follows from Kepler's third law.

    Args:
        rng: Random generator; a fresh unseeded one if None.
        epoch: Element epoch; the current time if None.

    Returns:
        Orbital elements satisfying P = 365.25 * a^1.5 days.
    """
    if rng is None:
        rng = np.random.default_rng()
    if epoch is None:
        epoch = datetime.now(timezone.utc)

    a_min, a_max = SYNTHETIC_SEMI_MAJOR_AXIS_AU
    a = float(rng.uniform(a_min, a_max))

    return OrbitalElements(
        epoch=epoch,
        semi_major_axis_au=a,
        eccentricity=float(rng.uniform(0.0, SYNTHETIC_MAX_ECCENTRICITY)),
        inclination_deg=float(rng.uniform(0.0, SYNTHETIC_MAX_INCLINATION_DEG)),
        longitude_ascending_node_deg=float(rng.uniform(0.0, 360.0)),
        argument_periapsis_deg=float(rng.uniform(0.0, 360.0)),
        mean_anomaly_deg=float(rng.uniform(0.0, 360.0)),
        orbital_period_days=orbital_period_days(a),
    )


def generate_orbital_elements_batch(
    count: int,
    rng: np.random.Generator | None = None,
    epoch: datetime | None = None,
) -> list[OrbitalElements]:
    """Draw ``count`` independent element sets sharing one generator and epoch."""
    if rng is None:
        rng = np.random.default_rng()
    if epoch is None:
        epoch = datetime.now(timezone.utc)
    batch = [generate_orbital_elements(rng, epoch) for _ in range(count)]
    logger.debug("Generated %d synthetic orbits", count)
    return batch

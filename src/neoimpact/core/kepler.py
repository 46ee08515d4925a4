"""Kepler's equation solver (mean anomaly to eccentric anomaly)."""
from __future__ import annotations

import logging
import math

from neoimpact.utils.constants import KEPLER_MAX_ITERATIONS, KEPLER_TOLERANCE

logger = logging.getLogger(__name__)


def solve_eccentric_anomaly(
    mean_anomaly_rad: float,
    eccentricity: float,
    tolerance: float = KEPLER_TOLERANCE,
    max_iterations: int = KEPLER_MAX_ITERATIONS,
) -> float:
    """Solve M = E - e*sin(E) for the eccentric anomaly E by Newton-Raphson.

    Iteration starts at E0 = M and stops once two successive estimates differ
    by less than ``tolerance``. If the iteration cap is reached the last
    estimate is returned as-is; callers needing a convergence check can use
    :func:`kepler_residual`.

    Args:
        mean_anomaly_rad: Mean anomaly in radians (not reduced to [0, 2π)).
        eccentricity: Orbital eccentricity, 0 <= e < 1.
        tolerance: Stopping threshold on |E_{n+1} - E_n| in radians.
        max_iterations: Iteration cap.

    Returns:
        Eccentric anomaly in radians.
    """
    if not (math.isfinite(mean_anomaly_rad) and math.isfinite(eccentricity)):
        return math.nan

    E = mean_anomaly_rad

    for _ in range(max_iterations):
        derivative = 1 - eccentricity * math.cos(E)
        if derivative == 0:
            # Flat derivative, only reachable for e >= 1
            return math.nan
        E_new = E - (E - eccentricity * math.sin(E) - mean_anomaly_rad) / derivative

        if not math.isfinite(E_new):
            return math.nan

        if abs(E_new - E) < tolerance:
            return E_new

        E = E_new

    logger.warning(
        "Kepler solver did not converge in %d iterations (M=%.6f, e=%.6f); returning last estimate",
        max_iterations, mean_anomaly_rad, eccentricity,
    )
    return E


def kepler_residual(eccentric_anomaly_rad: float, mean_anomaly_rad: float, eccentricity: float) -> float:
    """Residual E - e*sin(E) - M of Kepler's equation."""
    return eccentric_anomaly_rad - eccentricity * math.sin(eccentric_anomaly_rad) - mean_anomaly_rad

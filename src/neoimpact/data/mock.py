"""Mock NEO feed generator.

Produces payloads shaped like the NASA NeoWs ``/feed`` response so that the
parsers and estimators can be exercised without network access.
"""

from __future__ import annotations

import logging
import string
from datetime import datetime, timedelta, timezone
from typing import Any

import numpy as np

from neoimpact.core.synthetic import generate_orbital_elements
from neoimpact.data.neo import NearEarthObject, parse_feed
from neoimpact.utils.constants import AU_KM, LUNAR_DISTANCE_KM

logger = logging.getLogger(__name__)

_KM_TO_MILES = 0.621371
_M_TO_FEET = 3.28084


def _mock_object(rng: np.random.Generator, day: datetime) -> dict[str, Any]:
    neo_id = str(3000000 + int(rng.integers(0, 500000)))
    diameter = float(rng.uniform(50.0, 850.0))         # m
    velocity = float(rng.uniform(5.0, 55.0))           # km/s
    miss_km = float(rng.uniform(1e6, 5.1e7))
    date_str = day.strftime("%Y-%m-%d")
    hour, minute = int(rng.integers(0, 24)), int(rng.integers(0, 60))
    letters = "".join(rng.choice(list(string.ascii_uppercase), size=2))
    name = f"({2000 + int(rng.integers(0, 25))} {letters}{int(rng.integers(0, 10))})"

    return {
        "links": {"self": f"http://api.nasa.gov/neo/rest/v1/neo/{neo_id}?api_key=DEMO_KEY"},
        "id": neo_id,
        "neo_reference_id": neo_id,
        "name": name,
        "nasa_jpl_url": f"https://ssd.jpl.nasa.gov/tools/sbdb_lookup.html#/?sstr={neo_id}",
        "absolute_magnitude_h": float(rng.uniform(18.0, 26.0)),
        "estimated_diameter": {
            "kilometers": {
                "estimated_diameter_min": diameter / 1000,
                "estimated_diameter_max": diameter * 1.5 / 1000,
            },
            "meters": {
                "estimated_diameter_min": diameter,
                "estimated_diameter_max": diameter * 1.5,
            },
            "miles": {
                "estimated_diameter_min": diameter / 1000 * _KM_TO_MILES,
                "estimated_diameter_max": diameter * 1.5 / 1000 * _KM_TO_MILES,
            },
            "feet": {
                "estimated_diameter_min": diameter * _M_TO_FEET,
                "estimated_diameter_max": diameter * 1.5 * _M_TO_FEET,
            },
        },
        "is_potentially_hazardous_asteroid": bool(rng.random() > 0.85),
        "close_approach_data": [
            {
                "close_approach_date": date_str,
                "close_approach_date_full": f"{date_str} {hour:02d}:{minute:02d}",
                "epoch_date_close_approach": int(day.timestamp() * 1000),
                "relative_velocity": {
                    "kilometers_per_second": f"{velocity:.6f}",
                    "kilometers_per_hour": f"{velocity * 3600:.6f}",
                    "miles_per_hour": f"{velocity * 3600 * _KM_TO_MILES:.6f}",
                },
                "miss_distance": {
                    "astronomical": f"{miss_km / AU_KM:.10f}",
                    "lunar": f"{miss_km / LUNAR_DISTANCE_KM:.10f}",
                    "kilometers": f"{miss_km:.6f}",
                    "miles": f"{miss_km * _KM_TO_MILES:.6f}",
                },
                "orbiting_body": "Earth",
            }
        ],
        "is_sentry_object": bool(rng.random() > 0.95),
    }


def generate_mock_feed_payload(
    days: int = 7,
    rng: np.random.Generator | None = None,
    start: datetime | None = None,
) -> dict[str, Any]:
    """Raw NeoWs-style feed with 5 to 14 objects per day.

    Args:
        days: Number of consecutive days, starting at ``start``.
        rng: Random generator; a fresh unseeded one if None.
        start: First day (UTC); today if None.

    Returns:
        Mapping with ``element_count`` and ``near_earth_objects``.
    """
    if rng is None:
        rng = np.random.default_rng()
    if start is None:
        start = datetime.now(timezone.utc)
    start = start.replace(hour=0, minute=0, second=0, microsecond=0)

    objects: dict[str, list[dict[str, Any]]] = {}
    for offset in range(days):
        day = start + timedelta(days=offset)
        count = int(rng.integers(5, 15))
        objects[day.strftime("%Y-%m-%d")] = [_mock_object(rng, day) for _ in range(count)]

    return {
        "element_count": sum(len(v) for v in objects.values()),
        "near_earth_objects": objects,
    }


def generate_mock_feed(
    days: int = 7,
    rng: np.random.Generator | None = None,
    start: datetime | None = None,
) -> dict[str, list[NearEarthObject]]:
    """Parsed mock feed whose objects carry synthetic orbital elements."""
    if rng is None:
        rng = np.random.default_rng()
    feed = parse_feed(generate_mock_feed_payload(days, rng, start))
    for objects in feed.values():
        for neo in objects:
            neo.orbital_elements = generate_orbital_elements(rng, neo.close_approaches[0].date)
    logger.debug("Generated mock feed with %d objects", sum(len(v) for v in feed.values()))
    return feed

"""Near-Earth object records and parsers for NeoWs / SBDB payloads.

The NASA NeoWs feed and the JPL Small-Body Database return loosely typed JSON
(numbers are frequently strings, optional blocks may be absent). This module
turns those payloads into typed, immutable records and rejects objects that
lack the fields the estimators depend on.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from neoimpact.core.orbit import OrbitalElements, orbital_period_days
from neoimpact.utils.constants import LUNAR_DISTANCE_KM

logger = logging.getLogger(__name__)

_J2000_JD = 2451545.0
_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

# SBDB element names, in the positional order used when names are absent
_SBDB_ELEMENT_NAMES = ("a", "e", "i", "om", "w", "ma")


@dataclass(frozen=True)
class CloseApproach:
    """One recorded flyby of an object.

    Attributes:
        date: Time of closest approach (UTC).
        relative_velocity_km_s: Relative velocity in km/s.
        miss_distance_lunar: Miss distance in lunar distances.
        miss_distance_km: Miss distance in km.
        orbiting_body: Body being approached (normally "Earth").
    """

    date: datetime
    relative_velocity_km_s: float
    miss_distance_lunar: float
    miss_distance_km: float
    orbiting_body: str = "Earth"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CloseApproach:
        """Parse one entry of a NeoWs ``close_approach_data`` list.

        Raises:
            ValueError: If the record is not a mapping, or the date or relative
                velocity is missing or invalid.
        """
        if not isinstance(data, dict):
            logger.error("Invalid close approach record: %s", type(data).__name__)
            raise ValueError(f"Invalid close approach record: expected a mapping, got {type(data).__name__}")

        try:
            date = _parse_approach_date(data)
            velocity = float(data["relative_velocity"]["kilometers_per_second"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Invalid close approach record: %s", e)
            raise ValueError(f"Invalid close approach record: {e}") from e

        miss = _mapping(data.get("miss_distance"))
        miss_km = _to_float(miss.get("kilometers"))
        miss_lunar = _to_float(miss.get("lunar"))
        if miss_lunar == 0.0 and miss_km > 0.0:
            miss_lunar = miss_km / LUNAR_DISTANCE_KM

        return cls(
            date=date,
            relative_velocity_km_s=velocity,
            miss_distance_lunar=miss_lunar,
            miss_distance_km=miss_km,
            orbiting_body=str(data.get("orbiting_body", "Earth")),
        )


@dataclass(frozen=True)
class EstimatedDiameter:
    """Estimated diameter range in meters."""

    min_m: float
    max_m: float

    @property
    def mean_m(self) -> float:
        return (self.min_m + self.max_m) / 2


@dataclass
class NearEarthObject:
    """A near-Earth object as reported by the NEO feed.

    Attributes:
        id: Catalog identifier (also the seed for impact point estimates).
        name: Display name.
        close_approaches: Recorded close approaches, earliest first as supplied.
        estimated_diameter: Diameter range in meters, if known.
        is_potentially_hazardous: PHA flag.
        is_sentry_object: Whether the object is on the Sentry risk list.
        absolute_magnitude_h: Absolute magnitude H, if known.
        orbital_elements: Keplerian elements, if fetched separately.
    """

    id: str
    name: str = ""
    close_approaches: list[CloseApproach] = field(default_factory=list)
    estimated_diameter: EstimatedDiameter | None = None
    is_potentially_hazardous: bool = False
    is_sentry_object: bool = False
    absolute_magnitude_h: float | None = None
    orbital_elements: OrbitalElements | None = None

    @property
    def first_approach(self) -> CloseApproach | None:
        return self.close_approaches[0] if self.close_approaches else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NearEarthObject:
        """Parse a NeoWs near-Earth object.

        Args:
            data: One object from ``near_earth_objects[date]`` or ``/neo/{id}``.

        Returns:
            The parsed object.

        Raises:
            ValueError: If the record is not a mapping, the id is missing or a
                close approach is malformed.
        """
        if not isinstance(data, dict):
            logger.error("Invalid near-Earth object record: %s", type(data).__name__)
            raise ValueError(f"Invalid near-Earth object record: expected a mapping, got {type(data).__name__}")

        neo_id = data.get("id") or data.get("neo_reference_id")
        if not neo_id:
            logger.error("Near-Earth object record without id")
            raise ValueError("Near-Earth object record without id")

        approaches = [CloseApproach.from_dict(ca) for ca in data.get("close_approach_data") or []]

        diameter = None
        meters = _mapping(data.get("estimated_diameter")).get("meters")
        if meters:
            try:
                diameter = EstimatedDiameter(
                    min_m=float(meters["estimated_diameter_min"]),
                    max_m=float(meters["estimated_diameter_max"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Ignoring malformed diameter for NEO %s: %s", neo_id, e)

        h = data.get("absolute_magnitude_h")
        if h is not None:
            try:
                h = float(h)
            except (TypeError, ValueError) as e:
                logger.warning("Ignoring malformed absolute magnitude for NEO %s: %s", neo_id, e)
                h = None

        return cls(
            id=str(neo_id),
            name=str(data.get("name", "")),
            close_approaches=approaches,
            estimated_diameter=diameter,
            is_potentially_hazardous=bool(data.get("is_potentially_hazardous_asteroid", False)),
            is_sentry_object=bool(data.get("is_sentry_object", False)),
            absolute_magnitude_h=h,
        )


def _mapping(value: Any) -> dict[str, Any]:
    """Optional sub-block; anything but a dict counts as absent."""
    return value if isinstance(value, dict) else {}


def _to_float(value: Any, default: float = 0.0) -> float:
    """Lenient float conversion; unparseable or non-finite values give ``default``."""
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _parse_approach_date(data: dict[str, Any]) -> datetime:
    full = data.get("close_approach_date_full")
    if full:
        for fmt in ("%Y-%b-%d %H:%M", "%Y-%m-%d %H:%M"):
            try:
                return datetime.strptime(full, fmt).replace(tzinfo=timezone.utc)
            except ValueError:
                continue
        logger.debug("Unrecognised close_approach_date_full %r, using date only", full)
    return datetime.strptime(data["close_approach_date"], "%Y-%m-%d").replace(tzinfo=timezone.utc)


def jd_to_datetime(jd: float) -> datetime:
    """Convert a Julian date to a UTC datetime (TDB/UTC offset ignored)."""
    return _J2000 + timedelta(days=jd - _J2000_JD)


def parse_feed(payload: dict[str, Any]) -> dict[str, list[NearEarthObject]]:
    """Parse a NeoWs feed response into date-keyed object lists.

    Accepts either the full response (with ``near_earth_objects``) or the
    date map itself. Malformed objects are skipped.

    Raises:
        ValueError: If the payload is not a date map.
    """
    objects = payload.get("near_earth_objects", payload)
    if not isinstance(objects, dict):
        logger.error("Invalid NEO feed payload: near_earth_objects is %s", type(objects).__name__)
        raise ValueError("Invalid NEO feed payload: expected a mapping of date to objects")

    feed: dict[str, list[NearEarthObject]] = {}
    skipped = 0
    for date, entries in objects.items():
        parsed = []
        for entry in entries or []:
            try:
                parsed.append(NearEarthObject.from_dict(entry))
            except ValueError as e:
                logger.warning("Skipping malformed NEO on %s: %s", date, e)
                skipped += 1
        feed[date] = parsed

    logger.debug("Parsed NEO feed: %d dates, %d objects, %d skipped",
                 len(feed), sum(len(v) for v in feed.values()), skipped)
    return feed


def flatten_feed(feed: dict[str, list[NearEarthObject]]) -> list[NearEarthObject]:
    """All objects of a date-keyed feed in a single list, in date-key order."""
    result: list[NearEarthObject] = []
    for objects in feed.values():
        result.extend(objects)
    return result


def elements_from_sbdb(payload: dict[str, Any]) -> OrbitalElements | None:
    """Map an SBDB orbit block to :class:`OrbitalElements`.

    Elements are read by name (``a``, ``e``, ``i``, ``om``, ``w``, ``ma``)
    when the entries carry one, otherwise by position in that order.
    Unparseable values become 0. The period is derived from a via Kepler's
    third law.

    Args:
        payload: SBDB response; the orbit may sit under ``orbit`` or
            ``object.orbit``.

    Returns:
        Orbital elements, or None if the payload has no elements.
    """
    orbit = _mapping(payload.get("orbit")) or _mapping(_mapping(payload.get("object")).get("orbit"))
    elements = orbit.get("elements")
    if not elements:
        logger.warning("No orbital elements in SBDB payload")
        return None

    values: dict[str, float] = {}
    if all(isinstance(el, dict) and "name" in el for el in elements):
        for el in elements:
            values[el["name"]] = _to_float(el.get("value"))
    else:
        for name, el in zip(_SBDB_ELEMENT_NAMES, elements):
            values[name] = _to_float(el.get("value") if isinstance(el, dict) else el)

    jd = _to_float(orbit.get("epoch"))
    epoch = jd_to_datetime(jd) if jd > 0 else datetime.now(timezone.utc)

    a = values.get("a", 0.0)
    return OrbitalElements(
        epoch=epoch,
        semi_major_axis_au=a,
        eccentricity=values.get("e", 0.0),
        inclination_deg=values.get("i", 0.0),
        longitude_ascending_node_deg=values.get("om", 0.0),
        argument_periapsis_deg=values.get("w", 0.0),
        mean_anomaly_deg=values.get("ma", 0.0),
        orbital_period_days=orbital_period_days(a),
    )

"""Tests for impact point estimation."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from neoimpact.core.impact_point import (
    ImpactPointMethod,
    advanced_impact_point,
    basic_impact_point,
    best_impact_point,
    day_of_year,
    direction_impact_point,
    explain_impact_point,
    hash_string,
    seasonal_influence,
    seeded_random,
    select_method,
)
from neoimpact.core.orbit import OrbitalElements
from neoimpact.data.neo import CloseApproach, EstimatedDiameter, NearEarthObject

APPROACH = CloseApproach(
    date=datetime(2025, 10, 14, 17, 42, tzinfo=timezone.utc),
    relative_velocity_km_s=18.27,
    miss_distance_lunar=12.4,
    miss_distance_km=12.4 * 384400.0,
)


def make_neo(neo_id: str = "54131736", approaches=(APPROACH,), diameter: float | None = 240.0) -> NearEarthObject:
    return NearEarthObject(
        id=neo_id,
        name="(2021 AB1)",
        close_approaches=list(approaches),
        estimated_diameter=EstimatedDiameter(diameter, diameter * 2.2) if diameter is not None else None,
    )


class TestHashString:
    def test_empty(self) -> None:
        assert hash_string("") == 0

    def test_short_strings(self) -> None:
        assert hash_string("a") == 97
        assert hash_string("ab") == 97 * 31 + 98

    def test_matches_java_string_hash(self) -> None:
        """Same wrap-around as a 32-bit signed rolling hash."""
        assert hash_string("hello") == 99162322
        assert hash_string("Hello World") == 862545276

    def test_lone_surrogate(self) -> None:
        """Unpaired UTF-16 surrogates hash as their raw code unit."""
        assert hash_string("ab\ud800") == (97 * 31 + 98) * 31 + 0xD800

    def test_non_negative_32_bit(self) -> None:
        for text in ("54131736", "3542519", "x" * 200, "(2024 YR4)"):
            h = hash_string(text)
            assert 0 <= h <= 2 ** 31


class TestSeededRandom:
    def test_zero_seed(self) -> None:
        assert seeded_random(0) == 0.0
        assert seeded_random(0, -1, 1) == -1.0

    def test_matches_sine_construction(self) -> None:
        x = math.sin(42) * 10000
        assert seeded_random(42) == x - math.floor(x)

    def test_range(self) -> None:
        for seed in range(1, 500):
            assert 0.0 <= seeded_random(seed) < 1.0
            assert -1.0 <= seeded_random(seed, -1, 1) < 1.0

    def test_deterministic(self) -> None:
        assert seeded_random(123456789) == seeded_random(123456789)


class TestDayOfYear:
    @pytest.mark.parametrize(
        "date, expected",
        [
            (datetime(2024, 1, 1, tzinfo=timezone.utc), 1),
            (datetime(2024, 1, 1, 23, 59, tzinfo=timezone.utc), 1),
            (datetime(2023, 3, 1, tzinfo=timezone.utc), 60),
            (datetime(2024, 3, 1, tzinfo=timezone.utc), 61),
            (datetime(2024, 12, 31, 12, tzinfo=timezone.utc), 366),
            (datetime(2025, 10, 14), 287),
        ],
    )
    def test_day_of_year(self, date: datetime, expected: int) -> None:
        assert day_of_year(date) == expected


class TestMethods:
    def test_determinism(self) -> None:
        assert best_impact_point(make_neo()) == best_impact_point(make_neo())

    def test_different_ids_differ(self) -> None:
        assert best_impact_point(make_neo("54131736")) != best_impact_point(make_neo("3542519"))

    def test_advanced_bounds(self) -> None:
        for k in range(200):
            lon, lat = advanced_impact_point(make_neo(str(2000000 + k), diameter=float(k)))
            assert -180.0 <= lon < 180.0
            assert -75.0 <= lat <= 75.0

    def test_advanced_formula(self) -> None:
        neo = make_neo()
        seed = hash_string(neo.id)
        latitude = (
            seasonal_influence(APPROACH.date)
            + math.tanh(18.27 / 30) * 30 * seeded_random(seed, -1, 1)
            + (1 - 0.24) * 20 * seeded_random(seed + 1, -1, 1)
        )
        longitude = ((17 / 24 * 360 - 180 + seeded_random(seed + 2, -1, 1) * 90 + 180) % 360) - 180
        lon, lat = advanced_impact_point(neo)
        assert lat == pytest.approx(max(-75, min(75, latitude)))
        assert lon == pytest.approx(longitude)

    def test_direction_formula(self) -> None:
        neo = make_neo(diameter=None)
        angle = (287 / 365) * 2 * math.pi + seeded_random(hash_string(neo.id)) * math.pi
        lon, lat = direction_impact_point(neo)
        assert lat == pytest.approx(60 * math.sin(angle))
        assert lon == pytest.approx(180 * math.cos(angle))

    def test_direction_bounds(self) -> None:
        for k in range(200):
            lon, lat = direction_impact_point(make_neo(str(k), diameter=None))
            assert -60.0 <= lat <= 60.0
            assert -180.0 <= lon <= 180.0

    def test_basic_bounds(self) -> None:
        fast = CloseApproach(APPROACH.date, 70.0, 1.0, 384400.0)
        for k in range(200):
            lon, lat = basic_impact_point(make_neo(str(k), approaches=(fast,)))
            assert -180.0 <= lon < 180.0
            assert -80.0 <= lat <= 80.0

    def test_basic_without_approach_uses_reference_time(self) -> None:
        """No velocity means no latitude scatter: latitude is the seasonal term."""
        neo = make_neo(approaches=(), diameter=None)
        reference = datetime(2024, 3, 21, 6, tzinfo=timezone.utc)
        lon, lat = basic_impact_point(neo, reference)
        seed = hash_string(neo.id)
        assert lat == pytest.approx(math.sin(81 / 365 * 2 * math.pi) * 23.5)
        expected_lon = ((6 / 24 * 360 - 180 + (seeded_random(seed + 1) - 0.5) * 120 + 180) % 360) - 180
        assert lon == pytest.approx(expected_lon)

    def test_basic_without_approach_prefers_element_epoch(self) -> None:
        epoch = datetime(2024, 6, 1, 12, tzinfo=timezone.utc)
        neo = make_neo(approaches=(), diameter=None)
        neo.orbital_elements = OrbitalElements.from_keplerian(1.2, 0.2, 5.0, 10.0, 20.0, 30.0, epoch=epoch)
        reference = datetime(2020, 1, 1, tzinfo=timezone.utc)
        assert basic_impact_point(neo, reference) == basic_impact_point(make_neo(approaches=(), diameter=None), epoch)

    def test_direction_requires_approach(self) -> None:
        with pytest.raises(ValueError, match="no close approach"):
            direction_impact_point(make_neo(approaches=()))


class TestBestImpactPoint:
    def test_selects_advanced(self) -> None:
        neo = make_neo()
        assert select_method(neo) is ImpactPointMethod.ADVANCED
        assert best_impact_point(neo) == advanced_impact_point(neo)

    def test_selects_direction_without_diameter(self) -> None:
        neo = make_neo(diameter=None)
        assert select_method(neo) is ImpactPointMethod.DIRECTION
        assert best_impact_point(neo) == direction_impact_point(neo)

    def test_falls_back_to_basic(self) -> None:
        neo = make_neo(approaches=(), diameter=240.0)
        reference = datetime(2025, 1, 5, tzinfo=timezone.utc)
        assert select_method(neo) is ImpactPointMethod.BASIC
        assert best_impact_point(neo, reference) == basic_impact_point(neo, reference)

    def test_explain(self) -> None:
        neo = make_neo()
        explanation = explain_impact_point(neo)
        assert explanation.point == best_impact_point(neo)
        assert explanation.method is ImpactPointMethod.ADVANCED
        assert explanation.velocity_km_s == 18.27
        assert explanation.miss_distance_lunar == 12.4
        assert explanation.diameter_m == 240.0
        assert explanation.seasonal_influence_deg == pytest.approx(seasonal_influence(APPROACH.date))
        assert "18.3 km/s" in explanation.explanation

    def test_explain_requires_approach(self) -> None:
        with pytest.raises(ValueError):
            explain_impact_point(make_neo(approaches=()))

"""Estimate impact points and damage for a week of mock NEO feed data."""

from neoimpact import ImpactParameters, best_impact_point, damage_radius_km
from neoimpact.data.mock import generate_mock_feed
from neoimpact.data.neo import flatten_feed

neos = flatten_feed(generate_mock_feed(days=7))
print(f"Loaded {len(neos)} objects")

for neo in sorted(neos, key=lambda n: n.estimated_diameter.mean_m, reverse=True)[:10]:
    approach = neo.first_approach
    params = ImpactParameters(
        diameter_m=neo.estimated_diameter.mean_m,
        velocity_km_s=approach.relative_velocity_km_s,
        density_kg_m3=3000.0,
    )
    lon, lat = best_impact_point(neo)
    print(
        f"{neo.name:16s} {neo.estimated_diameter.mean_m:7.0f} m "
        f"{approach.relative_velocity_km_s:5.1f} km/s -> "
        f"({lon:7.2f}, {lat:6.2f}) radius {damage_radius_km(params):6.1f} km"
    )

"""neoimpact quickstart: impact energy, damage rings and an orbit for one asteroid."""

from datetime import datetime, timezone

from neoimpact import (
    CloseApproach,
    EstimatedDiameter,
    ImpactParameters,
    NearEarthObject,
    OrbitalElements,
    best_impact_point,
    damage_rings_km,
    generate_orbit_points,
    impact_energy,
)

# A 100 m stony asteroid hitting at 20 km/s, 45° from the horizontal
params = ImpactParameters(diameter_m=100.0, velocity_km_s=20.0, density_kg_m3=3000.0, angle_deg=45.0)

energy = impact_energy(params)
rings = damage_rings_km(params)

print(f"Energy:    {energy.energy_joules:.3e} J ({energy.energy_megatons_tnt:.1f} Mt TNT)")
print(f"Severe:    {rings.severe:.1f} km")
print(f"Moderate:  {rings.moderate:.1f} km")
print(f"Light:     {rings.light:.1f} km")
print(f"Thermal:   {rings.thermal:.1f} km")

# Where would it land?
neo = NearEarthObject(
    id="54131736",
    name="(2021 AB1)",
    close_approaches=[
        CloseApproach(
            date=datetime(2025, 10, 14, 17, 42, tzinfo=timezone.utc),
            relative_velocity_km_s=20.0,
            miss_distance_lunar=12.4,
            miss_distance_km=4766560.0,
        )
    ],
    estimated_diameter=EstimatedDiameter(min_m=100.0, max_m=220.0),
)
lon, lat = best_impact_point(neo)
print(f"Impact:    lon={lon:.2f}°, lat={lat:.2f}°")

# Apophis-like orbit, sampled for plotting
elements = OrbitalElements.from_keplerian(0.9224, 0.1914, 3.339, 203.96, 126.6, 142.8)
points = generate_orbit_points(elements, 200, visual=False)
print(f"Orbit:     {len(points)} points, period {elements.orbital_period_days:.1f} days")

"""Synthetic standard-vs-eco route comparison.

This is a simulation stand-in, not a routing engine: distances, times and
traffic are drawn from a caller-supplied random source.
"""

import random
from typing import Optional

from ..models.eco_route_schema import (
    EcoRouteOption,
    RouteComparison,
    RouteOption,
    RouteSavings,
    Waypoint,
)

FUEL_L_PER_KM = 0.08
ECO_FUEL_REDUCTION = 0.35
CO2_KG_PER_L = 2.31
FUEL_PRICE_PER_L = 1.5

STANDARD_TRAFFIC = ("Low", "Moderate", "High")
ECO_TRAFFIC = ("Low", "Moderate")


def estimate_route(start: str, end: str, rng: Optional[random.Random] = None) -> RouteComparison:
    rng = rng or random.Random()

    distance = rng.uniform(10, 30)
    eco_distance = distance * rng.uniform(1.05, 1.15)

    # minutes: roughly 30 km/h through town, eco route favours steadier roads
    duration = distance * 2.0 + rng.uniform(0, 10)
    eco_duration = eco_distance * 1.8 + rng.uniform(0, 8)

    fuel = distance * FUEL_L_PER_KM
    eco_fuel = eco_distance * FUEL_L_PER_KM * (1 - ECO_FUEL_REDUCTION)
    co2 = fuel * CO2_KG_PER_L
    eco_co2 = eco_fuel * CO2_KG_PER_L

    fuel_saved = max(0.0, fuel - eco_fuel)

    standard = RouteOption(
        name="Standard Route",
        distance=round(distance, 2),
        duration=round(duration, 1),
        fuelConsumption=round(fuel, 2),
        co2Emissions=round(co2, 2),
        trafficLevel=rng.choice(STANDARD_TRAFFIC),
    )
    eco = EcoRouteOption(
        name="Eco Route",
        distance=round(eco_distance, 2),
        duration=round(eco_duration, 1),
        fuelConsumption=round(eco_fuel, 2),
        co2Emissions=round(eco_co2, 2),
        trafficLevel=rng.choice(ECO_TRAFFIC),
        waypoints=[
            Waypoint(label=start, kind="start"),
            Waypoint(label="Low-traffic arterial", kind="via"),
            Waypoint(label="Green corridor", kind="via"),
            Waypoint(label=end, kind="end"),
        ],
    )

    return RouteComparison(
        start=start,
        end=end,
        standardRoute=standard,
        ecoRoute=eco,
        savings=RouteSavings(
            fuel=round(fuel_saved, 2),
            co2=round(fuel_saved * CO2_KG_PER_L, 2),
            cost=round(fuel_saved * FUEL_PRICE_PER_L, 2),
        ),
    )

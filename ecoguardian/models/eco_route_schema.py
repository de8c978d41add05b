from typing import List, Literal

from pydantic import BaseModel, Field

TrafficLevel = Literal["Low", "Moderate", "High"]


class EcoRouteRequest(BaseModel):
    start: str = Field(..., min_length=1, description="Starting location label")
    end: str = Field(..., min_length=1, description="Destination label")


class Waypoint(BaseModel):
    label: str
    kind: Literal["start", "via", "end"]


class RouteOption(BaseModel):
    name: str
    distance: float = Field(..., description="Kilometers")
    duration: float = Field(..., description="Minutes")
    fuelConsumption: float = Field(..., description="Liters")
    co2Emissions: float = Field(..., description="Kilograms of CO₂")
    trafficLevel: TrafficLevel


class EcoRouteOption(RouteOption):
    waypoints: List[Waypoint]


class RouteSavings(BaseModel):
    fuel: float = Field(..., description="Liters saved")
    co2: float = Field(..., description="Kilograms of CO₂ saved")
    cost: float = Field(..., description="Fuel cost saved")


class RouteComparison(BaseModel):
    start: str
    end: str
    standardRoute: RouteOption
    ecoRoute: EcoRouteOption
    savings: RouteSavings

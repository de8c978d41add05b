import random

from fastapi import APIRouter, Depends

from ..dependencies import get_rng, get_user_id
from ..models.eco_route_schema import EcoRouteRequest, RouteComparison
from ..services.eco_route import estimate_route

router = APIRouter(prefix="/api", tags=["tools"])


@router.post("/eco-route", response_model=RouteComparison, dependencies=[Depends(get_user_id)])
async def eco_route(
    payload: EcoRouteRequest,
    rng: random.Random = Depends(get_rng),
) -> RouteComparison:
    return estimate_route(payload.start.strip(), payload.end.strip(), rng)

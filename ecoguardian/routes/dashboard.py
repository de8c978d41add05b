from fastapi import APIRouter, Depends

from ..dependencies import get_store, get_user_id, load_records
from ..models.analytics_schema import DashboardMetrics
from ..services.aggregation import compute_dashboard_metrics
from ..storage.base import ActivityStore

router = APIRouter(prefix="/api", tags=["carbon"])


@router.get("/dashboard-metrics", response_model=DashboardMetrics)
async def dashboard_metrics(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
) -> DashboardMetrics:
    return compute_dashboard_metrics(await load_records(store, user_id))

from fastapi import APIRouter, Depends

from ..dependencies import get_predictions, get_store, get_user_id, load_records
from ..models.prediction_schema import PredictionResult
from ..services.predictions import PredictionService
from ..storage.base import ActivityStore

router = APIRouter(prefix="/api", tags=["ai"])


@router.get("/predictions", response_model=PredictionResult)
async def predictions(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
    service: PredictionService = Depends(get_predictions),
) -> PredictionResult:
    return await service.predict(await load_records(store, user_id))

import json

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..dependencies import get_advisor, get_store, get_user_id, load_records
from ..models.advisor_schema import ChatRequest, RecommendationsResponse
from ..services.advisor import AdvisorService, build_user_context
from ..storage.base import ActivityStore

router = APIRouter(prefix="/api", tags=["ai"])


@router.post("/chat")
async def chat(
    payload: ChatRequest,
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
    advisor: AdvisorService = Depends(get_advisor),
) -> StreamingResponse:
    context = build_user_context(await load_records(store, user_id))
    response = await advisor.chat(payload.message, context)

    async def event_stream():
        # one complete message per request, then the stream closes
        yield f"data: {json.dumps({'response': response}, ensure_ascii=False)}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


@router.get("/recommendations", response_model=RecommendationsResponse)
async def recommendations(
    user_id: str = Depends(get_user_id),
    store: ActivityStore = Depends(get_store),
    advisor: AdvisorService = Depends(get_advisor),
) -> RecommendationsResponse:
    context = build_user_context(await load_records(store, user_id))
    return RecommendationsResponse(recommendations=await advisor.recommend_products(context))

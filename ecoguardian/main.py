import logging
import random
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import AIRequestFailed
from .routes.advisor import router as advisor_router
from .routes.carbon_entries import router as carbon_entries_router
from .routes.dashboard import router as dashboard_router
from .routes.eco_route import router as eco_route_router
from .routes.goals import router as goals_router
from .routes.predictions import router as predictions_router
from .services.advisor import AdvisorService
from .services.gemini_client import CompletionClient, GeminiCompletionClient
from .services.predictions import PredictionService
from .settings import Settings, settings as default_settings
from .storage.base import ActivityStore
from .storage.factory import build_store

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ActivityStore] = None,
    completion: Optional[CompletionClient] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="EcoGuardian Carbon Tracker",
        version="0.3.0",
        description="Personal carbon-footprint tracking with analytics, predictions and an AI sustainability assistant.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    completion = completion or GeminiCompletionClient(settings)
    app.state.store = store or build_store(settings)
    app.state.advisor = AdvisorService(completion)
    app.state.predictions = PredictionService(completion)
    app.state.rng = rng or random.Random()

    @app.exception_handler(AIRequestFailed)
    async def ai_request_failed(request: Request, exc: AIRequestFailed) -> JSONResponse:
        logger.error("AI request failed on %s: %s", request.url.path, exc.detail)
        return JSONResponse(status_code=502, content={"detail": exc.detail})

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "ecoguardian"}

    app.include_router(carbon_entries_router)
    app.include_router(dashboard_router)
    app.include_router(goals_router)
    app.include_router(advisor_router)
    app.include_router(predictions_router)
    app.include_router(eco_route_router)

    return app


app = create_app()

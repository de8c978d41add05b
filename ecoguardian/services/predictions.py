import json
import logging
from datetime import datetime, timedelta
from typing import Any, List, Optional

from pydantic import ValidationError

from ..errors import CompletionError
from ..models.prediction_schema import PredictionInput, PredictionResult, ResourcePrediction
from ..schemas import ActivityRecord
from .advice_content import tips_for_category
from .aggregation import category_breakdown, resolve_now, to_local, top_category
from .gemini_client import CompletionClient, clean_json

logger = logging.getLogger(__name__)

EMPTY_HISTORY_INSIGHT = "Start tracking your carbon footprint to receive AI-powered predictions"
EMPTY_HISTORY_RECOMMENDATION = "Add your first carbon entry to get personalized recommendations"

PROMPT = """
You are an AI resource forecaster for a personal carbon footprint tracker.
From the user's carbon summary, forecast the next 7 days and return ONLY JSON:

{
  "energyPrediction": {"value": <energy risk 0-100>, "trend": "increasing|decreasing|stable", "confidence": <0-100>},
  "waterPrediction": {"value": <water risk 0-100>, "trend": "increasing|decreasing|stable", "confidence": <0-100>},
  "carbonPrediction": {"value": <forecast kg CO2 for the next 7 days>, "trend": "increasing|decreasing|stable", "confidence": <0-100>},
  "insights": ["<short insight>", "..."],
  "recommendations": ["<short actionable recommendation>", "..."]
}

No explanations. JSON only.
""".strip()


def empty_prediction() -> PredictionResult:
    zero = ResourcePrediction(value=0, trend="stable", confidence=0)
    return PredictionResult(
        energyPrediction=zero,
        waterPrediction=zero.model_copy(),
        carbonPrediction=zero.model_copy(),
        insights=[EMPTY_HISTORY_INSIGHT],
        recommendations=[EMPTY_HISTORY_RECOMMENDATION],
    )


def build_prediction_input(records: List[ActivityRecord], now: Optional[datetime] = None) -> PredictionInput:
    current = resolve_now(now)
    week_start = current - timedelta(days=7)

    breakdown = category_breakdown(records)
    total = sum(breakdown.values(), 0.0)
    weekly = sum((r.amount for r in records if week_start <= to_local(r.date) <= current), 0.0)

    return PredictionInput(
        dailyAverage=total / max(len(records), 1),
        weeklyTotal=weekly,
        topCategory=top_category(breakdown) or "transportation",
        categoryBreakdown=breakdown,
    )


def _clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def _trend(weekly: float, projected: float) -> str:
    if projected <= 0:
        return "increasing" if weekly > 0 else "stable"
    ratio = weekly / projected
    if ratio > 1.1:
        return "increasing"
    if ratio < 0.9:
        return "decreasing"
    return "stable"


def local_prediction(data: PredictionInput) -> PredictionResult:
    """Deterministic forecast from historical averages and category shares."""
    breakdown = data.categoryBreakdown
    total = sum(breakdown.values(), 0.0)

    def share(category: str) -> float:
        return breakdown.get(category, 0.0) / total if total > 0 else 0.0

    intensity = min(data.dailyAverage, 15.0)
    coverage = sum(1 for amount in breakdown.values() if amount > 0)
    confidence = min(90, 50 + 10 * coverage)

    projected = data.dailyAverage * 7
    forecast = (data.weeklyTotal + projected) / 2
    trend = _trend(data.weeklyTotal, projected)

    energy_share = share("energy")
    water_share = share("food") * 0.7 + share("shopping") * 0.3

    energy = ResourcePrediction(
        value=round(_clamp(25 + energy_share * 60 + intensity)),
        trend=trend if energy_share >= 0.25 else "stable",
        confidence=confidence - 5,
    )
    water = ResourcePrediction(
        value=round(_clamp(20 + water_share * 65 + intensity)),
        trend=trend if water_share >= 0.25 else "stable",
        confidence=confidence - 10,
    )
    carbon = ResourcePrediction(value=round(forecast, 1), trend=trend, confidence=confidence)

    top = data.topCategory
    top_amount = breakdown.get(top, 0.0)
    outlook = {
        "increasing": f"Your emissions are trending upward; expect about {forecast:.1f} kg CO₂ over the next 7 days.",
        "decreasing": f"Your emissions are trending downward; expect about {forecast:.1f} kg CO₂ over the next 7 days.",
        "stable": f"Your emissions are steady; expect about {forecast:.1f} kg CO₂ over the next 7 days.",
    }[trend]

    insights = [
        f"{top.capitalize()} is your highest-impact category at {top_amount:.1f} kg CO₂ "
        f"({share(top) * 100:.0f}% of your total).",
        f"You logged {data.weeklyTotal:.1f} kg CO₂ in the last 7 days against a typical week of {projected:.1f} kg.",
        outlook,
    ]
    recommendations = tips_for_category(top)[:3] + ["Log your activities daily to sharpen these predictions"]

    return PredictionResult(
        energyPrediction=energy,
        waterPrediction=water,
        carbonPrediction=carbon,
        insights=insights,
        recommendations=recommendations,
    )


def _normalize(parsed: dict) -> dict:
    for key in ("energyPrediction", "waterPrediction", "carbonPrediction"):
        item = parsed.get(key)
        if not isinstance(item, dict):
            continue
        try:
            value = float(item.get("value", 0))
            conf = float(item.get("confidence", 0))
        except (TypeError, ValueError):
            continue
        item["value"] = max(0.0, value) if key == "carbonPrediction" else _clamp(value)
        item["confidence"] = _clamp(conf)
    return parsed


class PredictionService:
    def __init__(self, completion: CompletionClient):
        self.completion = completion

    async def _remote_prediction(self, data: PredictionInput) -> Optional[PredictionResult]:
        user_prompt = f"User carbon summary:\n{json.dumps(data.model_dump(), indent=2)}"

        try:
            raw_text = await self.completion.complete(
                PROMPT,
                user_prompt,
                max_tokens=800,
                temperature=0.4,
                json_output=True,
            )
        except CompletionError as exc:
            logger.warning("Prediction request failed (%s), using local forecast", exc.kind.value)
            return None

        clean = clean_json(raw_text)
        try:
            parsed: Any = json.loads(clean)
            result = PredictionResult.model_validate(_normalize(parsed))
        except (json.JSONDecodeError, ValidationError, AttributeError):
            logger.exception("Gemini returned an unusable prediction\nRAW:\n%s", raw_text)
            return None

        if not result.insights or not result.recommendations:
            return None
        return result

    async def predict(self, records: List[ActivityRecord], now: Optional[datetime] = None) -> PredictionResult:
        if not records:
            return empty_prediction()

        data = build_prediction_input(records, now)
        remote = await self._remote_prediction(data)
        return remote if remote is not None else local_prediction(data)

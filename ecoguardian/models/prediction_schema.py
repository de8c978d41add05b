from typing import Dict, List, Literal

from pydantic import BaseModel, Field

Trend = Literal["increasing", "decreasing", "stable"]


class ResourcePrediction(BaseModel):
    value: float
    trend: Trend = "stable"
    confidence: float = Field(default=0, ge=0, le=100)


class PredictionInput(BaseModel):
    dailyAverage: float
    weeklyTotal: float
    topCategory: str
    categoryBreakdown: Dict[str, float]


class PredictionResult(BaseModel):
    energyPrediction: ResourcePrediction
    waterPrediction: ResourcePrediction
    carbonPrediction: ResourcePrediction
    insights: List[str]
    recommendations: List[str]

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class CarbonStats(BaseModel):
    total: float
    monthTotal: float
    categoryBreakdown: Dict[str, float]
    entryCount: int


class DailyAmount(BaseModel):
    date: str = Field(..., description="ISO calendar date, e.g. 2025-01-28")
    amount: float


class TopCategory(BaseModel):
    category: str
    amount: float


class CarbonAnalytics(BaseModel):
    dailyTotals: List[DailyAmount]
    categoryTrends: Dict[str, List[DailyAmount]]
    weekOverWeekChange: float = Field(..., description="Percent change vs. the previous 7 days")
    thisWeekTotal: float
    lastWeekTotal: float
    topCategory: Optional[TopCategory] = None
    totalEntries: int
    averageDaily: float


class DashboardMetrics(BaseModel):
    carbonSavedToday: float
    sustainabilityScore: int = Field(..., ge=0, le=100)
    todayTotal: float
    averageDaily: float

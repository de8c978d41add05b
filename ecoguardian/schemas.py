from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Category(str, Enum):
    transportation = "transportation"
    energy = "energy"
    food = "food"
    shopping = "shopping"


CATEGORIES: List[str] = [c.value for c in Category]


class CarbonEntryCreate(BaseModel):
    category: Category
    amount: float = Field(
        ..., ge=0, strict=True, allow_inf_nan=False, description="Kilograms of CO₂-equivalent"
    )
    description: Optional[str] = Field(default=None, max_length=500)
    date: Optional[datetime] = Field(
        default=None, description="When the activity happened; defaults to creation time"
    )

    @field_validator("date")
    @classmethod
    def _as_local_time(cls, value: Optional[datetime]) -> Optional[datetime]:
        # stored dates are naive server-local time
        if value is not None and value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value


class ActivityRecord(BaseModel):
    id: str = Field(..., description="Unique activity identifier")
    userId: str
    category: Category
    amount: float = Field(..., ge=0, description="Kilograms of CO₂-equivalent (kgCO2e)")
    description: Optional[str] = None
    date: datetime


class GoalCreate(BaseModel):
    category: Optional[Category] = Field(
        default=None, description="Category the target applies to; empty means all categories"
    )
    targetAmount: float = Field(..., ge=0, strict=True, allow_inf_nan=False)
    period: str = Field(default="monthly", pattern="^(weekly|monthly)$")


class Goal(BaseModel):
    id: str
    userId: str
    category: Optional[Category] = None
    targetAmount: float
    period: str
    createdAt: datetime


class UserCarbonContext(BaseModel):
    """Aggregated figures handed to the AI assistant."""

    totalCarbon: float = 0.0
    monthCarbon: float = 0.0
    categoryBreakdown: Dict[str, float] = Field(default_factory=dict)

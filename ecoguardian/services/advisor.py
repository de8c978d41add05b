import logging
from typing import List, Optional

from ..errors import AIRequestFailed, CompletionError
from ..schemas import CATEGORIES, ActivityRecord, UserCarbonContext
from .advice_content import (
    GENERAL_CLOSING,
    GENERAL_HEADER,
    GENERAL_TIPS,
    match_topic,
    numbered,
    products_for_category,
)
from .aggregation import compute_stats, top_category
from .gemini_client import CompletionClient

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I apologize, but I couldn't generate a response. Please try again."

CHAT_PROMPT = """
You are EcoGuardian AI, a helpful and knowledgeable environmental assistant specializing in carbon footprint reduction and sustainable living.

Your role is to:
- Provide personalized advice on reducing carbon emissions
- Suggest eco-friendly alternatives and sustainable practices
- Answer questions about climate change and environmental impact
- Help users understand their carbon footprint data
- Offer practical, actionable tips for everyday sustainability

Be friendly, encouraging, and specific in your recommendations. Keep responses concise but informative.
""".strip()

PRODUCTS_PROMPT = """
You are an expert in sustainable products and eco-friendly alternatives. Based on the user's carbon footprint data, recommend specific products that would help reduce their impact.

User's highest carbon category: {highest}
Category breakdown:
{breakdown}

Provide 5 specific product recommendations that would help reduce their carbon footprint. Format each on its own line as:
"Product Name - Brief description (estimated CO2 savings: X kg/year)"

Focus on practical, affordable products that target their highest impact categories.
""".strip()


def _amount(context: UserCarbonContext, category: str) -> float:
    return context.categoryBreakdown.get(category, 0.0)


def format_breakdown(context: UserCarbonContext) -> str:
    return "\n".join(
        f"- {category.capitalize()}: {_amount(context, category):.1f} kg" for category in CATEGORIES
    )


def build_chat_prompt(context: Optional[UserCarbonContext]) -> str:
    if context is None:
        return CHAT_PROMPT
    return (
        f"{CHAT_PROMPT}\n\n"
        "Current user carbon data:\n"
        f"- Total carbon footprint: {context.totalCarbon:.1f} kg CO₂\n"
        f"- This month: {context.monthCarbon:.1f} kg CO₂\n"
        f"{format_breakdown(context)}"
    )


def fallback_reply(message: str, context: Optional[UserCarbonContext] = None) -> str:
    """Keyword-routed canned advice used when the remote service is rate-limited."""
    topic = match_topic(message)

    if topic is None:
        parts = [GENERAL_HEADER, numbered(GENERAL_TIPS)]
        if context is not None:
            parts.append(
                f"Your total carbon footprint is {context.totalCarbon:.1f} kg CO₂ "
                f"({context.monthCarbon:.1f} kg this month)."
            )
        parts.append(GENERAL_CLOSING)
        return "\n\n".join(parts)

    category, header, tips, label = topic
    parts = [header, numbered(tips)]
    if context is not None:
        parts.append(f"Your current {label} footprint is {_amount(context, category):.1f} kg CO₂.")
    return "\n\n".join(parts)


def build_user_context(records: List[ActivityRecord]) -> UserCarbonContext:
    stats = compute_stats(records)
    return UserCarbonContext(
        totalCarbon=stats.total,
        monthCarbon=stats.monthTotal,
        categoryBreakdown=stats.categoryBreakdown,
    )


def highest_category(context: UserCarbonContext) -> str:
    return top_category(context.categoryBreakdown) or "transportation"


class AdvisorService:
    def __init__(self, completion: CompletionClient):
        self.completion = completion

    async def chat(self, message: str, context: Optional[UserCarbonContext] = None) -> str:
        try:
            text = await self.completion.complete(
                build_chat_prompt(context),
                message,
                max_tokens=500,
                temperature=0.7,
            )
        except CompletionError as exc:
            if exc.rate_limited:
                logger.warning("Completion service rate-limited, using fallback chat reply")
                return fallback_reply(message, context)
            raise AIRequestFailed("Failed to get AI response") from exc

        return text.strip() or EMPTY_REPLY

    async def recommend_products(self, context: UserCarbonContext) -> List[str]:
        highest = highest_category(context)
        system_prompt = PRODUCTS_PROMPT.format(highest=highest, breakdown=format_breakdown(context))

        try:
            text = await self.completion.complete(
                system_prompt,
                "Please recommend 5 sustainable products for me.",
                max_tokens=600,
                temperature=0.8,
            )
        except CompletionError as exc:
            if exc.rate_limited:
                logger.warning("Completion service rate-limited, using fallback products for %s", highest)
                return products_for_category(highest)
            raise AIRequestFailed("Failed to get product recommendations") from exc

        lines = [line.strip() for line in text.splitlines()]
        return [line for line in lines if line][:5]

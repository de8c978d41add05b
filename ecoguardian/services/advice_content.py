"""Static advice used when the completion service is unavailable."""

from typing import Dict, List, Optional, Tuple

# (keywords, category, header, tips, footprint label); first match wins.
TOPICS: List[Tuple[Tuple[str, ...], str, str, List[str], str]] = [
    (
        ("commute", "transport"),
        "transportation",
        "To reduce transportation emissions:",
        [
            "Consider carpooling or using public transit when possible",
            "Bike or walk for short trips (under 2 miles)",
            "Combine multiple errands into one trip",
            "Maintain proper tire pressure to improve fuel efficiency",
            "Consider a hybrid or electric vehicle for your next car",
        ],
        "transportation",
    ),
    (
        ("energy", "electricity"),
        "energy",
        "To reduce energy consumption:",
        [
            "Switch to LED bulbs (75% less energy)",
            "Unplug devices when not in use",
            "Use a programmable thermostat",
            "Seal air leaks around windows and doors",
            "Consider renewable energy options like solar panels",
        ],
        "energy",
    ),
    (
        ("food", "eating", "diet"),
        "food",
        "For sustainable eating habits:",
        [
            "Reduce meat consumption, especially beef",
            "Buy local and seasonal produce",
            "Plan meals to minimize food waste",
            "Compost food scraps when possible",
            "Choose products with minimal packaging",
        ],
        "food-related",
    ),
    (
        ("product", "shopping", "buy"),
        "shopping",
        "For eco-friendly shopping:",
        [
            "Choose quality items that last longer",
            "Buy second-hand when possible",
            "Support companies with sustainable practices",
            "Avoid single-use plastics",
            "Repair items instead of replacing them",
        ],
        "shopping",
    ),
]

GENERAL_HEADER = "Here are some general tips to reduce your carbon footprint:"
GENERAL_TIPS = [
    "Transportation: Use public transit, carpool, or bike when possible",
    "Energy: Switch to LED bulbs and unplug unused devices",
    "Food: Reduce meat consumption and buy local produce",
    "Shopping: Choose sustainable products and avoid single-use items",
    "Habits: Reduce, reuse, recycle in that order",
]
GENERAL_CLOSING = "I'm here to help you reduce your environmental impact!"

PRODUCT_RECOMMENDATIONS: Dict[str, List[str]] = {
    "transportation": [
        "Reusable Water Bottle - Stay hydrated without single-use plastics during commutes (saves 15 kg CO₂/year)",
        "Bike Repair Kit - Maintain your bike for regular cycling instead of driving (saves 200 kg CO₂/year)",
        "Public Transit Pass - Monthly pass encourages sustainable commuting habits (saves 500 kg CO₂/year)",
        "Electric Scooter - Zero-emission alternative for short trips under 5 miles (saves 300 kg CO₂/year)",
        "Carpooling App Subscription - Share rides and reduce individual vehicle emissions (saves 400 kg CO₂/year)",
    ],
    "energy": [
        "Smart Power Strip - Eliminate phantom energy drain from electronics (saves 50 kg CO₂/year)",
        "LED Light Bulbs - 75% more efficient than incandescent bulbs (saves 40 kg CO₂/year)",
        "Programmable Thermostat - Optimize heating/cooling schedules (saves 180 kg CO₂/year)",
        "Solar Charger - Charge devices with renewable energy (saves 25 kg CO₂/year)",
        "Insulation Weather Strips - Seal air leaks around doors and windows (saves 100 kg CO₂/year)",
    ],
    "food": [
        "Reusable Produce Bags - Replace plastic bags at grocery stores (saves 10 kg CO₂/year)",
        "Compost Bin - Turn food scraps into nutrient-rich soil (saves 75 kg CO₂/year)",
        "Meal Planning Journal - Reduce food waste through better planning (saves 120 kg CO₂/year)",
        "Reusable Food Containers - Replace single-use packaging for leftovers (saves 30 kg CO₂/year)",
        "Plant-Based Cookbook - Delicious recipes to reduce meat consumption (saves 250 kg CO₂/year)",
    ],
    "shopping": [
        "Reusable Shopping Bags - Durable bags that last for years (saves 20 kg CO₂/year)",
        "Bamboo Toothbrush - Biodegradable alternative to plastic (saves 5 kg CO₂/year)",
        "Refillable Cleaning Supplies - Reduce packaging waste with concentrate refills (saves 15 kg CO₂/year)",
        "Second-Hand Shopping Guide - Find quality pre-owned items (saves 200 kg CO₂/year)",
        "Repair Kit - Fix items instead of replacing them (saves 100 kg CO₂/year)",
    ],
}


def numbered(tips: List[str]) -> str:
    return "\n".join(f"{i}. {tip}" for i, tip in enumerate(tips, start=1))


def tips_for_category(category: str) -> List[str]:
    for _, topic_category, _, tips, _ in TOPICS:
        if topic_category == category:
            return list(tips)
    return list(GENERAL_TIPS)


def match_topic(message: str) -> Optional[Tuple[str, str, List[str], str]]:
    lowered = message.lower()
    for keywords, category, header, tips, label in TOPICS:
        if any(k in lowered for k in keywords):
            return category, header, tips, label
    return None


def products_for_category(category: str) -> List[str]:
    return list(PRODUCT_RECOMMENDATIONS.get(category, PRODUCT_RECOMMENDATIONS["transportation"]))

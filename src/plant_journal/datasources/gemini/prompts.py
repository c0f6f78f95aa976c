"""Prompt templates for each Gemini-backed analysis."""

from __future__ import annotations

from plant_journal.schemas import GrowthStage

HEALTHY = "Healthy - No infections detected"


def describe(plant_name: str) -> str:
    return (
        f'Write a factual 1-2 paragraph description about the plant "{plant_name}". '
        "Include basic and advanced care information, and numeric requirements "
        "such as the exact temperature and humidity ranges it needs."
    )


def weather(city: str) -> str:
    line = (
        '"High [X]°F, Low [Y]°F, Humidity [Z]%, Sunrise [time], Sunset [time], '
        'Daylight [hours]"'
    )
    return (
        f"Search for the weather in {city} for today and tomorrow.\n"
        "For each day provide: high and low temperatures, humidity, sunrise time, "
        "sunset time and total daylight hours.\n"
        "Format the answer as exactly 2 lines:\n"
        f"Line 1: {line} (for today)\n"
        f"Line 2: {line} (for tomorrow)\n"
        'Do NOT include prefixes like "Today:" or "Tomorrow:" - only the weather data.'
    )


COLOR = (
    "Analyze this image of a plant. Determine the average color of the PLANT itself "
    "(only the leaves and stems, not the background, pot or soil). "
    "Return ONLY the hex color code in the format #XXXXXX. Nothing else."
)

LEAF_COUNT = (
    "Analyze this image of a plant. Count the number of visible leaves on the plant. "
    "Return ONLY a single number representing the leaf count. Nothing else."
)


def infections(plant_name: str, day: int, about: str | None) -> str:
    return (
        f'This is a "{plant_name}" plant on Day {day}.\n\n'
        "Plant care information:\n"
        f"{about or 'No plant info available'}\n\n"
        "Analyze this image of the plant for any signs of disease, infection, pest "
        "damage or health issues based on the plant type and its care requirements.\n"
        f'If the plant appears healthy, respond with: "{HEALTHY}"\n'
        "If you detect any issues, describe them briefly in 1-2 sentences including "
        "the type of infection or disease if identifiable."
    )


def growth_stage(plant_name: str, day: int, leaf_count: str, plant_color: str) -> str:
    stages = "\n".join(f"- {stage}" for stage in GrowthStage)
    return (
        f'The plant is a "{plant_name}" and the photo was taken on "Day {day}".\n'
        "Additional context:\n"
        f"- Current leaf count: {leaf_count}\n"
        f"- Current plant color: {plant_color}\n\n"
        f"Search online for the growth stages of {plant_name} plants and analyze this "
        "image along with the provided context.\n"
        f"Identify its growth stage from these options:\n{stages}\n\n"
        "Return ONLY a JSON object in this exact format:\n"
        '{"stage": "<stage>"}'
    )


def predict_next(plant_name: str, day: int) -> str:
    return (
        f"Generate a photorealistic image of this {plant_name} plant as it would look "
        f"tomorrow (Day {day + 1}).\n"
        "Keep the pot, soil and background identical.\n"
        "Only simulate extremely subtle growth (1mm taller, slightly larger leaves).\n"
        "Maintain high fidelity to the original image."
    )


def insights(context: str) -> str:
    return (
        "You are a plant care assistant. Using the journal entries below, write 3-5 "
        "short bullet points (each starting with '- ') with concrete care "
        "recommendations for the next day. Mention changes between the two days when "
        "they matter.\n\n"
        f"{context}"
    )

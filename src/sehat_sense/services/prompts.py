"""Prompt builders for the generative service."""

import json

from sehat_sense.domain.profile import UserProfile
from sehat_sense.domain.suggestions import DrinkFilters, MealFilters

MEAL_IDEA_COUNT = 3
DRINK_COUNT = 6

REPORT_PROMPT = (
    "Extract ALL medical test values from this blood report. "
    "Find and return ONLY the numerical values for: HbA1c (%), "
    "Fasting Glucose (mg/dL), LDL (mg/dL), HDL (mg/dL), Triglycerides (mg/dL), "
    "Total Cholesterol (mg/dL), Vitamin D (ng/mL), Vitamin B12 (pg/mL), "
    "SGPT (U/L), SGOT (U/L). "
    "If any value is not found in the report, write 'Not found'. "
    "Return one 'Key: Value' pair per line using exactly those key names. "
    "Example: HbA1c: 6.2"
)

_FOOD_ANALYSIS_EXAMPLE = """{
  "overallScore": 85,
  "calories": 420,
  "protein": 18,
  "carbs": 52,
  "fats": 12,
  "fiber": 8,
  "bloodSugarImpact": {"level": "moderate", "explanation": "The rice and roti will raise blood sugar moderately.", "tip": "Replace half the rice with extra dal for slower sugar release."},
  "liverHealth": {"score": 7, "explanation": "Low fat cooking method is good. Paneer adds protein which supports liver repair.", "tip": "Use hung curd instead of paneer to reduce saturated fat."},
  "cholesterolImpact": {"effect": "neutral", "explanation": "No high saturated fat detected.", "tip": "Add a teaspoon of flax seeds for omega-3."},
  "weightLossAlignment": {"percentage": 85, "explanation": "Fits a 1500 calorie goal well. Good protein-to-carb ratio.", "tip": "Remove 1 roti to save 70 calories while staying satisfied."},
  "smartSuggestions": ["Add a side of cucumber salad for volume and hydration.", "Drink a glass of water 20 mins before this meal."]
}"""  # noqa: E501

_MEAL_IDEA_EXAMPLE = """{
  "name": "Protein-Packed Moong Dal Cheela",
  "imageSearchTerm": "moong dal chilla",
  "description": "A savory pancake perfect for a filling, low-glycemic breakfast.",
  "healthScores": [{"condition": "bloodSugar", "score": 9}, {"condition": "weightLoss", "score": 9}, {"condition": "liver", "score": 8}],
  "nutrition": {"calories": 180, "protein": 12, "carbs": 22, "fats": 5},
  "prepTime": "15 minutes",
  "difficulty": "Easy",
  "ingredients": ["1 cup moong dal (soaked)", "1 small onion, chopped", "Green chili, coriander", "Spices"],
  "recipe": ["Grind soaked dal to a paste.", "Mix in veggies and spices.", "Cook on a pan like a pancake."],
  "whyItsGood": "Moong dal has a low glycemic index and is high in protein and fiber."
}"""  # noqa: E501

_DRINK_EXAMPLE = """[{
  "name": "Amla-Ginger Immunity Shot",
  "perfectFor": ["Fatty Liver (Detoxifying)", "Immunity boost"],
  "calories": 25,
  "sugar": "4g",
  "keyNutrients": "Vitamin C: 300% DV",
  "whyItWorks": "Amla supports liver detox and reduces inflammation. Ginger improves insulin sensitivity.",
  "ingredients": ["2 fresh amla", "1 inch ginger", "1 tsp honey (optional)"],
  "prepTime": "5 mins",
  "bestTime": "Morning on empty stomach",
  "recipe": "Blend amla and ginger with a little water, strain, and drink.",
  "warnings": ""
}]"""  # noqa: E501


def build_user_context(profile: UserProfile) -> str:
    """Describe the profile in the plain-text block every prompt embeds."""
    conditions = ", ".join(c.spoken for c in profile.conditions) or "None specified"
    allergies = ", ".join(profile.allergies) or "None"
    lines = [
        f"Name: {profile.name}, Age: {_show(profile.age)}, "
        f"Gender: {_show(profile.gender)}",
        f"Height: {_show(profile.height)} cm, "
        f"Weight: {_show(profile.current_weight)} kg",
        f"Conditions: {conditions}",
        f"Allergies: {allergies}",
        f"Dietary Preference: {profile.dietary_preference}",
        f"Activity Level: {_show(profile.activity_level)}",
        f"Average Sleep: {_show(profile.sleep_hours)} hours/night",
        f"Daily Water Intake: {_show(profile.water_intake)} liters",
    ]
    if profile.weight_loss_goal:
        lines.append(
            f"Primary Goal: Weight Loss (Target: {_show(profile.target_weight)}kg)"
        )
    return "\n".join(lines) + "\n"


def food_analysis_prompt(description: str, profile: UserProfile) -> str:
    """Prompt asking for a condition-aware analysis of one meal."""
    return (
        "You are a nutrition expert analyzing food for someone with specific "
        "health conditions.\n"
        f"USER PROFILE:\n{build_user_context(profile)}\n"
        f'FOOD EATEN: "{description}"\n\n'
        "Provide a comprehensive analysis in this EXACT JSON format, "
        "with no other text or markdown:\n"
        f"{_FOOD_ANALYSIS_EXAMPLE}"
    )


def meal_ideas_prompt(profile: UserProfile, filters: MealFilters) -> str:
    """Prompt asking for personalized meal ideas."""
    preferences = json.dumps(
        {
            "mealType": filters.meal_type,
            "time": filters.time,
            "cuisine": filters.cuisine,
        }
    )
    return (
        f"Generate {MEAL_IDEA_COUNT} personalized meal ideas for the user below.\n"
        f"USER PROFILE:\n{build_user_context(profile)}\n"
        f"PREFERENCES: {preferences}\n\n"
        f"Return a valid JSON array of {MEAL_IDEA_COUNT} objects. "
        "Each object must have this structure:\n"
        f"{_MEAL_IDEA_EXAMPLE}"
    )


def drink_suggestions_prompt(profile: UserProfile, filters: DrinkFilters) -> str:
    """Prompt asking for personalized healthy drinks."""
    return (
        f"You are a nutrition expert. Generate {DRINK_COUNT} personalized healthy "
        "drink recommendations for this user:\n"
        f"USER PROFILE:\n{build_user_context(profile)}\n"
        "PREFERENCES:\n"
        f"Drink type: {filters.drink_type}, Time of day: {filters.time_of_day}\n\n"
        f"Return response as a valid JSON array of {DRINK_COUNT} objects, "
        "with this exact structure:\n"
        f"{_DRINK_EXAMPLE}"
    )


def coach_instruction(profile: UserProfile) -> str:
    """Persona instruction for the chat coach."""
    return (
        "You are SehatSense, a warm, supportive AI Health Coach for Indians. "
        f"Your user's profile is:\n{build_user_context(profile)}"
        "Use a friendly, conversational tone, mixing in simple Hindi-English "
        'naturally (e.g., "Try adding jeera to your dal"). Give practical, '
        "India-specific advice. Be encouraging, never judgmental. "
        "Keep responses concise."
    )


def _show(value: object) -> str:
    if value is None:
        return "not provided"
    return str(value)

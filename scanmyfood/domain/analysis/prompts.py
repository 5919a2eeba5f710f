"""
Prompts for food analysis.

One fixed template per analysis mode. Each template states the task,
embeds the literal JSON schema the model must return, and lists the
normalization rules. Only the meal description mode has a dynamic part:
the user's text, substituted verbatim.
"""

from __future__ import annotations

from scanmyfood.domain.analysis.daily_values import format_daily_values
from scanmyfood.domain.analysis.models import (
    AnalysisRequest,
    FoodImageRequest,
    MealDescriptionRequest,
    ProductImagesRequest,
)


# ═══════════════════════════════════════════════════════════
# JSON SCHEMAS (literal text embedded in prompts)
# ═══════════════════════════════════════════════════════════

PRODUCT_LABEL_SCHEMA = """{
  "product": {
    "name": "Product name from front image",
    "category": "Food category (e.g., snack, beverage, etc.)"
  },
  "nutrition_analysis": {
    "serving_size": "Serving size with unit",
    "nutrients": [
      {
        "name": "Nutrient name",
        "quantity": "Quantity with unit",
        "daily_value": "Percentage of daily value",
        "status": "High/Moderate/Low based on DV%",
        "health_impact": "Good/Bad/Moderate"
      }
    ],
    "primary_concerns": [
      {
        "issue": "Primary nutritional concern",
        "explanation": "Brief explanation of health impact",
        "recommendations": [
          {
            "food": "Complementary food to add",
            "quantity": "Recommended quantity to add",
            "reasoning": "How this helps balance nutrition"
          }
        ]
      }
    ]
  }
}"""

_NUTRIENT_BLOCK = """{
        "calories": 0,
        "protein": {"value": 0, "unit": "g"},
        "carbohydrates": {"value": 0, "unit": "g"},
        "fat": {"value": 0, "unit": "g"},
        "fiber": {"value": 0, "unit": "g"}
      }"""

PLATE_ANALYSIS_SCHEMA = f"""{{
  "plate_analysis": {{
    "meal_name": "Name of the meal",
    "items": [
      {{
        "food_name": "Name of the food item",
        "estimated_quantity": {{"amount": 0, "unit": "g"}},
        "nutrients_per_100g": {_NUTRIENT_BLOCK},
        "total_nutrients": {_NUTRIENT_BLOCK},
        "visual_cues": ["List of visual indicators used for estimation"],
        "position": "Description of item location in the image"
      }}
    ],
    "total_plate_nutrients": {_NUTRIENT_BLOCK}
  }}
}}"""

MEAL_ANALYSIS_SCHEMA = f"""{{
  "meal_analysis": {{
    "meal_name": "Name of the meal",
    "items": [
      {{
        "food_name": "Name of the food item",
        "mentioned_quantity": {{"amount": 0, "unit": "g"}},
        "nutrients_per_100g": {_NUTRIENT_BLOCK},
        "nutrients_in_mentioned_quantity": {_NUTRIENT_BLOCK}
      }}
    ],
    "total_nutrients": {_NUTRIENT_BLOCK}
  }}
}}"""


# ═══════════════════════════════════════════════════════════
# RULES
# ═══════════════════════════════════════════════════════════

DV_GUIDELINES = """Use %DV guidelines:
   5% DV or less is considered low
   20% DV or more is considered high
   5% < DV < 20% is considered moderate"""

PRODUCT_LABEL_RULES = f"""Strictly follow these rules:
1. Mention Quantity with units in the label
2. Do not include any extra characters or formatting outside of the JSON object
3. Use accurate escape sequences for any special characters
4. Avoid including nutrients that aren't mentioned in the label
5. For primary_concerns, focus on major nutritional imbalances
6. For recommendations:
   - Suggest foods that can be added to complement the product
   - Focus on practical additions
   - Explain how each addition helps balance nutrition
7. {DV_GUIDELINES}
8. For health_impact determination:
   "At least" nutrients (like fiber, protein):
     High status -> Good health_impact
     Moderate status -> Moderate health_impact
     Low status -> Bad health_impact
   "Less than" nutrients (like sodium, saturated fat):
     Low status -> Good health_impact
     Moderate status -> Moderate health_impact
     High status -> Bad health_impact"""

PLATE_ANALYSIS_RULES = """Consider:
1. Use visual cues to estimate portions (size relative to plate, height of food, etc.)
2. Take a deeper look into the container size of food, don't consider a zoomed in container to be a big container
3. Provide nutrients both per 100g and for estimated total quantity
4. Prioritize using values from the USDA FoodData Central database
5. Consider common serving sizes and preparation methods
6. Account for density and volume-to-weight conversions
7. Round all nutritional values to one decimal place
8. Return only the JSON object, without markdown or commentary"""

MEAL_ANALYSIS_RULES = """Important considerations:
1. Analyze the provided food items and their quantities in the meal description.
2. Generate nutritional information for each food item and the total meal, adhering to the provided JSON schema.
3. Prioritize using values from the USDA FoodData Central database. If data is unavailable in the USDA database, use other reputable sources like the EFSA (European Food Safety Authority) Comprehensive Food Consumption Database or national food composition databases, ensuring data reliability and scientific validity.
4. Account for common preparation methods (e.g., boiled, fried, baked) when calculating nutritional values. If the preparation method is not specified, assume the most common method for that food item.
5. Convert all measurements to grams (g) or milliliters (ml) as appropriate. If only volume is provided, use standard density values to convert to weight. If a unit is not specified, assume grams (g).
6. Consider regional variations in portion sizes when interpreting quantities. If the description is ambiguous, use standard serving sizes.
7. Round all nutritional values to one decimal place.
8. Account for density and volume-to-weight conversions.
9. Return only the JSON object, without markdown or commentary."""


# ═══════════════════════════════════════════════════════════
# BUILDERS
# ═══════════════════════════════════════════════════════════


def build_product_label_prompt() -> str:
    """Build prompt for the product front image + nutrition label pair.

    Returns:
        Prompt text including the reference daily values table
    """
    return (
        "Analyze the food product, product name and its nutrition label. "
        "Provide response in this strict JSON format:\n"
        f"{PRODUCT_LABEL_SCHEMA}\n\n"
        f"{PRODUCT_LABEL_RULES}\n\n"
        "Reference daily values:\n"
        f"{format_daily_values()}\n"
    )


def build_food_image_prompt() -> str:
    """Build prompt for a single meal photo."""
    return (
        "Analyze this food image and break down each visible food item.\n"
        "Provide response in this strict JSON format:\n"
        f"{PLATE_ANALYSIS_SCHEMA}\n\n"
        f"{PLATE_ANALYSIS_RULES}\n"
    )


def build_meal_description_prompt(description: str) -> str:
    """Build prompt for a free-text meal description.

    Args:
        description: Meal description from user, inserted verbatim

    Returns:
        Prompt text
    """
    return f"""You are a highly qualified and experienced nutritionist specializing in providing accurate nutritional information.
Analyze these food items (always consider items in cooked form whenever applicable) and their quantities:

{description}

Generate nutritional info for each of the mentioned food items and their respective quantities and respond using this JSON schema:
{MEAL_ANALYSIS_SCHEMA}

{MEAL_ANALYSIS_RULES}

Provide accurate nutritional data based on the most reliable food databases and scientific sources.
"""


def build_prompt(request: AnalysisRequest) -> str:
    """Select and build the prompt for an analysis request."""
    if isinstance(request, ProductImagesRequest):
        return build_product_label_prompt()
    if isinstance(request, FoodImageRequest):
        return build_food_image_prompt()
    if isinstance(request, MealDescriptionRequest):
        return build_meal_description_prompt(request.description)
    raise TypeError(f"Unsupported analysis request: {type(request).__name__}")

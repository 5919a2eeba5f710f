"""Reference daily values (FDA, adults and children >= 4 years)."""

from typing import Dict, List

DAILY_VALUES: List[Dict[str, str]] = [
    {"Nutrient": "Added sugars", "Current Daily Value": "50g"},
    {"Nutrient": "Biotin", "Current Daily Value": "30mcg"},
    {"Nutrient": "Calcium", "Current Daily Value": "1300mg"},
    {"Nutrient": "Chloride", "Current Daily Value": "2300mg"},
    {"Nutrient": "Choline", "Current Daily Value": "550mg"},
    {"Nutrient": "Cholesterol", "Current Daily Value": "300mg"},
    {"Nutrient": "Chromium", "Current Daily Value": "35mcg"},
    {"Nutrient": "Copper", "Current Daily Value": "0.9mg"},
    {"Nutrient": "Dietary Fiber", "Current Daily Value": "28g"},
    {"Nutrient": "Fat", "Current Daily Value": "78g"},
    {"Nutrient": "Folate/Folic Acid", "Current Daily Value": "400mcg DFE"},
    {"Nutrient": "Iodine", "Current Daily Value": "150mcg"},
    {"Nutrient": "Iron", "Current Daily Value": "18mg"},
    {"Nutrient": "Magnesium", "Current Daily Value": "420mg"},
    {"Nutrient": "Manganese", "Current Daily Value": "2.3mg"},
    {"Nutrient": "Molybdenum", "Current Daily Value": "45mcg"},
    {"Nutrient": "Niacin", "Current Daily Value": "16mg NE"},
    {"Nutrient": "Pantothenic Acid", "Current Daily Value": "5mg"},
    {"Nutrient": "Phosphorus", "Current Daily Value": "1250mg"},
    {"Nutrient": "Potassium", "Current Daily Value": "4700mg"},
    {"Nutrient": "Protein", "Current Daily Value": "50g"},
    {"Nutrient": "Riboflavin", "Current Daily Value": "1.3mg"},
    {"Nutrient": "Saturated fat", "Current Daily Value": "20g"},
    {"Nutrient": "Selenium", "Current Daily Value": "55mcg"},
    {"Nutrient": "Sodium", "Current Daily Value": "2300mg"},
    {"Nutrient": "Thiamin", "Current Daily Value": "1.2mg"},
    {"Nutrient": "Total carbohydrate", "Current Daily Value": "275g"},
    {"Nutrient": "Vitamin A", "Current Daily Value": "900mcg RAE"},
    {"Nutrient": "Vitamin B12", "Current Daily Value": "2.4mcg"},
    {"Nutrient": "Vitamin B6", "Current Daily Value": "1.7mg"},
    {"Nutrient": "Vitamin C", "Current Daily Value": "90mg"},
    {"Nutrient": "Vitamin D", "Current Daily Value": "20mcg"},
    {"Nutrient": "Vitamin E", "Current Daily Value": "15mg alpha-tocopherol"},
    {"Nutrient": "Vitamin K", "Current Daily Value": "120mcg"},
    {"Nutrient": "Zinc", "Current Daily Value": "11mg"},
]


def format_daily_values() -> str:
    """Render the table as ``"<Nutrient>: <Current Daily Value>"`` lines."""
    return "\n".join(
        f"{row['Nutrient']}: {row['Current Daily Value']}" for row in DAILY_VALUES
    )

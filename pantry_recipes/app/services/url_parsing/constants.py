"""Shared vocabularies and markers for recipe parsing."""

MEASUREMENTS = (
    "cup",
    "tablespoon",
    "tbsp",
    "teaspoon",
    "tsp",
    "ounces",
    "oz",
    "lb",
    "pound",
    "gram",
    "g",
    "kilogram",
    "kg",
    "milliliter",
    "millilitre",
    "ml",
)

# Decimal digits a vulgar fraction contributes after the point, e.g. "1½" -> "1.5"
FRACTION_DIGITS = {
    "½": "5",
    "⅔": "67",
    "⅓": "33",
    "¼": "25",
}
FRACTION_CHARS = "".join(FRACTION_DIGITS.keys())

NUMERAL_SEPARATORS = (" ", ".", "/")

LD_JSON_TYPE = "application/ld+json"
INGREDIENTS_KEY = "recipeIngredient"
INSTRUCTIONS_KEY = "recipeInstructions"
GRAPH_KEY = "@graph"
TYPE_KEY = "@type"
RECIPE_TYPE = "Recipe"

MISSING_STEP_TEXT = "---"

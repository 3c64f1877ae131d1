"""Ingredient-line and recipe-page parsing package.

Free-text ingredient lines are split into amount, unit and name. Recipe pages are
reduced to the schema.org JSON-LD Recipe object they embed.
"""

from pantry_recipes.app.services.url_parsing.errors import (
    AmountError,
    BadFormatError,
    IngredientParseError,
    LinkUnavailableError,
    MalformedAmountError,
    NoAmountError,
    RecipeExtractionError,
    UnknownUnitError,
)
from pantry_recipes.app.services.url_parsing.html_fetcher import fetch_html, is_private_host
from pantry_recipes.app.services.url_parsing.ingredient_parser import (
    clean_ingredient_text,
    parse_ingredient_line,
    parse_ingredient_lines,
    tokenize_ingredient_line,
)
from pantry_recipes.app.services.url_parsing.models import (
    ParsedIngredientLine,
    RecipeExtractionResult,
)
from pantry_recipes.app.services.url_parsing.parsing_utils import (
    classify_unit,
    clean_text,
    extract_image,
    extract_instructions,
    normalize_amount,
    parse_iso8601_duration,
    parse_numeral,
    parse_servings,
)

__all__ = [
    # Models
    "ParsedIngredientLine",
    "RecipeExtractionResult",
    # Errors
    "AmountError",
    "BadFormatError",
    "IngredientParseError",
    "LinkUnavailableError",
    "MalformedAmountError",
    "NoAmountError",
    "RecipeExtractionError",
    "UnknownUnitError",
    # HTML fetching
    "fetch_html",
    "is_private_host",
    # Ingredient parsing
    "clean_ingredient_text",
    "parse_ingredient_line",
    "parse_ingredient_lines",
    "tokenize_ingredient_line",
    # Parsing utilities
    "classify_unit",
    "clean_text",
    "extract_image",
    "extract_instructions",
    "normalize_amount",
    "parse_iso8601_duration",
    "parse_numeral",
    "parse_servings",
]

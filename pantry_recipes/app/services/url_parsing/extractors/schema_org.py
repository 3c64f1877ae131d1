"""Schema.org JSON-LD recipe extraction."""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

from pantry_recipes.app.services.url_parsing.constants import (
    GRAPH_KEY,
    INGREDIENTS_KEY,
    INSTRUCTIONS_KEY,
    LD_JSON_TYPE,
    RECIPE_TYPE,
    TYPE_KEY,
)
from pantry_recipes.app.services.url_parsing.errors import BadFormatError
from pantry_recipes.app.services.url_parsing.ingredient_parser import parse_ingredient_lines
from pantry_recipes.app.services.url_parsing.models import RecipeExtractionResult
from pantry_recipes.app.services.url_parsing.parsing_utils import (
    extract_description,
    extract_image,
    extract_ingredient_lines,
    extract_instructions,
    extract_name,
    parse_iso8601_duration,
    parse_servings,
)

logger = logging.getLogger(__name__)


class LinkedDataKind(enum.Enum):
    GRAPH = "graph"
    LIST = "list"
    OBJECT = "object"
    SCALAR = "scalar"


@dataclass(frozen=True)
class LinkedDataShape:
    """Top level of a JSON-LD block tagged with the shape it arrived in."""

    kind: LinkedDataKind
    value: Any


def decode_linked_data(data) -> LinkedDataShape:
    if isinstance(data, dict):
        if GRAPH_KEY in data:
            return LinkedDataShape(LinkedDataKind.GRAPH, data[GRAPH_KEY])
        return LinkedDataShape(LinkedDataKind.OBJECT, data)
    if isinstance(data, list):
        return LinkedDataShape(LinkedDataKind.LIST, data)
    return LinkedDataShape(LinkedDataKind.SCALAR, data)


def is_recipe_object(candidate) -> bool:
    if not isinstance(candidate, dict):
        return False
    obj_type = candidate.get(TYPE_KEY)
    if isinstance(obj_type, list):
        return RECIPE_TYPE in obj_type
    return obj_type == RECIPE_TYPE


def find_recipe_script(html: str):
    """Return the text of the first JSON-LD script that mentions recipe ingredients."""
    soup = BeautifulSoup(html, "lxml")
    scripts = soup.find_all("script")
    logger.info("Found %d script blocks", len(scripts))
    for idx, script in enumerate(scripts):
        if script.get("type") != LD_JSON_TYPE:
            continue
        raw_json = script.string or script.get_text()
        if raw_json and INGREDIENTS_KEY in raw_json:
            logger.debug("Using JSON-LD script block %d", idx)
            return raw_json
    return None


def locate_recipe_json(html: str, url: str) -> dict:
    """Find the schema.org Recipe object embedded in ``html``.

    Only the first ``application/ld+json`` block mentioning ``recipeIngredient`` is
    considered. Its top level may be a ``@graph`` container or a plain array.
    Raises BadFormatError when no recipe object can be found.
    """
    raw_json = find_recipe_script(html)
    if raw_json is None:
        raise BadFormatError(url, "No recipe element")
    try:
        data = json.loads(raw_json)
    except (ValueError, RecursionError) as exc:
        logger.warning("JSON-LD block failed to parse: %s (first 200 chars: %s)", exc, raw_json[:200])
        raise BadFormatError(url, f"Invalid JSON-LD: {exc}") from exc

    shape = decode_linked_data(data)
    if shape.kind is LinkedDataKind.OBJECT:
        raise BadFormatError(url, "Could not parse recipe element")
    if shape.kind is LinkedDataKind.SCALAR or not isinstance(shape.value, list):
        raise BadFormatError(url, "No recipe element")

    logger.info("JSON-LD %s has %d items", shape.kind.value, len(shape.value))
    for candidate in shape.value:
        if is_recipe_object(candidate):
            return candidate
    raise BadFormatError(url, "No recipe element")


def extract_recipe_fields(recipe: dict) -> RecipeExtractionResult:
    """Project the fields of a schema.org Recipe object; each field degrades to None alone."""
    ingredient_lines = extract_ingredient_lines(recipe.get(INGREDIENTS_KEY))
    result = RecipeExtractionResult(
        name=extract_name(recipe.get("name")),
        description=extract_description(recipe.get("description")),
        prep_time_minutes=parse_iso8601_duration(recipe.get("prepTime")),
        cook_time_minutes=parse_iso8601_duration(recipe.get("cookTime")),
        total_time_minutes=parse_iso8601_duration(recipe.get("totalTime")),
        servings=parse_servings(recipe.get("recipeYield")),
        instructions=extract_instructions(recipe.get(INSTRUCTIONS_KEY)),
        image=extract_image(recipe.get("image")),
        ingredients=parse_ingredient_lines(ingredient_lines),
    )
    logger.info(
        "Recipe %s: ingredients=%d, instructions=%s",
        (result.name or "None")[:50],
        len(result.ingredients),
        "yes" if result.instructions is not None else "no",
    )
    return result


def extract_recipe_from_schema_org(html: str, url: str) -> RecipeExtractionResult:
    """Extract recipe data from the schema.org JSON-LD embedded in HTML."""
    return extract_recipe_fields(locate_recipe_json(html, url))

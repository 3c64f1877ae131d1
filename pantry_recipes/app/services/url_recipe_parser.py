import logging

from pantry_recipes.app.services.url_parsing.errors import BadFormatError, LinkUnavailableError
from pantry_recipes.app.services.url_parsing.extractors.schema_org import (
    extract_recipe_from_schema_org,
)
from pantry_recipes.app.services.url_parsing.html_fetcher import fetch_html
from pantry_recipes.app.services.url_parsing.models import RecipeExtractionResult

logger = logging.getLogger(__name__)


async def parse_recipe_from_url(url: str) -> RecipeExtractionResult:
    """Fetch ``url`` and extract the recipe described by its JSON-LD block.

    ``url`` must already be percent-decoded. Every call fetches and parses from
    scratch. Raises LinkUnavailableError when the page cannot be fetched and
    BadFormatError when it holds no schema.org Recipe.
    """
    try:
        html = await fetch_html(url)
    except LinkUnavailableError as exc:
        logger.warning("Could not fetch recipe page %s: %s", url, exc.reason)
        raise
    except BadFormatError as exc:
        logger.warning("Unusable response from %s: %s", url, exc.reason)
        raise

    try:
        result = extract_recipe_from_schema_org(html, url)
    except BadFormatError as exc:
        logger.warning("No recipe found at %s: %s", url, exc.reason)
        raise

    logger.info("Extracted recipe from %s with %d ingredients", url, len(result.ingredients))
    return result

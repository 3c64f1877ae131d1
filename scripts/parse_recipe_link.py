#!/usr/bin/env python
"""
Extract a recipe from a URL and print it as JSON.

Run manually:
    python scripts/parse_recipe_link.py "https://example.com/some-recipe"
"""
import asyncio
import logging
import sys

from pantry_recipes.app.core.config import get_settings
from pantry_recipes.app.services import url_recipe_parser
from pantry_recipes.app.services.url_parsing.errors import RecipeExtractionError

logger = logging.getLogger("parse_recipe_link")


def main():
    logging.basicConfig(level=get_settings().log_level.upper())
    if len(sys.argv) < 2:
        logger.error('Usage: python scripts/parse_recipe_link.py "<url>"')
        sys.exit(1)

    url = sys.argv[1]
    try:
        result = asyncio.run(url_recipe_parser.parse_recipe_from_url(url))
    except RecipeExtractionError as exc:
        logger.error("%s", exc)
        sys.exit(2)
    print(result.model_dump_json(indent=2))


if __name__ == "__main__":
    main()

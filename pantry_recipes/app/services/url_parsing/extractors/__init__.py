"""Recipe extractors for embedded structured data."""

from pantry_recipes.app.services.url_parsing.extractors.schema_org import (
    extract_recipe_fields,
    extract_recipe_from_schema_org,
    locate_recipe_json,
)

__all__ = [
    "extract_recipe_fields",
    "extract_recipe_from_schema_org",
    "locate_recipe_json",
]

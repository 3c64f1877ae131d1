from typing import List
from urllib.parse import unquote

from fastapi import APIRouter, HTTPException, Query, status

from pantry_recipes.app.services.url_parsing.ingredient_parser import (
    clean_ingredient_text,
    parse_ingredient_lines,
)
from pantry_recipes.app.services.url_parsing.models import ParsedIngredientLine

router = APIRouter(prefix="/parse_ingredients", tags=["parsing"])


@router.get("", response_model=List[ParsedIngredientLine])
def parse_ingredients(text: str = Query(..., description="URL-encoded, newline separated lines")):
    try:
        decoded = unquote(text, errors="strict")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error_code": "invalid_encoding", "message": "Ingredients must be urlencoded."},
        )
    return parse_ingredient_lines(clean_ingredient_text(decoded))

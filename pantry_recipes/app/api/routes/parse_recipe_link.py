from urllib.parse import unquote

from fastapi import APIRouter, HTTPException, Query, status

from pantry_recipes.app.services import url_recipe_parser
from pantry_recipes.app.services.url_parsing.errors import BadFormatError, LinkUnavailableError
from pantry_recipes.app.services.url_parsing.models import RecipeExtractionResult

router = APIRouter(prefix="/parse_recipe_link", tags=["parsing"])


@router.get("", response_model=RecipeExtractionResult)
async def parse_recipe_link(link: str = Query(..., description="URL-encoded recipe page link")):
    try:
        decoded = unquote(link, errors="strict")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error_code": "invalid_encoding", "message": "Link must be urlencoded."},
        )

    try:
        return await url_recipe_parser.parse_recipe_from_url(decoded)
    except LinkUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error_code": "link_unavailable", "message": str(exc)},
        )
    except BadFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error_code": "bad_format", "message": str(exc)},
        )

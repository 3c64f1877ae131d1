from fastapi import APIRouter

from pantry_recipes.app.api.routes import parse_ingredients, parse_recipe_link

api_router = APIRouter()
api_router.include_router(parse_ingredients.router)
api_router.include_router(parse_recipe_link.router)

"""Pydantic models for ingredient and recipe-page parsing."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedIngredientLine(BaseModel):
    """One ingredient line split into amount, unit and name."""

    amount: Optional[float] = None
    unit: Optional[str] = None
    name: str

    model_config = ConfigDict(frozen=True)


class RecipeExtractionResult(BaseModel):
    """Recipe metadata extracted from a page's JSON-LD block.

    Every field is optional on its own; a missing or oddly shaped field never
    prevents the others from being filled in.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    prep_time_minutes: Optional[int] = None
    cook_time_minutes: Optional[int] = None
    total_time_minutes: Optional[int] = None
    servings: Optional[int] = None
    instructions: Optional[str] = None
    image: Optional[str] = None
    ingredients: List[ParsedIngredientLine] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

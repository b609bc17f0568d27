from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

MIN_INPUT_CHARS = 20
MAX_INPUT_CHARS = 10_000


class GenerateRecipeRequest(BaseModel):
    inputText: str = Field(..., min_length=MIN_INPUT_CHARS, max_length=MAX_INPUT_CHARS)


class RecipeItemResponse(BaseModel):
    content: str
    position: int


class GeneratedRecipeResponse(BaseModel):
    generationId: str
    name: str
    description: str
    ingredients: list[RecipeItemResponse]
    steps: list[RecipeItemResponse]


class ErrorBody(BaseModel):
    error: str
    message: Optional[str] = None
    details: Optional[list[dict[str, Any]]] = None


class ErrorResponse(BaseModel):
    """Body of errors raised by the route, wrapped in FastAPI's detail envelope."""
    detail: ErrorBody


class AuthErrorResponse(BaseModel):
    detail: str

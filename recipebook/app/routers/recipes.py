# recipebook/app/routers/recipes.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from recipebook.app.deps import CurrentUser, get_current_user, get_generation_service
from recipebook.app.domain.errors import RecipeValidationError
from recipebook.app.schemas.generation import (
    AuthErrorResponse,
    ErrorResponse,
    GenerateRecipeRequest,
    GeneratedRecipeResponse,
)
from recipebook.app.services.recipe_generation import RecipeGenerationService
from recipebook.services.errors import (
    InferenceParseError,
    InferenceTimeoutError,
    InferenceValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])

_UNPROCESSABLE_ERRORS = (RecipeValidationError, InferenceValidationError, InferenceParseError)


def _error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "message": message})


@router.post(
    "/generate",
    response_model=GeneratedRecipeResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": AuthErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def generate_recipe(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    service: RecipeGenerationService = Depends(get_generation_service),
):
    """
    Generate a recipe draft from free-form text.

    The draft is not a recipe yet: the client reviews it and creates the
    recipe separately, referencing generationId.
    """
    try:
        body = await request.json()
    except ValueError:
        raise _error(status.HTTP_400_BAD_REQUEST, "Bad Request", "Invalid JSON in request body")

    try:
        payload = GenerateRecipeRequest.model_validate(body)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Validation failed", "details": e.errors(include_url=False, include_context=False)},
        )

    try:
        draft = await run_in_threadpool(
            service.generate_recipe_from_text,
            payload.inputText,
            current_user.id,
        )
    except _UNPROCESSABLE_ERRORS as e:
        logger.info("Text could not be turned into a recipe: user=%s, error=%s", current_user.id, e)
        raise _error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Unprocessable Entity",
            "The provided text could not be processed as a recipe. "
            "Please describe a dish with its ingredients and cooking steps.",
        )
    except InferenceTimeoutError:
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "The recipe assistant took too long to respond. Please try again.",
        )
    except Exception as e:
        logger.error("Recipe generation failed: user=%s, error=%s", current_user.id, e)
        raise _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "Failed to generate recipe. Please try again later.",
        )

    return draft.to_dict()

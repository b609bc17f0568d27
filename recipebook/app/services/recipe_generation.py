# recipebook/app/services/recipe_generation.py
"""
AI recipe generation service.
Turns free-form text into a validated recipe draft and leaves an audit trail.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from recipebook.app.domain.errors import GenerationPersistenceError, RecipeValidationError
from recipebook.app.domain.models import (
    GeneratedRecipeDraft,
    GenerationErrorRecord,
    GenerationRecord,
)
from recipebook.app.infra.db.base import GenerationRepository
from recipebook.services.openrouter_client import ModelParams, OpenRouterClient
from recipebook.services.prompts import SYSTEM_PROMPT, build_user_prompt
from recipebook.services.recipe_schema import (
    RECIPE_RESPONSE_FORMAT,
    GeneratedRecipe,
    format_validation_errors,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_MODEL_PARAMS = ModelParams(temperature=0.3, max_tokens=4096)


def build_recipe_client(
    api_key: str,
    model: str = DEFAULT_MODEL,
    *,
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
) -> OpenRouterClient:
    """Client preconfigured with the recipe system prompt and schema."""
    extra: dict[str, Any] = {}
    if timeout_seconds is not None:
        extra["timeout_seconds"] = timeout_seconds
    return OpenRouterClient(
        api_key=api_key,
        model=model,
        system_prompt=SYSTEM_PROMPT,
        response_format=RECIPE_RESPONSE_FORMAT,
        base_url=base_url,
        model_params=DEFAULT_MODEL_PARAMS,
        **extra,
    )


def _error_code(error: BaseException) -> str:
    code = getattr(error, "code", None)
    return code if isinstance(code, str) and code else type(error).__name__


def _error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


class RecipeGenerationService:
    """
    Service for AI-assisted recipe extraction.

    Responsibilities:
    - Render the prompt and call the inference provider
    - Re-validate the model output against the recipe schema
    - Store a generation record for the accepted output
    - Record every failure in generation_errors without hiding it
    """

    def __init__(
        self,
        repository: GenerationRepository,
        client: Optional[OpenRouterClient] = None,
        *,
        api_key: Optional[str] = None,
        model: str = DEFAULT_MODEL,
    ):
        self._repo = repository
        self._client = client or build_recipe_client(api_key or "", model)

    def generate_recipe_from_text(self, input_text: str, user_id: str) -> GeneratedRecipeDraft:
        """
        Generate a recipe draft from free-form text.

        Args:
            input_text: Text describing the recipe (pre-validated by the caller)
            user_id: The authenticated user

        Returns:
            GeneratedRecipeDraft referencing the stored generation

        Raises:
            InferenceError: If the provider call failed
            RecipeValidationError: If the output is not a valid recipe
            GenerationPersistenceError: If the generation record was not stored
        """
        try:
            result = self._client.generate(build_user_prompt(input_text))
            recipe = self._validate_recipe(result.json)
            generated_output = recipe.model_dump(mode="json")

            generation_id = self._repo.create_generation(
                GenerationRecord(
                    user_id=user_id,
                    input_text=input_text,
                    generated_output=generated_output,
                )
            )
            if not generation_id:
                raise GenerationPersistenceError("create generation record", "no id returned")
        except Exception as error:
            logger.error("Recipe generation failed: user=%s, error=%s", user_id, error)
            self._log_generation_error(user_id, input_text, error)
            raise

        logger.info(
            "Recipe generated: id=%s, user=%s, ingredients=%d, steps=%d",
            generation_id,
            user_id,
            len(recipe.ingredients),
            len(recipe.steps),
        )
        return GeneratedRecipeDraft(
            generation_id=generation_id,
            name=recipe.name,
            description=recipe.description,
            ingredients=generated_output["ingredients"],
            steps=generated_output["steps"],
        )

    @staticmethod
    def _validate_recipe(payload: Any) -> GeneratedRecipe:
        # The client may have been configured with any schema; check ours again.
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")
        try:
            return GeneratedRecipe.model_validate(payload)
        except ValidationError as error:
            raise RecipeValidationError(format_validation_errors(error)) from error

    def _log_generation_error(self, user_id: str, input_text: str, error: BaseException) -> None:
        record = GenerationErrorRecord(
            user_id=user_id,
            input_text=input_text,
            error_message=_error_message(error),
            error_code=_error_code(error),
        )
        try:
            self._repo.log_generation_error(record)
        except Exception:
            logger.exception("Failed to log generation error: user=%s", user_id)

"""
Structural contract for AI-generated recipe drafts.

The same pydantic model produces the JSON schema sent to the inference provider
and validates whatever comes back.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError


class RecipeItem(BaseModel):
    """An ingredient or a step, ordered by a 1-based position."""
    model_config = ConfigDict(extra="forbid")

    content: str = Field(..., min_length=1)
    position: StrictInt = Field(..., gt=0)


class GeneratedRecipe(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    ingredients: list[RecipeItem] = Field(..., min_length=1)
    steps: list[RecipeItem] = Field(..., min_length=1)


@dataclass(frozen=True)
class JsonSchemaFormat:
    """Named response schema for `response_format.json_schema`."""
    name: str
    model: type[BaseModel]
    strict: bool = True

    @property
    def schema(self) -> dict[str, Any]:
        return self.model.model_json_schema()

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "schema": self.schema, "strict": self.strict}


RECIPE_RESPONSE_FORMAT = JsonSchemaFormat(name="recipe", model=GeneratedRecipe)


def format_validation_errors(error: ValidationError) -> list[str]:
    messages: list[str] = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "<root>"
        messages.append(f"{location}: {item.get('msg', 'invalid value')}")
    return messages

# recipebook/app/domain/models.py
"""
Domain models for AI recipe generation.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenerationRecord:
    """One accepted AI generation, stored before the user confirms the draft."""
    user_id: str
    input_text: str
    generated_output: dict[str, Any]
    is_accepted: bool = False

    def to_row(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "input_text": self.input_text,
            "generated_output": self.generated_output,
            "is_accepted": self.is_accepted,
        }


@dataclass
class GenerationErrorRecord:
    """Audit entry for a failed generation attempt."""
    user_id: str
    input_text: str
    error_message: str
    error_code: str

    def to_row(self) -> dict[str, str]:
        return {
            "user_id": self.user_id,
            "input_text": self.input_text,
            "error_message": self.error_message,
            "error_code": self.error_code,
        }


@dataclass
class GeneratedRecipeDraft:
    """Unconfirmed recipe handed back to the caller for review."""
    generation_id: str
    name: str
    description: str
    ingredients: list[dict[str, Any]] = field(default_factory=list)
    steps: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "generationId": self.generation_id,
            "name": self.name,
            "description": self.description,
            "ingredients": self.ingredients,
            "steps": self.steps,
        }

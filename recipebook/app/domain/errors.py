from __future__ import annotations


class GenerationError(Exception):
    code = "generation_error"


class RecipeValidationError(GenerationError):
    code = "recipe_validation"

    def __init__(self, errors: list[str]):
        super().__init__(f"Generated recipe failed validation: {'; '.join(errors)}")
        self.errors = errors


class GenerationPersistenceError(GenerationError):
    code = "persistence_error"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Failed to {operation}: {reason}")
        self.operation = operation
        self.reason = reason

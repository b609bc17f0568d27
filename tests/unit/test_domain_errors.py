from __future__ import annotations

from recipebook.app.domain.errors import (
    GenerationError,
    GenerationPersistenceError,
    RecipeValidationError,
)


class TestGenerationError:
    def test_base_exception(self) -> None:
        error = GenerationError("Base error")
        assert str(error) == "Base error"
        assert error.code == "generation_error"


class TestRecipeValidationError:
    def test_lists_every_complaint(self) -> None:
        error = RecipeValidationError(["ingredients: List should have at least 1 item", "name: Field required"])
        assert "ingredients" in str(error)
        assert "name: Field required" in str(error)
        assert error.errors == ["ingredients: List should have at least 1 item", "name: Field required"]
        assert error.code == "recipe_validation"


class TestGenerationPersistenceError:
    def test_includes_operation_and_reason(self) -> None:
        error = GenerationPersistenceError("create generation record", "connection refused")
        assert str(error) == "Failed to create generation record: connection refused"
        assert error.operation == "create generation record"
        assert error.reason == "connection refused"
        assert error.code == "persistence_error"


class TestExceptionHierarchy:
    def test_all_domain_errors_inherit_from_generation_error(self) -> None:
        assert issubclass(RecipeValidationError, GenerationError)
        assert issubclass(GenerationPersistenceError, GenerationError)

from __future__ import annotations

from recipebook.services.errors import (
    InferenceConfigurationError,
    InferenceError,
    InferenceHTTPError,
    InferenceParseError,
    InferenceResponseError,
    InferenceTimeoutError,
    InferenceValidationError,
    ServiceError,
)


class TestServiceError:
    def test_base_exception(self) -> None:
        error = ServiceError("Base service error")
        assert str(error) == "Base service error"
        assert isinstance(error, Exception)


class TestInferenceHTTPError:
    def test_includes_status_and_text(self) -> None:
        error = InferenceHTTPError(401, "Unauthorized", '{"error": "bad key"}')
        assert "HTTP 401 Unauthorized" in str(error)
        assert "bad key" in str(error)
        assert error.status_code == 401
        assert error.status_text == "Unauthorized"
        assert error.body == '{"error": "bad key"}'

    def test_without_body(self) -> None:
        error = InferenceHTTPError(500, "Internal Server Error")
        assert str(error).endswith("HTTP 500 Internal Server Error")
        assert error.code == "http_error"


class TestInferenceTimeoutError:
    def test_includes_timeout(self) -> None:
        error = InferenceTimeoutError(30.0)
        assert "request timed out" in str(error)
        assert "30" in str(error)
        assert error.timeout_seconds == 30.0
        assert error.code == "timeout"


class TestInferenceResponseError:
    def test_keeps_response(self) -> None:
        error = InferenceResponseError("Invalid response shape: missing choices", {"choices": []})
        assert "missing choices" in str(error)
        assert error.response == {"choices": []}


class TestInferenceParseError:
    def test_keeps_raw_content(self) -> None:
        error = InferenceParseError("{invalid json}", "Expecting property name")
        assert "not valid JSON" in str(error)
        assert "Expecting property name" in str(error)
        assert error.content == "{invalid json}"
        assert error.code == "invalid_json"


class TestInferenceValidationError:
    def test_context_lists_errors(self) -> None:
        schema = {"type": "object", "required": ["description"]}
        error = InferenceValidationError({"name": "Soup"}, schema, ["description: Field required"])
        assert "description: Field required" in str(error)
        assert error.context == {
            "value": {"name": "Soup"},
            "schema": schema,
            "errors": ["description: Field required"],
        }


class TestExceptionHierarchy:
    def test_all_inference_errors_share_one_type(self) -> None:
        assert issubclass(InferenceError, ServiceError)
        assert issubclass(InferenceConfigurationError, InferenceError)
        assert issubclass(InferenceHTTPError, InferenceError)
        assert issubclass(InferenceTimeoutError, InferenceError)
        assert issubclass(InferenceResponseError, InferenceError)
        assert issubclass(InferenceParseError, InferenceError)
        assert issubclass(InferenceValidationError, InferenceError)

    def test_timeout_is_not_an_http_error(self) -> None:
        assert not issubclass(InferenceTimeoutError, InferenceHTTPError)

    def test_codes_are_distinct(self) -> None:
        codes = {
            InferenceConfigurationError.code,
            InferenceHTTPError.code,
            InferenceTimeoutError.code,
            InferenceResponseError.code,
            InferenceParseError.code,
            InferenceValidationError.code,
        }
        assert len(codes) == 6

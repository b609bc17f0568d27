from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    pass


class InferenceError(ServiceError):
    code = "inference_error"


class InferenceConfigurationError(InferenceError):
    code = "configuration"


class InferenceHTTPError(InferenceError):
    code = "http_error"

    def __init__(self, status_code: int, status_text: str, body: str = ""):
        message = f"OpenRouter request failed: HTTP {status_code} {status_text}".rstrip()
        if body:
            message = f"{message} - {body}"
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class InferenceTimeoutError(InferenceError):
    code = "timeout"

    def __init__(self, timeout_seconds: float):
        super().__init__(f"OpenRouter request timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class InferenceResponseError(InferenceError):
    code = "invalid_response"

    def __init__(self, message: str, response: Any = None):
        super().__init__(message)
        self.response = response


class InferenceParseError(InferenceError):
    code = "invalid_json"

    def __init__(self, content: str, reason: str = ""):
        message = "Model content is not valid JSON"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.content = content
        self.reason = reason


class InferenceValidationError(InferenceError):
    code = "schema_validation"

    def __init__(self, value: Any, schema: dict[str, Any], errors: list[str]):
        super().__init__(f"Model output does not match schema: {'; '.join(errors)}")
        self.value = value
        self.schema = schema
        self.errors = errors

    @property
    def context(self) -> dict[str, Any]:
        return {"value": self.value, "schema": self.schema, "errors": self.errors}

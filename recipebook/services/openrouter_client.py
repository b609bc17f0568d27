from __future__ import annotations

import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recipebook.services.errors import (
    InferenceConfigurationError,
    InferenceHTTPError,
    InferenceParseError,
    InferenceResponseError,
    InferenceTimeoutError,
    InferenceValidationError,
)
from recipebook.services.recipe_schema import JsonSchemaFormat, format_validation_errors

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
MAX_ERROR_BODY_CHARS = 500
MAX_USER_PROMPT_CHARS = 50_000
MAX_SYSTEM_PROMPT_CHARS = 50_000
MAX_TOTAL_PROMPT_CHARS = 100_000

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

T = TypeVar("T", bound=BaseModel)


class ModelParams(BaseModel):
    """Optional sampling parameters, merged verbatim into the request payload."""
    model_config = ConfigDict(extra="forbid")

    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(None, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(None, ge=1, le=32768)
    frequency_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    presence_penalty: Optional[float] = Field(None, ge=-2.0, le=2.0)
    seed: Optional[int] = None


@dataclass
class InferenceResult(Generic[T]):
    raw: dict[str, Any]
    json: T


def _strip_code_fence(content: str) -> str:
    stripped = content.strip()
    match = _CODE_FENCE.match(stripped)
    return match.group(1) if match else stripped


class OpenRouterClient:
    """
    Single-shot chat-completion client with a JSON-schema response contract.

    Every failure of the contract surfaces as an InferenceError subclass.
    Lower-level transport errors (connection refused, DNS, ...) propagate as-is.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        system_prompt: str,
        response_format: JsonSchemaFormat,
        *,
        base_url: str | None = None,
        model_params: ModelParams | dict[str, Any] | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key:
            raise InferenceConfigurationError("OpenRouterClient: api_key is required")
        if not model:
            raise InferenceConfigurationError("OpenRouterClient: model is required")
        if not system_prompt:
            raise InferenceConfigurationError("OpenRouterClient: system_prompt is required")
        if len(system_prompt) > MAX_SYSTEM_PROMPT_CHARS:
            raise InferenceConfigurationError(
                f"OpenRouterClient: system_prompt exceeds maximum length of {MAX_SYSTEM_PROMPT_CHARS} characters"
            )
        if response_format is None or not response_format.name or response_format.model is None:
            raise InferenceConfigurationError("OpenRouterClient: response_format is required")

        self.api_key = api_key
        self.model = model
        self.system_prompt = system_prompt
        self.response_format = response_format
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.model_params = self._coerce_params(model_params)
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client

    @staticmethod
    def _coerce_params(params: ModelParams | dict[str, Any] | None) -> ModelParams:
        if params is None:
            return ModelParams()
        if isinstance(params, ModelParams):
            return params
        try:
            return ModelParams.model_validate(params)
        except ValidationError as error:
            details = "; ".join(format_validation_errors(error))
            raise InferenceConfigurationError(f"OpenRouterClient: invalid model params: {details}") from error

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, user_message: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": user_message},
            ],
            "stream": False,
        }
        payload.update(self.model_params.model_dump(exclude_none=True))
        payload["response_format"] = {
            "type": "json_schema",
            "json_schema": self.response_format.to_payload(),
        }
        return payload

    def _check_user_message(self, user_message: str) -> None:
        if not user_message:
            raise InferenceConfigurationError("OpenRouterClient: user_message is required and cannot be empty")
        if len(user_message) > MAX_USER_PROMPT_CHARS:
            raise InferenceConfigurationError(
                f"OpenRouterClient: user_message exceeds maximum length of {MAX_USER_PROMPT_CHARS} characters"
            )
        if len(user_message) + len(self.system_prompt) > MAX_TOTAL_PROMPT_CHARS:
            raise InferenceConfigurationError(
                f"OpenRouterClient: combined prompts exceed maximum length of {MAX_TOTAL_PROMPT_CHARS} characters"
            )

    def generate(self, user_message: str) -> InferenceResult:
        self._check_user_message(user_message)
        payload = self.build_payload(user_message)
        logger.debug(
            "OpenRouter request: model=%s, prompt_chars=%d",
            self.model,
            len(user_message),
        )

        response, content = self._post(payload)
        if not response.is_success:
            logger.warning("OpenRouter HTTP error: status=%d", response.status_code)
            raise InferenceHTTPError(response.status_code, response.reason_phrase, content)

        data = self._decode_body(content)
        message = self._extract_content(data)
        parsed = self._parse_content(message)
        validated = self._validate(parsed)
        return InferenceResult(raw=data, json=validated)

    def _post(self, payload: dict[str, Any]) -> tuple[httpx.Response, str]:
        body = json.dumps(payload, ensure_ascii=False)
        deadline = time.monotonic() + self.timeout_seconds
        try:
            if self._http_client is not None:
                return self._send(self._http_client, body, deadline)
            with httpx.Client(timeout=self.timeout_seconds) as client:
                return self._send(client, body, deadline)
        except httpx.TimeoutException as error:
            raise InferenceTimeoutError(self.timeout_seconds) from error

    def _send(self, client: httpx.Client, body: str, deadline: float) -> tuple[httpx.Response, str]:
        """POST and read the whole body, giving up once the deadline passes."""
        request = client.build_request(
            "POST",
            self.endpoint,
            headers=self._headers(),
            content=body,
            timeout=self.timeout_seconds,
        )
        response = client.send(request, stream=True)
        try:
            if response.is_success:
                raw = self._read_until(response, deadline)
                return response, raw.decode(response.encoding or "utf-8", errors="replace")
            return response, self._read_error_body(response, deadline)
        finally:
            response.close()

    def _read_until(self, response: httpx.Response, deadline: float) -> bytes:
        chunks: list[bytes] = []
        for chunk in response.iter_bytes():
            if time.monotonic() > deadline:
                raise InferenceTimeoutError(self.timeout_seconds)
            chunks.append(chunk)
        if time.monotonic() > deadline:
            raise InferenceTimeoutError(self.timeout_seconds)
        return b"".join(chunks)

    def _read_error_body(self, response: httpx.Response, deadline: float) -> str:
        try:
            raw = self._read_until(response, deadline)
        except (httpx.HTTPError, httpx.StreamError, InferenceTimeoutError) as error:
            logger.warning("Could not read OpenRouter error body: %s", error)
            return ""
        return raw.decode("utf-8", errors="replace")[:MAX_ERROR_BODY_CHARS]

    @staticmethod
    def _decode_body(content: str) -> dict[str, Any]:
        try:
            data = json.loads(content)
        except ValueError as error:
            raise InferenceResponseError("Invalid response shape: body is not JSON", content) from error
        if not isinstance(data, dict):
            raise InferenceResponseError("Invalid response shape: missing choices", data)
        return data

    @staticmethod
    def _extract_content(data: dict[str, Any]) -> Any:
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise InferenceResponseError("Invalid response shape: missing choices", data)

        first = choices[0] if isinstance(choices[0], dict) else {}
        message = first.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if content is None:
            raise InferenceResponseError("Invalid response shape: missing content", data)
        return content

    @staticmethod
    def _parse_content(content: Any) -> Any:
        if not isinstance(content, str):
            return content
        try:
            return json.loads(_strip_code_fence(content))
        except json.JSONDecodeError as error:
            raise InferenceParseError(content, str(error)) from error

    def _validate(self, parsed: Any) -> BaseModel:
        try:
            return self.response_format.model.model_validate(parsed)
        except ValidationError as error:
            raise InferenceValidationError(
                value=parsed,
                schema=self.response_format.schema,
                errors=format_validation_errors(error),
            ) from error

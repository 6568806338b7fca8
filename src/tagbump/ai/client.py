"""Client for the Messages summarization API.

A single user message is sent and the first text block of the reply is
returned. Every failure mode (transport, HTTP status, error payload,
malformed or empty response) surfaces as ApiCallFailedError so callers
have exactly one thing to handle.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from tagbump.exceptions import ApiCallFailedError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.anthropic.com"
DEFAULT_MODEL = "claude-opus-4-6"
DEFAULT_MAX_TOKENS = 1024
DEFAULT_TIMEOUT = 60.0
API_VERSION = "2023-06-01"


class SummarizationClient(Protocol):
    """Anything that can turn a prompt into text."""

    def summarize(self, prompt: str) -> str: ...


class Message(BaseModel):
    role: str
    content: str


class MessagesRequest(BaseModel):
    model: str
    max_tokens: int
    messages: list[Message]


class ContentBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    text: str | None = None


class ApiErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str
    type: str | None = None


class MessagesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: list[ContentBlock] | None = None
    error: ApiErrorBody | None = None

    @property
    def text(self) -> str:
        for block in self.content or []:
            if block.text:
                return block.text
        return ""


class MessagesClient:
    """Synchronous Messages API client.

    Args:
        api_key: API key sent as ``x-api-key``
        base_url: Service root; ``/v1/messages`` is appended
        model: Model identifier
        max_tokens: Maximum output tokens
        timeout: Request timeout in seconds
        http_client: Optional preconfigured httpx client
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._http_client = http_client

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1/messages"

    def _headers(self) -> dict[str, str]:
        return {
            "content-type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": API_VERSION,
        }

    def _post(self, payload: dict) -> httpx.Response:
        if self._http_client is not None:
            return self._http_client.post(
                self.url, headers=self._headers(), json=payload, timeout=self.timeout
            )
        with httpx.Client(timeout=self.timeout) as client:
            return client.post(self.url, headers=self._headers(), json=payload)

    def summarize(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text.

        Raises:
            ApiCallFailedError: If the call fails or yields no text
        """
        request = MessagesRequest(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[Message(role="user", content=prompt)],
        )
        logger.debug("POST %s (model=%s)", self.url, self.model)

        try:
            response = self._post(request.model_dump())
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # InvalidURL and header encoding errors are not HTTPError subclasses
            raise ApiCallFailedError(f"Failed to call summarization API: {e}") from e

        try:
            body = MessagesResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            if not response.is_success:
                raise ApiCallFailedError(
                    f"Summarization API returned HTTP {response.status_code}",
                    status_code=response.status_code,
                ) from e
            raise ApiCallFailedError(f"Failed to parse summarization API response: {e}") from e

        if body.error is not None:
            raise ApiCallFailedError(
                f"Summarization API error: {body.error.message}",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise ApiCallFailedError(
                f"Summarization API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        text = body.text
        if not text.strip():
            raise ApiCallFailedError("Summarization API returned empty response")
        return text

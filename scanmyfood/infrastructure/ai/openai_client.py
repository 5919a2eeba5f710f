"""
OpenAI API client for food analysis.

Sends one prompt plus up to two images to a chat completion model and
returns the raw text of the top choice. Transient failures are retried
once (configurable) with tenacity; every provider failure surfaces as
TransportError.
"""

from __future__ import annotations

import base64
import time
from typing import Any, Dict, List, Optional, Sequence

import openai
import structlog
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from scanmyfood.config import Settings, get_settings
from scanmyfood.domain.analysis.models import ImageAttachment
from scanmyfood.domain.shared.errors import ConfigurationError, TransportError

logger = structlog.get_logger(__name__)

# APITimeoutError is a subclass of APIConnectionError.
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)

MAX_IMAGES = 2


def to_data_url(image: ImageAttachment) -> str:
    """Encode image bytes as a base64 ``data:`` URL."""
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.mime_type};base64,{encoded}"


class OpenAIClient:
    """
    Async OpenAI client returning raw model text.

    Features:
    - Prompt + 0-2 inline images per request
    - Bounded timeout per attempt
    - Single retry on transient failures (connection, timeout, 429, 5xx)
    - Optional JSON-only output mode
    - Context manager for resource cleanup

    Example:
        >>> async with OpenAIClient(api_key="sk-...") as client:
        ...     text = await client.generate("Describe this meal", images=[image])
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        timeout: float = 30.0,
        max_attempts: int = 2,
        json_mode: bool = True,
        temperature: float = 0.2,
        max_tokens: int = 2000,
        retry_backoff: float = 0.5,
        client: Optional[AsyncOpenAI] = None,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (reads OPENAI_API_KEY if None)
            model: Model to use (must support vision for image modes)
            timeout: Request timeout in seconds
            max_attempts: Total attempts per call (2 = one retry)
            json_mode: Request ``{"type": "json_object"}`` output
            temperature: Sampling temperature
            max_tokens: Max tokens in response
            retry_backoff: Exponential backoff multiplier in seconds
            client: Optional pre-configured AsyncOpenAI client (for testing)

        Raises:
            ConfigurationError: If API key not found and client not provided
        """
        if client is not None:
            self._client: Optional[AsyncOpenAI] = client
            self.api_key: str = api_key or "test-key"
        else:
            resolved_key = api_key or get_settings().openai_api_key
            if not resolved_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY not found in environment. "
                    "Set it in .env file or pass as parameter."
                )
            self.api_key = resolved_key
            self._client = None

        self.model = model
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.json_mode = json_mode
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.retry_backoff = retry_backoff

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> OpenAIClient:
        """Build a client from application settings."""
        settings = settings or get_settings()
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.openai_timeout_s,
            max_attempts=settings.openai_max_attempts,
            json_mode=settings.openai_json_mode,
            temperature=settings.openai_temperature,
        )

    async def __aenter__(self) -> OpenAIClient:
        """Async context manager entry."""
        if self._client is None:
            # tenacity owns the retry policy
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        if self._client:
            await self._client.close()
            self._client = None

    def build_messages(
        self, prompt: str, images: Sequence[ImageAttachment] = ()
    ) -> List[Dict[str, Any]]:
        """Build the single user message carrying prompt and images.

        Raises:
            ValueError: If more than two images are given
        """
        if len(images) > MAX_IMAGES:
            raise ValueError(f"At most {MAX_IMAGES} images per request, got {len(images)}")

        if not images:
            return [{"role": "user", "content": prompt}]

        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        for image in images:
            content.append(
                {
                    "type": "image_url",
                    "image_url": {"url": to_data_url(image), "detail": "high"},
                }
            )
        return [{"role": "user", "content": content}]

    async def generate(self, prompt: str, images: Sequence[ImageAttachment] = ()) -> str:
        """
        Send prompt (and images) to the model and return the top choice text.

        Args:
            prompt: Instruction text
            images: Zero, one or two images

        Returns:
            Raw text of the first choice ("" if the model sent no content)

        Raises:
            TransportError: On provider failure after retries, or zero choices
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": self.build_messages(prompt, images),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if self.json_mode:
            params["response_format"] = {"type": "json_object"}

        start_time = time.time()
        try:
            completion = await self._create_with_retry(params)
        except openai.APIError as e:
            logger.warning(
                "Model request failed",
                model=self.model,
                error_type=type(e).__name__,
            )
            raise TransportError(f"Model request failed: {e}") from e

        if not completion.choices:
            raise TransportError("Model returned no candidates")

        text = completion.choices[0].message.content or ""
        logger.info(
            "Model request complete",
            model=self.model,
            image_count=len(images),
            finish_reason=completion.choices[0].finish_reason,
            duration_ms=int((time.time() - start_time) * 1000),
        )
        return text

    async def _create_with_retry(self, params: Dict[str, Any]) -> Any:
        assert self._client is not None
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.retry_backoff, max=4),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying model request",
                        attempt=attempt.retry_state.attempt_number,
                    )
                return await self._client.chat.completions.create(**params)
        raise AssertionError("unreachable")  # pragma: no cover

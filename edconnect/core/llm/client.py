# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""LLM client using LiteLLM.

This module provides the completion interface the AI tutor talks to.
Models use the LiteLLM ``provider/model`` format; the Anthropic API key
from settings is passed directly to ``acompletion()`` rather than through
environment variables.

Example:
    >>> from edconnect.core.llm import LLMClient
    >>> client = LLMClient()
    >>> response = await client.complete_with_messages([
    ...     {"role": "system", "content": "You are a Socratic tutor."},
    ...     {"role": "user", "content": "What is a quadratic?"},
    ... ])
    >>> print(response.content)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import litellm
from litellm import acompletion

from edconnect.core.config.settings import LLMSettings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class LLMResponse:
    """Response from an LLM completion.

    Attributes:
        content: The generated text content.
        model: The model that generated the response.
        tokens_input: Number of input tokens used.
        tokens_output: Number of output tokens generated.
        finish_reason: Why generation stopped (stop, length, etc.).
        raw_response: Original response object from LiteLLM.
    """

    content: str
    model: str
    tokens_input: int = 0
    tokens_output: int = 0
    finish_reason: str = "stop"
    raw_response: Optional[object] = field(default=None, repr=False)

    @property
    def total_tokens(self) -> int:
        """Get total tokens used (input + output)."""
        return self.tokens_input + self.tokens_output


class LLMError(Exception):
    """Exception raised when LLM operation fails.

    Attributes:
        message: Error description.
        model: Model that caused the error.
        original_error: Original exception if any.
    """

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


class LLMClient:
    """Client for LLM operations via LiteLLM.

    Attributes:
        model: Default model to use for completions.
        timeout: Request timeout in seconds.
        max_retries: Retries handed to LiteLLM.

    Example:
        >>> client = LLMClient(model="anthropic/claude-sonnet-4-20250514")
        >>> response = await client.complete_with_messages([{"role": "user", "content": "Hi"}])
    """

    def __init__(
        self,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        llm_settings: Optional[LLMSettings] = None,
    ):
        """Initialize the LLM client.

        Args:
            model: Default model in LiteLLM format. Falls back to settings.
            timeout: Request timeout in seconds. Falls back to settings.
            max_retries: Maximum retry attempts. Falls back to settings.
            llm_settings: LLM configuration. Uses get_settings() if None.
        """
        self._settings = llm_settings or get_settings().llm
        self._model = model or self._settings.tutor_model
        self._timeout = timeout or self._settings.request_timeout
        self._max_retries = max_retries if max_retries is not None else self._settings.max_retries

        litellm.set_verbose = False
        litellm.drop_params = True

        logger.info(
            "LLMClient initialized with model=%s, timeout=%.1fs, max_retries=%d",
            self._model,
            self._timeout,
            self._max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def _get_provider_params(self) -> dict[str, Any]:
        """Credentials passed straight to acompletion()."""
        params: dict[str, Any] = {}
        if self._settings.anthropic_api_key is not None:
            params["api_key"] = self._settings.anthropic_api_key.get_secret_value()
        return params

    async def complete_with_messages(
        self,
        messages: list[dict[str, Any]],
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: int = 1024,
        **kwargs,
    ) -> LLMResponse:
        """Generate a completion from messages already in OpenAI format.

        Raises:
            LLMError: If completion fails after retries.
            ValueError: If messages list is empty.
        """
        if not messages:
            raise ValueError("Messages list cannot be empty")

        use_model = model or self._model
        use_temperature = self._settings.temperature if temperature is None else temperature

        try:
            response = await acompletion(
                model=use_model,
                messages=messages,
                temperature=use_temperature,
                max_tokens=max_tokens,
                timeout=self._timeout,
                num_retries=self._max_retries,
                **self._get_provider_params(),
                **kwargs,
            )

            content = response.choices[0].message.content or ""
            finish_reason = response.choices[0].finish_reason or "stop"

            usage = getattr(response, "usage", None)
            tokens_input = getattr(usage, "prompt_tokens", 0) or 0
            tokens_output = getattr(usage, "completion_tokens", 0) or 0

            logger.debug(
                "Completion generated: model=%s, tokens_in=%d, tokens_out=%d",
                use_model,
                tokens_input,
                tokens_output,
            )

            return LLMResponse(
                content=content,
                model=use_model,
                tokens_input=tokens_input,
                tokens_output=tokens_output,
                finish_reason=finish_reason,
                raw_response=response,
            )

        except Exception as e:
            logger.error(
                "LLM completion failed: model=%s, messages=%d, error=%s",
                use_model,
                len(messages),
                str(e),
            )
            raise LLMError(
                message=f"Completion failed: {str(e)}",
                model=use_model,
                original_error=e,
            ) from e

    def __repr__(self) -> str:
        return (
            f"LLMClient(model={self._model!r}, "
            f"timeout={self._timeout}, max_retries={self._max_retries})"
        )

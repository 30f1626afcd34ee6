"""Chat-completion client for the OpenAI and OpenRouter backends.

Wraps the OpenAI SDK behind a single ``complete`` call. The backend
is chosen once at startup (see ``resolve_provider``); OpenRouter is
reached through the same SDK by swapping the base URL and adding its
identification headers. Failures never raise: they come back as a
failed CompletionResult so callers can tell "not configured" from
"the API broke" from "the model returned nothing".
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import openai

from docsync.pipeline.structure import CompletionResult, FailureKind
from docsync.utils.config import ProviderSettings

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_MESSAGE = "You are a helpful assistant."


@dataclass
class TokenUsage:
    """Token usage accumulated across calls.

    Attributes:
        input_tokens: Number of prompt tokens.
        output_tokens: Number of completion tokens.
    """

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        """Total tokens consumed."""
        return self.input_tokens + self.output_tokens


class LLMClient:
    """Sends one system + user message pair per call to the configured backend."""

    def __init__(self, settings: Optional[ProviderSettings] = None) -> None:
        """Initialize the LLM client.

        Args:
            settings: Provider selected at startup. An unconfigured
                default is used if not provided.
        """
        self.settings = settings or ProviderSettings()
        self._client: Optional[openai.OpenAI] = None
        self._total_usage = TokenUsage()

    @property
    def configured(self) -> bool:
        return self.settings.configured

    @property
    def client(self) -> openai.OpenAI:
        """Lazily initialize the OpenAI SDK client.

        Returns:
            An authenticated client bound to the selected backend.

        Raises:
            ValueError: If no backend is configured.
        """
        if self._client is None:
            if not self.settings.configured:
                raise ValueError(
                    "No LLM backend configured. Set OPENAI_API_KEY or "
                    "OPENROUTER_API_KEY before making API calls."
                )
            kwargs: dict[str, Any] = {"api_key": self.settings.api_key}
            if self.settings.base_url:
                kwargs["base_url"] = self.settings.base_url
            if self.settings.default_headers:
                kwargs["default_headers"] = dict(self.settings.default_headers)
            if self.settings.timeout is not None:
                kwargs["timeout"] = self.settings.timeout
            self._client = openai.OpenAI(**kwargs)
        return self._client

    @property
    def total_usage(self) -> TokenUsage:
        return self._total_usage

    def complete(
        self,
        prompt: str,
        model: str,
        system: str = DEFAULT_SYSTEM_MESSAGE,
    ) -> CompletionResult:
        """Request a completion for a single prompt.

        Args:
            prompt: The user message.
            model: Model identifier understood by the backend.
            system: The system message.

        Returns:
            A successful CompletionResult carrying the trimmed text of
            the first choice, or a failed one describing what went wrong.
        """
        if not self.settings.configured:
            logger.error("LLM client is not configured. Cannot make API calls.")
            return CompletionResult.failure(
                FailureKind.NOT_CONFIGURED, "no LLM backend configured"
            )

        kwargs: dict[str, Any] = {
            "model": model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        if self.settings.temperature is not None:
            kwargs["temperature"] = self.settings.temperature

        try:
            response = self.client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            logger.error(
                "%s API returned status %d: %s",
                self.settings.backend.value,
                e.status_code,
                e.message,
            )
            return CompletionResult.failure(
                FailureKind.API_ERROR, f"status {e.status_code}: {e.message}"
            )
        except openai.OpenAIError as e:
            logger.error("Error calling %s API: %s", self.settings.backend.value, e)
            return CompletionResult.failure(FailureKind.API_ERROR, str(e))

        choices = getattr(response, "choices", None) or []
        message = choices[0].message if choices else None
        content = getattr(message, "content", None)
        if content is None:
            logger.error(
                "Invalid response structure from %s API for model %s",
                self.settings.backend.value,
                model,
            )
            return CompletionResult.failure(
                FailureKind.EMPTY_RESPONSE, "response contained no message content"
            )

        input_tokens, output_tokens = self._record_usage(response)
        logger.debug(
            "Completion from %s (input: %d, output: %d tokens)",
            model,
            input_tokens,
            output_tokens,
        )
        return CompletionResult.success(
            content.strip(), input_tokens=input_tokens, output_tokens=output_tokens
        )

    def _record_usage(self, response: Any) -> tuple[int, int]:
        usage = getattr(response, "usage", None)
        if usage is None:
            return 0, 0
        input_tokens = usage.prompt_tokens or 0
        output_tokens = usage.completion_tokens or 0
        self._total_usage.input_tokens += input_tokens
        self._total_usage.output_tokens += output_tokens
        return input_tokens, output_tokens

"""LLM client for the model-backed implementer."""

import logging
import os

from anthropic import Anthropic, APIConnectionError, APIStatusError, RateLimitError
from anthropic.types import MessageParam
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from skillwright.exceptions import ConfigurationError, ImplementationError

logger = logging.getLogger(__name__)


class BuilderLLM:
    """LLM client for writing and revising skill implementations.

    Wraps the Anthropic API with builder-specific configuration.
    """

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
    ) -> None:
        """Initialize LLM client.

        Args:
            model: Claude model to use
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)

        Raises:
            ConfigurationError: If no API key is available
        """
        api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ConfigurationError(
                "The llm implementer needs ANTHROPIC_API_KEY (or use --implementer template)"
            )
        self.model = model
        self.client = Anthropic(api_key=api_key)

    @retry(
        retry=retry_if_exception_type((APIConnectionError, RateLimitError)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    def _create(self, **kwargs):  # type: ignore[no-untyped-def]
        return self.client.messages.create(**kwargs)

    def generate(
        self,
        system: str,
        messages: list[MessageParam],
        max_tokens: int = 8192,
        temperature: float = 0.2,
    ) -> str:
        """Generate completion from messages.

        Args:
            system: System prompt
            messages: Conversation messages
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Generated text response

        Raises:
            ImplementationError: If the API call fails
        """
        logger.debug("Requesting completion from %s", self.model)
        try:
            response = self._create(
                model=self.model,
                system=system,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except (APIConnectionError, APIStatusError) as e:
            raise ImplementationError(f"LLM request failed: {e}") from e

        # Extract text from response
        text_blocks = [block.text for block in response.content if hasattr(block, "text")]
        return "\n".join(text_blocks)

"""
Base LLM Provider

Interface the constraint name extractor talks to.
"""

import logging
from abc import ABC, abstractmethod

from fkdoctor.llm.models import LLMRequest, LLMResponse

logger = logging.getLogger(__name__)


class BaseLLMProvider(ABC):
    """
    Chat completion provider with per-instance defaults.

    Attributes:
        provider_name: Name used in log records
        temperature: Used when a request leaves temperature unset
        max_tokens: Used when a request leaves max_tokens unset
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        provider_name: str,
        temperature: float = 0.0,
        max_tokens: int = 256,
        timeout: int = 60,
    ):
        self.provider_name = provider_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout

    @abstractmethod
    async def generate(self, request: LLMRequest) -> LLMResponse:
        """
        Return the model's reply to ``request``.

        Raises:
            Exception: Provider-specific API and timeout errors
        """
        pass  # pragma: no cover - abstract method

    def _with_defaults(self, request: LLMRequest) -> LLMRequest:
        return request.model_copy(
            update={
                "temperature": self.temperature if request.temperature is None else request.temperature,
                "max_tokens": self.max_tokens if request.max_tokens is None else request.max_tokens,
            }
        )

    def _log_exchange(self, request: LLMRequest, response: LLMResponse) -> None:
        logger.debug(
            f"{self.provider_name} completion",
            extra={
                "provider": self.provider_name,
                "model": response.model,
                "temperature": request.temperature,
                "max_tokens": request.max_tokens,
                "total_tokens": response.usage.total_tokens if response.usage else None,
                "finish_reason": response.finish_reason,
            },
        )

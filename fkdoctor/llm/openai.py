"""
OpenAI LLM Provider

Implementation of BaseLLMProvider for OpenAI's chat models.
"""

import logging

import openai
from openai import AsyncOpenAI

from fkdoctor.llm.base import BaseLLMProvider
from fkdoctor.llm.models import LLMRequest, LLMResponse, LLMUsage

logger = logging.getLogger(__name__)


class OpenAIProvider(BaseLLMProvider):
    """
    OpenAI LLM provider implementation.

    Uses the official openai Python SDK with async support.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4",
        temperature: float = 0.0,
        max_tokens: int = 256,
        timeout: int = 60,
    ):
        super().__init__(
            provider_name="openai",
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=timeout,
        )

        self.model = model
        self.client = AsyncOpenAI(
            api_key=api_key,
            timeout=float(timeout),
        )

    async def generate(self, request: LLMRequest) -> LLMResponse:
        """
        Run one chat completion.

        Raises:
            openai.APIError: On API errors, including timeouts
        """
        request = self._with_defaults(request)
        try:
            response = await self.client.chat.completions.create(
                model=request.model or self.model,
                messages=[message.model_dump() for message in request.messages],
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            )
        except openai.APIError as e:
            logger.debug(f"OpenAI API error: {e}")
            raise

        choice = response.choices[0]
        usage = None
        if response.usage is not None:
            usage = LLMUsage(
                prompt_tokens=response.usage.prompt_tokens,
                completion_tokens=response.usage.completion_tokens,
                total_tokens=response.usage.total_tokens,
            )
        llm_response = LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            usage=usage,
            finish_reason=choice.finish_reason,
        )
        self._log_exchange(request, llm_response)
        return llm_response

"""
LLM Provider Module

Provider abstraction used for constraint name extraction.

Usage:
    from fkdoctor.llm import OpenAIProvider, LLMRequest, LLMMessage

    provider = OpenAIProvider(api_key="sk-...")
    response = await provider.generate(
        LLMRequest(messages=[LLMMessage(role="user", content="Hello!")])
    )
    print(response.content)
"""

from fkdoctor.llm.base import BaseLLMProvider
from fkdoctor.llm.models import LLMMessage, LLMRequest, LLMResponse, LLMUsage
from fkdoctor.llm.openai import OpenAIProvider

__all__ = [
    "BaseLLMProvider",
    "LLMMessage",
    "LLMRequest",
    "LLMResponse",
    "LLMUsage",
    "OpenAIProvider",
]

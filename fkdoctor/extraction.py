"""Constraint name extraction from pasted migration errors."""

from __future__ import annotations

import logging

from fkdoctor.llm.base import BaseLLMProvider
from fkdoctor.llm.models import LLMMessage, LLMRequest

logger = logging.getLogger(__name__)

EXTRACTION_INSTRUCTION = (
    "Extract the foreign key constraint name from the following error message. "
    "Take into account that this message was probably pasted from the terminal so it "
    "might have unwanted spaces and newlines that could potentially separate the key "
    "constraint name. You'll be able to correctly identify this because the key "
    "constraint name will always start with FK_ it will never contain spaces and be "
    "delimited by single quotes. Only return the constraint name without quotes, "
    "nothing else:\n\n{error_message}"
)


class ConstraintNameExtractor:
    """Asks the LLM for the FK_ constraint name mentioned in an error message.

    The returned name is only trimmed. It is untrusted input downstream and is
    escaped by the schema inspector before it reaches any SQL text.
    """

    def __init__(self, provider: BaseLLMProvider) -> None:
        self._provider = provider

    async def extract(self, error_message: str) -> str:
        request = LLMRequest(
            messages=[
                LLMMessage(
                    role="user",
                    content=EXTRACTION_INSTRUCTION.format(error_message=error_message),
                )
            ],
        )
        response = await self._provider.generate(request)
        constraint_name = response.content.strip()
        logger.debug(f"Extracted constraint name: {constraint_name}")
        return constraint_name

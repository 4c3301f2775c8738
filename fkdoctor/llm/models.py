"""
LLM Request and Response Models

Only single-turn user prompts are sent; the reply text is all the caller reads.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class LLMMessage(BaseModel):
    """A user turn sent to the model."""

    role: Literal["user"] = "user"
    content: str = Field(..., min_length=1)


class LLMRequest(BaseModel):
    """Chat completion request; unset options fall back to the provider defaults."""

    messages: List[LLMMessage] = Field(..., min_length=1)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, gt=0)
    model: Optional[str] = None


class LLMUsage(BaseModel):
    """Token accounting reported by the provider."""

    prompt_tokens: int = Field(..., ge=0)
    completion_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(..., ge=0)


class LLMResponse(BaseModel):
    """Reply text plus the details worth logging."""

    content: str
    model: str
    usage: Optional[LLMUsage] = None
    finish_reason: Optional[str] = None

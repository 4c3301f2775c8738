"""Prompt templates shipped with fkdoctor."""

from fkdoctor.prompts.loader import PromptLoader

__all__ = ["PromptLoader"]

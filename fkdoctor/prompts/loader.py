"""Prompt loading and rendering utilities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

PROMPTS_DIR = Path(__file__).resolve().parent


@dataclass(frozen=True)
class PromptEntry:
    """Loaded prompt content and metadata."""

    content: str
    metadata: dict[str, Any]


def _split_front_matter(source: str) -> tuple[str, str | None]:
    if source.startswith("---"):
        parts = source.split("---", 2)
        if len(parts) == 3:
            return parts[2].lstrip(), parts[1]
    return source, None


class FrontMatterLoader(FileSystemLoader):
    """Jinja2 loader that strips YAML front matter."""

    def get_source(self, environment: Environment, template: str):  # type: ignore[override]
        source, filename, uptodate = super().get_source(environment, template)
        source, _ = _split_front_matter(source)
        return source, filename, uptodate


class PromptLoader:
    """Load and render prompt templates shipped with the package."""

    def __init__(self, prompts_dir: str | Path | None = None) -> None:
        self.prompts_dir = Path(prompts_dir) if prompts_dir is not None else PROMPTS_DIR
        self.cache: dict[str, PromptEntry] = {}
        self._env = Environment(
            loader=FrontMatterLoader(str(self.prompts_dir)),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def load(self, prompt_path: str) -> str:
        """
        Load prompt from file without rendering.

        Args:
            prompt_path: Relative path (e.g., "diagnostics/fk_remediation.md")

        Returns:
            Prompt content as string
        """
        if prompt_path in self.cache:
            return self.cache[prompt_path].content

        file_path = self.prompts_dir / prompt_path
        if not file_path.exists():
            raise FileNotFoundError(f"Prompt not found: {file_path}")

        content, front_matter = _split_front_matter(file_path.read_text(encoding="utf-8"))
        metadata = (yaml.safe_load(front_matter) or {}) if front_matter else {}

        self.cache[prompt_path] = PromptEntry(content=content, metadata=metadata)
        return content

    def render(self, prompt_path: str, **variables: Any) -> str:
        """
        Load prompt and substitute variables using Jinja2.

        Every variable referenced by the template must be supplied.
        """
        try:
            template = self._env.get_template(prompt_path)
        except TemplateNotFound as exc:
            raise FileNotFoundError(f"Prompt not found: {prompt_path}") from exc
        return template.render(**variables)

    def get_metadata(self, prompt_path: str) -> dict[str, Any]:
        """Return metadata for a prompt (loads if needed)."""
        if prompt_path not in self.cache:
            self.load(prompt_path)
        return self.cache[prompt_path].metadata

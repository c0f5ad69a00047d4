"""
LLM rewrite action.

Asks a model behind an OpenAI-compatible API (OpenAI, Ollama, vLLM...) to
rewrite the current source, guided by the diagnostics earlier phases
reported.
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Any, cast

from openai import APIError, OpenAI

from lintflow.domain.exceptions import ActionFailed
from lintflow.domain.models import ActionResult, Diagnostic, PhaseContext, Severity

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434/v1"

SYSTEM_PROMPT = (
    "You are a senior Python engineer fixing a single source file. "
    "Return the complete corrected file in one markdown block:\n"
    "```python\n# code\n```"
)


@dataclass
class LLMRewriteConfig:
    """Configuration for LLMRewriteAction.

    This typed config ensures unknown fields are rejected at construction time.
    """

    model: str = "qwen2.5-coder:7b"
    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None  # Falls back to OPENAI_API_KEY, then "ollama"
    timeout: float = 120.0
    temperature: float = 0.2
    instructions: str = "Fix the reported problems without changing behaviour."
    max_diagnostics: int = 50


class LLMRewriteAction:
    """Rewrites the source through a chat completion."""

    def __init__(
        self,
        config: LLMRewriteConfig | None = None,
        client: Any = None,
        **kwargs: Any,
    ):
        """
        Args:
            config: Typed configuration object (preferred)
            client: Pre-built OpenAI client (tests inject a fake)
            **kwargs: LLMRewriteConfig fields, used when config is omitted
        """
        if config is None:
            config = LLMRewriteConfig(**kwargs)
        self._config = config

        if client is None:
            client = OpenAI(
                base_url=config.base_url,
                api_key=config.api_key or os.environ.get("OPENAI_API_KEY", "ollama"),
                timeout=config.timeout,
            )
        self._client = client

    @property
    def config(self) -> LLMRewriteConfig:
        return self._config

    def __call__(self, context: PhaseContext) -> ActionResult:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self.build_prompt(context)},
        ]
        logger.debug(f"Requesting rewrite of {context.file_path} from {self._config.model}")

        try:
            response = self._client.chat.completions.create(
                model=self._config.model,
                messages=cast(Any, messages),
                temperature=self._config.temperature,
            )
        except APIError as e:
            raise ActionFailed(f"LLM request to {self._config.model} failed: {e}") from e

        content = response.choices[0].message.content or ""
        code = self._extract_code(content)
        if not code:
            message = f"Model {self._config.model} returned no code block"
            return ActionResult(
                diagnostics=(
                    Diagnostic(
                        severity=Severity.ERROR, message=message, rule="llm-rewrite"
                    ),
                ),
                error=message,
            )

        if not code.endswith("\n"):
            code += "\n"
        return ActionResult(source=code)

    def build_prompt(self, context: PhaseContext) -> str:
        """Build the user prompt from instructions, diagnostics and source."""
        instructions = context.parameters.get("instructions", self._config.instructions)
        parts = [instructions, f"\nFile: {context.file_path}"]

        reported = context.diagnostics[: self._config.max_diagnostics]
        if reported:
            lines = "\n".join(self._format_diagnostic(d) for d in reported)
            parts.append(f"\nReported problems:\n{lines}")

        parts.append(f"\nSource:\n```python\n{context.source}\n```")
        return "\n".join(parts)

    @staticmethod
    def _format_diagnostic(diagnostic: Diagnostic) -> str:
        location = ""
        if diagnostic.line is not None:
            location = f"line {diagnostic.line}: "
        rule = f" [{diagnostic.rule}]" if diagnostic.rule else ""
        return f"- {diagnostic.severity.value}{rule} {location}{diagnostic.message}"

    def _extract_code(self, content: str) -> str:
        """Extract Python code from response."""
        if not content or content.isspace():
            return ""

        match = re.search(r"```python\n(.*?)\n```", content, re.DOTALL)
        if match:
            return match.group(1)

        match = re.search(r"```\n(.*?)\n```", content, re.DOTALL)
        if match:
            return match.group(1)

        # No code block - an empty answer fails the phase
        return ""

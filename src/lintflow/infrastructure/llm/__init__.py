"""
LLM-backed and scripted phase actions.
"""

from lintflow.infrastructure.llm.mock import ScriptedAction
from lintflow.infrastructure.llm.openai_rewriter import (
    LLMRewriteAction,
    LLMRewriteConfig,
)

__all__ = [
    "LLMRewriteAction",
    "LLMRewriteConfig",
    "ScriptedAction",
]

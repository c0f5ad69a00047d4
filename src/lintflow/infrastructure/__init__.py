"""
Infrastructure adapters: action registry, LLM actions and persistence.
"""

from lintflow.infrastructure.llm import LLMRewriteAction, LLMRewriteConfig, ScriptedAction
from lintflow.infrastructure.persistence import (
    FilesystemWorkflowEventStore,
    InMemoryWorkflowEventStore,
    load_report_data,
    save_report,
)
from lintflow.infrastructure.registry import ActionRegistry

__all__ = [
    "ActionRegistry",
    "FilesystemWorkflowEventStore",
    "InMemoryWorkflowEventStore",
    "LLMRewriteAction",
    "LLMRewriteConfig",
    "ScriptedAction",
    "load_report_data",
    "save_report",
]

"""
Standard 14-phase lint-and-fix layout.

Describes the phase graph of the TypeScript lint-and-fix pipeline the
engine was built for. The layout carries no actions; callers bind one
action per phase id with build_standard_pipeline().
"""

from collections.abc import Mapping
from dataclasses import dataclass

from lintflow.domain.interfaces import PhaseAction
from lintflow.domain.models import Phase


@dataclass(frozen=True)
class PhaseTemplate:
    """Phase definition without an action."""

    id: str
    name: str
    description: str
    priority: int
    depends_on: tuple[str, ...] = ()
    blocking: bool = False
    validation: bool = False

    def bind(self, action: PhaseAction) -> Phase:
        return Phase(
            id=self.id,
            action=action,
            name=self.name,
            description=self.description,
            priority=self.priority,
            depends_on=self.depends_on,
            blocking=self.blocking,
            validation=self.validation,
        )


_LAYOUT: tuple[tuple[str, str, str, bool, bool], ...] = (
    # (id, name, description, blocking, validation)
    ("tsc", "TypeScript compiler", "TypeScript compilation critical errors", True, False),
    ("eslint-fix", "ESLint auto-fix", "ESLint auto-fix (layout, suggestions, problems)", False, False),
    ("oxc-rules-analysis", "OXC rules", "AST-based rule analysis", False, False),
    ("typescript-compilation-fixer", "Compilation fixer", "AI fix for compilation and critical runtime errors", True, False),
    ("method-implementation-completer", "Method completer", "AI completion of method implementations and type safety", True, False),
    ("google-style-modernizer", "Style modernizer", "AI rewrite to Google TypeScript style and modern patterns", False, False),
    ("complexity-analysis", "Complexity analysis", "Complexity analysis and optimization", False, False),
    ("import-style-organizer", "Import organizer", "AI import organization and style consistency", False, False),
    ("security-analysis", "Security analysis", "Security vulnerability analysis", False, False),
    ("tsdoc-analysis", "TSDoc analysis", "Documentation coverage analysis", False, False),
    ("edge-case-handler", "Edge case handler", "AI edge case handling and final polish", False, False),
    ("ai-tsdoc-enhancement", "TSDoc enhancement", "AI documentation enhancement", False, False),
    ("production-perfectionist", "Production perfectionist", "AI zero tolerance review", False, False),
    ("final-validation", "Final validation", "Compiler and linter zero tolerance check", False, True),
)


def standard_phase_layout() -> tuple[PhaseTemplate, ...]:
    """
    Return the 14 standard phases as a linear chain.

    Priorities run 1..14 in chain order; each phase depends on the one
    before it.
    """
    templates: list[PhaseTemplate] = []
    previous: str | None = None
    for priority, (phase_id, name, description, blocking, validation) in enumerate(
        _LAYOUT, start=1
    ):
        templates.append(
            PhaseTemplate(
                id=phase_id,
                name=name,
                description=description,
                priority=priority,
                depends_on=(previous,) if previous else (),
                blocking=blocking,
                validation=validation,
            )
        )
        previous = phase_id
    return tuple(templates)


def build_standard_pipeline(actions: Mapping[str, PhaseAction]) -> list[Phase]:
    """
    Bind actions to the standard layout.

    Args:
        actions: Action per phase id; every standard phase needs one

    Returns:
        Phases in definition order

    Raises:
        KeyError: If a standard phase has no action
    """
    phases: list[Phase] = []
    for template in standard_phase_layout():
        if template.id not in actions:
            raise KeyError(f"No action provided for standard phase '{template.id}'")
        phases.append(template.bind(actions[template.id]))
    return phases

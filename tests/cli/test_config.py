"""Tests for pipeline configuration loading."""

import json

import pytest

from lintflow.actions import PythonSyntaxAction
from lintflow.application import RetryingAction
from lintflow.cli.config import (
    build_engine,
    build_phases,
    load_pipeline_config,
    validate_pipeline_data,
)
from lintflow.cli.exceptions import ConfigurationError
from lintflow.domain import ConditionKind, PhaseCondition
from lintflow.pipelines import available_pipelines, load_default_pipeline


class TestLoadPipelineConfig:
    """Tests for load_pipeline_config."""

    def test_missing_file(self, tmp_path) -> None:
        """A missing file raises ConfigurationError naming the path."""
        path = tmp_path / "absent.json"
        with pytest.raises(ConfigurationError, match="not found"):
            load_pipeline_config(path)

    def test_invalid_json(self, tmp_path) -> None:
        """Broken JSON raises ConfigurationError."""
        path = tmp_path / "p.json"
        path.write_text("[1, 2")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_pipeline_config(path)

    def test_not_an_object(self, tmp_path) -> None:
        """The top level must be an object."""
        path = tmp_path / "p.json"
        path.write_text("[]")
        with pytest.raises(ConfigurationError, match="Expected an object"):
            load_pipeline_config(path)

    def test_schema_error_has_location(self, tmp_path) -> None:
        """Schema violations point at the offending field."""
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"phases": [{"id": "a", "action": "syntax", "blocking": "yes"}]}))
        with pytest.raises(ConfigurationError, match="phases/0/blocking"):
            load_pipeline_config(path)

    def test_valid_file(self, tmp_path) -> None:
        """A valid file is returned as a dict."""
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"name": "x", "phases": []}))
        assert load_pipeline_config(path) == {"name": "x", "phases": []}


class TestBuildPhases:
    """Tests for build_phases."""

    def test_fields_mapped(self, registry) -> None:
        """Phase fields are copied from the definition."""
        phases = build_phases(
            {
                "phases": [
                    {
                        "id": "final",
                        "name": "Final",
                        "description": "check",
                        "priority": 9,
                        "depends_on": [],
                        "blocking": True,
                        "validation": True,
                        "action": "syntax",
                        "options": {"restart_on_failure": True},
                        "parameters": {"mode": "strict"},
                    }
                ]
            },
            registry,
        )

        phase = phases[0]
        assert phase.id == "final"
        assert phase.display_name == "Final"
        assert phase.priority == 9
        assert phase.blocking and phase.validation
        assert isinstance(phase.action, PythonSyntaxAction)
        assert phase.action.restart_on_failure is True
        assert phase.parameters["mode"] == "strict"

    def test_disabled_phases_dropped(self, registry) -> None:
        """enabled: false removes a phase."""
        phases = build_phases(
            {
                "phases": [
                    {"id": "a", "action": "syntax"},
                    {"id": "b", "action": "syntax", "enabled": False},
                ]
            },
            registry,
        )
        assert [p.id for p in phases] == ["a"]

    def test_retry_wraps_action(self, registry) -> None:
        """A retry block wraps the action in RetryingAction."""
        phases = build_phases(
            {"phases": [{"id": "a", "action": "syntax", "retry": {"max_attempts": 5}}]},
            registry,
        )

        assert isinstance(phases[0].action, RetryingAction)
        assert phases[0].action.policy.max_attempts == 5

    def test_condition_mapped(self, registry) -> None:
        """A condition block becomes a PhaseCondition; absent means always."""
        phases = build_phases(
            {
                "phases": [
                    {"id": "a", "action": "syntax"},
                    {
                        "id": "b",
                        "action": "syntax",
                        "condition": {"when": "on_failure", "phase": "a"},
                    },
                ]
            },
            registry,
        )

        assert phases[0].condition == PhaseCondition()
        assert phases[1].condition == PhaseCondition(ConditionKind.ON_FAILURE, "a")

    @pytest.mark.parametrize(
        "condition",
        [{"when": "on_failure"}, {"when": "always", "phase": "a"}, {"when": "sometimes"}],
    )
    def test_malformed_condition_rejected(self, condition) -> None:
        """The schema requires a phase for gated conditions and forbids one for always."""
        data = {
            "phases": [
                {"id": "a", "action": "syntax"},
                {"id": "b", "action": "syntax", "condition": condition},
            ]
        }
        with pytest.raises(ConfigurationError):
            validate_pipeline_data(data, "<test>")

    def test_unknown_action(self, registry) -> None:
        """Unknown action names raise ConfigurationError with the phase id."""
        with pytest.raises(ConfigurationError, match="Phase 'lint'"):
            build_phases({"phases": [{"id": "lint", "action": "eslint"}]}, registry)

    def test_bad_options(self, registry) -> None:
        """Options the factory rejects raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="invalid options"):
            build_phases(
                {"phases": [{"id": "a", "action": "command", "options": {"command": []}}]},
                registry,
            )


class TestBuildEngine:
    """Tests for build_engine."""

    def test_uses_pipeline_budget(self, registry) -> None:
        """max_restarts comes from the pipeline by default."""
        engine = build_engine({"max_restarts": 7, "phases": []}, registry=registry)
        assert engine.max_restarts == 7

    def test_override_budget(self, registry) -> None:
        """An explicit max_restarts wins."""
        engine = build_engine({"max_restarts": 7, "phases": []}, max_restarts=0, registry=registry)
        assert engine.max_restarts == 0

    def test_default_budget(self, registry) -> None:
        """Without either, the default of 3 applies."""
        assert build_engine({"phases": []}, registry=registry).max_restarts == 3


class TestBundledPipeline:
    """Tests for the bundled default pipeline."""

    def test_listed(self) -> None:
        """The Python pipeline ships with the package."""
        assert "python" in available_pipelines()

    def test_default_pipeline_is_valid(self, registry) -> None:
        """The default pipeline passes the schema and resolves."""
        config = validate_pipeline_data(load_default_pipeline(), "<bundled>")

        engine = build_engine(config, registry=registry)

        ids = [p.id for p in engine.order]
        assert ids[0] == "syntax"
        assert ids[-1] == "final-validation"
        assert "ai-rewrite" not in ids
        assert engine.order[-1].validation

    def test_rewrite_gated_on_lint_failure(self, registry) -> None:
        """The optional LLM rewrite only runs when lint-fix leaves findings."""
        config = load_default_pipeline()
        rewrite = next(p for p in config["phases"] if p["id"] == "ai-rewrite")

        assert rewrite["condition"] == {"when": "on_failure", "phase": "lint-fix"}

"""Tests for validation framework core functionality."""

import logging

import pytest

from attrcheck.validation.framework import (
    CheckResult,
    Rule,
    RuleConfigurationError,
    RuleDef,
    RuleEvaluator,
    RuleRegistry,
    UnknownRule,
)
from attrcheck.validation.rules import create_default_registry


class EvenRule(Rule):
    """Value must be an even integer."""

    @property
    def name(self) -> str:
        return "even"

    def check(self, value, expectation):
        return value is not None and value.strip().isdigit() and int(value) % 2 == 0


class ExplodingRule(Rule):
    """Always misconfigured."""

    requires_expectation = True

    def __init__(self):
        self.calls = 0

    @property
    def name(self) -> str:
        return "boom"

    def check(self, value, expectation):
        self.calls += 1
        raise RuleConfigurationError(f"cannot use {expectation}")


@pytest.fixture
def evaluator():
    """Evaluator over the built-in rules."""
    return RuleEvaluator(create_default_registry())


class TestRuleDef:
    """Test RuleDef value semantics."""

    def test_equality_and_hash(self):
        assert RuleDef("min", "5") == RuleDef("min", "5")
        assert RuleDef("min", "5") != RuleDef("min", "6")
        assert len({RuleDef("min", "5"), RuleDef("min", "5")}) == 1

    def test_string_representation(self):
        assert str(RuleDef("required")) == "required"
        assert str(RuleDef("min", "5")) == "min: 5"

    def test_has_expectation(self):
        assert RuleDef("min", "5").has_expectation is True
        assert RuleDef("min", "  ").has_expectation is False
        assert RuleDef("required").has_expectation is False


class TestRuleRegistry:
    """Test RuleRegistry lookups."""

    def test_resolve(self):
        registry = RuleRegistry([EvenRule()])
        assert isinstance(registry.resolve("even"), EvenRule)
        assert registry.resolve("odd") is None
        assert "even" in registry
        assert registry.names == ["even"]

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate rule name"):
            RuleRegistry([EvenRule(), EvenRule()])

    def test_rules_cannot_be_replaced(self):
        registry = RuleRegistry([EvenRule()])
        with pytest.raises(TypeError):
            registry._rules["even"] = ExplodingRule()


class TestCheckResult:
    """Test CheckResult invariants and output."""

    def test_success(self):
        result = CheckResult.success("42")
        assert result.valid is True
        assert result.failed_rules == ()
        assert result.exception is None
        assert result.summary() == ""

    def test_failure(self):
        result = CheckResult.failure([RuleDef("min", "5"), RuleDef("maxLength", "2")])
        assert result.valid is False
        assert result.failed_rule_names == ["min", "maxLength"]
        assert result.summary() == "min: 5, maxLength: 2"
        assert result.is_misconfigured is False

    def test_error(self):
        error = RuleConfigurationError("bad pattern")
        result = CheckResult.error(RuleDef("regex", "[0-9"), error)
        assert result.valid is False
        assert result.failed_rules == (RuleDef("regex", "[0-9"),)
        assert result.exception is error
        assert result.is_misconfigured is True

    def test_inconsistent_results_rejected(self):
        with pytest.raises(ValueError):
            CheckResult(valid=True, failed_rules=(RuleDef("required"),))
        with pytest.raises(ValueError):
            CheckResult(valid=False)
        with pytest.raises(ValueError):
            CheckResult(
                valid=False,
                failed_rules=(RuleDef("min", "1"), RuleDef("max", "2")),
                exception=RuleConfigurationError("x")
            )

    def test_to_dict(self):
        result = CheckResult.error(RuleDef("min", "abc"), RuleConfigurationError("not a number"), value="5")
        data = result.to_dict()
        assert data["valid"] is False
        assert data["value"] == "5"
        assert data["failedRules"] == [{"rule": "min", "expectation": "abc"}]
        assert data["exception"] == {"type": "RuleConfigurationError", "message": "not a number"}


class TestRuleEvaluator:
    """Test RuleEvaluator aggregation."""

    def test_empty_rules_always_valid(self, evaluator):
        assert evaluator.check("anything", []).valid is True
        assert evaluator.check(None, []).valid is True

    def test_no_short_circuit(self, evaluator):
        rules = [RuleDef("required"), RuleDef("type", "double"), RuleDef("maxLength", "2")]
        result = evaluator.check("abc", rules)
        assert result.valid is False
        assert result.failed_rules == (RuleDef("type", "double"), RuleDef("maxLength", "2"))

    def test_configuration_error_is_captured(self, evaluator, caplog):
        rules = [RuleDef("required"), RuleDef("regex", "[0-9"), RuleDef("maxLength", "1")]
        with caplog.at_level(logging.WARNING):
            result = evaluator.check("abc", rules)
        assert result.valid is False
        assert result.failed_rules == (RuleDef("regex", "[0-9"),)
        assert isinstance(result.exception, RuleConfigurationError)
        assert "misconfigured" in caplog.text

    def test_configuration_error_stops_evaluation(self):
        boom = ExplodingRule()
        evaluator = RuleEvaluator(RuleRegistry([EvenRule(), boom]))
        result = evaluator.check("3", [RuleDef("even"), RuleDef("boom", "x"), RuleDef("boom", "y")])
        assert result.failed_rules == (RuleDef("boom", "x"),)
        assert boom.calls == 1

    def test_unregistered_rule_raises(self, evaluator):
        with pytest.raises(UnknownRule):
            evaluator.check("1", [RuleDef("even")])

    def test_custom_registry(self):
        evaluator = RuleEvaluator(RuleRegistry([EvenRule()]))
        assert evaluator.check("4", [RuleDef("even")]).valid is True
        assert evaluator.check("5", [RuleDef("even")]).failed_rules == (RuleDef("even"),)

    def test_result_keeps_value(self, evaluator):
        assert evaluator.check("x", [RuleDef("required")]).value == "x"

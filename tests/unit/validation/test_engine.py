"""Tests for the check and parse_rules entry points."""

import pytest

from attrcheck.validation import (
    RuleConfigurationError,
    RuleDef,
    RuleRegistry,
    UnknownRule,
    check,
    parse_rules,
)
from attrcheck.validation.rules import MinRule, RequiredRule


class TestCheck:
    """Test single-value validation end to end."""

    @pytest.mark.parametrize("value", [None, "", "anything", "   "])
    def test_empty_definition_always_valid(self, value):
        for definition in ("", None, []):
            result = check(value, definition)
            assert result.valid is True
            assert result.failed_rules == ()

    def test_number_within_range(self):
        assert check("5", "min:1; max:10").valid is True

    def test_min_max_boundaries_inclusive(self):
        assert check("10", "min:10").valid is True
        assert check("10", "max:10").valid is True

    def test_below_min(self):
        result = check("3", "min:5")
        assert result.valid is False
        assert result.failed_rules == (RuleDef("min", "5"),)

    def test_padded_number(self):
        assert check("   42   ", "min:40; max:50").valid is True

    def test_non_numeric_value_fails_min(self):
        result = check("notANumber", "min:5")
        assert result.failed_rules == (RuleDef("min", "5"),)
        assert result.exception is None

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_required_fails_on_blank(self, value):
        result = check(value, "required")
        assert result.valid is False
        assert result.failed_rules == (RuleDef("required"),)

    def test_required_passes_on_non_blank(self):
        assert check("something", "required").valid is True

    def test_regex(self):
        assert check("12345", r"regex:\d+").valid is True
        result = check("abc", r"regex:\d+")
        assert result.valid is False
        assert result.failed_rules == (RuleDef("regex", r"\d+"),)

    @pytest.mark.parametrize("value", ["true", "FALSE", "TrUe"])
    def test_boolean_type(self, value):
        assert check(value, "type:boolean").valid is True

    def test_boolean_type_rejects_yes(self):
        assert check("yes", "type:boolean").failed_rules == (RuleDef("type", "boolean"),)

    def test_only_type_fails_when_length_matches(self):
        result = check("abc", "type:number; minLength:2; maxLength:5")
        assert result.failed_rules == (RuleDef("type", "number"),)

    def test_all_failures_reported(self):
        result = check("abc", "required; type:double; maxLength:2")
        assert result.valid is False
        assert result.failed_rules == (RuleDef("type", "double"), RuleDef("maxLength", "2"))
        assert "required" not in result.failed_rule_names

    def test_blank_value_and_max(self):
        assert check("   ", "max:-1").failed_rules == (RuleDef("max", "-1"),)
        assert check("   ", "max:1").valid is True

    @pytest.mark.parametrize("definition,rule_def", [
        ("regex:[0-9", RuleDef("regex", "[0-9")),
        ("required; min:abc", RuleDef("min", "abc")),
        ("type:tristate", RuleDef("type", "tristate")),
        ("regex:a{99999999999}", RuleDef("regex", "a{99999999999}")),
    ])
    def test_misconfigured_rule_captured(self, definition, rule_def):
        result = check("10", definition)
        assert result.valid is False
        assert result.failed_rules == (rule_def,)
        assert isinstance(result.exception, RuleConfigurationError)

    def test_definition_errors_raise(self):
        with pytest.raises(UnknownRule, match="Unknown rule"):
            check("foo", "nonexistent:xyz")
        with pytest.raises(ValueError):
            check("10", "min:")

    def test_duplicate_rule_names_all_enforced(self):
        result = check("5", "min:10; min:1")
        assert result.failed_rules == (RuleDef("min", "10"),)

    def test_parsed_rules_round_trip(self):
        rule_defs = parse_rules("required; maxLength:3")
        assert check("ab", rule_defs).valid is True
        assert check("abcd", rule_defs).failed_rules == (RuleDef("maxLength", "3"),)

    def test_empty_parse_is_always_valid(self):
        rule_defs = parse_rules("")
        assert rule_defs == []
        assert check(None, rule_defs).valid is True
        assert check("x" * 100, rule_defs).valid is True

    def test_custom_registry(self):
        registry = RuleRegistry([RequiredRule(), MinRule()])
        assert check("7", "required; min:5", registry=registry).valid is True
        with pytest.raises(UnknownRule):
            check("7", "maxLength:5", registry=registry)


class TestParseRules:
    """Test parse_rules entry point."""

    def test_parse_is_idempotent(self):
        definition = "required; type:double; min:0; max:100"
        assert parse_rules(definition) == parse_rules(definition)

    def test_parse_returns_new_list(self):
        first = parse_rules("required")
        first.append(RuleDef("min", "1"))
        assert parse_rules("required") == [RuleDef("required")]

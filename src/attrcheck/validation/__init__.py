"""Validation engine for attribute values.

Parses rule definitions such as ``"required; type:double; min:0"`` and
evaluates them against string values with a pluggable rule registry.
"""

from .engine import check, parse_rules
from .framework import (
    AttrcheckError,
    CheckResult,
    MalformedRuleDefinition,
    MissingExpectation,
    Rule,
    RuleConfigurationError,
    RuleDef,
    RuleDefinitionError,
    RuleEvaluator,
    RuleRegistry,
    UnknownRule,
)
from .parser import RuleDefinitionParser
from .rules import (
    DEFAULT_REGISTRY,
    MaxLengthRule,
    MaxRule,
    MinLengthRule,
    MinRule,
    RegexRule,
    RequiredRule,
    TypeRule,
    ValueType,
    create_default_registry,
)

__all__ = [
    "check",
    "parse_rules",
    "AttrcheckError",
    "CheckResult",
    "MalformedRuleDefinition",
    "MissingExpectation",
    "Rule",
    "RuleConfigurationError",
    "RuleDef",
    "RuleDefinitionError",
    "RuleDefinitionParser",
    "RuleEvaluator",
    "RuleRegistry",
    "UnknownRule",
    "DEFAULT_REGISTRY",
    "MaxLengthRule",
    "MaxRule",
    "MinLengthRule",
    "MinRule",
    "RegexRule",
    "RequiredRule",
    "TypeRule",
    "ValueType",
    "create_default_registry",
]

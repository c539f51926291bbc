"""Entry points used by hosts to parse definitions and check values."""

from collections.abc import Sequence

from .framework import CheckResult, RuleDef, RuleEvaluator, RuleRegistry
from .parser import RuleDefinitionParser
from .rules import DEFAULT_REGISTRY


def parse_rules(definition: str | None, registry: RuleRegistry | None = None) -> list[RuleDef]:
    """Parse a rule-definition string against ``registry`` (built-in rules by default)."""
    if registry is None:
        registry = DEFAULT_REGISTRY
    return RuleDefinitionParser(registry).parse(definition)


def check(
    value: str | None,
    definition: str | Sequence[RuleDef] | None,
    registry: RuleRegistry | None = None,
) -> CheckResult:
    """Validate a single value.

    Args:
        value: Value to validate, may be None
        definition: Rule-definition string or already parsed rule definitions
        registry: Rules to resolve names against (built-in rules by default)

    Returns:
        CheckResult describing which rules failed, if any

    Raises:
        RuleDefinitionError: If ``definition`` is a string that does not parse
    """
    if registry is None:
        registry = DEFAULT_REGISTRY
    if definition is None or isinstance(definition, str):
        rule_defs = RuleDefinitionParser(registry).parse(definition)
    else:
        rule_defs = list(definition)
    return RuleEvaluator(registry).check(value, rule_defs)

"""Parser for the rule-definition language.

A definition is a semicolon-separated list of ``rule[:expectation]``
segments, for example ``"required; type:double; min:0; max:100"``.
"""

import logging

from .framework import (
    MalformedRuleDefinition,
    MissingExpectation,
    RuleDef,
    RuleRegistry,
    UnknownRule,
)

logger = logging.getLogger(__name__)

RULE_SEPARATOR = ";"
EXPECTATION_SEPARATOR = ":"


class RuleDefinitionParser:
    """Turns definition strings into rule definitions checked against a registry."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def parse(self, definition: str | None) -> list[RuleDef]:
        """Parse a rule-definition string.

        Blank segments are skipped and repeated ``(rule, expectation)``
        pairs keep their first position. The same rule name with different
        expectations is kept once per expectation.

        Args:
            definition: Rule-definition string, None or blank for no rules

        Returns:
            Rule definitions in the order they were written

        Raises:
            MalformedRuleDefinition: If a segment has no rule name
            UnknownRule: If a rule name is not registered
            MissingExpectation: If a rule needing an expectation has none
        """
        if definition is None or not definition.strip():
            return []

        rule_defs: list[RuleDef] = []
        seen: set[RuleDef] = set()

        for segment in definition.split(RULE_SEPARATOR):
            segment = segment.strip()
            if not segment:
                continue

            rule_def = self.parse_segment(segment)
            if rule_def in seen:
                logger.debug(f"Skipping duplicate rule '{rule_def}'")
                continue

            seen.add(rule_def)
            rule_defs.append(rule_def)

        logger.debug(f"Parsed {len(rule_defs)} rules from '{definition}'")
        return rule_defs

    def parse_segment(self, segment: str) -> RuleDef:
        """Parse a single ``rule[:expectation]`` segment."""
        rule_name, separator, expectation = segment.partition(EXPECTATION_SEPARATOR)
        rule_name = rule_name.strip()

        if not rule_name:
            raise MalformedRuleDefinition(
                f"Rule definition '{segment}' is invalid: missing rule name",
                definition=segment
            )

        rule = self.registry.resolve(rule_name)
        if rule is None:
            raise UnknownRule(f"Unknown rule '{rule_name}'", rule_name=rule_name, definition=segment)

        rule_def = RuleDef(rule_name, expectation.strip() if separator else None)

        if rule.requires_expectation and not rule_def.has_expectation:
            raise MissingExpectation(
                f"Rule '{rule_name}' requires an expectation, e.g. '{rule_name}{EXPECTATION_SEPARATOR}<value>'",
                rule_name=rule_name,
                definition=segment
            )

        return rule_def

"""Validation of whole attribute maps.

A host configures one rule definition per attribute name. AttributeSchema
parses all of them up front and checks a mapping of submitted values,
producing one CheckResult per configured attribute.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from attrcheck.validation import (
    DEFAULT_REGISTRY,
    CheckResult,
    RuleDef,
    RuleDefinitionError,
    RuleDefinitionParser,
    RuleEvaluator,
    RuleRegistry,
)

logger = logging.getLogger(__name__)

HINT_DEFAULTS = {
    "type": "text",
    "required": "",
    "min": "",
    "max": "",
    "minLength": "",
    "maxLength": "",
}


class AttributeDefinitionError(RuleDefinitionError):
    """A rule definition configured for an attribute does not parse."""

    def __init__(self, attribute: str, cause: RuleDefinitionError):
        self.attribute = attribute
        super().__init__(
            f"Invalid rules for attribute '{attribute}': {cause}",
            rule_name=cause.rule_name,
            definition=cause.definition
        )


@dataclass
class AttributeSetResult:
    """Check results for every configured attribute."""
    results: dict[str, CheckResult] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return all(result.valid for result in self.results.values())

    @property
    def invalid_attributes(self) -> list[str]:
        return [name for name, result in self.results.items() if not result.valid]

    def messages(self) -> dict[str, str]:
        """Failure summary per invalid attribute, e.g. ``{"score": "min: 0"}``."""
        return {name: self.results[name].summary() for name in self.invalid_attributes}

    def __getitem__(self, attribute: str) -> CheckResult:
        return self.results[attribute]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "attributes": {name: result.to_dict() for name, result in self.results.items()},
        }


class AttributeSchema:
    """Rule definitions keyed by attribute name."""

    def __init__(self, definitions: Mapping[str, str | None], registry: RuleRegistry | None = None):
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        self.definitions = dict(definitions)
        self.rules: dict[str, list[RuleDef]] = {}

        parser = RuleDefinitionParser(self.registry)
        for attribute, definition in self.definitions.items():
            try:
                self.rules[attribute] = parser.parse(definition)
            except RuleDefinitionError as e:
                raise AttributeDefinitionError(attribute, e) from e

        logger.debug(f"Loaded rules for {len(self.rules)} attributes")

    @property
    def attributes(self) -> list[str]:
        return list(self.rules)

    def check(self, values: Mapping[str, str | None]) -> AttributeSetResult:
        """Validate submitted values against every configured attribute.

        Attributes without a submitted value are checked as None; values for
        attributes that are not configured are ignored.
        """
        evaluator = RuleEvaluator(self.registry)
        result = AttributeSetResult()

        for attribute, rule_defs in self.rules.items():
            result.results[attribute] = evaluator.check(values.get(attribute), rule_defs)

        unknown = sorted(set(values) - set(self.rules))
        if unknown:
            logger.debug(f"Ignoring values for unconfigured attributes: {', '.join(unknown)}")

        invalid = result.invalid_attributes
        if invalid:
            logger.info(f"{len(invalid)} of {len(self.rules)} attributes are invalid: {', '.join(invalid)}")

        return result

    def field_hints(self) -> dict[str, dict[str, str]]:
        """Input constraints per attribute for rendering a form.

        When a rule appears more than once for an attribute, the last
        occurrence wins.
        """
        hints = {}
        for attribute, rule_defs in self.rules.items():
            attribute_hints = dict(HINT_DEFAULTS)
            for rule_def in rule_defs:
                rule = self.registry.resolve(rule_def.rule_name)
                attribute_hints.update(rule.describe(rule_def.expectation))
            hints[attribute] = attribute_hints
        return hints

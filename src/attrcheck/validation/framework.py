"""Core validation framework for attribute rules.

Defines the rule contract, the registry rules are resolved from, the
evaluator that applies parsed rule definitions to a value and the immutable
result it produces.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


class AttrcheckError(Exception):
    """Base class for all attrcheck errors."""


class RuleDefinitionError(AttrcheckError, ValueError):
    """Raised when a rule definition string cannot be turned into rules."""

    def __init__(self, message: str, rule_name: str | None = None, definition: str | None = None):
        self.rule_name = rule_name
        self.definition = definition
        super().__init__(message)


class MalformedRuleDefinition(RuleDefinitionError):
    """A definition segment has no rule name."""


class UnknownRule(RuleDefinitionError):
    """A definition names a rule that is not registered."""


class MissingExpectation(RuleDefinitionError):
    """A rule that needs an expectation was defined without one."""


class RuleConfigurationError(AttrcheckError, ValueError):
    """Raised by a rule when its expectation cannot be interpreted.

    Examples are ``min:abc``, ``regex:[0-9`` or ``type:tristate``. The
    evaluator captures it into the check result instead of propagating it.
    """


@dataclass(frozen=True)
class RuleDef:
    """A parsed ``(rule_name, expectation)`` pair."""
    rule_name: str
    expectation: str | None = None

    @property
    def has_expectation(self) -> bool:
        return self.expectation is not None and self.expectation.strip() != ""

    def __str__(self) -> str:
        if self.expectation is None:
            return self.rule_name
        return f"{self.rule_name}: {self.expectation}"


class Rule(ABC):
    """Base class for validation rules.

    Rules are stateless: everything a check needs arrives as arguments, so a
    single instance is shared by every validation call.
    """

    requires_expectation: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name as written in rule definitions."""
        pass

    @abstractmethod
    def check(self, value: str | None, expectation: str | None) -> bool:
        """Apply the rule to a value.

        Args:
            value: Value under validation, None when absent
            expectation: Rule parameter from the definition, if any

        Returns:
            True if the value satisfies the rule

        Raises:
            RuleConfigurationError: If the expectation is malformed
        """
        pass

    def describe(self, expectation: str | None) -> dict[str, str]:
        """Field hints this rule contributes for form rendering."""
        return {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class RuleRegistry:
    """Read-only lookup of rules by name."""

    def __init__(self, rules: Iterable[Rule]):
        table: dict[str, Rule] = {}
        for rule in rules:
            if rule.name in table:
                raise ValueError(f"Duplicate rule name: {rule.name}")
            table[rule.name] = rule
        self._rules = MappingProxyType(table)

    def resolve(self, rule_name: str) -> Rule | None:
        """Return the rule registered under ``rule_name`` or None."""
        return self._rules.get(rule_name)

    @property
    def names(self) -> list[str]:
        return list(self._rules)

    def __contains__(self, rule_name: object) -> bool:
        return rule_name in self._rules

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of validating one value against a set of rules."""
    valid: bool
    failed_rules: tuple[RuleDef, ...] = ()
    exception: Exception | None = None
    value: str | None = None

    def __post_init__(self) -> None:
        if self.valid != (not self.failed_rules and self.exception is None):
            raise ValueError("valid must be True exactly when there are no failed rules and no exception")
        if self.exception is not None and len(self.failed_rules) != 1:
            raise ValueError("a result carrying an exception must name exactly the one rule that raised")

    @classmethod
    def success(cls, value: str | None = None) -> "CheckResult":
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, failed_rules: Sequence[RuleDef], value: str | None = None) -> "CheckResult":
        return cls(valid=False, failed_rules=tuple(failed_rules), value=value)

    @classmethod
    def error(cls, rule_def: RuleDef, exception: Exception, value: str | None = None) -> "CheckResult":
        return cls(valid=False, failed_rules=(rule_def,), exception=exception, value=value)

    @property
    def is_misconfigured(self) -> bool:
        """True when a rule itself was broken rather than the value."""
        return self.exception is not None

    @property
    def failed_rule_names(self) -> list[str]:
        return [rule_def.rule_name for rule_def in self.failed_rules]

    def summary(self) -> str:
        """Failed rules joined for display, e.g. ``"min: 5, maxLength: 2"``."""
        return ", ".join(str(rule_def) for rule_def in self.failed_rules)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "valid": self.valid,
            "value": self.value,
            "failedRules": [
                {"rule": rule_def.rule_name, "expectation": rule_def.expectation}
                for rule_def in self.failed_rules
            ],
            "exception": None if self.exception is None else {
                "type": type(self.exception).__name__,
                "message": str(self.exception),
            },
        }


class RuleEvaluator:
    """Applies parsed rule definitions to values."""

    def __init__(self, registry: RuleRegistry):
        self.registry = registry

    def check(self, value: str | None, rules: Sequence[RuleDef]) -> CheckResult:
        """Validate a value against every rule definition.

        All rules run even after a failure so the caller sees every
        violation. A rule raising RuleConfigurationError stops evaluation
        and is reported as the only failed rule.

        Args:
            value: Value to validate, may be None
            rules: Parsed rule definitions in evaluation order

        Returns:
            CheckResult for the value

        Raises:
            UnknownRule: If a definition names a rule missing from the registry
        """
        failed: list[RuleDef] = []

        for rule_def in rules:
            rule = self.registry.resolve(rule_def.rule_name)
            if rule is None:
                raise UnknownRule(f"Unknown rule '{rule_def.rule_name}'", rule_name=rule_def.rule_name)

            try:
                passed = rule.check(value, rule_def.expectation)
            except RuleConfigurationError as e:
                logger.warning(f"Rule '{rule_def}' is misconfigured: {e}")
                return CheckResult.error(rule_def, e, value=value)

            if not passed:
                failed.append(rule_def)

        if failed:
            logger.debug(f"Value failed {len(failed)} of {len(rules)} rules: {', '.join(map(str, failed))}")
            return CheckResult.failure(failed, value=value)

        return CheckResult.success(value=value)

"""Built-in validation rules.

Every rule treats the value as a string and parses it as needed, so ``min``
works on its own without a ``type`` rule in the same definition.
"""

import logging
import math
import re
from abc import abstractmethod
from enum import Enum

from .framework import Rule, RuleConfigurationError, RuleRegistry

logger = logging.getLogger(__name__)

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def parse_number(text: str | None) -> float | None:
    """Parse a decimal number literal, returning None if ``text`` is not one."""
    if text is None:
        return None
    text = text.strip()
    if not _NUMBER_PATTERN.fullmatch(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def format_number(number: float) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if number.is_integer():
        return str(int(number))
    return repr(number)


def _blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def _trimmed(value: str | None) -> str:
    return "" if value is None else value.strip()


def _is_int32(text: str) -> bool:
    if not _INTEGER_PATTERN.fullmatch(text):
        return False
    # int() rejects oversized digit strings
    digits = text.lstrip("+-").lstrip("0")
    return len(digits) <= 10 and INT32_MIN <= int(text) <= INT32_MAX


class ValueType(str, Enum):
    """Types accepted by the ``type`` rule."""
    DOUBLE = "double"
    FLOAT = "float"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"

    @classmethod
    def of(cls, name: str | None) -> "ValueType | None":
        """Resolve a type name or alias, case-insensitively."""
        if name is None:
            return None
        return _TYPE_ALIASES.get(name.strip().lower())

    @property
    def is_numeric(self) -> bool:
        return self in (ValueType.DOUBLE, ValueType.FLOAT, ValueType.INTEGER)


_TYPE_ALIASES = {
    "double": ValueType.DOUBLE,
    "decimal": ValueType.DOUBLE,
    "float": ValueType.FLOAT,
    "number": ValueType.FLOAT,
    "int": ValueType.INTEGER,
    "integer": ValueType.INTEGER,
    "boolean": ValueType.BOOLEAN,
    "bool": ValueType.BOOLEAN,
    "string": ValueType.STRING,
    "str": ValueType.STRING,
}


class NumericExpectationRule(Rule):
    """Base for rules whose expectation is a number."""

    requires_expectation = True

    def check(self, value: str | None, expectation: str | None) -> bool:
        return self.check_number(value, self.numeric_expectation(expectation))

    def numeric_expectation(self, expectation: str | None) -> float:
        number = parse_number(expectation)
        if number is None:
            raise RuleConfigurationError(f"Invalid {self.name} expectation: {expectation!r} is not a number")
        return number

    @abstractmethod
    def check_number(self, value: str | None, expectation: float) -> bool:
        pass

    def describe(self, expectation: str | None) -> dict[str, str]:
        number = parse_number(expectation)
        return {self.name: format_number(number) if number is not None else ""}


class RequiredRule(Rule):
    """Value must be present and not blank."""

    @property
    def name(self) -> str:
        return "required"

    def check(self, value: str | None, expectation: str | None) -> bool:
        return not _blank(value)

    def describe(self, expectation: str | None) -> dict[str, str]:
        return {"required": "true"}


class TypeRule(Rule):
    """Value must be parseable as the expected type."""

    requires_expectation = True

    @property
    def name(self) -> str:
        return "type"

    def value_type(self, expectation: str | None) -> ValueType:
        value_type = ValueType.of(expectation)
        if value_type is None:
            raise RuleConfigurationError(f"Unsupported type: {expectation!r}")
        return value_type

    def check(self, value: str | None, expectation: str | None) -> bool:
        value_type = self.value_type(expectation)

        if _blank(value):
            return value_type is ValueType.STRING

        text = value.strip()
        if value_type in (ValueType.DOUBLE, ValueType.FLOAT):
            return parse_number(text) is not None
        if value_type is ValueType.INTEGER:
            return _is_int32(text)
        if value_type is ValueType.BOOLEAN:
            return text.lower() in ("true", "false")
        return True

    def describe(self, expectation: str | None) -> dict[str, str]:
        value_type = ValueType.of(expectation)
        return {"type": "number" if value_type is not None and value_type.is_numeric else "text"}


class MinRule(NumericExpectationRule):
    """Numeric minimum, inclusive. A blank value counts as 0."""

    @property
    def name(self) -> str:
        return "min"

    def check_number(self, value: str | None, expectation: float) -> bool:
        if _blank(value):
            return 0 >= expectation
        number = parse_number(value)
        return number is not None and number >= expectation


class MaxRule(NumericExpectationRule):
    """Numeric maximum, inclusive. A blank value counts as 0."""

    @property
    def name(self) -> str:
        return "max"

    def check_number(self, value: str | None, expectation: float) -> bool:
        if _blank(value):
            return 0 <= expectation
        number = parse_number(value)
        return number is not None and number <= expectation


class MinLengthRule(NumericExpectationRule):
    """Minimum length of the trimmed value, inclusive."""

    @property
    def name(self) -> str:
        return "minLength"

    def check_number(self, value: str | None, expectation: float) -> bool:
        return len(_trimmed(value)) >= expectation


class MaxLengthRule(NumericExpectationRule):
    """Maximum length of the trimmed value, inclusive."""

    @property
    def name(self) -> str:
        return "maxLength"

    def check_number(self, value: str | None, expectation: float) -> bool:
        return len(_trimmed(value)) <= expectation


class RegexRule(Rule):
    """Trimmed value must match the pattern from start to end.

    Character classes such as \\d and \\w match ASCII characters only.
    """

    requires_expectation = True

    @property
    def name(self) -> str:
        return "regex"

    def pattern(self, expectation: str | None) -> re.Pattern:
        if expectation is None:
            raise RuleConfigurationError("Invalid regex expectation: no pattern given")
        try:
            return re.compile(expectation, re.ASCII)
        except (re.error, OverflowError, RecursionError) as e:
            raise RuleConfigurationError(f"Invalid regex expectation pattern {expectation!r}: {e}") from e

    def check(self, value: str | None, expectation: str | None) -> bool:
        return self.pattern(expectation).fullmatch(_trimmed(value)) is not None

    def describe(self, expectation: str | None) -> dict[str, str]:
        return {"pattern": expectation or ""}


def default_rules() -> list[Rule]:
    """One instance of every built-in rule."""
    return [
        RequiredRule(),
        TypeRule(),
        MinRule(),
        MaxRule(),
        MinLengthRule(),
        MaxLengthRule(),
        RegexRule(),
    ]


def create_default_registry() -> RuleRegistry:
    """Build a registry holding the built-in rules."""
    registry = RuleRegistry(default_rules())
    logger.debug(f"Registered rules: {', '.join(registry.names)}")
    return registry


DEFAULT_REGISTRY = create_default_registry()

"""attrcheck - Rule-based validation engine for string attribute values.

attrcheck parses a compact rule-definition language such as
``"required; type:number; min:0; max:100"`` and validates single values or
whole attribute maps against it, reporting which rules failed.
"""

__version__ = "0.1.0"
__author__ = "attrcheck"
__description__ = "Rule-based validation engine for string attribute values"

from attrcheck.attributes import AttributeSchema, AttributeSetResult
from attrcheck.config import AttrcheckConfig
from attrcheck.validation import CheckResult, RuleDef, check, parse_rules

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "AttrcheckConfig",
    "AttributeSchema",
    "AttributeSetResult",
    "CheckResult",
    "RuleDef",
    "check",
    "parse_rules",
]

"""Enums for the rules system."""

from enum import Enum
from typing import Dict


class RuleCategory(str, Enum):
    """Category a rule assigns to the change it matches."""

    BREAKING = "Breaking"
    NON_BREAKING = "Non-Breaking"
    IGNORED = "Ignored"


class ConditionOperator(str, Enum):
    """Operators available to rule conditions."""

    EQUAL = "equal"
    NOT_EQUAL = "notEqual"
    IN = "in"
    NOT_IN = "notIn"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesNotContain"
    HAS_PROPERTY = "hasProperty"
    HAS_NO_PROPERTY = "hasNoProperty"


def create_category_summary() -> Dict[RuleCategory, int]:
    """Create a summary with every category present and all counts set to zero."""
    return {category: 0 for category in RuleCategory}

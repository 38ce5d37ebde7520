"""Domain models for the rules system.

A ruleset is a list of rules. Each rule holds a tree of conditions evaluated
against a single node diff and, when the tree passes, an event that
categorizes the change:

    - name: Rule to detect operation removal
      conditions:
        all:
          - path: $.type
            operator: contains
            value: apiContract:Operation
          - path: $.removed
            operator: hasProperty
            value: core:name
      event:
        type: operation-removed
        params:
          category: Breaking
          changedProperty: core:name
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from graphdelta.rules.domain.enums import ConditionOperator, RuleCategory
from graphdelta.shared.domain.base_model import BaseDomainModel


@dataclass
class Condition(BaseDomainModel):
    """Single comparison of a fact value against a rule value.

    Attributes:
        path: JSON path into the node diff ($.added, $.removed.core:name, $.type)
        operator: Comparison operator
        value: Value the fact is compared with
    """

    path: str
    operator: ConditionOperator
    value: Any = None


@dataclass
class ConditionGroup(BaseDomainModel):
    """Boolean combination of conditions: 'all', 'any' or 'not'."""

    mode: str
    conditions: List[Union[Condition, "ConditionGroup"]] = field(default_factory=list)


@dataclass
class Rule(BaseDomainModel):
    """Rule that categorizes a node diff.

    Attributes:
        name: Human-readable rule name
        conditions: Condition tree evaluated against the node diff
        event_type: Event emitted when the rule passes (e.g. 'operation-removed')
        category: Category assigned to the change
        changed_property: Property whose old/new values are reported
        priority: Rules with higher priority are evaluated first
    """

    name: str
    conditions: ConditionGroup
    event_type: str
    category: RuleCategory
    changed_property: Optional[str] = None
    priority: int = 1


@dataclass
class CategorizedChange(BaseDomainModel):
    """Change of a node that was categorized by a rule.

    Attributes:
        rule_name: Name of the rule that passed
        rule_event: Event type defined in the rule
        category: Category defined in the rule
        change: (old value, new value); optional only for ignored changes
    """

    rule_name: str
    rule_event: str
    category: RuleCategory
    change: Optional[Tuple[Any, Any]] = None

    def __post_init__(self) -> None:
        if self.category != RuleCategory.IGNORED and self.change is None:
            raise ValueError("Changed values are required")

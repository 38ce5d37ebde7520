"""
Ruleset loader.

Rulesets are YAML or JSON files holding a list of rules, either at the top
level or under a `rules` key. The rule layout follows json-rules-engine so
that existing rule files keep working:

    - name: Rule to detect version change
      priority: 1
      conditions:
        all:
          - fact: diff
            path: $.type
            operator: contains
            value: apiContract:WebAPI
          - path: $.added
            operator: hasProperty
            value: core:version
      event:
        type: version-changed
        params:
          category: Breaking
          changedProperty: core:version
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from graphdelta.rules.domain.enums import ConditionOperator, RuleCategory
from graphdelta.rules.domain.models import Condition, ConditionGroup, Rule
from graphdelta.shared.domain.exceptions import RuleSetError
from graphdelta.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

# Only fact exposed to conditions: the node diff being categorized
DIFF_FACT_ID = "diff"

_GROUP_MODES = ("all", "any", "not")


def load_ruleset(path: Union[str, Path]) -> List[Rule]:
    """
    Load and validate a ruleset file.

    Args:
        path: Path to a .yaml/.yml or .json ruleset

    Returns:
        Rules in file order

    Raises:
        RuleSetError: If the file cannot be parsed or a rule is invalid
    """
    ruleset_path = Path(path)
    try:
        with open(ruleset_path, encoding="utf-8") as f:
            if ruleset_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise RuleSetError(
            f"Error parsing the rules file: {e}", context={"path": str(ruleset_path)}
        ) from e

    if isinstance(data, dict) and "rules" in data:
        data = data["rules"]

    rules = parse_rules(data)
    logger.debug("ruleset_loaded", path=str(ruleset_path), rule_count=len(rules))
    return rules


def parse_rules(data: Any) -> List[Rule]:
    """Build rules from already-parsed ruleset data."""
    if not isinstance(data, list):
        raise RuleSetError("Rules must be defined as an array")
    return [parse_rule(rule_data) for rule_data in data]


def parse_rule(rule_data: Any) -> Rule:
    """
    Build one rule, enforcing what a graph diff rule needs.

    Raises:
        RuleSetError: On missing name, category, event or changed property
    """
    if not isinstance(rule_data, dict):
        raise RuleSetError("Every rule must be an object")

    name = rule_data.get("name")
    if not name:
        raise RuleSetError("Name is required for every rule")

    event = rule_data.get("event") or {}
    if not isinstance(event, dict):
        raise RuleSetError(f"Event must be an object in rule: {name}")
    params = event.get("params") or {}
    if not isinstance(params, dict):
        raise RuleSetError(f"Event params must be an object in rule: {name}")
    event_type = event.get("type")
    if not event_type:
        raise RuleSetError(f"Event type is required in rule: {name}")

    category_value = params.get("category")
    if not category_value:
        raise RuleSetError(f"Category is required in rule: {name}")
    try:
        category = RuleCategory(category_value)
    except ValueError:
        raise RuleSetError(f"Invalid category in rule: {name}")

    # changedProperty is optional only for ignored changes
    changed_property = params.get("changedProperty")
    if isinstance(changed_property, str):
        changed_property = changed_property.strip() or None
    if changed_property is None and category != RuleCategory.IGNORED:
        raise RuleSetError(f"Changed property is required in rule: {name}")

    conditions = rule_data.get("conditions")
    if not isinstance(conditions, dict):
        raise RuleSetError(f"Conditions are required in rule: {name}")

    priority = rule_data.get("priority", 1)
    # bool is an int subclass but never a priority
    if isinstance(priority, bool) or not isinstance(priority, int):
        try:
            priority = int(str(priority))
        except ValueError:
            raise RuleSetError(f"Priority must be an integer in rule: {name}")

    return Rule(
        name=name,
        conditions=_parse_group(conditions, name),
        event_type=event_type,
        category=category,
        changed_property=changed_property,
        priority=priority,
    )


def _parse_group(data: Dict[str, Any], rule_name: str) -> ConditionGroup:
    modes = [mode for mode in _GROUP_MODES if mode in data]
    if len(modes) != 1:
        raise RuleSetError(
            f"Conditions must have exactly one of 'all', 'any' or 'not' in rule: {rule_name}"
        )
    mode = modes[0]
    children = data[mode]
    if mode == "not":
        children = [children]
    if not isinstance(children, list):
        raise RuleSetError(f"'{mode}' conditions must be an array in rule: {rule_name}")
    return ConditionGroup(mode=mode, conditions=[_parse_node(child, rule_name) for child in children])


def _parse_node(data: Any, rule_name: str) -> Union[Condition, ConditionGroup]:
    if not isinstance(data, dict):
        raise RuleSetError(f"Invalid condition in rule: {rule_name}")
    if any(mode in data for mode in _GROUP_MODES):
        return _parse_group(data, rule_name)

    fact = data.get("fact", DIFF_FACT_ID)
    if fact != DIFF_FACT_ID:
        raise RuleSetError(f"Unknown fact '{fact}' in rule: {rule_name}")

    try:
        operator = ConditionOperator(data.get("operator"))
    except ValueError:
        raise RuleSetError(f"Unknown operator '{data.get('operator')}' in rule: {rule_name}")

    return Condition(path=data.get("path", "$"), operator=operator, value=data.get("value"))

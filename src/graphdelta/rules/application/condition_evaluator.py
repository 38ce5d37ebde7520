"""Evaluation of rule condition trees against a node diff."""

from collections.abc import Mapping
from typing import Any, Callable, Dict, Union

from graphdelta.diff.domain.models import NodeDiff
from graphdelta.rules.domain.enums import ConditionOperator
from graphdelta.rules.domain.models import Condition, ConditionGroup

_MISSING = object()


def _contains(fact: Any, value: Any) -> bool:
    if isinstance(fact, str):
        return isinstance(value, str) and value in fact
    return isinstance(fact, (list, tuple)) and value in fact


def _is_in(fact: Any, value: Any) -> bool:
    if isinstance(value, str):
        return isinstance(fact, str) and fact in value
    return isinstance(value, (list, tuple)) and fact is not _MISSING and fact in value


OPERATORS: Dict[ConditionOperator, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUAL: lambda fact, value: fact is not _MISSING and fact == value,
    ConditionOperator.NOT_EQUAL: lambda fact, value: fact is _MISSING or fact != value,
    ConditionOperator.IN: _is_in,
    ConditionOperator.NOT_IN: lambda fact, value: not _is_in(fact, value),
    ConditionOperator.CONTAINS: _contains,
    ConditionOperator.DOES_NOT_CONTAIN: lambda fact, value: isinstance(fact, (list, tuple, str))
    and not _contains(fact, value),
    ConditionOperator.HAS_PROPERTY: lambda fact, value: isinstance(fact, Mapping) and value in fact,
    ConditionOperator.HAS_NO_PROPERTY: lambda fact, value: not (isinstance(fact, Mapping) and value in fact),
}


def build_fact(node_diff: NodeDiff) -> Dict[str, Any]:
    """Expose a node diff to conditions as plain data."""
    return {
        "id": node_diff.id,
        "type": node_diff.type or [],
        "added": node_diff.added,
        "removed": node_diff.removed,
    }


def resolve_path(fact: Dict[str, Any], path: str) -> Any:
    """
    Resolve a `$.a.b` path inside the fact.

    Segments are property names; AMF property names contain ':' but never '.'.
    Returns a sentinel when the path does not exist.
    """
    value: Any = fact
    segments = path.split(".")
    if segments and segments[0] == "$":
        segments = segments[1:]
    for segment in segments:
        if not isinstance(value, Mapping) or segment not in value:
            return _MISSING
        value = value[segment]
    return value


def evaluate(node: Union[Condition, ConditionGroup], fact: Dict[str, Any]) -> bool:
    """Evaluate a condition or condition group."""
    if isinstance(node, ConditionGroup):
        results = (evaluate(child, fact) for child in node.conditions)
        if node.mode == "all":
            return all(results)
        if node.mode == "any":
            return any(results)
        return not all(results)

    return OPERATORS[node.operator](resolve_path(fact, node.path), node.value)

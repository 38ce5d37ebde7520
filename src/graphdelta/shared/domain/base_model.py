"""
Base domain model with camelCase JSON output.

Reports and CLI output are written in the same camelCase shape that the
changelog consumers expect. All serializable domain models inherit from
BaseDomainModel.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("rule_name")
        'ruleName'
        >>> to_camel_case("categorized_changes")
        'categorizedChanges'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def _to_json_value(value: Any) -> Any:
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {k: _to_json_value(v) for k, v in value.items()}
    return value


@dataclass
class BaseDomainModel:
    """
    Base class for serializable domain models.

    - to_json() serializes field names to camelCase
    - Enum values are serialized by value
    - Tuples become lists so the result is plain JSON
    """

    def to_json(self) -> Dict[str, Any]:
        """
        Serialize to camelCase JSON.

        Returns:
            Dictionary with camelCase keys and JSON-compatible values
        """
        result: Dict[str, Any] = {}

        for field in fields(self):
            result[to_camel_case(field.name)] = _to_json_value(getattr(self, field.name))

        return result

    def __str__(self) -> str:
        """String representation for logging."""
        field_strs = [f"{field.name}={getattr(self, field.name)!r}" for field in fields(self)]
        return f"{self.__class__.__name__}({', '.join(field_strs)})"

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return self.__str__()

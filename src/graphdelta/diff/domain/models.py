"""
Diff Domain Models.

Core entities for comparing flattened JSON-LD graphs.

Document Structure:
    {
      "@graph": [
        {"@id": "#/web-api", "@type": ["apiContract:WebAPI"], "core:name": "Shop"},
        {"@id": "#/web-api/end-points/products", "apiContract:path": "/products"}
      ],
      "@context": {"@base": "shop.raml"}
    }
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from graphdelta.rules.domain.enums import RuleCategory, create_category_summary
from graphdelta.rules.domain.models import CategorizedChange
from graphdelta.shared.domain.base_model import BaseDomainModel

# Top level keys and property names in flattened JSON-LD
KEY_GRAPH = "@graph"
KEY_CONTEXT = "@context"
KEY_NODE_ID = "@id"
KEY_NODE_TYPE = "@type"

# The context is diffed as a node; it has no @type so it gets this one
CONTEXT_TYPE = ["context"]

JsonLdDocument = Dict[str, Any]
GraphNode = Dict[str, Any]


class DiffType(str, Enum):
    """Kind of a single difference."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    MOVED = "moved"  # Never valid: positions are not compared
    REFERENCE_CHANGED = "reference-changed"


@dataclass(frozen=True)
class PropertyDelta:
    """
    Difference of one property between two versions of a node.

    For ADDED only `new` is meaningful, for REMOVED only `old`.
    MODIFIED and REFERENCE_CHANGED carry both.
    """

    kind: DiffType
    key: str
    old: Any = None
    new: Any = None


@dataclass(frozen=True)
class ArrayElementDelta(PropertyDelta):
    """Delta of a single element inside an array-valued property (ADDED or REMOVED)."""


@dataclass
class NodeDiff(BaseDomainModel):
    """
    Accumulated differences of one node identity.

    A key present in both `added` and `removed` means the property was
    modified: `removed[key]` holds the old value and `added[key]` the new one.

    Example:
        NodeDiff(
            id="#/web-api",
            type=["apiContract:WebAPI"],
            added={"core:name": "Shop v2"},
            removed={"core:name": "Shop"},
        )
    """

    id: str
    type: Optional[List[str]] = None
    added: Dict[str, Any] = field(default_factory=dict)
    removed: Dict[str, Any] = field(default_factory=dict)
    categorized_changes: List[CategorizedChange] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when no property has been added or removed."""
        return not self.added and not self.removed

    def has_categorized_changes(self) -> bool:
        return len(self.categorized_changes) > 0

    def has_breaking_changes(self) -> bool:
        return any(c.category == RuleCategory.BREAKING for c in self.categorized_changes)

    def get_change_count_by_category(self, category: RuleCategory) -> int:
        return sum(1 for c in self.categorized_changes if c.category == category)

    def get_category_summary(self) -> Dict[RuleCategory, int]:
        """Number of categorized changes in each category."""
        summary = create_category_summary()
        for change in self.categorized_changes:
            summary[change.category] += 1
        return summary

"""Changes between two versions of a JSON-LD document."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from graphdelta.diff.domain.models import NodeDiff
from graphdelta.rules.domain.enums import RuleCategory, create_category_summary
from graphdelta.shared.domain.base_model import BaseDomainModel


@dataclass
class GraphChanges(BaseDomainModel):
    """
    Holds the node differences between a base and a new document.

    Attributes:
        base_document: Path (or label) of the base document
        new_document: Path (or label) of the new document
        node_diffs: Differences found, one per node
    """

    base_document: str
    new_document: str
    node_diffs: List[NodeDiff] = field(default_factory=list)

    def has_changes(self) -> bool:
        return len(self.node_diffs) > 0

    def has_categorized_changes(self) -> bool:
        return any(n.has_categorized_changes() for n in self.node_diffs)

    def get_nodes_with_categorized_changes(self) -> List[NodeDiff]:
        return [n for n in self.node_diffs if n.has_categorized_changes()]

    def has_breaking_changes(self) -> bool:
        return any(n.has_breaking_changes() for n in self.node_diffs)

    def get_change_count_by_category(self, category: RuleCategory) -> int:
        return sum(n.get_change_count_by_category(category) for n in self.node_diffs)

    def get_breaking_changes_count(self) -> int:
        return self.get_change_count_by_category(RuleCategory.BREAKING)

    def get_non_breaking_changes_count(self) -> int:
        return self.get_change_count_by_category(RuleCategory.NON_BREAKING)

    def get_ignored_changes_count(self) -> int:
        return self.get_change_count_by_category(RuleCategory.IGNORED)

    def get_category_summary(self) -> Dict[RuleCategory, int]:
        """Number of categorized changes in each category, across all nodes."""
        summary = create_category_summary()
        for node_diff in self.node_diffs:
            for category, count in node_diff.get_category_summary().items():
                summary[category] += count
        return summary

    def to_json(self) -> Dict[str, Any]:
        result = super().to_json()
        result["categorySummary"] = {c.value: n for c, n in self.get_category_summary().items()}
        return result

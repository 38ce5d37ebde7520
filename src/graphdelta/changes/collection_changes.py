"""Changes between two directories of JSON-LD documents."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from graphdelta.changes.graph_changes import GraphChanges
from graphdelta.rules.domain.enums import RuleCategory, create_category_summary
from graphdelta.shared.domain.base_model import BaseDomainModel


@dataclass
class CollectionChanges(BaseDomainModel):
    """
    Holds the changes of every document in a directory pair.

    Attributes:
        base_path: Base directory
        new_path: New directory
        changed: Relative document path -> its changes (only documents that differ)
        errored: Relative document path -> reason the comparison failed
        added: Documents only present in the new directory
        removed: Documents only present in the base directory
    """

    base_path: str
    new_path: str
    changed: Dict[str, GraphChanges] = field(default_factory=dict)
    errored: Dict[str, str] = field(default_factory=dict)
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    def has_changes(self) -> bool:
        if self.removed or self.added:
            return True
        return any(changes.has_changes() for changes in self.changed.values())

    def has_errors(self) -> bool:
        return len(self.errored) > 0

    def get_category_summary(self) -> Dict[RuleCategory, int]:
        summary = create_category_summary()
        for changes in self.changed.values():
            for category, count in changes.get_category_summary().items():
                summary[category] += count
        return summary

    def to_json(self) -> Dict[str, Any]:
        result = super().to_json()
        result["hasChanges"] = self.has_changes()
        result["categorySummary"] = {c.value: n for c, n in self.get_category_summary().items()}
        return result

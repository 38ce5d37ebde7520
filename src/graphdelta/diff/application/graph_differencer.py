"""Differences between two JSON-LD documents on disk."""

from pathlib import Path
from typing import List, Optional, Union

from graphdelta.changes.graph_changes import GraphChanges
from graphdelta.diff.application.differ import find_differences
from graphdelta.documents.loader import load_document, strip_base_path
from graphdelta.rules.application.rules_processor import apply_rules
from graphdelta.rules.domain.models import Rule
from graphdelta.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class GraphDifferencer:
    """
    Compares a base and a new document.

    Usage:
        differencer = GraphDifferencer("v1/shop.json", "v2/shop.json")
        changes = differencer.find_and_categorize_changes()

        if changes.has_breaking_changes():
            ...
    """

    def __init__(
        self,
        base_document: Union[str, Path],
        new_document: Union[str, Path],
        strip_prefix: bool = False,
    ):
        """
        Args:
            base_document: Path to the base document
            new_document: Path to the new document
            strip_prefix: Remove each document's directory from its string
                values before comparing
        """
        self.base_document = Path(base_document)
        self.new_document = Path(new_document)
        self.strip_prefix = strip_prefix

    def find_changes(self) -> GraphChanges:
        """Find the differences between the documents without categorizing them."""
        left = self._load(self.base_document)
        right = self._load(self.new_document)

        logger.info(
            "graph_diff_started",
            base=str(self.base_document),
            new=str(self.new_document),
        )
        changes = GraphChanges(
            base_document=str(self.base_document),
            new_document=str(self.new_document),
            node_diffs=find_differences(left, right),
        )
        logger.info("graph_diff_completed", node_diffs=len(changes.node_diffs))
        return changes

    def find_and_categorize_changes(
        self, ruleset: Optional[Union[str, Path, List[Rule]]] = None
    ) -> GraphChanges:
        """
        Find the differences and categorize them with a ruleset.

        Args:
            ruleset: Rules or path to a ruleset; packaged defaults when omitted
        """
        changes = self.find_changes()
        apply_rules(changes.node_diffs, ruleset)
        return changes

    def _load(self, path: Path):
        document = load_document(path)
        if self.strip_prefix:
            document = strip_base_path(document, str(path.resolve().parent) + "/")
        return document

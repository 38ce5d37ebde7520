"""
Directory Differ.

Compares every document of a base directory with the document at the same
relative path in a new directory. A failure on one document is recorded and
the remaining documents are still compared.
"""

from pathlib import Path
from typing import List, Optional, Set, Tuple, Union

from graphdelta.changes.collection_changes import CollectionChanges
from graphdelta.diff.application.graph_differencer import GraphDifferencer
from graphdelta.rules.defaults import DEFAULT_RULES_PATH
from graphdelta.rules.domain.models import Rule
from graphdelta.rules.infrastructure.ruleset_loader import load_ruleset
from graphdelta.shared.domain.exceptions import DocumentLoadError, GraphDeltaError
from graphdelta.shared.infrastructure.config import settings
from graphdelta.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

ERROR_MESSAGE = "The operation was unsuccessful"


def list_documents(directory: Path, pattern: str) -> Set[str]:
    """Relative paths (posix style) of the files matching the glob pattern."""
    return {path.relative_to(directory).as_posix() for path in directory.glob(pattern) if path.is_file()}


def split_common_and_unique(left: Set[str], right: Set[str]) -> Tuple[List[str], List[str], List[str]]:
    """Return (common, only in left, only in right), each sorted."""
    return sorted(left & right), sorted(left - right), sorted(right - left)


def diff_directories(
    base_dir: Union[str, Path],
    new_dir: Union[str, Path],
    pattern: Optional[str] = None,
    ruleset: Optional[Union[str, Path, List[Rule]]] = None,
    categorize: bool = False,
    strip_prefix: bool = False,
) -> CollectionChanges:
    """
    Find differences for all documents in two directories.

    Args:
        base_dir: Directory with the base documents
        new_dir: Directory with the new documents
        pattern: Glob selecting documents (settings.document_pattern by default)
        ruleset: Ruleset used when categorize is set
        categorize: Apply a ruleset to each document's differences
        strip_prefix: Remove each document's directory from its string values

    Raises:
        DocumentLoadError: If either argument is not a directory
    """
    base_path, new_path = Path(base_dir), Path(new_dir)
    for directory in (base_path, new_path):
        if not directory.is_dir():
            raise DocumentLoadError(f"Not a directory: {directory}", context={"path": str(directory)})

    pattern = pattern or settings.document_pattern
    if categorize and not isinstance(ruleset, list):
        # A broken ruleset fails the whole run, not each document
        ruleset = load_ruleset(ruleset or DEFAULT_RULES_PATH)

    common, removed, added = split_common_and_unique(
        list_documents(base_path, pattern), list_documents(new_path, pattern)
    )
    logger.info(
        "directory_diff_started",
        base=str(base_path),
        new=str(new_path),
        common=len(common),
        removed=len(removed),
        added=len(added),
    )

    result = CollectionChanges(base_path=str(base_path), new_path=str(new_path), added=added, removed=removed)
    for name in common:
        differencer = GraphDifferencer(base_path / name, new_path / name, strip_prefix=strip_prefix)
        try:
            if categorize:
                changes = differencer.find_and_categorize_changes(ruleset)
            else:
                changes = differencer.find_changes()
        except GraphDeltaError as e:
            logger.error("document_diff_failed", document=name, error=str(e))
            result.errored[name] = f"{ERROR_MESSAGE}: {e}"
            continue
        if changes.has_changes():
            result.changed[name] = changes

    logger.info(
        "directory_diff_completed",
        changed=len(result.changed),
        errored=len(result.errored),
    )
    return result

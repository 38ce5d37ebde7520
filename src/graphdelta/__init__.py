"""
graphdelta - order-insensitive differences between JSON-LD API graphs.

Usage:
    from graphdelta import find_differences

    for node_diff in find_differences(base_document, new_document):
        print(node_diff.id, node_diff.removed, node_diff.added)
"""

__version__ = "0.1.0"

from graphdelta.diff.application.differ import find_differences
from graphdelta.diff.domain.models import DiffType, NodeDiff, PropertyDelta
from graphdelta.shared.domain.exceptions import (
    DiffContractError,
    DocumentValidationError,
    GraphDeltaError,
)

__all__ = [
    "__version__",
    "find_differences",
    "NodeDiff",
    "DiffType",
    "PropertyDelta",
    "GraphDeltaError",
    "DocumentValidationError",
    "DiffContractError",
]

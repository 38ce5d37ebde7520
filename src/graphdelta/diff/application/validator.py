"""Structural checks for the two documents handed to the differ."""

from collections.abc import Mapping
from typing import Any

from graphdelta.diff.domain.models import KEY_CONTEXT, KEY_GRAPH, KEY_NODE_ID
from graphdelta.shared.domain.exceptions import DocumentValidationError

LEFT = "left"
RIGHT = "right"


def validate_document(document: Any, side: str) -> None:
    """
    Verify a document conforms to the flattened JSON-LD graph structure.

    Args:
        document: Candidate document
        side: 'left' or 'right', used in the error message

    Raises:
        DocumentValidationError: On the first invariant that does not hold
    """
    if not document or not isinstance(document, Mapping):
        raise DocumentValidationError("Invalid object", side)

    graph = document.get(KEY_GRAPH)
    if graph is None:
        raise DocumentValidationError(f"{KEY_GRAPH} property is missing", side)
    if not isinstance(graph, list):
        raise DocumentValidationError(
            f"{KEY_GRAPH} property must be an array of json nodes", side
        )
    if len(graph) == 0:
        raise DocumentValidationError(f"{KEY_GRAPH} property must not be empty", side)

    context = document.get(KEY_CONTEXT)
    if context is not None and not isinstance(context, Mapping):
        raise DocumentValidationError(f"{KEY_CONTEXT} property must be an object", side)

    seen: set = set()
    for index, node in enumerate(graph):
        if not isinstance(node, Mapping) or not isinstance(node.get(KEY_NODE_ID), str):
            raise DocumentValidationError(
                f"graph node at index {index} has no {KEY_NODE_ID}",
                side,
                context={"index": index},
            )
        node_id = node[KEY_NODE_ID]
        if node_id in seen:
            raise DocumentValidationError(
                f"duplicate {KEY_NODE_ID} in graph: {node_id}",
                side,
                context={"index": index, "id": node_id},
            )
        seen.add(node_id)

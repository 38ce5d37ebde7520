"""
Graph Differ for flattened JSON-LD documents.

Compares two documents node by node and reports:
1. Nodes added to the right document
2. Nodes removed from the left document
3. Properties added, removed or modified on nodes present in both
4. Changes to the @context

Nodes and array elements are matched by identity, never by position, so
reordering a document produces no differences.

Usage:
    diffs = find_differences(left_document, right_document)

    for node_diff in diffs:
        print(node_diff.id, node_diff.removed, node_diff.added)
"""

import copy
import json
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional

from graphdelta.diff.application.indexer import index_graph
from graphdelta.diff.application.validator import LEFT, RIGHT, validate_document
from graphdelta.diff.domain.models import (
    CONTEXT_TYPE,
    KEY_CONTEXT,
    KEY_GRAPH,
    KEY_NODE_ID,
    KEY_NODE_TYPE,
    ArrayElementDelta,
    DiffType,
    GraphNode,
    JsonLdDocument,
    NodeDiff,
    PropertyDelta,
)
from graphdelta.shared.domain.exceptions import DiffContractError


def find_differences(left: JsonLdDocument, right: JsonLdDocument) -> List[NodeDiff]:
    """
    Find differences between two flattened JSON-LD documents.

    Args:
        left: Base document
        right: Document compared against the base

    Returns:
        One NodeDiff per node that differs, plus one for @context when it
        differs. The order of the list is not significant.

    Raises:
        DocumentValidationError: When either document is malformed (left first)
    """
    validate_document(left, LEFT)
    validate_document(right, RIGHT)

    node_diffs = diff_nodes(index_graph(left[KEY_GRAPH]), index_graph(right[KEY_GRAPH]))

    context_diff = diff_context(left.get(KEY_CONTEXT) or {}, right.get(KEY_CONTEXT) or {})
    if context_diff is not None:
        node_diffs.append(context_diff)

    return node_diffs


def diff_nodes(
    left_index: Dict[str, GraphNode], right_index: Dict[str, GraphNode]
) -> List[NodeDiff]:
    """Compare two graphs indexed by node id."""
    node_diffs: List[NodeDiff] = []

    for node_id, right_node in right_index.items():
        if node_id not in left_index:
            node_diffs.append(record_node_delta(DiffType.ADDED, right_node))
            continue
        node_diff = diff_properties(left_index[node_id], right_node)
        if not node_diff.is_empty():
            node_diffs.append(node_diff)

    for node_id, left_node in left_index.items():
        if node_id not in right_index:
            node_diffs.append(record_node_delta(DiffType.REMOVED, left_node))

    return node_diffs


def diff_properties(left_node: GraphNode, right_node: GraphNode) -> NodeDiff:
    """Compare two versions of the same node. The result may be empty."""
    node_diff = NodeDiff(id=right_node[KEY_NODE_ID], type=_node_type(right_node))
    for delta in compare_properties(left_node, right_node):
        record_property_delta(node_diff, delta)
    return node_diff


def diff_context(left_context: Mapping, right_context: Mapping) -> Optional[NodeDiff]:
    """Compare the @context of both documents as one flat node."""
    node_diff = NodeDiff(id=KEY_CONTEXT, type=list(CONTEXT_TYPE))

    for key in _union_keys(left_context, right_context):
        if key not in right_context:
            delta = PropertyDelta(DiffType.REMOVED, key, old=left_context[key])
        elif key not in left_context:
            delta = PropertyDelta(DiffType.ADDED, key, new=right_context[key])
        elif _value_key(left_context[key]) != _value_key(right_context[key]):
            delta = PropertyDelta(
                DiffType.MODIFIED, key, old=left_context[key], new=right_context[key]
            )
        else:
            continue
        record_property_delta(node_diff, delta)

    return None if node_diff.is_empty() else node_diff


def compare_properties(left_node: GraphNode, right_node: GraphNode) -> Iterator[PropertyDelta]:
    """Classify every property of two versions of a node."""
    node_id = right_node[KEY_NODE_ID]

    for key in _union_keys(left_node, right_node):
        if key == KEY_NODE_ID:
            continue
        if key not in right_node:
            yield PropertyDelta(DiffType.REMOVED, key, old=left_node[key])
            continue
        if key not in left_node:
            yield PropertyDelta(DiffType.ADDED, key, new=right_node[key])
            continue

        old, new = left_node[key], right_node[key]
        if isinstance(old, list) and isinstance(new, list):
            yield from _compare_arrays(node_id, key, old, new)
        elif _is_reference(old) and _is_reference(new):
            old_id = _reference_id(old, node_id, key)
            new_id = _reference_id(new, node_id, key)
            if _value_key(old_id) != _value_key(new_id):
                yield PropertyDelta(DiffType.REFERENCE_CHANGED, key, old=old_id, new=new_id)
        elif _element_key(old, node_id, key) != _element_key(new, node_id, key):
            yield PropertyDelta(DiffType.MODIFIED, key, old=old, new=new)


def record_node_delta(kind: DiffType, node: GraphNode) -> NodeDiff:
    """
    Build the NodeDiff of a node that exists on one side only.

    Raises:
        DiffContractError: For any kind other than ADDED or REMOVED
    """
    node_id = node.get(KEY_NODE_ID)
    if kind == DiffType.ADDED:
        return NodeDiff(id=node_id, type=_node_type(node), added=_node_content(node))
    if kind == DiffType.REMOVED:
        return NodeDiff(id=node_id, type=_node_type(node), removed=_node_content(node))
    # Nodes are matched by id, so a node can only appear or disappear
    raise DiffContractError(
        f"Invalid difference type for node: {kind.value}, node: {node_id}",
        context={"node": node_id, "kind": kind.value},
    )


def record_property_delta(node_diff: NodeDiff, delta: PropertyDelta) -> None:
    """
    Record a property difference into the node's added/removed mappings.

    Raises:
        DiffContractError: When the delta kind cannot apply to a property
    """
    if isinstance(delta, ArrayElementDelta):
        record_array_delta(node_diff, delta)
    elif delta.kind == DiffType.ADDED:
        node_diff.added[delta.key] = copy.deepcopy(delta.new)
    elif delta.kind == DiffType.REMOVED:
        node_diff.removed[delta.key] = copy.deepcopy(delta.old)
    elif delta.kind == DiffType.MODIFIED:
        node_diff.removed[delta.key] = copy.deepcopy(delta.old)
        node_diff.added[delta.key] = copy.deepcopy(delta.new)
    elif delta.kind == DiffType.REFERENCE_CHANGED:
        record_reference_delta(node_diff, delta)
    else:
        raise DiffContractError(
            f"Invalid difference type for node property: {delta.kind.value}, "
            f"node: {node_diff.id}, property: {delta.key}",
            context={"node": node_diff.id, "property": delta.key, "kind": delta.kind.value},
        )


def record_array_delta(node_diff: NodeDiff, delta: PropertyDelta) -> None:
    """
    Record one element added to or removed from an array property.

    Raises:
        DiffContractError: For any kind other than ADDED or REMOVED
    """
    if delta.kind == DiffType.ADDED:
        node_diff.added.setdefault(delta.key, []).append(copy.deepcopy(delta.new))
    elif delta.kind == DiffType.REMOVED:
        node_diff.removed.setdefault(delta.key, []).append(copy.deepcopy(delta.old))
    else:
        raise DiffContractError(
            f"Invalid difference type for node array property: {delta.kind.value}, "
            f"node: {node_diff.id}, property: {delta.key}",
            context={"node": node_diff.id, "property": delta.key, "kind": delta.kind.value},
        )


def record_reference_delta(node_diff: NodeDiff, delta: PropertyDelta) -> None:
    """
    Record a reference that now points at another node.

    Raises:
        DiffContractError: For any kind other than REFERENCE_CHANGED
    """
    if delta.kind != DiffType.REFERENCE_CHANGED:
        raise DiffContractError(
            f"Invalid difference type for node reference property: {delta.kind.value}, "
            f"node: {node_diff.id}, property: {delta.key}",
            context={"node": node_diff.id, "property": delta.key, "kind": delta.kind.value},
        )
    node_diff.removed[delta.key] = {KEY_NODE_ID: delta.old}
    node_diff.added[delta.key] = {KEY_NODE_ID: delta.new}


def _compare_arrays(node_id: str, key: str, old: List[Any], new: List[Any]) -> Iterator[PropertyDelta]:
    old_elements = {_element_key(value, node_id, key): value for value in old}
    new_elements = {_element_key(value, node_id, key): value for value in new}

    for element_key, value in new_elements.items():
        if element_key not in old_elements:
            yield ArrayElementDelta(DiffType.ADDED, key, new=value)
    for element_key, value in old_elements.items():
        if element_key not in new_elements:
            yield ArrayElementDelta(DiffType.REMOVED, key, old=value)


def _union_keys(left: Mapping, right: Mapping) -> List[str]:
    return list(left) + [key for key in right if key not in left]


def _node_content(node: GraphNode) -> Dict[str, Any]:
    """Properties of a node; @id and @type are carried by NodeDiff itself."""
    return {
        key: copy.deepcopy(value)
        for key, value in node.items()
        if key not in (KEY_NODE_ID, KEY_NODE_TYPE)
    }


def _node_type(node: GraphNode) -> Optional[List[str]]:
    node_type = node.get(KEY_NODE_TYPE)
    if node_type is None:
        return None
    if isinstance(node_type, list):
        return list(node_type)
    return [node_type]


def _is_reference(value: Any) -> bool:
    return isinstance(value, Mapping) and KEY_NODE_ID in value


def _reference_id(value: Mapping, node_id: str, key: str) -> Any:
    if len(value) != 1:
        raise DiffContractError(
            f"Invalid difference type for node reference property: "
            f"reference carries keys other than {KEY_NODE_ID}, node: {node_id}, property: {key}",
            context={"node": node_id, "property": key, "keys": sorted(value)},
        )
    return value[KEY_NODE_ID]


def _element_key(value: Any, node_id: str, key: str) -> tuple:
    """Hashable identity of a property value; references are keyed by the id they point at."""
    if _is_reference(value):
        return ("reference", _value_key(_reference_id(value, node_id, key)))
    return _value_key(value)


def _value_key(value: Any) -> tuple:
    # bool is tested before int: True must not equal 1
    if isinstance(value, bool):
        return ("boolean", value)
    if isinstance(value, (int, float)):
        return ("number", value)
    if isinstance(value, str):
        return ("string", value)
    if value is None:
        return ("null", None)
    return ("json", json.dumps(_normalize_numbers(value), sort_keys=True, default=str))


def _normalize_numbers(value: Any) -> Any:
    # Nested numbers follow the top-level rule: 1 and 1.0 are the same number
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, Mapping):
        return {k: _normalize_numbers(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_numbers(v) for v in value]
    return value

"""Index graph nodes by identity."""

from typing import Dict, List

from graphdelta.diff.domain.models import KEY_NODE_ID, GraphNode


def index_graph(graph: List[GraphNode]) -> Dict[str, GraphNode]:
    """
    Map every node of a validated @graph to its @id.

    Position in the array is dropped here, which is what makes the diff
    insensitive to node order.
    """
    return {node[KEY_NODE_ID]: node for node in graph}

"""Aggregates of node differences for one document pair or a directory of them."""

from graphdelta.changes.collection_changes import CollectionChanges
from graphdelta.changes.graph_changes import GraphChanges

__all__ = ["GraphChanges", "CollectionChanges"]

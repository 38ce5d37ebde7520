"""Shared test fixtures for the graphdelta test suite."""

import copy
import json
from pathlib import Path

import pytest

VALID_GRAPH = {
    "@graph": [
        {
            "@id": "#/web-api",
            "@type": ["apiContract:WebAPI"],
            "core:name": "Test Raml",
            "core:version": "v1",
            "apiContract:endpoint": [
                {"@id": "#/web-api/end-points/resource"},
                {"@id": "#/web-api/end-points/items"},
            ],
        },
        {
            "@id": "#/web-api/end-points/resource",
            "@type": ["apiContract:EndPoint"],
            "apiContract:path": "/resource",
        },
        {
            "@id": "#/web-api/end-points/items",
            "@type": ["apiContract:EndPoint"],
            "apiContract:path": "/items",
        },
    ],
    "@context": {"@base": "test.raml"},
}


def build_valid_graph() -> dict:
    """Fresh copy of a small, valid flattened graph."""
    return copy.deepcopy(VALID_GRAPH)


@pytest.fixture
def find_node():
    """Look up a node of a graph by @id."""

    def _find(graph: dict, node_id: str) -> dict:
        return next(node for node in graph["@graph"] if node["@id"] == node_id)

    return _find


@pytest.fixture
def base_graph():
    return build_valid_graph()


@pytest.fixture
def new_graph():
    return build_valid_graph()


@pytest.fixture
def write_document(tmp_path):
    """Write a document as JSON under tmp_path and return its path."""

    def _write(name: str, document) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write

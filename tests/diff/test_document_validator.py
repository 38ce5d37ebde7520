"""Tests for document structure validation."""

import pytest

from graphdelta.diff.application.differ import find_differences
from graphdelta.diff.application.validator import LEFT, RIGHT, validate_document
from graphdelta.shared.domain.exceptions import DocumentValidationError


class TestValidateDocument:
    """Each malformed shape is rejected with its own message."""

    def test_valid_document_passes(self, base_graph):
        validate_document(base_graph, LEFT)

    def test_context_is_optional(self, base_graph):
        del base_graph["@context"]
        validate_document(base_graph, RIGHT)

    @pytest.mark.parametrize("document", [None, {}, [], "graph", 42])
    def test_invalid_object(self, document):
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(document, LEFT)
        assert str(exc_info.value) == "Error validating left document: Invalid object"

    def test_missing_graph(self):
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document({"@context": {}}, RIGHT)
        assert str(exc_info.value) == "Error validating right document: @graph property is missing"
        assert exc_info.value.side == RIGHT

    @pytest.mark.parametrize("graph", [{"@id": "#/a"}, "nodes", 1])
    def test_graph_not_array(self, graph):
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document({"@graph": graph}, LEFT)
        assert "@graph property must be an array of json nodes" in str(exc_info.value)

    def test_empty_graph(self):
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document({"@graph": []}, LEFT)
        assert "@graph property must not be empty" in str(exc_info.value)

    def test_context_not_object(self, base_graph):
        base_graph["@context"] = ["test.raml"]
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(base_graph, LEFT)
        assert "@context property must be an object" in str(exc_info.value)

    def test_node_without_id(self, base_graph):
        base_graph["@graph"].append({"core:name": "orphan"})
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(base_graph, RIGHT)
        assert "graph node at index 3 has no @id" in str(exc_info.value)
        assert exc_info.value.context == {"index": 3}

    def test_node_not_object(self, base_graph):
        base_graph["@graph"][0] = "#/web-api"
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(base_graph, LEFT)
        assert "graph node at index 0 has no @id" in str(exc_info.value)

    def test_duplicate_id(self, base_graph):
        base_graph["@graph"].append({"@id": "#/web-api"})
        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(base_graph, LEFT)
        assert "duplicate @id in graph: #/web-api" in str(exc_info.value)


class TestValidationOrder:
    """find_differences validates the left document before the right one."""

    def test_left_reported_first(self):
        with pytest.raises(DocumentValidationError) as exc_info:
            find_differences({}, {})
        assert exc_info.value.side == LEFT

    def test_right_reported_when_left_valid(self, base_graph):
        with pytest.raises(DocumentValidationError) as exc_info:
            find_differences(base_graph, {"@graph": []})
        assert str(exc_info.value) == "Error validating right document: @graph property must not be empty"

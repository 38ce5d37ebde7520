"""Tests for the graph diff engine."""

import copy

import pytest

from graphdelta.diff.application.differ import (
    diff_context,
    find_differences,
    record_array_delta,
    record_node_delta,
    record_property_delta,
    record_reference_delta,
)
from graphdelta.diff.domain.models import ArrayElementDelta, DiffType, NodeDiff, PropertyDelta
from graphdelta.shared.domain.exceptions import DiffContractError


def by_id(node_diffs):
    return {node_diff.id: node_diff for node_diff in node_diffs}


class TestIdenticalDocuments:
    """Equal documents produce no differences regardless of order."""

    def test_same_document(self, base_graph, new_graph):
        assert find_differences(base_graph, new_graph) == []

    def test_reversed_graph(self, base_graph, new_graph):
        new_graph["@graph"].reverse()
        assert find_differences(base_graph, new_graph) == []

    def test_reversed_array_property(self, base_graph, new_graph, find_node):
        find_node(new_graph, "#/web-api")["apiContract:endpoint"].reverse()
        assert find_differences(base_graph, new_graph) == []

    def test_single_node_reversed(self):
        left = {"@graph": [{"@id": "#/a", "name": "x"}], "@context": {"@base": "t.raml"}}
        right = copy.deepcopy(left)
        right["@graph"].reverse()
        assert find_differences(left, right) == []

    def test_reordered_scalar_array(self):
        left = {"@graph": [{"@id": "#/a", "endpoint": ["A", "B"]}]}
        right = {"@graph": [{"@id": "#/a", "endpoint": ["B", "A"]}]}
        assert find_differences(left, right) == []

    def test_inputs_not_modified(self, base_graph, new_graph, find_node):
        find_node(new_graph, "#/web-api")["core:name"] = "Renamed"
        new_graph["@graph"].append({"@id": "#/extra", "core:name": "extra"})
        left_before, right_before = copy.deepcopy(base_graph), copy.deepcopy(new_graph)

        find_differences(base_graph, new_graph)

        assert base_graph == left_before
        assert new_graph == right_before


class TestNodeLevelDiff:
    """Nodes present on one side only."""

    def test_added_node(self, base_graph, new_graph):
        node = {"@id": "#/b", "@type": ["apiContract:Operation"], "core:name": "get"}
        new_graph["@graph"].append(node)

        diffs = find_differences(base_graph, new_graph)

        assert len(diffs) == 1
        assert diffs[0].id == "#/b"
        assert diffs[0].added == {"core:name": "get"}
        assert diffs[0].removed == {}
        assert diffs[0].type == ["apiContract:Operation"]

    def test_removed_node(self, base_graph, new_graph):
        new_graph["@graph"] = [n for n in new_graph["@graph"] if n["@id"] != "#/web-api/end-points/items"]

        diffs = by_id(find_differences(base_graph, new_graph))

        removed = diffs["#/web-api/end-points/items"]
        assert removed.added == {}
        assert removed.removed == {"apiContract:path": "/items"}
        assert removed.type == ["apiContract:EndPoint"]

    def test_added_and_removed_together(self):
        left = {"@graph": [{"@id": "#/a", "name": "x"}]}
        right = {"@graph": [{"@id": "#/b", "name": "x"}]}

        diffs = by_id(find_differences(left, right))

        assert set(diffs) == {"#/a", "#/b"}
        assert diffs["#/a"].removed == {"name": "x"}
        assert diffs["#/b"].added == {"name": "x"}

    def test_node_content_without_id_and_type(self):
        left = {"@graph": [{"@id": "#/a"}]}
        right = {"@graph": [{"@id": "#/a"}, {"@id": "#/b", "@type": ["t:B"], "name": "x"}]}

        diffs = find_differences(left, right)

        assert diffs[0].added == {"name": "x"}
        assert "@id" not in diffs[0].added
        assert "@type" not in diffs[0].added

    def test_node_content_is_copied(self):
        left = {"@graph": [{"@id": "#/a", "tags": ["a"], "schema": {"items": [1]}}]}
        right = {"@graph": [{"@id": "#/b"}]}

        removed = by_id(find_differences(left, right))["#/a"].removed
        removed["tags"].append("b")
        removed["schema"]["items"].append(2)

        assert left["@graph"][0] == {"@id": "#/a", "tags": ["a"], "schema": {"items": [1]}}

    def test_modified_value_is_copied(self):
        left = {"@graph": [{"@id": "#/a", "schema": {"items": [1]}}]}
        right = {"@graph": [{"@id": "#/a", "schema": {"items": [2]}}]}

        diffs = find_differences(left, right)
        diffs[0].added["schema"]["items"].append(3)

        assert right["@graph"][0]["schema"] == {"items": [2]}

    def test_single_type_normalized_to_list(self):
        left = {"@graph": [{"@id": "#/a"}]}
        right = {"@graph": [{"@id": "#/a"}, {"@id": "#/b", "@type": "core:Thing"}]}

        diffs = find_differences(left, right)

        assert diffs[0].type == ["core:Thing"]


class TestPropertyLevelDiff:
    """Scalar, reference and array properties of shared nodes."""

    def test_modified_scalar(self):
        left = {"@graph": [{"@id": "#/a", "name": "x"}]}
        right = {"@graph": [{"@id": "#/a", "name": "y"}]}

        diffs = find_differences(left, right)

        assert len(diffs) == 1
        assert diffs[0].id == "#/a"
        assert diffs[0].removed == {"name": "x"}
        assert diffs[0].added == {"name": "y"}

    def test_added_and_removed_property(self):
        left = {"@graph": [{"@id": "#/a", "old": 1}]}
        right = {"@graph": [{"@id": "#/a", "new": 2}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"old": 1}
        assert diffs[0].added == {"new": 2}

    @pytest.mark.parametrize(
        "old, new",
        [
            ("1", 1),
            (True, 1),
            (False, 0),
            (None, "null"),
            ("true", True),
        ],
    )
    def test_no_type_coercion(self, old, new):
        left = {"@graph": [{"@id": "#/a", "value": old}]}
        right = {"@graph": [{"@id": "#/a", "value": new}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"value": old}
        assert diffs[0].added == {"value": new}

    def test_int_and_float_with_same_value_are_equal(self):
        left = {"@graph": [{"@id": "#/a", "value": 1}]}
        right = {"@graph": [{"@id": "#/a", "value": 1.0}]}
        assert find_differences(left, right) == []

    def test_nested_int_and_float_with_same_value_are_equal(self):
        left = {"@graph": [{"@id": "#/a", "value": {"v": 1, "range": [0, 2]}, "tags": [{"n": 1}]}]}
        right = {"@graph": [{"@id": "#/a", "value": {"v": 1.0, "range": [0.0, 2]}, "tags": [{"n": 1.0}]}]}
        assert find_differences(left, right) == []

    def test_nested_numbers_still_strict_by_type(self):
        left = {"@graph": [{"@id": "#/a", "value": {"v": 1}}]}
        right = {"@graph": [{"@id": "#/a", "value": {"v": True}}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"value": {"v": 1}}
        assert diffs[0].added == {"value": {"v": True}}

    def test_type_change_is_a_modification(self):
        left = {"@graph": [{"@id": "#/a", "@type": ["core:A"]}]}
        right = {"@graph": [{"@id": "#/a", "@type": ["core:B"]}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"@type": ["core:A"]}
        assert diffs[0].added == {"@type": ["core:B"]}
        assert diffs[0].type == ["core:B"]

    def test_nested_object_compared_by_content(self):
        left = {"@graph": [{"@id": "#/a", "value": {"@value": "1", "@type": "xsd:int"}}]}
        right = {"@graph": [{"@id": "#/a", "value": {"@type": "xsd:int", "@value": "1"}}]}
        assert find_differences(left, right) == []

    def test_scalar_replaced_by_array(self):
        left = {"@graph": [{"@id": "#/a", "value": "x"}]}
        right = {"@graph": [{"@id": "#/a", "value": ["x"]}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"value": "x"}
        assert diffs[0].added == {"value": ["x"]}


class TestReferences:
    """References are compared by the id they point at."""

    def test_same_reference(self):
        left = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s"}}]}
        right = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s"}}]}
        assert find_differences(left, right) == []

    def test_changed_reference(self):
        left = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s1"}}]}
        right = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s2"}}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"schema": {"@id": "#/s1"}}
        assert diffs[0].added == {"schema": {"@id": "#/s2"}}

    def test_reference_with_extra_keys_rejected(self):
        left = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s1", "name": "s"}}]}
        right = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s2"}}]}

        with pytest.raises(DiffContractError) as exc_info:
            find_differences(left, right)
        assert "Invalid difference type for node reference property" in str(exc_info.value)

    def test_reference_array_with_extra_keys_rejected(self):
        left = {"@graph": [{"@id": "#/a", "items": [{"@id": "#/i1", "extra": True}]}]}
        right = {"@graph": [{"@id": "#/a", "items": [{"@id": "#/i1"}]}]}

        with pytest.raises(DiffContractError):
            find_differences(left, right)

    def test_reference_replaced_by_scalar(self):
        left = {"@graph": [{"@id": "#/a", "schema": {"@id": "#/s"}}]}
        right = {"@graph": [{"@id": "#/a", "schema": "#/s"}]}

        diffs = find_differences(left, right)

        assert diffs[0].removed == {"schema": {"@id": "#/s"}}
        assert diffs[0].added == {"schema": "#/s"}


class TestArrays:
    """Array properties are compared as sets."""

    def test_element_added_and_removed(self):
        left = {"@graph": [{"@id": "#/a", "tags": ["a", "b"]}]}
        right = {"@graph": [{"@id": "#/a", "tags": ["b", "c"]}]}

        diffs = find_differences(left, right)

        assert diffs[0].added == {"tags": ["c"]}
        assert diffs[0].removed == {"tags": ["a"]}

    def test_only_additions(self):
        left = {"@graph": [{"@id": "#/a", "tags": ["a"]}]}
        right = {"@graph": [{"@id": "#/a", "tags": ["a", "b", "c"]}]}

        diffs = find_differences(left, right)

        assert diffs[0].added == {"tags": ["b", "c"]}
        assert "tags" not in diffs[0].removed

    def test_reference_elements(self, base_graph, new_graph, find_node):
        endpoints = find_node(new_graph, "#/web-api")["apiContract:endpoint"]
        endpoints.remove({"@id": "#/web-api/end-points/items"})
        endpoints.insert(0, {"@id": "#/web-api/end-points/orders"})

        diffs = by_id(find_differences(base_graph, new_graph))

        web_api = diffs["#/web-api"]
        assert web_api.added == {"apiContract:endpoint": [{"@id": "#/web-api/end-points/orders"}]}
        assert web_api.removed == {"apiContract:endpoint": [{"@id": "#/web-api/end-points/items"}]}

    def test_strict_element_equality(self):
        left = {"@graph": [{"@id": "#/a", "values": [1, "2", True]}]}
        right = {"@graph": [{"@id": "#/a", "values": ["1", 2, True]}]}

        diffs = find_differences(left, right)

        assert diffs[0].added == {"values": ["1", 2]}
        assert diffs[0].removed == {"values": [1, "2"]}

    def test_duplicate_elements_collapse(self):
        left = {"@graph": [{"@id": "#/a", "tags": ["a", "a"]}]}
        right = {"@graph": [{"@id": "#/a", "tags": ["a"]}]}
        assert find_differences(left, right) == []

    def test_empty_to_empty(self):
        left = {"@graph": [{"@id": "#/a", "tags": []}]}
        right = {"@graph": [{"@id": "#/a", "tags": []}]}
        assert find_differences(left, right) == []


class TestContext:
    """@context is compared as one flat pseudo-node."""

    def test_changed_base(self, base_graph, new_graph):
        new_graph["@context"]["@base"] = "other.raml"

        diffs = find_differences(base_graph, new_graph)

        assert len(diffs) == 1
        assert diffs[0].id == "@context"
        assert diffs[0].type == ["context"]
        assert diffs[0].removed == {"@base": "test.raml"}
        assert diffs[0].added == {"@base": "other.raml"}

    def test_missing_context_on_one_side(self, base_graph, new_graph):
        del new_graph["@context"]

        diffs = find_differences(base_graph, new_graph)

        assert diffs[0].id == "@context"
        assert diffs[0].removed == {"@base": "test.raml"}
        assert diffs[0].added == {}

    def test_context_missing_on_both_sides(self, base_graph, new_graph):
        del base_graph["@context"]
        del new_graph["@context"]
        assert find_differences(base_graph, new_graph) == []

    def test_identical_context(self):
        assert diff_context({"@base": "a", "core": "http://a.ml/core#"}, {"core": "http://a.ml/core#", "@base": "a"}) is None

    def test_context_reported_after_nodes(self, base_graph, new_graph, find_node):
        find_node(new_graph, "#/web-api")["core:name"] = "Renamed"
        new_graph["@context"]["@base"] = "other.raml"

        diffs = find_differences(base_graph, new_graph)

        assert [d.id for d in diffs] == ["#/web-api", "@context"]


class TestDiffContract:
    """Recording a delta of the wrong kind is a contract violation."""

    def test_moved_node(self):
        with pytest.raises(DiffContractError) as exc_info:
            record_node_delta(DiffType.MOVED, {"@id": "#/a"})
        assert str(exc_info.value) == "Invalid difference type for node: moved, node: #/a"

    @pytest.mark.parametrize("kind", [DiffType.MODIFIED, DiffType.REFERENCE_CHANGED])
    def test_node_only_added_or_removed(self, kind):
        with pytest.raises(DiffContractError):
            record_node_delta(kind, {"@id": "#/a"})

    def test_moved_property(self):
        node_diff = NodeDiff(id="#/a")
        with pytest.raises(DiffContractError) as exc_info:
            record_property_delta(node_diff, PropertyDelta(DiffType.MOVED, "name", old="x", new="y"))
        assert "Invalid difference type for node property: moved" in str(exc_info.value)
        assert exc_info.value.context["property"] == "name"

    def test_moved_array_element(self):
        node_diff = NodeDiff(id="#/a")
        with pytest.raises(DiffContractError) as exc_info:
            record_property_delta(node_diff, ArrayElementDelta(DiffType.MOVED, "tags", old="x"))
        assert "Invalid difference type for node array property: moved" in str(exc_info.value)

    def test_modified_array_element(self):
        with pytest.raises(DiffContractError):
            record_array_delta(NodeDiff(id="#/a"), ArrayElementDelta(DiffType.MODIFIED, "tags"))

    def test_reference_delta_of_wrong_kind(self):
        with pytest.raises(DiffContractError) as exc_info:
            record_reference_delta(NodeDiff(id="#/a"), PropertyDelta(DiffType.ADDED, "schema", new="#/s"))
        assert "Invalid difference type for node reference property: added" in str(exc_info.value)

    def test_failed_record_leaves_diff_untouched(self):
        node_diff = NodeDiff(id="#/a")
        with pytest.raises(DiffContractError):
            record_property_delta(node_diff, PropertyDelta(DiffType.MOVED, "name"))
        assert node_diff.is_empty()

    def test_array_elements_accumulate(self):
        node_diff = NodeDiff(id="#/a")
        record_property_delta(node_diff, ArrayElementDelta(DiffType.ADDED, "tags", new="a"))
        record_property_delta(node_diff, ArrayElementDelta(DiffType.ADDED, "tags", new="b"))
        assert node_diff.added == {"tags": ["a", "b"]}

"""Tests for the tree validation engine."""

from __future__ import annotations

from typing import Any, Literal

import pytest
from pydantic import BaseModel, ConfigDict, Field

from stackspec.exceptions import SchemaDefinitionError, TreeValidationError
from stackspec.schemas.issues import IssueKind
from stackspec.tree import TreeSchema, Variant


class _Node(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")


class LeafA(_Node):
    kind: Literal["leafA"]
    name: str
    id: str | None = None


class LeafB(_Node):
    kind: Literal["leafB"]
    size: int = Field(default=1, ge=1)
    id: str | None = None


class Container(_Node):
    kind: Literal["container"]
    expanded: bool = False
    id: str | None = None
    children: list[Any] = Field(default_factory=list)


TOY = TreeSchema(
    "toy",
    [
        Variant("leafA", LeafA),
        Variant("leafB", LeafB),
        Variant("container", Container, children="children"),
    ],
    discriminator="kind",
    id_field="id",
)


def _paths(result) -> list[list[Any]]:
    return [issue.path for issue in result.errors]


def _nested(depth: int, leaf: dict[str, Any]) -> dict[str, Any]:
    node = leaf
    for _ in range(depth):
        node = {"kind": "container", "children": [node]}
    return node


class TestScenarios:
    """The canonical accept/reject scenarios."""

    def test_container_with_leaf_gets_defaults(self) -> None:
        result = TOY.validate({"kind": "container", "children": [{"kind": "leafA", "name": "x"}]})

        assert result.ok
        assert result.value.expanded is False
        assert len(result.value.children) == 1
        child = result.value.children[0]
        assert isinstance(child, LeafA)
        assert child.name == "x"

    def test_leaf_missing_required_field(self) -> None:
        result = TOY.validate({"kind": "leafA"})

        assert not result.ok
        assert len(result.errors) == 1
        assert result.errors[0].kind is IssueKind.MISSING_REQUIRED_FIELD
        assert result.errors[0].path == ["name"]

    def test_unknown_root_variant(self) -> None:
        result = TOY.validate({"kind": "bogus"})

        assert len(result.errors) == 1
        assert result.errors[0].kind is IssueKind.UNRECOGNIZED_VARIANT
        assert result.errors[0].path == []
        assert result.errors[0].received == "'bogus'"

    def test_errors_from_sibling_children_are_all_reported(self) -> None:
        result = TOY.validate({"kind": "container", "children": [{"kind": "leafA"}, {"kind": "bogus"}]})

        assert _paths(result) == [["children", 0, "name"], ["children", 1, "kind"]]
        assert [issue.kind for issue in result.errors] == [
            IssueKind.MISSING_REQUIRED_FIELD,
            IssueKind.UNRECOGNIZED_VARIANT,
        ]

    def test_cycle_at_depth_three(self) -> None:
        root: dict[str, Any] = {"kind": "container", "children": []}
        middle: dict[str, Any] = {"kind": "container", "children": []}
        inner: dict[str, Any] = {"kind": "container", "children": [root]}
        root["children"].append(middle)
        middle["children"].append(inner)

        result = TOY.validate(root)

        assert len(result.errors) == 1
        issue = result.errors[0]
        assert issue.kind is IssueKind.CYCLIC_STRUCTURE
        assert issue.path == ["children", 0, "children", 0, "children", 0]


class TestDiscriminator:
    """Tests for variant dispatch."""

    def test_missing_discriminator_at_root(self) -> None:
        result = TOY.validate({"name": "x"})

        assert result.errors[0].kind is IssueKind.UNRECOGNIZED_VARIANT
        assert result.errors[0].path == []
        assert result.errors[0].received is None
        assert "Missing discriminator" in result.errors[0].message

    def test_missing_discriminator_on_child_points_at_tag(self) -> None:
        result = TOY.validate({"kind": "container", "children": [{"name": "x"}]})

        assert _paths(result) == [["children", 0, "kind"]]

    def test_non_string_discriminator(self) -> None:
        result = TOY.validate({"kind": 3})

        assert result.errors[0].kind is IssueKind.UNRECOGNIZED_VARIANT
        assert result.errors[0].received == "3"

    def test_expected_lists_known_tags(self) -> None:
        result = TOY.validate({"kind": "bogus"})

        assert result.errors[0].expected == "one of 'leafA', 'leafB', 'container'"

    def test_non_mapping_node(self) -> None:
        result = TOY.validate([{"kind": "leafA", "name": "x"}])

        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH
        assert result.errors[0].received == "array"

    def test_non_mapping_child(self) -> None:
        result = TOY.validate({"kind": "container", "children": ["leafA"]})

        assert _paths(result) == [["children", 0]]
        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH

    def test_tags_in_declaration_order(self) -> None:
        assert TOY.tags == ("leafA", "leafB", "container")


class TestVariantIsolation:
    """Fields of one variant never satisfy or leak into another."""

    def test_foreign_field_does_not_mask_required_check(self) -> None:
        result = TOY.validate({"kind": "leafA", "size": 3})

        found = {(issue.kind, tuple(issue.path)) for issue in result.errors}
        assert (IssueKind.MISSING_REQUIRED_FIELD, ("name",)) in found
        assert (IssueKind.CONSTRAINT_VIOLATION, ("size",)) in found

    def test_children_on_leaf_are_not_walked(self) -> None:
        result = TOY.validate({"kind": "leafA", "name": "x", "children": [{"kind": "bogus"}]})

        assert _paths(result) == [["children"]]
        assert result.errors[0].kind is IssueKind.CONSTRAINT_VIOLATION
        assert result.errors[0].message == "Unrecognized field 'children'"

    def test_children_must_be_a_list(self) -> None:
        result = TOY.validate({"kind": "container", "children": "nope"})

        assert _paths(result) == [["children"]]
        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH
        assert result.errors[0].expected == "array"
        assert result.errors[0].received == "string"


class TestDefaults:
    """Defaults apply only to absent fields."""

    def test_default_applied_when_absent(self) -> None:
        result = TOY.validate({"kind": "leafB"})

        assert result.value.size == 1

    def test_explicit_value_preserved(self) -> None:
        result = TOY.validate({"kind": "container", "expanded": True, "children": []})

        assert result.value.expanded is True

    def test_explicit_null_is_not_defaulted(self) -> None:
        result = TOY.validate({"kind": "container", "expanded": None, "children": []})

        assert _paths(result) == [["expanded"]]
        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH
        assert result.errors[0].expected == "boolean"

    def test_strict_types(self) -> None:
        result = TOY.validate({"kind": "leafB", "size": "3"})

        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH
        assert result.errors[0].expected == "integer"
        assert result.errors[0].received == "'3'"

    def test_bounds_are_constraints(self) -> None:
        result = TOY.validate({"kind": "leafB", "size": 0})

        assert result.errors[0].kind is IssueKind.CONSTRAINT_VIOLATION
        assert result.errors[0].expected == "number >= 1"
        assert result.errors[0].received == "0"


class TestCollection:
    """Every independent issue is reported in one call."""

    def test_reports_violations_across_branches(self) -> None:
        raw = {
            "kind": "container",
            "expanded": "yes",
            "children": [
                {"kind": "leafA"},
                {"kind": "container", "children": [{"kind": "leafB", "size": -1}]},
                {"kind": "leafB", "extra": True},
            ],
        }

        result = TOY.validate(raw)

        assert _paths(result) == [
            ["expanded"],
            ["children", 0, "name"],
            ["children", 1, "children", 0, "size"],
            ["children", 2, "extra"],
        ]

    def test_deterministic(self) -> None:
        raw = {"kind": "container", "children": [{"kind": "leafA"}, {"kind": "bogus"}, 7]}

        first = TOY.validate(raw)
        second = TOY.validate(raw)

        assert first.errors == second.errors

    def test_input_is_not_mutated(self) -> None:
        raw = {"kind": "container", "children": [{"kind": "leafB"}]}

        TOY.validate(raw)

        assert raw == {"kind": "container", "children": [{"kind": "leafB"}]}


class TestCycles:
    """Cyclic object graphs are rejected without crashing."""

    def test_node_containing_itself(self) -> None:
        node: dict[str, Any] = {"kind": "container", "children": []}
        node["children"].append(node)

        result = TOY.validate(node)

        assert [issue.kind for issue in result.errors] == [IssueKind.CYCLIC_STRUCTURE]
        assert _paths(result) == [["children", 0]]

    def test_shared_children_list(self) -> None:
        shared: list[Any] = []
        outer = {"kind": "container", "children": shared}
        inner = {"kind": "container", "children": shared}
        shared.append(inner)

        result = TOY.validate(outer)

        assert [issue.kind for issue in result.errors] == [IssueKind.CYCLIC_STRUCTURE]
        assert _paths(result) == [["children", 0, "children", 0]]

    def test_shared_subtree_without_cycle_is_valid(self) -> None:
        shared = {"kind": "leafA", "name": "s"}
        raw = {"kind": "container", "children": [shared, {"kind": "container", "children": [shared]}]}

        result = TOY.validate(raw)

        assert result.ok
        assert result.value.children[0] == result.value.children[1].children[0]


class TestDepth:
    """Depth handling."""

    @pytest.mark.slow
    def test_deep_tree_beyond_recursion_limit(self) -> None:
        depth = 5000
        result = TOY.validate(_nested(depth, {"kind": "leafA", "name": "bottom"}))

        assert result.ok
        node = result.value
        levels = 0
        while isinstance(node, Container):
            node = node.children[0]
            levels += 1
        assert levels == depth
        assert node.name == "bottom"

    @pytest.mark.slow
    def test_deep_invalid_leaf_is_located(self) -> None:
        depth = 3000
        result = TOY.validate(_nested(depth, {"kind": "leafA"}))

        assert len(result.errors) == 1
        assert result.errors[0].path == ["children", 0] * depth + ["name"]

    @pytest.mark.slow
    def test_deep_tree_dump_round_trip(self) -> None:
        depth = 3000
        first = TOY.validate(_nested(depth, {"kind": "leafB", "size": 2}))

        dumped = TOY.dump(first.value)

        assert TOY.validate(dumped).ok

    def test_max_depth_limit(self) -> None:
        raw = _nested(2, {"kind": "leafA", "name": "x"})

        result = TOY.validate(raw, max_depth=2)

        assert _paths(result) == [["children", 0, "children", 0]]
        assert result.errors[0].kind is IssueKind.CONSTRAINT_VIOLATION
        assert result.errors[0].expected == "depth <= 2"

    def test_zero_max_depth_is_unlimited(self) -> None:
        assert TOY.validate(_nested(50, {"kind": "leafB"}), max_depth=0).ok


class TestIdentifiers:
    """Opt-in identifier uniqueness."""

    @pytest.fixture
    def duplicated(self) -> dict[str, Any]:
        return {
            "kind": "container",
            "id": "root",
            "children": [
                {"kind": "leafA", "name": "a", "id": "dup"},
                {"kind": "leafB", "id": "dup"},
            ],
        }

    def test_duplicates_allowed_by_default(self, duplicated: dict[str, Any]) -> None:
        assert TOY.validate(duplicated).ok

    def test_duplicates_reported_when_requested(self, duplicated: dict[str, Any]) -> None:
        result = TOY.validate(duplicated, unique_ids=True)

        assert _paths(result) == [["children", 1, "id"]]
        assert result.errors[0].kind is IssueKind.CONSTRAINT_VIOLATION
        assert "children[0]" in result.errors[0].message

    def test_uniqueness_spans_a_forest(self) -> None:
        result = TOY.validate_many(
            [{"kind": "leafB", "id": "a"}, {"kind": "leafA", "name": "n", "id": "a"}],
            unique_ids=True,
        )

        assert _paths(result) == [[1, "id"]]


class TestValidateMany:
    """Tests for sequences of trees."""

    def test_returns_list_of_nodes(self) -> None:
        result = TOY.validate_many([{"kind": "leafB"}, {"kind": "leafA", "name": "x"}])

        assert result.ok
        assert [type(node) for node in result.value] == [LeafB, LeafA]

    def test_element_paths_are_indexed(self) -> None:
        result = TOY.validate_many([{"kind": "leafB"}, {"kind": "bogus"}], path=("items",))

        assert _paths(result) == [["items", 1, "kind"]]

    def test_rejects_non_list(self) -> None:
        result = TOY.validate_many({"kind": "leafB"})

        assert result.errors[0].kind is IssueKind.TYPE_MISMATCH
        assert result.errors[0].expected == "array"
        assert result.errors[0].received == "object"

    def test_empty_list(self) -> None:
        result = TOY.validate_many([])

        assert result.ok
        assert result.value == []


class TestParseAndDump:
    """Tests for parse and dump."""

    def test_parse_returns_node(self) -> None:
        node = TOY.parse({"kind": "leafA", "name": "x"})

        assert node == LeafA(kind="leafA", name="x")

    def test_parse_raises_with_issues(self) -> None:
        with pytest.raises(TreeValidationError) as exc_info:
            TOY.parse({"kind": "container", "children": [{"kind": "leafA"}]})

        assert [issue.path for issue in exc_info.value.issues] == [["children", 0, "name"]]
        assert "children[0].name" in str(exc_info.value)

    def test_round_trip_is_idempotent(self) -> None:
        raw = {
            "kind": "container",
            "children": [
                {"kind": "leafA", "name": "x"},
                {"kind": "container", "expanded": True, "children": [{"kind": "leafB"}]},
            ],
        }

        first = TOY.validate(raw)
        dumped = TOY.dump(first.value)
        second = TOY.validate(dumped)

        assert second.ok
        assert second.value == first.value
        assert dumped["children"][1]["children"][0] == {"kind": "leafB", "size": 1}
        assert dumped["expanded"] is False

    def test_dump_preserves_child_order(self) -> None:
        raw = {"kind": "container", "children": [{"kind": "leafA", "name": str(i)} for i in range(10)]}

        dumped = TOY.dump(TOY.parse(raw))

        assert [child["name"] for child in dumped["children"]] == [str(i) for i in range(10)]

    def test_dump_rejects_foreign_model(self) -> None:
        class Other(BaseModel):
            kind: str = "leafA"

        with pytest.raises(TypeError, match="not a toy node"):
            TOY.dump(Other())


class TestSchemaDefinition:
    """Inconsistent schema declarations fail at construction."""

    def test_duplicate_tag(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="Duplicate variant tag"):
            TreeSchema("bad", [Variant("leafA", LeafA), Variant("leafA", LeafA)], discriminator="kind")

    def test_model_without_discriminator(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="no discriminator field"):
            TreeSchema("bad", [Variant("leafA", LeafA)], discriminator="type")

    def test_missing_child_field(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="no child field"):
            TreeSchema("bad", [Variant("leafA", LeafA, children="children")], discriminator="kind")

    def test_required_children_without_field(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="requires children"):
            TreeSchema("bad", [Variant("leafA", LeafA, children_required=True)], discriminator="kind")

    def test_no_variants(self) -> None:
        with pytest.raises(SchemaDefinitionError, match="no variants"):
            TreeSchema("bad", [], discriminator="kind")

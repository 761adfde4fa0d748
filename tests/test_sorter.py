"""Tests for dependency graphing and topological ordering."""

import random

import pytest

from gql_typegen.core.errors import CircularDependencyError, UnknownTypeError
from gql_typegen.core.ir import (
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    ObjectType,
    ScalarType,
    TypeKind,
    TypeRef,
    UnionType,
)
from gql_typegen.core.sorter import (
    build_dependency_graph,
    sort_types_by_dependency_order,
    type_dependencies,
)


def named(kind: TypeKind, name: str) -> TypeRef:
    return TypeRef(kind=kind, name=name)


def non_null(ref: TypeRef) -> TypeRef:
    return TypeRef(kind=TypeKind.NON_NULL, of_type=ref)


def list_of(ref: TypeRef) -> TypeRef:
    return TypeRef(kind=TypeKind.LIST, of_type=ref)


def obj(name: str, *field_refs: TypeRef, interfaces=()) -> ObjectType:
    return ObjectType(
        name=name,
        fields=[Field(name=f"f{i}", type=r) for i, r in enumerate(field_refs)],
        interfaces=[named(TypeKind.INTERFACE, i) for i in interfaces],
    )


STRING = named(TypeKind.SCALAR, "String")


def assert_dependency_order(sorted_types, all_types):
    """Every custom type appears once and after all of its dependencies."""
    names = [t.name for t in sorted_types]
    custom = [t.name for t in all_types if t.kind.is_custom]
    assert sorted(names) == sorted(custom)
    position = {name: i for i, name in enumerate(names)}
    for t in sorted_types:
        for dependency in type_dependencies(t):
            assert position[dependency] < position[t.name], (dependency, t.name)


# =============================================================================
# Tests: Dependency edges
# =============================================================================


class TestTypeDependencies:
    """Tests for type_dependencies."""

    def test_field_types_are_unwrapped(self):
        t = obj("Film", non_null(list_of(non_null(named(TypeKind.OBJECT, "Planet")))))
        assert type_dependencies(t) == ["Planet"]

    def test_scalars_add_no_edges(self):
        t = obj("Film", STRING, non_null(named(TypeKind.SCALAR, "ID")))
        assert type_dependencies(t) == []

    def test_argument_types(self):
        # foo(bar: SomeInputObject): SomeEnum
        t = ObjectType(
            name="Query",
            fields=[
                Field(
                    name="foo",
                    type=named(TypeKind.ENUM, "SomeEnum"),
                    args=[InputValue(name="bar", type=named(TypeKind.INPUT_OBJECT, "SomeInputObject"))],
                )
            ],
        )
        assert type_dependencies(t) == ["SomeEnum", "SomeInputObject"]

    def test_input_fields(self):
        t = InputObjectType(
            name="ReviewInput",
            input_fields=[
                InputValue(name="stars", type=non_null(named(TypeKind.SCALAR, "Int"))),
                InputValue(name="color", type=named(TypeKind.INPUT_OBJECT, "ColorInput")),
            ],
        )
        assert type_dependencies(t) == ["ColorInput"]

    def test_interfaces(self):
        t = obj("Droid", STRING, interfaces=["Character", "Node"])
        assert type_dependencies(t) == ["Character", "Node"]

    def test_interface_fields_but_not_possible_types(self):
        t = InterfaceType(
            name="Character",
            fields=[Field(name="episode", type=named(TypeKind.ENUM, "Episode"))],
            possible_types=[named(TypeKind.OBJECT, "Droid")],
        )
        assert type_dependencies(t) == ["Episode"]

    def test_union_members_add_no_edges(self):
        t = UnionType(
            name="SearchResult",
            possible_types=[named(TypeKind.OBJECT, "Droid"), named(TypeKind.OBJECT, "Human")],
        )
        assert type_dependencies(t) == []

    def test_duplicates_collapse(self):
        episode = named(TypeKind.ENUM, "Episode")
        t = obj("Film", episode, list_of(episode))
        assert type_dependencies(t) == ["Episode"]


class TestBuildDependencyGraph:
    """Tests for build_dependency_graph."""

    def test_only_custom_types_are_nodes(self):
        graph = build_dependency_graph([
            ScalarType(name="String"),
            EnumType(name="Episode"),
            obj("Film", named(TypeKind.ENUM, "Episode")),
        ])
        assert list(graph.types) == ["Episode", "Film"]
        assert graph.dependencies == {"Episode": set(), "Film": {"Episode"}}
        assert graph.dependents == {"Episode": ["Film"], "Film": []}
        assert graph.edge_count == 1

    def test_unknown_dependency(self):
        with pytest.raises(UnknownTypeError) as exc_info:
            build_dependency_graph([obj("Film", named(TypeKind.OBJECT, "Planet"))])
        assert exc_info.value.type_name == "Film"
        assert exc_info.value.dependency == "Planet"


# =============================================================================
# Tests: Ordering
# =============================================================================


class TestSortTypes:
    """Tests for sort_types_by_dependency_order."""

    def test_empty_for_scalar_only_schema(self):
        types = [ScalarType(name=n) for n in ("Int", "Float", "String", "Boolean", "ID")]
        assert sort_types_by_dependency_order(types) == []

    def test_dependencies_come_first(self):
        types = [
            obj("Film", named(TypeKind.OBJECT, "Planet"), named(TypeKind.ENUM, "Episode")),
            obj("Planet", named(TypeKind.ENUM, "Climate")),
            EnumType(name="Episode", enum_values=[EnumValue(name="EMPIRE")]),
            EnumType(name="Climate"),
        ]
        result = sort_types_by_dependency_order(types)
        assert [t.name for t in result] == ["Episode", "Climate", "Planet", "Film"]

    def test_argument_dependencies_are_honored(self):
        types = [
            ObjectType(
                name="Query",
                fields=[
                    Field(
                        name="foo",
                        type=named(TypeKind.ENUM, "SomeEnum"),
                        args=[InputValue(name="bar", type=named(TypeKind.INPUT_OBJECT, "SomeInputObject"))],
                    )
                ],
            ),
            InputObjectType(name="SomeInputObject"),
            EnumType(name="SomeEnum"),
        ]
        names = [t.name for t in sort_types_by_dependency_order(types)]
        assert names.index("SomeInputObject") < names.index("Query")
        assert names.index("SomeEnum") < names.index("Query")

    def test_interface_before_implementation(self):
        types = [
            obj("Droid", STRING, interfaces=["Character"]),
            InterfaceType(name="Character", possible_types=[named(TypeKind.OBJECT, "Droid")]),
        ]
        assert [t.name for t in sort_types_by_dependency_order(types)] == ["Character", "Droid"]

    def test_union_before_members_is_allowed(self):
        types = [
            UnionType(name="SearchResult", possible_types=[named(TypeKind.OBJECT, "Droid")]),
            obj("Droid", STRING),
        ]
        assert [t.name for t in sort_types_by_dependency_order(types)] == ["SearchResult", "Droid"]

    def test_deterministic(self):
        types = [EnumType(name=f"E{i}") for i in range(20)]
        first = [t.name for t in sort_types_by_dependency_order(types)]
        second = [t.name for t in sort_types_by_dependency_order(types)]
        assert first == second == [f"E{i}" for i in range(20)]

    def test_random_acyclic_graphs(self):
        rng = random.Random(1234)
        for _ in range(25):
            count = rng.randint(1, 15)
            # Edges only point to lower indices, so the graph is acyclic
            types = []
            for i in range(count):
                deps = rng.sample(range(i), rng.randint(0, i)) if i else []
                types.append(obj(f"T{i}", *(named(TypeKind.OBJECT, f"T{d}") for d in deps)))
            rng.shuffle(types)
            types.append(ScalarType(name="String"))

            result = sort_types_by_dependency_order(types)
            assert_dependency_order(result, types)


class TestCircularDependencies:
    """Tests for cycle detection."""

    def test_two_type_cycle(self):
        types = [
            obj("A", named(TypeKind.OBJECT, "B")),
            obj("B", named(TypeKind.OBJECT, "A")),
        ]
        with pytest.raises(CircularDependencyError) as exc_info:
            sort_types_by_dependency_order(types)
        assert exc_info.value.type_names == ["A", "B"]

    def test_wrappers_do_not_break_cycles(self):
        types = [
            obj("A", list_of(non_null(named(TypeKind.OBJECT, "B")))),
            obj("B", non_null(named(TypeKind.OBJECT, "A"))),
        ]
        with pytest.raises(CircularDependencyError):
            sort_types_by_dependency_order(types)

    def test_self_reference(self):
        types = [obj("User", list_of(named(TypeKind.OBJECT, "User")))]
        with pytest.raises(CircularDependencyError, match="User"):
            sort_types_by_dependency_order(types)

    def test_only_unresolved_types_reported(self):
        types = [
            EnumType(name="Episode"),
            obj("A", named(TypeKind.OBJECT, "B"), named(TypeKind.ENUM, "Episode")),
            obj("B", named(TypeKind.OBJECT, "A")),
            obj("C", named(TypeKind.OBJECT, "A")),
        ]
        with pytest.raises(CircularDependencyError) as exc_info:
            sort_types_by_dependency_order(types)
        assert exc_info.value.type_names == ["A", "B", "C"]

"""Dependency ordering of custom schema types.

A custom type depends on every custom type reachable through its fields,
field arguments, input fields and declared interfaces (after stripping
LIST/NON_NULL wrappers). Union members add no edges. The sorter emits types
so that each one comes after everything it depends on.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from .errors import CircularDependencyError, UnknownTypeError
from .ir import (
    InputObjectType,
    InterfaceType,
    NamedType,
    ObjectType,
    TypeRef,
)

logger = logging.getLogger(__name__)


def type_dependencies(named_type: NamedType) -> list[str]:
    """Return names of custom types ``named_type`` depends on, first-seen order."""
    dependencies: list[str] = []

    def add(ref: TypeRef):
        if ref.name and ref.kind.is_custom and ref.name not in dependencies:
            dependencies.append(ref.name)

    if isinstance(named_type, (ObjectType, InterfaceType)):
        for f in named_type.fields:
            add(f.type.underlying_type())
            for arg in f.args:
                add(arg.type.underlying_type())

    if isinstance(named_type, InputObjectType):
        for input_field in named_type.input_fields:
            add(input_field.type.underlying_type())

    if isinstance(named_type, ObjectType):
        for interface in named_type.interfaces:
            add(interface)

    return dependencies


@dataclass
class DependencyGraph:
    """Outstanding dependencies per custom type and the inverse edges."""
    types: dict[str, NamedType] = field(default_factory=dict)
    dependencies: dict[str, set[str]] = field(default_factory=dict)
    dependents: dict[str, list[str]] = field(default_factory=dict)

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self.dependencies.values())


def build_dependency_graph(types: list[NamedType]) -> DependencyGraph:
    """Build the dependency graph over the custom types in ``types``.

    Raises:
        UnknownTypeError: a type depends on a name that is not in ``types``
    """
    graph = DependencyGraph()
    for named_type in types:
        if named_type.kind.is_custom:
            graph.types[named_type.name] = named_type
            graph.dependencies[named_type.name] = set()
            graph.dependents[named_type.name] = []

    for name, named_type in graph.types.items():
        for dependency in type_dependencies(named_type):
            if dependency not in graph.types:
                raise UnknownTypeError(name, dependency)
            graph.dependencies[name].add(dependency)
            graph.dependents[dependency].append(name)

    return graph


def sort_types_by_dependency_order(types: list[NamedType]) -> list[NamedType]:
    """Order the custom types of ``types`` so dependencies come first.

    Uses Kahn's algorithm with a FIFO queue seeded in document order, so the
    result is the same on every run.

    Raises:
        CircularDependencyError: the custom types contain a cycle
        UnknownTypeError: a type depends on a name that is not in ``types``
    """
    graph = build_dependency_graph(types)
    logger.debug(
        "Sorting %d custom types with %d dependency edges",
        len(graph.types), graph.edge_count,
    )

    queue = deque(name for name, deps in graph.dependencies.items() if not deps)
    sorted_types: list[NamedType] = []

    while queue:
        name = queue.popleft()
        sorted_types.append(graph.types[name])
        for dependent in graph.dependents[name]:
            outstanding = graph.dependencies[dependent]
            outstanding.discard(name)
            if not outstanding:
                queue.append(dependent)
        graph.dependencies.pop(name)

    if graph.dependencies:
        raise CircularDependencyError(sorted(graph.dependencies))

    return sorted_types

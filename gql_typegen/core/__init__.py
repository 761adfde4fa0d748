"""Core modules for GraphQL type generation."""

from .errors import (
    CircularDependencyError,
    FetchError,
    GenerationError,
    MalformedInputError,
    TypegenError,
    UnknownTypeError,
)
from .fetcher import fetch_introspection
from .generator import CodeGenerator, screaming_snake_to_pascal
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    EnumType,
    EnumValue,
    Field,
    InputObjectType,
    InputValue,
    InterfaceType,
    NamedType,
    ObjectType,
    ScalarKind,
    ScalarType,
    Schema,
    TypeKind,
    TypeRef,
    UnionType,
)
from .parser import IntrospectionParser
from .pipeline import generate
from .sorter import (
    build_dependency_graph,
    sort_types_by_dependency_order,
    type_dependencies,
)

__all__ = [
    # Errors
    "TypegenError",
    "MalformedInputError",
    "UnknownTypeError",
    "CircularDependencyError",
    "GenerationError",
    "FetchError",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR types
    "TypeKind",
    "ScalarKind",
    "TypeRef",
    "InputValue",
    "Field",
    "EnumValue",
    "NamedType",
    "ScalarType",
    "ObjectType",
    "InterfaceType",
    "UnionType",
    "EnumType",
    "InputObjectType",
    "Schema",
    # Parser
    "IntrospectionParser",
    # Ordering
    "type_dependencies",
    "build_dependency_graph",
    "sort_types_by_dependency_order",
    # Generator
    "CodeGenerator",
    "screaming_snake_to_pascal",
    # Pipeline
    "generate",
    # Fetcher
    "fetch_introspection",
]

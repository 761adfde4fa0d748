"""Intermediate Representation (IR) for introspected GraphQL schemas.

This module defines dataclasses mirroring the GraphQL introspection type
system. Each named type kind has its own class carrying only the payload
that applies to it, so an enum never exposes fields and an object never
exposes enum values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class TypeKind(Enum):
    """Kinds of types as reported by ``__Type.kind``."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"

    @property
    def is_custom(self) -> bool:
        """True for kinds that get a generated declaration."""
        return self in CUSTOM_KINDS

    @property
    def is_wrapper(self) -> bool:
        return self in (TypeKind.LIST, TypeKind.NON_NULL)


CUSTOM_KINDS = frozenset({
    TypeKind.OBJECT,
    TypeKind.INTERFACE,
    TypeKind.UNION,
    TypeKind.ENUM,
    TypeKind.INPUT_OBJECT,
})


class ScalarKind(Enum):
    """Scalars built into every GraphQL schema."""
    INT = "Int"        # 32 bit
    FLOAT = "Float"    # double
    STRING = "String"  # UTF-8
    BOOLEAN = "Boolean"
    ID = "ID"

    @classmethod
    def is_builtin(cls, name: str) -> bool:
        return name in {kind.value for kind in cls}


@dataclass(frozen=True)
class TypeRef:
    """A reference to a type from a field, argument or interface position.

    Wrapper kinds (LIST, NON_NULL) carry ``of_type`` and no name; every other
    kind carries a name and no ``of_type``.
    """
    kind: TypeKind
    name: str | None = None
    of_type: "TypeRef | None" = None

    def underlying_type(self) -> "TypeRef":
        """Strip LIST/NON_NULL wrappers and return the named reference."""
        ref = self
        while ref.of_type is not None:
            ref = ref.of_type
        return ref

    @property
    def is_list(self) -> bool:
        ref = self.of_type if self.kind is TypeKind.NON_NULL else self
        return ref is not None and ref.kind is TypeKind.LIST

    @property
    def is_optional(self) -> bool:
        """True if nullable (no ! in GraphQL)."""
        return self.kind is not TypeKind.NON_NULL

    def __str__(self) -> str:
        if self.kind is TypeKind.NON_NULL:
            return f"{self.of_type}!"
        if self.kind is TypeKind.LIST:
            return f"[{self.of_type}]"
        return self.name or ""


@dataclass
class InputValue:
    """An argument or an input object field."""
    name: str
    type: TypeRef
    description: str = ""


@dataclass
class Field:
    """A field of an object or interface type."""
    name: str
    type: TypeRef
    description: str = ""
    args: list[InputValue] = field(default_factory=list)


@dataclass
class EnumValue:
    """A single value of an enum type."""
    name: str
    description: str = ""


@dataclass
class NamedType:
    """Common base of all named schema types."""
    kind: ClassVar[TypeKind]

    name: str
    description: str = ""


@dataclass
class ScalarType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.SCALAR


@dataclass
class ObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.OBJECT

    fields: list[Field] = field(default_factory=list)
    interfaces: list[TypeRef] = field(default_factory=list)


@dataclass
class InterfaceType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INTERFACE

    fields: list[Field] = field(default_factory=list)
    possible_types: list[TypeRef] = field(default_factory=list)


@dataclass
class UnionType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.UNION

    possible_types: list[TypeRef] = field(default_factory=list)


@dataclass
class EnumType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.ENUM

    enum_values: list[EnumValue] = field(default_factory=list)


@dataclass
class InputObjectType(NamedType):
    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT

    input_fields: list[InputValue] = field(default_factory=list)


@dataclass
class Schema:
    """Complete intermediate representation of an introspected schema."""
    types: list[NamedType] = field(default_factory=list)
    query_type: str | None = None
    mutation_type: str | None = None
    subscription_type: str | None = None

    def get_type(self, name: str) -> NamedType | None:
        """Look up a type by name."""
        for named_type in self.types:
            if named_type.name == name:
                return named_type
        return None

    @property
    def custom_types(self) -> list[NamedType]:
        """Return all types that get a generated declaration."""
        return [t for t in self.types if t.kind.is_custom]

    @property
    def root_types(self) -> dict[str, str]:
        """Return operation name to root type name for declared roots."""
        roots = {
            "query": self.query_type,
            "mutation": self.mutation_type,
            "subscription": self.subscription_type,
        }
        return {op: name for op, name in roots.items() if name}

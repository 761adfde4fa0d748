"""Introspection result parser.

Decodes an introspection JSON document (or a .graphql/.graphqls SDL file,
converted with graphql-core) and produces a Schema IR.
"""

import logging
import os
from typing import Any

from graphql import GraphQLError, build_schema, introspection_from_schema
from pydantic import ValidationError

from .errors import MalformedInputError
from .introspection import (
    IntrospectionDocument,
    WireEnumValue,
    WireField,
    WireInputValue,
    WireSchema,
    WireType,
    WireTypeRef,
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
    ScalarType,
    Schema,
    TypeKind,
    TypeRef,
    UnionType,
)

logger = logging.getLogger(__name__)

SDL_EXTENSIONS = (".graphql", ".graphqls")


class IntrospectionParser:
    """Parses an introspection result into IR."""

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser, optionally with a path to the input file."""
        self.schema_path = schema_path

    def parse(self) -> Schema:
        """Read the input file and return the complete IR."""
        if self.schema_path is None:
            raise ValueError("No schema path given")
        with open(self.schema_path, "rb") as f:
            raw = f.read()
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"{self.schema_path} is not valid UTF-8: {e}") from e

        if self.schema_path.lower().endswith(SDL_EXTENSIONS):
            logger.info("Converting SDL %s to introspection", os.path.basename(self.schema_path))
            return self.parse_document(self.sdl_to_introspection(content))
        return self.parse_json(content)

    def parse_json(self, content: str) -> Schema:
        """Decode a JSON introspection response."""
        try:
            document = IntrospectionDocument.model_validate_json(content)
        except ValidationError as e:
            raise MalformedInputError(_describe(e)) from e
        return self._process_schema(document.data.introspected_schema)

    def parse_document(self, document: dict[str, Any]) -> Schema:
        """Decode an already-loaded introspection response."""
        try:
            decoded = IntrospectionDocument.model_validate(document)
        except ValidationError as e:
            raise MalformedInputError(_describe(e)) from e
        return self._process_schema(decoded.data.introspected_schema)

    @staticmethod
    def sdl_to_introspection(sdl: str) -> dict[str, Any]:
        """Build the introspection response for an SDL schema."""
        try:
            schema = build_schema(sdl)
        except GraphQLError as e:
            raise MalformedInputError(f"Invalid SDL: {e.message}") from e
        except TypeError as e:
            # graphql-core reports schema validation failures as TypeError
            raise MalformedInputError(f"Invalid SDL: {e}") from e
        return {"data": introspection_from_schema(schema)}

    def _process_schema(self, wire: WireSchema) -> Schema:
        schema = Schema(
            query_type=wire.query_type.name if wire.query_type else None,
            mutation_type=wire.mutation_type.name if wire.mutation_type else None,
            subscription_type=wire.subscription_type.name if wire.subscription_type else None,
        )
        seen: set[str] = set()
        for wire_type in wire.types:
            if wire_type.name in seen:
                raise MalformedInputError(f"Duplicate type name {wire_type.name!r}")
            seen.add(wire_type.name)
            schema.types.append(self._process_type(wire_type))

        logger.info(
            "Decoded %d types (%d custom)", len(schema.types), len(schema.custom_types)
        )
        return schema

    def _process_type(self, wire: WireType) -> NamedType:
        name = wire.name
        description = wire.description

        if wire.kind is TypeKind.SCALAR:
            return ScalarType(name=name, description=description)
        if wire.kind is TypeKind.OBJECT:
            return ObjectType(
                name=name,
                description=description,
                fields=self._process_fields(wire.fields),
                interfaces=[self._process_type_ref(i) for i in wire.interfaces],
            )
        if wire.kind is TypeKind.INTERFACE:
            return InterfaceType(
                name=name,
                description=description,
                fields=self._process_fields(wire.fields),
                possible_types=[self._process_type_ref(t) for t in wire.possible_types],
            )
        if wire.kind is TypeKind.UNION:
            return UnionType(
                name=name,
                description=description,
                possible_types=[self._process_type_ref(t) for t in wire.possible_types],
            )
        if wire.kind is TypeKind.ENUM:
            return EnumType(
                name=name,
                description=description,
                enum_values=self._process_enum_values(wire.enum_values),
            )
        if wire.kind is TypeKind.INPUT_OBJECT:
            return InputObjectType(
                name=name,
                description=description,
                input_fields=self._process_input_values(wire.input_fields),
            )
        raise MalformedInputError(f"Type {name!r} cannot have wrapper kind {wire.kind.value}")

    def _process_fields(self, wire_fields: list[WireField]) -> list[Field]:
        """Process field definitions into the Field list."""
        return [
            Field(
                name=f.name,
                description=f.description,
                args=self._process_input_values(f.args),
                type=self._process_type_ref(f.type),
            )
            for f in wire_fields
        ]

    def _process_input_values(self, wire_values: list[WireInputValue]) -> list[InputValue]:
        return [
            InputValue(
                name=v.name,
                description=v.description,
                type=self._process_type_ref(v.type),
            )
            for v in wire_values
        ]

    @staticmethod
    def _process_enum_values(wire_values: list[WireEnumValue]) -> list[EnumValue]:
        return [EnumValue(name=v.name, description=v.description) for v in wire_values]

    def _process_type_ref(self, wire: WireTypeRef) -> TypeRef:
        """Convert a type reference, enforcing the wrapper/name invariant."""
        if wire.kind.is_wrapper:
            if wire.of_type is None or wire.name is not None:
                raise MalformedInputError(
                    f"{wire.kind.value} type reference must have ofType and no name"
                )
            return TypeRef(kind=wire.kind, of_type=self._process_type_ref(wire.of_type))

        if wire.name is None or wire.of_type is not None:
            raise MalformedInputError(
                f"{wire.kind.value} type reference must have a name and no ofType"
            )
        return TypeRef(kind=wire.kind, name=wire.name)


def _describe(error: ValidationError) -> str:
    """Summarize a pydantic error as 'loc: message' lines."""
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<document>"
        lines.append(f"{location}: {err['msg']}")
    return "Malformed introspection result:\n  " + "\n  ".join(lines)

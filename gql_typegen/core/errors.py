"""Exceptions raised while decoding, ordering and generating types."""


class TypegenError(Exception):
    """Base class for all gql-typegen errors."""


class MalformedInputError(TypegenError):
    """The input document is not valid JSON or does not match the
    introspection shape."""


class UnknownTypeError(MalformedInputError):
    """A type depends on a type name that is not declared in the schema."""

    def __init__(self, type_name: str, dependency: str):
        self.type_name = type_name
        self.dependency = dependency
        super().__init__(
            f"Type {type_name!r} references unknown type {dependency!r}"
        )


class CircularDependencyError(TypegenError):
    """The custom types of a schema depend on each other in a cycle."""

    def __init__(self, type_names: list[str]):
        self.type_names = type_names
        super().__init__(
            "Circular dependencies in schema between: " + ", ".join(type_names)
        )


class GenerationError(TypegenError):
    """Rendered output is not valid Python."""


class FetchError(TypegenError):
    """Exception raised when an introspection request fails."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

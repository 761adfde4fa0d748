"""Generate Python type declarations from GraphQL introspection results."""

__version__ = "0.1.0"

"""Hooks run around generation.

Pre-generation hooks rewrite the decoded schema before dependency ordering
(e.g. dropping the introspection meta types); post-generation hooks rewrite
the rendered module before it is written.
"""

from dataclasses import replace
from typing import Protocol, runtime_checkable

from .ir import Schema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Receives the decoded schema and returns the one to generate from."""

    def pre_generate(self, schema: Schema) -> Schema:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the rendered module and returns the text to write."""

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Prepend a header (e.g. a license line) to non-empty output."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        if not content:
            return content
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Drop custom types by name prefix/suffix; scalars are always kept.

    ``FilterTypesHook(exclude_prefix="__")`` removes the introspection meta
    types (``__Type``, ``__TypeKind``, ...), which reference each other.
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, schema: Schema) -> Schema:
        """Return a copy of the schema without the filtered types."""
        types = [
            t for t in schema.types
            if not t.kind.is_custom or self._should_include(t.name)
        ]
        return replace(schema, types=types)


class HookRunner:
    """Runs registered hooks in registration order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_pre_hooks(self, schema: Schema) -> Schema:
        for hook in self.pre_hooks:
            schema = hook.pre_generate(schema)
        return schema

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content

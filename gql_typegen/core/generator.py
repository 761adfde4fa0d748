"""Code generator for introspected GraphQL schemas.

Renders Jinja2 templates to produce Python declarations from the IR, one
generation strategy per type kind, in dependency order.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(schema, "types.py", template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import keyword
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Callable, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .errors import GenerationError
from .hooks import HookRunner
from .ir import (
    EnumType,
    InputObjectType,
    InterfaceType,
    NamedType,
    ObjectType,
    Schema,
    TypeKind,
    UnionType,
)
from .sorter import sort_types_by_dependency_order

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "generated_types.py"
SPACES_PER_INDENT = 4
UNKNOWN_ENUM_CASE = "Unknown"


def indent(indentation: int) -> str:
    return " " * (indentation * SPACES_PER_INDENT)


def screaming_snake_to_pascal(name: str) -> str:
    """Convert SCREAMING_SNAKE_CASE to PascalCase.

    Empty segments contribute nothing, so ``"_FOO"`` becomes ``"Foo"``.
    """
    return "".join(word[:1].upper() + word[1:].lower() for word in name.split("_"))


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def upper_case(name: str) -> str:
    """Convert to UPPER_CASE."""
    return snake_case(name).upper()


def safe_comment(text: str) -> str:
    """Make text safe for a single-line Python comment.

    Removes newlines, replaces markdown formatting, and ensures
    the text doesn't cause syntax errors when used as # comment.
    """
    if not text:
        return ""
    text = text.replace("\n", " ").replace("\r", "")
    text = text.replace("**", "").replace("*", "")
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


def safe_identifier(name: str) -> str:
    """Suffix Python keywords with an underscore."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def enum_member_name(value_name: str) -> str:
    """Python member name for an enum wire value.

    Keywords (``NONE`` -> ``None_``) and values colliding with the
    placeholder member (``UNKNOWN`` -> ``Unknown_``) get a trailing underscore.
    """
    member = screaming_snake_to_pascal(value_name)
    if member == UNKNOWN_ENUM_CASE:
        return f"{member}_"
    return safe_identifier(member)


def enum_member_names(enum_type: EnumType) -> list[str]:
    """Member names for every value of ``enum_type``, in order.

    Values converting to a name already taken (``FOO_BAR`` and ``FOO__BAR``
    both give ``FooBar``) get underscores appended until the name is unique.
    """
    taken = {UNKNOWN_ENUM_CASE}
    members = []
    for value in enum_type.enum_values:
        member = enum_member_name(value.name)
        while member in taken:
            member += "_"
        taken.add(member)
        members.append(member)
    return members


class CodeGenerator:
    """Generates Python declarations from a schema IR.

    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - enum.py.j2 — Enum declaration and wire-name table
        - module.py.j2 — Module prelude wrapping all declarations

    Example:
        generator = CodeGenerator(
            schema=schema,
            output_path="./generated_types.py",
            template_dir="./my_templates"
        )
    """

    def __init__(
        self,
        schema: Schema,
        output_path: str = DEFAULT_OUTPUT,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
    ):
        """Initialize the code generator.

        Args:
            schema: The intermediate representation of the introspected schema
            output_path: File the generated module is written to
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional hooks; post-generation hooks run before writing
        """
        self.schema = schema
        self.output_path = output_path
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_typegen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["pascal_case"] = screaming_snake_to_pascal
        self.env.filters["snake_case"] = snake_case
        self.env.filters["upper_case"] = upper_case
        self.env.filters["repr"] = repr
        self.env.filters["safe_comment"] = safe_comment
        self.env.filters["safe_identifier"] = safe_identifier

        self._generators: dict[TypeKind, Callable[[NamedType, int], str]] = {
            TypeKind.OBJECT: self.generate_object,
            TypeKind.INTERFACE: self.generate_interface,
            TypeKind.UNION: self.generate_union,
            TypeKind.ENUM: self.generate_enum,
            TypeKind.INPUT_OBJECT: self.generate_input_object,
        }

    def generate(self) -> str:
        """Generate the module and write it to output_path.

        Returns the written content. Nothing is written if ordering or
        generation fails.
        """
        content = self.render_module(self.generate_types())
        content = self.hooks.run_post_hooks(os.path.basename(self.output_path), content)
        self._write_file(content)
        logger.info("Wrote %d bytes to %s", len(content), self.output_path)
        return content

    def generate_types(self) -> str:
        """Concatenate declarations for all custom types in dependency order."""
        sorted_types = sort_types_by_dependency_order(self.schema.types)
        return "".join(self.generate_type(t) for t in sorted_types)

    def generate_type(self, named_type: NamedType, indentation: int = 0) -> str:
        """Dispatch to the generator for the type's kind."""
        generator = self._generators.get(named_type.kind)
        if generator is None:
            return ""
        return generator(named_type, indentation)

    def generate_enum(self, enum_type: EnumType, indentation: int = 0) -> str:
        """Enum declaration followed by its wire-name table."""
        content = self._render(
            "enum.py.j2",
            {
                "enum": enum_type,
                "members": list(zip(enum_type.enum_values, enum_member_names(enum_type))),
                "unknown": UNKNOWN_ENUM_CASE,
            },
        )
        return self._indent_block(content, indentation)

    # Object, interface, union and input object declarations are not emitted
    # yet; these hooks keep their place in the dispatch table.

    def generate_object(self, object_type: ObjectType, indentation: int = 0) -> str:
        return ""

    def generate_interface(self, interface_type: InterfaceType, indentation: int = 0) -> str:
        return ""

    def generate_union(self, union_type: UnionType, indentation: int = 0) -> str:
        return ""

    def generate_input_object(self, input_type: InputObjectType, indentation: int = 0) -> str:
        return ""

    def render_module(self, body: str) -> str:
        """Wrap generated declarations in the module prelude and validate it.

        An empty body renders as an empty module.
        """
        if not body.strip():
            return ""
        content = self._render("module.py.j2", {"body": body.rstrip()})
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GenerationError(
                f"Generated invalid Python for {self.output_path}: {e}"
            ) from e
        return content

    def _render(self, template_name: str, context: dict) -> str:
        template = self.env.get_template(template_name)
        return template.render(context)

    @staticmethod
    def _indent_block(content: str, indentation: int) -> str:
        if indentation == 0:
            return content
        prefix = indent(indentation)
        return "".join(
            prefix + line if line.strip() else line
            for line in content.splitlines(keepends=True)
        )

    def _write_file(self, content: str):
        """Write content atomically: temp file in the target dir, then rename."""
        directory = os.path.dirname(os.path.abspath(self.output_path))
        os.makedirs(directory, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, self.output_path)
        except BaseException:
            os.unlink(temp_path)
            raise

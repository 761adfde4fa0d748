"""End-to-end generation: input document to written module."""

import logging

from .generator import DEFAULT_OUTPUT, CodeGenerator
from .hooks import HookRunner
from .parser import IntrospectionParser

logger = logging.getLogger(__name__)


def generate(
    schema_path: str,
    output_path: str = DEFAULT_OUTPUT,
    template_dir: str | None = None,
    hooks: HookRunner | None = None,
) -> str:
    """Decode ``schema_path``, generate declarations and write ``output_path``.

    Returns the written module text. Decoding and ordering errors propagate
    before anything is written.
    """
    hooks = hooks or HookRunner()

    schema = IntrospectionParser(schema_path).parse()
    schema = hooks.run_pre_hooks(schema)
    logger.debug("Generating %d custom types from %s", len(schema.custom_types), schema_path)

    generator = CodeGenerator(
        schema, output_path=output_path, template_dir=template_dir, hooks=hooks
    )
    return generator.generate()

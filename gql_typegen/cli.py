"""Command-line interface for gql-typegen."""

import json
import logging
from pathlib import Path

import click

from .core.errors import TypegenError
from .core.fetcher import fetch_introspection
from .core.generator import DEFAULT_OUTPUT
from .core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from .core.pipeline import generate as run_pipeline


def parse_header(value: str) -> tuple[str, str]:
    """Split a 'Name: value' header option."""
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected 'Name: value', got {value!r}")
    return name.strip(), header_value.strip()


@click.group(invoke_without_command=True)
@click.version_option(package_name="gql-typegen")
@click.pass_context
def main(ctx: click.Context):
    """Generate Python type declarations from GraphQL introspection results.

    Types are emitted in dependency order: nothing is referenced before it
    is declared.
    """
    if ctx.invoked_subcommand is None:
        click.echo("Please provide an input schema")


@main.command()
@click.argument("schema", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    default=DEFAULT_OUTPUT,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated declarations.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with Jinja2 templates overriding the built-in ones.",
)
@click.option(
    "--exclude-prefix",
    help="Skip custom types whose name starts with this prefix (e.g. '__').",
)
@click.option(
    "--header",
    help="Text prepended to the generated file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str | None,
    output: str,
    template_dir: str | None,
    exclude_prefix: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate declarations from an introspection result.

    SCHEMA is an introspection JSON file ({"data": {"__schema": ...}}) or a
    .graphql/.graphqls SDL file.

    Examples:

        gql-typegen generate schema.json

        gql-typegen generate schema.json -o types.py --exclude-prefix __
    """
    if schema is None:
        click.echo("Please provide an input schema")
        return

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    hooks = HookRunner()
    if exclude_prefix:
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix=exclude_prefix))
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    output_path = Path(output).resolve()
    if verbose:
        click.echo(f"Schema: {Path(schema).resolve()}")
        click.echo(f"Output: {output_path}")

    click.echo("Generating types...")
    try:
        content = run_pipeline(
            schema, str(output_path), template_dir=template_dir, hooks=hooks
        )
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Lines: {len(content.splitlines())}")
        click.echo(f"  Enums: {content.count('(enum.IntEnum):')}")

    click.echo(f"Done! Generated code in {output_path}")


@main.command()
@click.argument("url")
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="File the introspection JSON is written to.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="Request header as 'Name: value'. Repeatable.",
)
@click.option(
    "--timeout",
    default=30.0,
    show_default=True,
    help="Request timeout in seconds.",
)
def introspect(url: str, output: str, headers: tuple[str, ...], timeout: float):
    """Fetch an introspection result from a GraphQL endpoint.

    Examples:

        gql-typegen introspect https://api.example.com/graphql -o schema.json

        gql-typegen introspect $URL -o schema.json -H "Authorization: Bearer $TOKEN"
    """
    request_headers = dict(parse_header(h) for h in headers)

    click.echo(f"Fetching schema from {url}...")
    try:
        result = fetch_introspection(url, headers=request_headers, timeout=timeout)
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2)

    click.echo(f"Done! Wrote introspection result to {output_path}")


if __name__ == "__main__":
    main()

"""Command-line interface for selectql."""

import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from .core.compiler import SCHEMA_NOT_FOUND_PLACEHOLDER, generate_client
from .core.errors import SelectQLError
from .core.generator import SELECTOR_DECORATOR
from .core.hooks import AddHeaderHook, HookRunner


def configure_logging(verbose: bool):
    """Send library logs through rich, at DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="selectql")
def main():
    """Typed GraphQL client generator for Python.

    Generate selector-based client modules from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the GraphQL SDL file.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file for the generated client module (e.g., client.py).",
)
@click.option(
    "--namespace",
    "-n",
    default=None,
    help="Namespace named in the generated module (default: output file stem).",
)
@click.option(
    "--client-name",
    "-c",
    default="GraphQLClient",
    help="Name of the generated client class (default: GraphQLClient).",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--header",
    default=None,
    help="Text added at the top of the generated file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: Path,
    output: Path,
    namespace: str | None,
    client_name: str,
    template_dir: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate a typed client module from a GraphQL schema.

    Examples:

        selectql generate --schema ./schema.graphql --output ./client.py

        selectql generate -s ./schema.graphql -o ./api.py -c ApiClient
    """
    configure_logging(verbose)
    namespace = namespace or output.stem

    if verbose:
        click.echo(f"Schema: {schema}")
        click.echo(f"Output: {output}")

    hooks = HookRunner()
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    click.echo("Generating client code...")
    try:
        code = generate_client(
            schema.read_text(encoding="utf-8"),
            namespace,
            client_name,
            template_dir=template_dir,
            hooks=hooks,
            filename=output.name,
        )
    except SelectQLError as e:
        raise click.ClickException(str(e)) from e

    if code == SCHEMA_NOT_FOUND_PLACEHOLDER:
        click.echo("Warning: no schema definition found, writing placeholder.", err=True)

    # Count stats
    num_classes = code.count("\nclass ")
    num_selectors = code.count(SELECTOR_DECORATOR)

    if verbose:
        click.echo(f"  Lines: {len(code.splitlines())}")
        click.echo(f"  Classes: {num_classes}")
        click.echo(f"  Selector methods: {num_selectors}")

    # Create output directory if needed
    output.parent.mkdir(parents=True, exist_ok=True)

    click.echo(f"Writing to {output}...")
    output.write_text(code, encoding="utf-8")

    click.echo(f"Done! Generated {num_classes} classes with {num_selectors} selector methods.")


if __name__ == "__main__":
    main()

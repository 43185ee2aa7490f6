"""CLI entry point for gql-docgen."""

import logging
from pathlib import Path

import click

from gql_docgen.config import load_settings
from gql_docgen.generator.document import DocumentAssembler
from gql_docgen.errors import LoadError
from gql_docgen.parser.base import EnvironmentVariable, RenderContext, Workspace
from gql_docgen.parser.capture import parse_capture
from gql_docgen.parser.detect import detect_format
from gql_docgen.parser.postman import parse_postman
from gql_docgen.resolver.references import render_graphql_variables


def _load_workspace(file_path: Path, fmt: str) -> Workspace:
    """Load a workspace document based on format."""
    if fmt == "auto":
        fmt = detect_format(file_path)

    if fmt == "postman":
        return parse_postman(file_path)
    return parse_capture(file_path)


def _parse_env_pairs(pairs: tuple[str, ...]) -> list[EnvironmentVariable]:
    variables = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected ID=VALUE, got {pair!r}", param_hint="--env")
        variables.append(EnvironmentVariable(id=key, name=key, value=value))
    return variables


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def main(verbose: bool):
    """Render captured API requests as Markdown documentation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Output Markdown file. Defaults to stdout.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "capture", "postman"]), help="Document format.")
@click.option("--request", "request_names", multiple=True, help="Only document requests with this name (repeatable).")
@click.option("--author", default=None, help="Author shown in the footer.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
def generate(doc_path: Path, output: Path | None, fmt: str, request_names: tuple[str, ...], author: str | None, config_path: Path | None):
    """Generate a Markdown document from a captured workspace."""
    try:
        settings = load_settings(config_path)
        workspace = _load_workspace(doc_path, fmt)
    except LoadError as e:
        raise click.ClickException(str(e)) from e

    selected = workspace.find_requests(request_names) if request_names else []
    if request_names and not selected:
        raise click.ClickException(f"No request named {', '.join(request_names)} in {doc_path}")

    context = RenderContext(workspace=workspace, author=author or settings.author, settings=settings)
    markdown = DocumentAssembler().generate(context, selected)

    if output is None:
        click.echo(markdown)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(markdown, encoding="utf-8")
    click.echo(f"Documentation saved to {output}", err=True)


@main.command()
@click.argument("payload_path", type=click.Path(exists=True, path_type=Path))
@click.option("--env", "env_pairs", multiple=True, help="Environment variable as ID=VALUE (repeatable).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
def variables(payload_path: Path, env_pairs: tuple[str, ...], config_path: Path | None):
    """Resolve a GraphQL variables payload and print it as JSON."""
    try:
        settings = load_settings(config_path)
    except LoadError as e:
        raise click.ClickException(str(e)) from e

    workspace = Workspace(environment=_parse_env_pairs(env_pairs))
    context = RenderContext(workspace=workspace, settings=settings)
    click.echo(render_graphql_variables(payload_path.read_text(encoding="utf-8"), context))

"""javaimports resolve command - print the imports a file is missing."""

from pathlib import Path

import click

from javaimports.cli.utils import find_project_root
from javaimports.config.loader import load_config
from javaimports.config.options import Options
from javaimports.core.errors import ConfigError, ParseError, ProjectError
from javaimports.core.logging import configure_logging, get_logger
from javaimports.environment.maven.environment import MavenEnvironment
from javaimports.parser.models import Import, ParsedFile
from javaimports.parser.parser import JavaParser


def missing_imports(parsed: ParsedFile, env: MavenEnvironment) -> tuple[list[Import], list[str]]:
    """Imports to add for ``parsed``, and identifiers nothing declares."""
    found: set[Import] = set()
    missing: list[str] = []
    for identifier in sorted(parsed.unresolved_identifiers):
        candidate = env.search(identifier)
        if candidate is None:
            missing.append(identifier)
        elif candidate.qualifier != parsed.package_name:
            found.add(candidate)
    return sorted(found, key=lambda i: i.as_statement()), missing


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project root (default: nearest directory with a pom.xml)",
)
@click.option(
    "--repository",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local Maven repository (default: ~/.m2/repository)",
)
@click.option("--show-missing", is_flag=True, help="Report identifiers with no candidate")
@click.pass_context
def resolve_command(
    ctx: click.Context,
    file: Path,
    root: Path | None,
    repository: Path | None,
    show_missing: bool,
) -> None:
    """Print the import statements FILE is missing, one per line."""
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    project_root = (root or find_project_root(file)).resolve()

    resolver: dict[str, object] = {}
    if repository is not None:
        resolver["repository_path"] = repository
    if verbose:
        resolver["debug"] = True
    overrides = {"resolver": resolver} if resolver else {}
    try:
        config = load_config(project_root, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        configure_logging(level="DEBUG")
    else:
        configure_logging(config=config.logging)

    options = Options.from_config(config.resolver, logger=get_logger("javaimports.resolve"))
    try:
        parsed = JavaParser(options).parse_path(file.resolve())
    except ParseError as e:
        for diagnostic in e.diagnostics:
            click.echo(str(diagnostic), err=True)
        raise click.ClickException(str(e)) from e

    env = MavenEnvironment(project_root, file.resolve(), parsed.package_name, options)
    try:
        found, missing = missing_imports(parsed, env)
    except ProjectError as e:
        raise click.ClickException(str(e)) from e

    for imported in found:
        click.echo(imported.as_statement())
    if show_missing:
        for identifier in missing:
            click.echo(f"missing: {identifier}", err=True)

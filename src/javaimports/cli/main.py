"""javaimports CLI."""

import click

from javaimports.cli.resolve import resolve_command


@click.group()
@click.version_option(version="0.1.0", prog_name="javaimports")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """javaimports - find the import declarations a Java file is missing."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(resolve_command, name="resolve")


if __name__ == "__main__":
    cli()

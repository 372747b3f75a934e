"""sdt CLI - Semantic Diff Tool."""

import click

from sdt import __version__
from sdt.cli.compare import parsetree_command, semantic_command, status_command
from sdt.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="sdt")
@click.option("-v", "--verbose", is_flag=True, help="Show verbose output on stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Semantic Diff Tool - show only the changes that matter to the parser.

    If -A/-B are not given, comparisons are between current changes and HEAD.
    A trailing colon marks a branch or revision (HEAD:, main:, 0e904fa3:).
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(status_command, name="status")
cli.add_command(semantic_command, name="semantic")
cli.add_command(parsetree_command, name="parsetree")


if __name__ == "__main__":
    cli()

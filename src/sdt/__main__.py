"""Entry point for ``python -m sdt``."""

from sdt.cli.main import cli

if __name__ == "__main__":
    cli()

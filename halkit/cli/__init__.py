"""halkit CLI - Command line interface for halkit."""

from halkit.cli.commands import cli


def main() -> None:
    """Main entry point for the halkit CLI."""
    cli()


__all__ = ["main", "cli"]

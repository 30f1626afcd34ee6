"""Entry point for the AI Documentation Synchronizer.

Allows running the tool with ``python -m docsync.main``; the
installed ``docsync`` console script calls the same command.
"""

from docsync.cli.commands import sync


def main() -> None:
    """Launch the CLI."""
    sync()


if __name__ == "__main__":
    main()

"""Allow running as ``python -m enqueues``."""

from enqueues.cli import cli

if __name__ == "__main__":
    cli()

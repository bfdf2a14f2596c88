"""Allow ``python -m prguard`` to run the CLI."""

from prguard.cli import app

if __name__ == "__main__":
    app()

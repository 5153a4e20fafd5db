"""Entry point for ``python -m adcloak``."""

from adcloak.cli.typer_app import app

if __name__ == "__main__":
    app()

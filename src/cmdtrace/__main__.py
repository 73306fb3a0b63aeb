"""``python -m cmdtrace`` entry point."""

from cmdtrace.cli import app

if __name__ == "__main__":
    app()

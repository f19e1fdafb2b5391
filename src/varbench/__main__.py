"""Package entry point for ``python -m varbench``."""

from varbench.cli import app

if __name__ == "__main__":
    app(prog_name="varbench")

"""CLI entrypoint."""

from __future__ import annotations

from .cli import app


def main() -> None:
    app(prog_name="notestore")


if __name__ == "__main__":
    main()

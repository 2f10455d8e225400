"""Entry point: python -m dashgen

Reads ./schema.yaml (or the given schema), generates ./src (or the given
output directory).
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    app(prog_name="dashgen")


if __name__ == "__main__":
    main()

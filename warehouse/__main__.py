"""Entry point for ``python -m warehouse``."""

from .cli import run
from .warehouse import Warehouse


def main() -> None:
    run(Warehouse(verbose=False))


if __name__ == "__main__":
    main()

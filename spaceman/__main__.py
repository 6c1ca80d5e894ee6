"""Module entrypoint for ``python -m spaceman``."""

from .cli import main


if __name__ == "__main__":
    main()

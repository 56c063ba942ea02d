"""Entry point for ``python -m eights``."""

from .cli import main


if __name__ == "__main__":
    main()

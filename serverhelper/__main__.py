"""Module entrypoint for ``python -m serverhelper``.

All argument parsing and runtime setup happen in ``serverhelper.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()

"""Module entrypoint for running watchlater as ``python -m watchlater``."""

from __future__ import annotations

from watchlater.cli import main


if __name__ == "__main__":
    main()

"""Command-line entry point for the ``amazed`` script."""

from __future__ import annotations

from typing import List, Optional

from .builder import MazeImageGenerator


def main(argv: Optional[List[str]] = None) -> None:
    MazeImageGenerator.main(argv)


if __name__ == "__main__":
    main()

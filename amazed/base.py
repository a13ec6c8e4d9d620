"""Abstract interface for batch maze image generators."""

from __future__ import annotations

import dataclasses
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Generic, Iterable, List, Optional, TypeVar, Union

PathLike = Union[str, Path]
RecordT = TypeVar("RecordT")


class AbstractMazeGenerator(ABC, Generic[RecordT]):
    """Base class for builders that render mazes to disk and emit records."""

    def __init__(self, output_dir: PathLike) -> None:
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @abstractmethod
    def create_maze(self, *args, **kwargs) -> RecordT:
        """Build, render and save a single maze."""

    @abstractmethod
    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
        workers: int = 1,
    ) -> List[RecordT]:
        """Generate a batch of mazes and optionally persist metadata."""

    def write_metadata(
        self,
        records: Iterable[RecordT],
        metadata_path: PathLike,
        *,
        append: bool = True,
    ) -> None:
        """Write records as a JSON list, extending an existing list when ``append``."""
        path = Path(metadata_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        existing: List[Dict[str, Any]] = []
        if append and path.exists():
            existing = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(existing, list):
                raise ValueError(f"Maze metadata at {path} must be a list of records")
        payload = [self.record_to_dict(record) for record in records]
        path.write_text(json.dumps(existing + payload, indent=2), encoding="utf-8")

    def record_to_dict(self, record: RecordT) -> Dict[str, Any]:
        to_dict = getattr(record, "to_dict", None)
        return to_dict() if to_dict is not None else dataclasses.asdict(record)

    def relativize_path(self, path: Path) -> str:
        """Image path as stored in metadata, relative to ``output_dir`` when inside it."""
        try:
            return path.relative_to(self.output_dir).as_posix()
        except ValueError:
            return path.as_posix()


__all__ = ["AbstractMazeGenerator", "PathLike"]

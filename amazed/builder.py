"""Build, label, render and save mazes, one image per maze.

``build_maze`` is the core pipeline (carve, then label). ``MazeImageGenerator``
wraps it into a dataset-style batch generator with the command-line entry
point used by the ``amazed`` script.
"""

from __future__ import annotations

import argparse
import logging
import random
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from tqdm import tqdm

from .base import AbstractMazeGenerator, PathLike
from .maze.distance import LABELERS, DistanceLabeler, get_labeler
from .maze.generator import CARVERS, MazeCarver, get_carver
from .maze.grid import Maze
from .maze.policies import POLICIES, DirectionPolicy, get_policy
from .render.color import RGBColor, parse_color, random_color
from .render.rasterizer import DEFAULT_MODE, Rasterizer, RenderMode
from .render.sink import DEFAULT_SUFFIX, save_buffer


def build_maze(
    width: int,
    height: int,
    rng: random.Random,
    *,
    policy: Union[str, DirectionPolicy] = "uniform",
    generator: Union[str, MazeCarver] = "backtrack",
    labeler: Union[str, DistanceLabeler] = "traversal",
) -> Maze:
    """Carve a spanning tree over a fresh ``width`` x ``height`` grid and label it."""
    maze = Maze(width, height)
    if isinstance(policy, str):
        policy = get_policy(policy)
    if isinstance(generator, str):
        generator = get_carver(generator, policy)
    if isinstance(labeler, str):
        labeler = get_labeler(labeler)
    generator.carve(maze, rng)
    labeler.label(maze, rng)
    return maze


def spawn_seeds(entropy: int, start: int, count: int) -> List[int]:
    """Independent per-item seeds, stable for a given batch entropy and index."""
    return [
        int(np.random.SeedSequence(entropy, spawn_key=(index,)).generate_state(1, dtype=np.uint64)[0])
        for index in range(start, start + count)
    ]


def batch_file_name(file_name: str, index: int, count: int) -> str:
    """``maze.bmp`` for a single maze, ``maze0.bmp``, ``maze1.bmp``... for a batch."""
    if count <= 1:
        return file_name
    path = Path(file_name)
    suffix = path.suffix or DEFAULT_SUFFIX
    return f"{path.stem}{index}{suffix}"


@dataclass
class MazeRecord:
    """Serializable metadata for one rendered maze."""

    id: str
    image: str
    width: int
    height: int
    canvas_dimensions: Tuple[int, int]
    start: Tuple[int, int]
    max_distance: int
    seed: int
    policy: str
    generator: str
    labeler: str
    mode: List[str]
    colors: List[str]
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "image": self.image,
            "width": int(self.width),
            "height": int(self.height),
            "canvas_dimensions": [int(self.canvas_dimensions[0]), int(self.canvas_dimensions[1])],
            "start": [int(self.start[0]), int(self.start[1])],
            "max_distance": int(self.max_distance),
            "seed": int(self.seed),
            "policy": self.policy,
            "generator": self.generator,
            "labeler": self.labeler,
            "mode": list(self.mode),
            "colors": list(self.colors),
        }
        for key, value in self.extra.items():
            if key not in payload:
                payload[key] = value
        return payload


def _create_maze_job(job: Tuple["MazeImageGenerator", int, int, int]) -> MazeRecord:
    generator, index, seed, count = job
    return generator.create_maze(index, seed=seed, count=count)


class MazeImageGenerator(AbstractMazeGenerator[MazeRecord]):
    """Generate maze images with distance shading and wall tracing."""

    DEFAULT_WIDTH = 50
    DEFAULT_HEIGHT = 50
    DEFAULT_FILE_NAME = "maze.bmp"
    DEFAULT_POLICY = "uniform"
    DEFAULT_GENERATOR = "backtrack"
    DEFAULT_LABELER = "traversal"
    DEFAULT_COLOR_COUNT = 2
    MAX_COLORS = 4

    def __init__(
        self,
        output_dir: Optional[PathLike] = None,
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        file_name: str = DEFAULT_FILE_NAME,
        mode: RenderMode = DEFAULT_MODE,
        policy: str = DEFAULT_POLICY,
        generator: str = DEFAULT_GENERATOR,
        labeler: str = DEFAULT_LABELER,
        colors: Optional[Sequence[RGBColor]] = None,
        color_count: Optional[int] = None,
        threshold: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(output_dir if output_dir is not None else ".")
        if width < 1 or height < 1:
            raise ValueError("width and height must be at least 1")
        if policy not in POLICIES:
            raise ValueError(f"Unknown direction policy '{policy}'; choose from {sorted(POLICIES)}")
        if generator not in CARVERS:
            raise ValueError(f"Unknown maze generator '{generator}'; choose from {sorted(CARVERS)}")
        if labeler not in LABELERS:
            raise ValueError(f"Unknown distance labeler '{labeler}'; choose from {sorted(LABELERS)}")
        if colors is not None:
            color_count = len(colors)
        elif color_count is None:
            color_count = self.DEFAULT_COLOR_COUNT
        if not 1 <= color_count <= self.MAX_COLORS:
            raise ValueError(f"Must specify a max of {self.MAX_COLORS} colors (got {color_count})")
        if seed is not None and seed < 0:
            raise ValueError("seed must be non-negative")
        if not file_name:
            raise ValueError("file_name must not be empty")

        self.width = int(width)
        self.height = int(height)
        self.file_name = file_name
        self.mode = RenderMode(mode)
        self.policy_name = policy
        self.generator_name = generator
        self.labeler_name = labeler
        self.colors = list(colors) if colors is not None else None
        self.color_count = int(color_count)
        self.threshold = threshold
        self.entropy = int(seed) if seed is not None else int(np.random.SeedSequence().entropy)
        self._spawned = 0
        # Validates the mode before any maze is built.
        Rasterizer(self.mode, threshold=threshold)

    def next_seeds(self, count: int) -> List[int]:
        seeds = spawn_seeds(self.entropy, self._spawned, count)
        self._spawned += count
        return seeds

    def palette_for(self, rng: random.Random) -> List[RGBColor]:
        if self.colors is not None:
            return list(self.colors)
        return [random_color(rng) for _ in range(self.color_count)]

    def create_maze(
        self,
        index: int = 0,
        *,
        seed: Optional[int] = None,
        count: int = 1,
    ) -> MazeRecord:
        if seed is None:
            seed = self.next_seeds(1)[0]
        rng = random.Random(seed)
        palette = self.palette_for(rng)

        logging.debug(f"Building maze {index}..")
        maze = build_maze(
            self.width,
            self.height,
            rng,
            policy=self.policy_name,
            generator=self.generator_name,
            labeler=self.labeler_name,
        )
        logging.debug(f"Maze {index} built, max distance {maze.max_distance}")

        buffer = Rasterizer(self.mode, palette, threshold=self.threshold).render(maze)
        image_path = save_buffer(buffer, self.output_dir / batch_file_name(self.file_name, index, count))
        logging.debug(f"Maze {index} saved to {image_path}")

        return MazeRecord(
            id=image_path.stem,
            image=self.relativize_path(image_path),
            width=maze.width,
            height=maze.height,
            canvas_dimensions=(buffer.width, buffer.height),
            start=maze.start,
            max_distance=maze.max_distance,
            seed=seed,
            policy=self.policy_name,
            generator=self.generator_name,
            labeler=self.labeler_name,
            mode=self.mode.names(),
            colors=[color.to_hex() for color in palette],
            extra={"edge_count": maze.edge_count()},
        )

    def generate_dataset(
        self,
        count: int,
        *,
        metadata_path: Optional[PathLike] = None,
        append: bool = True,
        workers: int = 1,
    ) -> List[MazeRecord]:
        """Build ``count`` mazes, in a process pool when ``workers > 1``.

        Each maze draws from its own seed, so the output for a given index
        does not depend on which worker builds it.
        """
        if count < 1:
            raise ValueError("count must be at least 1")
        seeds = self.next_seeds(count)
        logging.info(f"Generating {count} {self.width}x{self.height} mazes ({self.mode.names()})...")

        results: Dict[int, MazeRecord] = {}
        if workers > 1 and count > 1:
            jobs = [(self, index, seed, count) for index, seed in enumerate(seeds)]
            with ProcessPoolExecutor(max_workers=workers) as executor:
                futures = {executor.submit(_create_maze_job, job): job[1] for job in jobs}
                for future in tqdm(as_completed(futures), total=count, desc="Mazes"):
                    index = futures[future]
                    try:
                        results[index] = future.result()
                    except Exception as e:
                        logging.warning(f"Failed to generate maze {index}: {e}")
        else:
            for index in tqdm(range(count), desc="Mazes", disable=count == 1):
                try:
                    results[index] = self.create_maze(index, seed=seeds[index], count=count)
                except Exception as e:
                    logging.warning(f"Failed to generate maze {index}: {e}")

        records = [results[index] for index in sorted(results)]
        if metadata_path is not None:
            logging.info(f"Saving metadata to {metadata_path}")
            self.write_metadata(records, metadata_path, append=append)
        return records

    @classmethod
    def _build_parser(cls) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="amazed",
            description="Generate random perfect mazes and render them to images",
        )
        parser.add_argument("width", type=int, help="Maze width in cells")
        parser.add_argument("height", type=int, help="Maze height in cells")
        parser.add_argument("filename", type=Path, help="Output image; the suffix picks the format (BMP by default)")
        parser.add_argument(
            "-R",
            dest="render",
            action="append",
            choices=["walls", "shaded"],
            default=None,
            help="Render mode; repeat to combine (default: walls and shaded)",
        )
        parser.add_argument(
            "-c",
            dest="colors",
            nargs="+",
            metavar="ARG",
            default=None,
            help="N followed by 'random' or N colors (0xRRGGBB, #RRGGBB or decimal), N between 1 and 4",
        )
        parser.add_argument("-d", dest="policy", choices=sorted(POLICIES), default=cls.DEFAULT_POLICY)
        parser.add_argument("-g", dest="generator", choices=sorted(CARVERS), default=cls.DEFAULT_GENERATOR)
        parser.add_argument("--distance", dest="labeler", choices=sorted(LABELERS), default=cls.DEFAULT_LABELER)
        parser.add_argument("-b", dest="count", type=int, default=1, help="Number of mazes to generate")
        parser.add_argument("--seed", type=int, default=None)
        parser.add_argument("--workers", type=int, default=1, help="Number of parallel workers")
        parser.add_argument("--metadata", type=Path, default=None, help="Write a JSON record per maze")
        parser.add_argument("-v", "--verbose", action="store_true")
        return parser

    @staticmethod
    def _parse_colors(tokens: Optional[List[str]]) -> Tuple[Optional[List[RGBColor]], Optional[int]]:
        """Return ``(colors, count)``; ``colors`` is None for random colors."""
        if not tokens:
            return None, None
        try:
            count = int(tokens[0])
        except ValueError as exc:
            raise ValueError(f"-c expects a color count first, got '{tokens[0]}'") from exc
        if not 1 <= count <= MazeImageGenerator.MAX_COLORS:
            raise ValueError(f"Must specify a max of {MazeImageGenerator.MAX_COLORS} colors")
        rest = tokens[1:]
        if not rest or rest == ["random"]:
            return None, count
        if len(rest) != count:
            raise ValueError(f"-c {count} expects {count} colors or 'random', got {len(rest)} values")
        return [parse_color(token) for token in rest], count

    @classmethod
    def _parse_args(cls, argv: Optional[List[str]] = None) -> argparse.Namespace:
        parser = cls._build_parser()
        namespace = parser.parse_args(argv)
        try:
            namespace.mode = RenderMode.parse(namespace.render) if namespace.render else DEFAULT_MODE
            namespace.color_list, namespace.color_count = cls._parse_colors(namespace.colors)
        except ValueError as exc:
            parser.error(str(exc))
        if namespace.count < 1:
            parser.error("-b expects a positive count")
        return namespace

    @classmethod
    def main(cls, argv: Optional[List[str]] = None) -> List[MazeRecord]:
        args = cls._parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )
        try:
            generator = cls(
                output_dir=args.filename.parent,
                width=args.width,
                height=args.height,
                file_name=args.filename.name,
                mode=args.mode,
                policy=args.policy,
                generator=args.generator,
                labeler=args.labeler,
                colors=args.color_list,
                color_count=args.color_count,
                seed=args.seed,
            )
        except ValueError as exc:
            cls._build_parser().error(str(exc))
        records = generator.generate_dataset(
            args.count,
            metadata_path=args.metadata,
            workers=max(1, args.workers),
        )
        if not records:
            cls._build_parser().exit(1, f"amazed: none of the {args.count} mazes could be written\n")
        logging.info(f"Done: {len(records)} of {args.count} mazes written to {generator.output_dir}")
        return records


__all__ = [
    "MazeImageGenerator",
    "MazeRecord",
    "batch_file_name",
    "build_maze",
    "spawn_seeds",
]

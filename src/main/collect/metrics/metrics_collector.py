from pathlib import Path
from typing import Dict, Optional

from src.main.config import ENCODING, SOURCE_GLOB
from src.main.metrics import compute_all
from src.main.metrics.boundary_value_common import calculate_boundary_value_metrics
from src.main.utils.scala_parser import ScalaParser, get_parser


class MetricsCollector:
    """
    Reads Scala sources and computes structural metrics for them.
    """

    def __init__(self, parser: Optional[ScalaParser] = None) -> None:
        """
        Initialize the metrics collector.

        Args:
            parser (Optional[ScalaParser]): Parser handle; the shared default when omitted.
        """
        self.parser: ScalaParser = parser if parser is not None else get_parser()

    @staticmethod
    def read_scala(path: Path) -> str:
        """
        Read Scala source code from a file or recursively from a directory.

        Args:
            path (Path): Path to the file or directory.

        Returns:
            str: Concatenated Scala source code.
        """
        if path.is_file():
            return path.read_text(encoding=ENCODING)
        return "\n".join(p.read_text(encoding=ENCODING) for p in sorted(path.rglob(SOURCE_GLOB)))

    def structural(self, src: str) -> Dict[str, float]:
        """
        Compute every registered metric over one parse of the source.

        Args:
            src (str): Source code.

        Returns:
            dict: Dictionary with structural metric names and values.
        """
        tree = self.parser.parse(src)
        return compute_all(tree)

    def boundary(self, src: str) -> Dict[str, float]:
        """
        Compute the boundary value metric record for the source.

        Args:
            src (str): Source code.

        Returns:
            dict: Keys sa, so, totalVertices, choiceVertices, acceptingVertices.
        """
        return calculate_boundary_value_metrics(src, self.parser).as_dict()

    @staticmethod
    def collect_sources(source_root: Path) -> Dict[str, str]:
        """
        Collect every Scala file below a directory.

        Args:
            source_root (Path): Root directory with sources.

        Returns:
            dict: Relative POSIX path to source code, sorted by path.
        """
        if not source_root.exists():
            raise FileNotFoundError(f"Source root {source_root} does not exist.")

        sources: Dict[str, str] = {}
        for p in sorted(source_root.rglob(SOURCE_GLOB)):
            if p.is_file():
                sources[p.relative_to(source_root).as_posix()] = p.read_text(encoding=ENCODING)

        if not sources:
            raise ValueError(f"No {SOURCE_GLOB} files found in {source_root}.")

        return sources

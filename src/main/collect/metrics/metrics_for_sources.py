from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from tqdm import tqdm

from src.main.collect.metrics.metrics_collector import MetricsCollector
from src.main.config import DEFAULT_OUTPUT_CSV


class SourceMetricsCalculator:
    """
    Computes structural metrics for every Scala file under a folder and saves them to a CSV.
    """

    def __init__(self, source_root: Path, output_csv: Path) -> None:
        """
        Args:
            source_root (Path): Folder with Scala sources.
            output_csv (Path): Path to the output CSV.
        """
        self.source_root: Path = source_root
        self.output_csv: Path = output_csv
        self.metrics_collector = MetricsCollector()

    def build_rows(self) -> List[Dict[str, Any]]:
        """
        Build one row per source file: its path followed by every structural metric.
        """
        sources = self.metrics_collector.collect_sources(self.source_root)
        rows: List[Dict[str, Any]] = []
        for rel_path, code in tqdm(sources.items(), desc="metrics"):
            row: Dict[str, Any] = {"File": rel_path}
            row.update(self.metrics_collector.structural(code))
            rows.append(row)
        return rows

    def run(self) -> None:
        """
        Compute the rows and write them, sorted by file, to the output CSV.
        """
        rows = self.build_rows()
        if not rows:
            raise ValueError(f"No metrics computed for {self.source_root}.")

        df = pd.DataFrame(rows).sort_values("File").reset_index(drop=True)
        df.to_csv(self.output_csv, index=False)
        print(f"{self.output_csv} (rows: {len(df)})")


def main() -> None:
    """
    Entry point for computing metrics over a source folder.
    """
    source_root = Path(input("Path to Scala sources: ").strip()).expanduser()
    out = input(f"Path to output CSV [{DEFAULT_OUTPUT_CSV}]: ").strip()
    output_csv = Path(out).expanduser() if out else DEFAULT_OUTPUT_CSV

    SourceMetricsCalculator(source_root, output_csv).run()


if __name__ == "__main__":
    main()

"""
Configuration settings for structural metric collection.
"""

from pathlib import Path

# Grammar name understood by tree_sitter_languages
LANGUAGE: str = "scala"
SOURCE_GLOB: str = f"*.{LANGUAGE}"
ENCODING: str = "utf-8"

# Decimal places kept for the normalized order score
SO_PRECISION: int = 3

DEFAULT_OUTPUT_CSV: Path = Path("boundary_value_metrics.csv")

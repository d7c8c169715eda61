from typing import Dict, Optional

from tree_sitter import Node

from src.main.metrics import metric_group
from .boundary_value_common import boundary_value_metrics


@metric_group(
    "Boundary Value Sa",
    "Boundary Value So",
    "Boundary Value Vertices",
    "Boundary Value Choice Vertices",
    "Boundary Value Accepting Vertices",
)
def boundary_value(root: Optional[Node]) -> Dict[str, float]:
    result = boundary_value_metrics(root)
    return {
        "Boundary Value Sa": result.sa,
        "Boundary Value So": result.so,
        "Boundary Value Vertices": result.total_vertices,
        "Boundary Value Choice Vertices": result.choice_vertices,
        "Boundary Value Accepting Vertices": result.accepting_vertices,
    }

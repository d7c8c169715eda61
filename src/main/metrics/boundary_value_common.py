"""
Boundary value complexity of a Scala syntax tree.

Statement-like nodes are flattened in document order into vertices, each
vertex is linked to the statement(s) control may reach next, and every
choice vertex is weighted by how many vertices its branches can reach.
The weights add up to the structural complexity Sa, and the normalized
order So = 1 - (N - 1) / Sa compares that to the vertex count N.
"""

from bisect import bisect_left
from collections import deque
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Set

from src.main.config import SO_PRECISION
from src.main.utils.scala_parser import ScalaParser, get_parser
from src.main.utils.syntax_tree import SyntaxNode, descendants_of_type, node_text, within

STATEMENT_TYPES = {
    "val_definition",
    "val_declaration",
    "var_definition",
    "var_declaration",
    "assignment_expression",
    "call_expression",
    "return_expression",
    "if_expression",
    "match_expression",
    "for_expression",
    "while_expression",
}

CHOICE_TYPES = {
    "if_expression",
    "match_expression",
    "for_expression",
    "while_expression",
}

LOOP_TYPES = {"for_expression", "while_expression"}


@dataclass
class Vertex:
    id: int
    node: SyntaxNode
    type: str
    text: str
    successors: List[int] = field(default_factory=list)
    is_choice: bool = False
    adjusted_complexity: int = 0


@dataclass(frozen=True)
class BoundaryValueMetrics:
    sa: int
    so: float
    total_vertices: int
    choice_vertices: int
    accepting_vertices: int

    @classmethod
    def empty(cls) -> "BoundaryValueMetrics":
        return cls(sa=0, so=0.0, total_vertices=0, choice_vertices=0, accepting_vertices=0)

    def as_dict(self) -> Dict[str, float]:
        return {
            "sa": self.sa,
            "so": self.so,
            "totalVertices": self.total_vertices,
            "choiceVertices": self.choice_vertices,
            "acceptingVertices": self.accepting_vertices,
        }


def flatten_statements(root: Optional[SyntaxNode]) -> List[SyntaxNode]:
    """
    Collect statement-like nodes in pre-order.

    A matching node is emitted before its children, and children of every
    node are visited, so nested statements follow the statement that
    contains them.
    """
    if root is None:
        return []
    statements: List[SyntaxNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in STATEMENT_TYPES:
            statements.append(node)
        stack.extend(reversed(node.children))
    return statements


def build_vertices(statements: Sequence[SyntaxNode]) -> List[Vertex]:
    return [
        Vertex(
            id=i,
            node=stmt,
            type=stmt.type,
            text=node_text(stmt),
            is_choice=stmt.type in CHOICE_TYPES,
        )
        for i, stmt in enumerate(statements)
    ]


class _StatementIndex:
    """Start offsets of the vertices, used to find the first statement inside a span."""

    def __init__(self, vertices: Sequence[Vertex]) -> None:
        self.vertices = vertices
        self.starts = [v.node.start_byte for v in vertices]

    def first_within(self, outer: Optional[SyntaxNode]) -> Optional[int]:
        if outer is None:
            return None
        # pre-order keeps start offsets non-decreasing
        i = bisect_left(self.starts, outer.start_byte)
        while i < len(self.vertices) and self.starts[i] <= outer.end_byte:
            if within(self.vertices[i].node, outer):
                return i
            i += 1
        return None


def _else_branch(node: SyntaxNode) -> Optional[SyntaxNode]:
    children = list(node.children)
    for i, child in enumerate(children):
        if child.type == "else":
            return children[i + 1] if i + 1 < len(children) else child
    return None


def link_successors(vertices: List[Vertex]) -> None:
    """
    Fill in the successor list of every vertex according to its construct.

    Branches whose span holds no statement contribute no edge.
    """
    index = _StatementIndex(vertices)
    last = len(vertices) - 1

    for vertex in vertices:
        node = vertex.node
        following = vertex.id + 1 if vertex.id < last else None

        if vertex.type == "if_expression":
            then_target = index.first_within(node.child(2) if node.child_count > 2 else None)
            if then_target is not None:
                vertex.successors.append(then_target)
            else_clause = _else_branch(node)
            if else_clause is not None:
                else_target = index.first_within(else_clause)
                if else_target is not None:
                    vertex.successors.append(else_target)
            elif following is not None:
                vertex.successors.append(following)

        elif vertex.type == "match_expression":
            for clause in descendants_of_type(node, "case_clause"):
                case_target = index.first_within(clause)
                if case_target is not None:
                    vertex.successors.append(case_target)

        elif vertex.type in LOOP_TYPES:
            body = node.child(node.child_count - 1) if node.child_count else None
            body_target = index.first_within(body)
            if body_target is not None:
                vertex.successors.append(body_target)
            if following is not None:
                vertex.successors.append(following)

        elif following is not None:
            vertex.successors.append(following)


def reachable_from(vertices: Sequence[Vertex], vertex: Vertex) -> Set[int]:
    """
    Ids reachable through the successors of `vertex`, excluding `vertex` itself.
    """
    visited = bytearray(len(vertices))
    queue = deque(vertex.successors)
    for vid in vertex.successors:
        visited[vid] = 1

    reached: Set[int] = set()
    while queue:
        vid = queue.popleft()
        if vid == vertex.id:
            continue
        reached.add(vid)
        for succ in vertices[vid].successors:
            if not visited[succ]:
                visited[succ] = 1
                queue.append(succ)
    return reached


def evaluate_complexity(vertices: List[Vertex]) -> None:
    for vertex in vertices:
        if vertex.is_choice:
            vertex.adjusted_complexity = len(reachable_from(vertices, vertex))
        else:
            vertex.adjusted_complexity = 1
    for vertex in vertices:
        if not vertex.successors:
            vertex.adjusted_complexity = 0


def structural_complexity(vertices: Sequence[Vertex]) -> int:
    return round(sum(v.adjusted_complexity for v in vertices))


def _round_half_up(value: float, places: int) -> float:
    # ties round away from zero, judged on the exact binary value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def normalized_order(vertices: Sequence[Vertex]) -> float:
    total = len(vertices)
    sa = sum(v.adjusted_complexity for v in vertices)
    if total > 1 and sa > 0:
        return _round_half_up(1 - (total - 1) / sa, SO_PRECISION)
    return 0.0


def build_graph(root: Optional[SyntaxNode]) -> List[Vertex]:
    vertices = build_vertices(flatten_statements(root))
    link_successors(vertices)
    evaluate_complexity(vertices)
    return vertices


def boundary_value_metrics(root: Optional[SyntaxNode]) -> BoundaryValueMetrics:
    vertices = build_graph(root)
    if not vertices:
        return BoundaryValueMetrics.empty()

    total = len(vertices)
    choices = sum(1 for v in vertices if v.is_choice)
    return BoundaryValueMetrics(
        sa=structural_complexity(vertices),
        so=normalized_order(vertices),
        total_vertices=total,
        choice_vertices=choices,
        accepting_vertices=total - choices,
    )


def calculate_boundary_value_metrics(
    code: str, parser: Optional[ScalaParser] = None
) -> BoundaryValueMetrics:
    """
    Parse source text and compute its boundary value metrics.

    Args:
        code (str): Scala source.
        parser (Optional[ScalaParser]): Parser handle; the shared default is used when omitted.

    Returns:
        BoundaryValueMetrics: Immutable result record.
    """
    parser = parser if parser is not None else get_parser()
    return boundary_value_metrics(parser.parse(code))

"""
Node capabilities the structural metrics rely on.

Attribute names follow tree_sitter.Node so parsed trees can be passed in
directly; tests use lightweight stand-ins with the same shape.
"""

from typing import Any, List, Optional, Protocol, Sequence


class SyntaxNode(Protocol):
    type: str
    start_byte: int
    end_byte: int
    children: Sequence[Any]
    child_count: int
    named_children: Sequence[Any]
    text: Optional[bytes]

    def child(self, index: int) -> Optional[Any]:
        ...


def node_text(node: SyntaxNode) -> str:
    text = getattr(node, "text", None)
    if text is None:
        return ""
    return text.decode("utf8") if isinstance(text, bytes) else text


def within(node: SyntaxNode, outer: SyntaxNode) -> bool:
    return node.start_byte >= outer.start_byte and node.end_byte <= outer.end_byte


def descendants_of_type(node: SyntaxNode, type_: str) -> List[SyntaxNode]:
    """
    Collect every descendant of `node` with the given type, in document order.

    The node itself is not included.
    """
    found: List[SyntaxNode] = []
    stack = list(reversed(node.children))
    while stack:
        current = stack.pop()
        if current.type == type_:
            found.append(current)
        stack.extend(reversed(current.children))
    return found

from functools import lru_cache
from typing import Optional

from tree_sitter import Node, Parser
from tree_sitter_languages import get_parser as get_language_parser

from src.main.config import ENCODING, LANGUAGE


class ScalaParser:
    """
    Handle over a tree-sitter parser for the Scala grammar.

    Construct one explicitly and pass it to the metric entry points, or use
    the shared default from get_parser().
    """

    def __init__(self) -> None:
        self.language: str = LANGUAGE
        self._parser: Parser = get_language_parser(LANGUAGE)

    def parse(self, code: str) -> Optional[Node]:
        """
        Parse source text and return the root node.

        Returns None when there is nothing to parse.
        """
        if not code or not code.strip():
            return None
        return self._parser.parse(code.encode(ENCODING)).root_node


@lru_cache
def get_parser() -> ScalaParser:
    return ScalaParser()


def parse(code: str) -> Optional[Node]:
    return get_parser().parse(code)

"""
Boundary value metrics over real Scala parsed with tree_sitter_languages.
"""

import pytest

from src.main.metrics.boundary_value_common import build_graph, calculate_boundary_value_metrics
from src.main.utils.scala_parser import ScalaParser

SEQUENCE = """
object Main {
  def run(): Unit = {
    val x = 1
    println(x)
  }
}
"""

IF_ELSE = """
object Main {
  def run(x: Int): Unit = {
    if (x > 0) {
      println("positive")
    } else {
      println("negative")
    }
    println("done")
  }
}
"""

WHILE_LOOP = """
object Main {
  def run(): Unit = {
    var i = 0
    while (i < 3) {
      i = i + 1
    }
    println(i)
  }
}
"""

MATCH = """
object Main {
  def run(x: Int): Unit = {
    x match {
      case 1 => println("one")
      case _ => println("other")
    }
  }
}
"""


@pytest.fixture(scope="module")
def parser():
    return ScalaParser()


def test_empty_source(parser):
    assert calculate_boundary_value_metrics("", parser).as_dict() == {
        "sa": 0,
        "so": 0,
        "totalVertices": 0,
        "choiceVertices": 0,
        "acceptingVertices": 0,
    }


def test_single_declaration(parser):
    result = calculate_boundary_value_metrics("object Main {\n  val x = 1\n}\n", parser)
    assert result.total_vertices == 1
    assert result.choice_vertices == 0
    assert result.accepting_vertices == 1
    assert result.sa == 0
    assert result.so == 0


def test_sequence(parser):
    vertices = build_graph(parser.parse(SEQUENCE))
    assert [v.type for v in vertices] == ["val_definition", "call_expression"]
    assert [v.successors for v in vertices] == [[1], []]
    assert vertices[1].text == "println(x)"

    result = calculate_boundary_value_metrics(SEQUENCE, parser)
    assert (result.sa, result.so) == (1, 0)


def test_if_else(parser):
    vertices = build_graph(parser.parse(IF_ELSE))
    assert vertices[0].type == "if_expression"
    assert vertices[0].is_choice
    assert vertices[0].successors == [1, 2]
    assert vertices[0].adjusted_complexity == 3

    result = calculate_boundary_value_metrics(IF_ELSE, parser)
    assert result.total_vertices == 4
    assert result.choice_vertices == 1
    assert result.sa == 5
    assert result.so == 0.4


def test_while_loop(parser):
    vertices = build_graph(parser.parse(WHILE_LOOP))
    assert [v.type for v in vertices] == [
        "var_definition",
        "while_expression",
        "assignment_expression",
        "call_expression",
    ]
    assert vertices[1].successors == [2, 2]
    assert vertices[1].adjusted_complexity == 2

    result = calculate_boundary_value_metrics(WHILE_LOOP, parser)
    assert (result.sa, result.so) == (4, 0.25)


def test_match(parser):
    vertices = build_graph(parser.parse(MATCH))
    assert vertices[0].type == "match_expression"
    assert vertices[0].successors == [1, 2]
    assert vertices[0].adjusted_complexity == 2


def test_normalized_order_tie_rounds_up(parser):
    calls = "\n".join(f"    f{i}()" for i in range(13))
    code = (
        "object Main {\n"
        "  def run(c: Boolean): Unit = {\n"
        f"{calls}\n"
        "    while (c) {}\n"
        "    g()\n"
        "    h()\n"
        "  }\n"
        "}\n"
    )
    result = calculate_boundary_value_metrics(code, parser)
    # 16 vertices, Sa 16: So is exactly 0.0625
    assert (result.total_vertices, result.sa) == (16, 16)
    assert result.so == 0.063


@pytest.mark.parametrize("code", [SEQUENCE, IF_ELSE, WHILE_LOOP, MATCH])
def test_same_source_same_result(parser, code):
    assert calculate_boundary_value_metrics(code, parser) == calculate_boundary_value_metrics(code)

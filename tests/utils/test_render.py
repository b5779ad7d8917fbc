"""
Tests for one-line node rendering.
"""

import pytest

from tagwalk import N, render_node


@pytest.mark.parametrize(
  "value, expected",
  [
    (N.Call(N.Id("f"), N.Number(1)), '`Call{ `Id "f", `Number 1 }'),
    (N.Nil(), "`Nil"),
    ([N.Break()], "{ `Break }"),
    ([], "{}"),
    (N.Local([N.Id("x")], []), '`Local{ { `Id "x" }, {} }'),
    (N.Op("not", N.True_()), '`Op{ "not", `True }'),
    (42, "42"),
    ("plain", '"plain"'),
  ],
)
def test_render_node(value, expected):
  assert render_node(value) == expected


def test_render_escapes_strings():
  assert render_node(N.String('say "hi"\n')) == '`String "say \\"hi\\"\\n"'


def test_render_truncates_to_limit():
  node = N.Table(*[N.Number(i) for i in range(100)])
  text = render_node(node, limit=30)
  assert len(text) == 30
  assert text.endswith("...")
  assert text.startswith("`Table{ `Number 0")


def test_render_short_node_is_not_truncated():
  assert render_node(N.Nil(), limit=30) == "`Nil"


def test_render_cycles():
  node = N.Do()
  node.append(node)
  assert render_node(node) == "`Do{ <cycle> }"

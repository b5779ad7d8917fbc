"""
Tests for the package-level API surface.
"""

import pytest

import tagwalk
from tagwalk import N, NodeKind, StructuralError


def test_all_exports_resolve():
  for name in tagwalk.__all__:
    assert hasattr(tagwalk, name), name


def test_walk_convenience_guesses_kind():
  downs = []
  tree = N.Call(N.Id("f"), N.Call(N.Id("g"), N.Id("x")))
  tagwalk.walk(tree, expr_down=lambda node, path: downs.append((node.tag, len(path))))
  assert downs == [("Call", 0), ("Id", 1), ("Call", 1), ("Id", 2), ("Id", 2)]


def test_walk_convenience_explicit_kind_and_binder():
  names = []
  tree = N.Call(N.Id("f"))
  tagwalk.walk([N.Local([N.Id("a"), N.Id("b")], [])], binder=lambda ident, path: names.append(ident[0]))
  tagwalk.walk(tree, kind=NodeKind.STATEMENT, stat_up=lambda node, path: names.append(node.tag))
  assert names == ["a", "b", "Call"]


def test_walk_convenience_strict():
  with pytest.raises(StructuralError):
    tagwalk.walk([N.Do()], strict=True)
  tagwalk.walk([N.Do()])

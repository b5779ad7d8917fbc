"""
Tests for structural diagnostics (malformed, unknown and invalid nodes).

Verifies:
1.  Nested problems are reported, treated as leaves and do not abort the walk.
2.  Problems at the root surface as exceptions.
3.  Strict mode escalates every problem.
4.  Diagnostics reach both the logger and the ``on_diagnostic`` sink.
"""

import logging

import pytest

from tagwalk import (
  DiagnosticKind,
  InvalidNodeError,
  MalformedNodeError,
  N,
  StructuralError,
  UnknownNodeError,
  WalkConfig,
  WalkerSettings,
  walk_block,
  walk_expression,
  walk_expression_list,
  walk_statement,
)


@pytest.fixture
def sink():
  return []


def test_empty_do_is_malformed_but_walk_continues(recorder, sink):
  walk_block(recorder.config(on_diagnostic=sink.append), [N.Do(), N.Break()])

  assert [d.kind for d in sink] == [DiagnosticKind.MALFORMED]
  assert sink[0].tag == "Do"
  assert "Break" in recorder.labels(phase="down")
  # the malformed node is a leaf, its hooks still fire
  assert recorder.labels(kind="stat") == ["Do", "Do", "Break", "Break"]


def test_while_without_condition_is_malformed(recorder, sink):
  walk_block(recorder.config(on_diagnostic=sink.append), [N.While([N.Break()]), N.Return()])

  assert len(sink) == 1
  assert sink[0].kind == DiagnosticKind.MALFORMED
  assert sink[0].tag == "While"
  assert "Malformed statement 'While'" in sink[0].message
  assert recorder.labels(phase="down", kind="stat") == ["While", "Return"]


@pytest.mark.parametrize(
  "stmt",
  [
    N.Set([N.Id("x")]),
    N.Local(N.Id("x"), [N.Nil()]),
    N.Localrec([N.Id("f")]),
    N.Fornum(N.Number(1), N.Number(1), N.Number(2), []),
    N.Fornum(N.Id("i"), N.Number(1), []),
    N.Forin([N.Id("k")], []),
    N.If(N.True_()),
    N.Call(),
    N.Invoke(N.Id("o")),
    N.Break(N.Nil()),
    N.Goto(),
  ],
)
def test_malformed_statement_shapes(sink, stmt):
  walk_block(WalkConfig(on_diagnostic=sink.append), [stmt])
  assert [d.kind for d in sink] == [DiagnosticKind.MALFORMED]


@pytest.mark.parametrize(
  "expr",
  [
    N.Paren(),
    N.Index(N.Id("t")),
    N.Op(N.Id("a"), N.Id("b")),
    N.Op("add", N.Id("a"), N.Id("b"), N.Id("c")),
    N.Function(N.Id("a"), []),
    N.Stat([]),
    N.Nil(N.Nil()),
    N.Id(),
    N.Id([N.Id("nested")]),
  ],
)
def test_malformed_expression_shapes(sink, expr):
  walk_expression_list(WalkConfig(on_diagnostic=sink.append), [expr], N.Return())
  assert [d.kind for d in sink] == [DiagnosticKind.MALFORMED]


def test_malformed_table_pair_skips_only_that_element(recorder, sink):
  table = N.Table(N.Pair(N.Id("k")), N.Id("after"))
  walk_expression(recorder.config(on_diagnostic=sink.append), N.Paren(table))

  assert len(sink) == 1
  assert sink[0].tag == "Pair"
  assert "Id after" in recorder.labels(phase="down")


def test_unknown_tag_is_reported_and_treated_as_leaf(recorder, sink):
  weird = N.make("Frobnicate", N.Id("hidden"))
  walk_block(recorder.config(on_diagnostic=sink.append), [weird, N.Break()])

  assert [d.kind for d in sink] == [DiagnosticKind.UNKNOWN]
  assert sink[0].tag == "Frobnicate"
  assert "Id hidden" not in recorder.labels()
  assert recorder.labels(kind="stat") == ["Frobnicate", "Frobnicate", "Break", "Break"]


def test_expression_tag_in_statement_position_is_unknown(sink):
  walk_block(WalkConfig(on_diagnostic=sink.append), [N.Op("add", N.Number(1), N.Number(2))])
  assert [d.kind for d in sink] == [DiagnosticKind.UNKNOWN]
  assert "Unknown statement 'Op'" in sink[0].message


def test_invalid_statement_inside_block(sink):
  walk_block(WalkConfig(on_diagnostic=sink.append), [42, N.Break()])
  assert [d.kind for d in sink] == [DiagnosticKind.INVALID]
  assert "int" in sink[0].message


def test_invalid_block_abandons_sub_list(recorder, sink):
  walk_statement(recorder.config(on_diagnostic=sink.append), N.While(N.Id("c"), "not a block"))

  assert [d.kind for d in sink] == [DiagnosticKind.INVALID]
  assert "Invalid block" in sink[0].message
  assert recorder.labels(phase="down") == ["While", "Id c", "Block"]


def test_well_formed_statement_below_explicit_parent_reports_nothing(sink):
  walk_statement(WalkConfig(on_diagnostic=sink.append), N.Local([N.Id("x")], [N.Nil()]), N.Do([]))
  assert sink == []


def test_diagnostic_carries_path(sink):
  bad = N.Do()
  block = [bad]
  walk_block(WalkConfig(on_diagnostic=sink.append), block)
  assert sink[0].path == (block,)
  assert sink[0].node is bad
  assert not sink[0].at_root


def test_root_invalid_input_raises():
  with pytest.raises(InvalidNodeError) as excinfo:
    walk_block(WalkConfig(), 42)
  assert excinfo.value.diagnostic.at_root


def test_root_invalid_expression_list_raises():
  with pytest.raises(InvalidNodeError):
    walk_expression_list(WalkConfig(), None)


def test_root_malformed_raises():
  with pytest.raises(MalformedNodeError):
    walk_statement(WalkConfig(), N.Do())


def test_root_unknown_raises():
  with pytest.raises(UnknownNodeError):
    walk_expression(WalkConfig(), N.make("Bogus"))


def test_structural_errors_are_value_errors():
  with pytest.raises(ValueError):
    walk_statement(None, N.While())


def test_strict_mode_escalates_nested_problems():
  cfg = WalkConfig(settings=WalkerSettings(strict_mode=True))
  with pytest.raises(MalformedNodeError):
    walk_block(cfg, [N.Break(), N.Do()])


def test_strict_mode_sink_sees_diagnostic_before_raise(sink):
  cfg = WalkConfig(on_diagnostic=sink.append, settings=WalkerSettings(strict_mode=True))
  with pytest.raises(StructuralError):
    walk_block(cfg, [N.make("Nope")])
  assert len(sink) == 1


def test_diagnostics_are_logged_as_warnings(caplog):
  with caplog.at_level(logging.WARNING, logger="tagwalk"):
    walk_block(WalkConfig(), [N.Do(), N.make("Mystery", N.Number(1))])

  assert "Malformed statement 'Do'" in caplog.text
  assert "Unknown statement 'Mystery'" in caplog.text
  assert all(r.levelno == logging.WARNING for r in caplog.records)


def test_logging_can_be_disabled(caplog):
  cfg = WalkConfig(settings=WalkerSettings(log_diagnostics=False))
  with caplog.at_level(logging.WARNING, logger="tagwalk"):
    walk_block(cfg, [N.Do()])
  assert caplog.records == []


def test_rendered_node_is_truncated(sink):
  long_call = N.Call(N.Id("f"), *[N.String("x" * 20) for _ in range(20)])
  cfg = WalkConfig(on_diagnostic=sink.append, settings=WalkerSettings(render_limit=40))
  walk_block(cfg, [N.Do(long_call, long_call)])

  assert len(sink[0].rendered) == 40
  assert sink[0].rendered.endswith("...")


def test_root_aggregate_member_problem_does_not_abort(recorder, sink):
  walk_statement(recorder.config(on_diagnostic=sink.append), [N.Do(), N.Break()])

  assert [d.kind for d in sink] == [DiagnosticKind.MALFORMED]
  assert sink[0].path == ()
  assert not sink[0].at_root
  assert recorder.labels(phase="down", kind="stat") == ["Block", "Do", "Break"]


def test_root_expression_list_member_problem_does_not_abort(recorder, sink):
  walk_expression_list(recorder.config(on_diagnostic=sink.append), [N.Paren(), N.make("Bogus"), N.Nil()])

  assert [d.kind for d in sink] == [DiagnosticKind.MALFORMED, DiagnosticKind.UNKNOWN]
  assert not any(d.at_root for d in sink)
  assert recorder.labels(phase="down") == ["Paren", "Bogus", "Nil"]


def test_root_aggregate_itself_still_raises():
  with pytest.raises(InvalidNodeError) as excinfo:
    walk_statement(WalkConfig(), "not a statement")
  assert excinfo.value.diagnostic.at_root

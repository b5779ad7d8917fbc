"""
Structural Traversers.

One traverser per node kind. A traverser knows the shape of every production
of its kind and enumerates the children to visit, in order, each with the kind
it must be walked as. Traversers never recurse themselves: they are
generators yielding :class:`Visit` requests, which the walker's work-list
driver turns into hooked walks (see :mod:`tagwalk.core.walker`). Binder hooks
are invoked inline, between the yields, so they interleave with child visits
exactly as in a recursive descent.

Path rule: statement and expression traversers push the current node onto the
ancestor path for their children; the block traverser pushes the block; the
expression-list traverser and binder lists never push themselves.
"""

from typing import Any, Callable, Dict, Iterator, List, NamedTuple

from tagwalk.core.errors import report
from tagwalk.core.nodes import get_tag, is_container, is_identifier
from tagwalk.core.path import AncestorPath
from tagwalk.core.tags import is_expr_tag, is_stat_tag
from tagwalk.enums import DiagnosticKind, NodeKind


class Visit(NamedTuple):
  """A request to walk ``node`` as ``kind`` below ``path``."""

  kind: NodeKind
  node: Any
  path: AncestorPath


Traverser = Callable[..., Iterator[Visit]]


def _stat(node: Any, path: AncestorPath) -> Visit:
  return Visit(NodeKind.STATEMENT, node, path)


def _expr(node: Any, path: AncestorPath) -> Visit:
  return Visit(NodeKind.EXPRESSION, node, path)


def _block(node: Any, path: AncestorPath) -> Visit:
  return Visit(NodeKind.BLOCK, node, path)


def _expr_list(node: Any, path: AncestorPath) -> Visit:
  return Visit(NodeKind.EXPRESSION_LIST, node, path)


def visit_binders(config: Any, binders: List[Any], path: AncestorPath) -> None:
  """
  Invokes the ``binder`` hook on every identifier of a binder list.

  Non-identifier elements (e.g. ``Dots`` in a parameter list) are skipped.

  Args:
      config: The active WalkConfig.
      binders: The identifiers introducing new local variables.
      path: Ancestors of the binding construct, starting with the construct itself.
  """
  hook = config.binder
  if hook is None:
    return
  for binder in binders:
    if is_identifier(binder):
      hook(binder, path)


# --------------------------------------------------------------------------
# Statements
# --------------------------------------------------------------------------


def _is_list(value: Any) -> bool:
  return is_container(value) and get_tag(value) is None


def _lists(x: Any, *indices: int) -> bool:
  return all(_is_list(x[i]) for i in indices)


def _stat_do(config, x, path):
  if len(x) != 1:
    return None
  return [_block(x[0], path)]


def _stat_set(config, x, path):
  if len(x) != 2 or not _lists(x, 0, 1):
    return None
  return [_expr_list(x[0], path), _expr_list(x[1], path)]


def _stat_while(config, x, path):
  if len(x) != 2:
    return None
  return [_expr(x[0], path), _block(x[1], path)]


def _stat_repeat(config, x, path):
  if len(x) != 2:
    return None
  return [_block(x[0], path), _expr(x[1], path)]


def _stat_local(config, x, path):
  if len(x) not in (1, 2) or not _lists(x, *range(len(x))):
    return None

  def steps():
    if len(x) == 2 and len(x[1]) > 0:
      yield _expr_list(x[1], path)
    visit_binders(config, x[0], path)

  return steps()


def _stat_localrec(config, x, path):
  if len(x) != 2 or not _lists(x, 0, 1):
    return None

  def steps():
    visit_binders(config, x[0], path)
    yield _expr_list(x[1], path)

  return steps()


def _stat_fornum(config, x, path):
  if len(x) not in (4, 5) or not is_identifier(x[0]):
    return None

  def steps():
    for bound in x[1:-1]:
      yield _expr(bound, path)
    visit_binders(config, [x[0]], path)
    yield _block(x[-1], path)

  return steps()


def _stat_forin(config, x, path):
  if len(x) != 3 or not _lists(x, 0, 1):
    return None

  def steps():
    yield _expr_list(x[1], path)
    visit_binders(config, x[0], path)
    yield _block(x[2], path)

  return steps()


def _stat_if(config, x, path):
  if len(x) < 2:
    return None

  def steps():
    for i in range(0, len(x) - 1, 2):
      yield _expr(x[i], path)
      yield _block(x[i + 1], path)
    if len(x) % 2 == 1:
      yield _block(x[-1], path)

  return steps()


def _as_expr_list(min_len: int):
  def handler(config, x, path):
    if len(x) < min_len:
      return None
    return [_expr_list(x, path)]

  return handler


def _terminal(expected_len: int):
  def handler(config, x, path):
    if len(x) != expected_len:
      return None
    return []

  return handler


_STAT_HANDLERS: Dict[str, Callable] = {
  "Do": _stat_do,
  "Set": _stat_set,
  "While": _stat_while,
  "Repeat": _stat_repeat,
  "Local": _stat_local,
  "Localrec": _stat_localrec,
  "Fornum": _stat_fornum,
  "Forin": _stat_forin,
  "If": _stat_if,
  "Call": _as_expr_list(1),
  "Invoke": _as_expr_list(2),
  "Return": _as_expr_list(0),
  "Break": _terminal(0),
  "Goto": _terminal(1),
  "Label": _terminal(1),
}


# --------------------------------------------------------------------------
# Expressions
# --------------------------------------------------------------------------


def _expr_paren(config, x, path):
  if len(x) != 1:
    return None
  return [_expr(x[0], path)]


def _expr_index(config, x, path):
  if len(x) != 2:
    return None
  return [_expr(x[0], path), _expr(x[1], path)]


def _expr_op(config, x, path):
  if len(x) not in (2, 3) or not isinstance(x[0], str):
    return None
  return [_expr(operand, path) for operand in x[1:]]


def _expr_function(config, x, path):
  if len(x) != 2 or not _is_list(x[0]):
    return None

  def steps():
    visit_binders(config, x[0], path)
    yield _block(x[1], path)

  return steps()


def _expr_stat(config, x, path):
  if len(x) != 2:
    return None
  return [_block(x[0], path), _expr(x[1], path)]


def _expr_table(config, x, path):
  def steps():
    for element in x:
      if get_tag(element) == "Pair":
        if len(element) != 2:
          report(config, DiagnosticKind.MALFORMED, element, path, "table pair")
          continue
        yield _expr(element[0], path)
        yield _expr(element[1], path)
      else:
        yield _expr(element, path)

  return steps()


def _atom_leaf(config, x, path):
  if len(x) != 1 or is_container(x[0]):
    return None
  return []


_EXPR_HANDLERS: Dict[str, Callable] = {
  "Paren": _expr_paren,
  "Call": _as_expr_list(1),
  "Invoke": _as_expr_list(2),
  "Index": _expr_index,
  "Op": _expr_op,
  "Function": _expr_function,
  "Stat": _expr_stat,
  "Table": _expr_table,
  "Nil": _terminal(0),
  "Dots": _terminal(0),
  "True": _terminal(0),
  "False": _terminal(0),
  "Number": _atom_leaf,
  "String": _atom_leaf,
  "Id": _atom_leaf,
}


# --------------------------------------------------------------------------
# Traversers
# --------------------------------------------------------------------------


def _dispatch(
  config: Any, x: Any, path: AncestorPath, root: bool, handlers: Dict[str, Callable], expected: str, classified
):
  tag = get_tag(x)
  handler = handlers.get(tag) if classified(tag) else None
  if handler is None:
    report(config, DiagnosticKind.UNKNOWN, x, path, expected, root)
    return
  steps = handler(config, x, path.push(x))
  if steps is None:
    report(config, DiagnosticKind.MALFORMED, x, path, expected, root)
    return
  yield from steps


def traverse_statement(config: Any, x: Any, path: AncestorPath, root: bool = False) -> Iterator[Visit]:
  """
  Enumerates the children of a statement.

  An untagged aggregate is walked as a sequence of statements without being
  pushed onto the path.

  Args:
      config: The active WalkConfig.
      x: The statement node.
      path: Ancestors of ``x``.
      root: True if ``x`` is the root of the walk; its own problems then raise.

  Yields:
      Visit: One request per child to walk.
  """
  if not is_container(x):
    report(config, DiagnosticKind.INVALID, x, path, "statement", root)
    return
  if get_tag(x) is None:
    for stat in x:
      yield _stat(stat, path)
    return
  yield from _dispatch(config, x, path, root, _STAT_HANDLERS, "statement", is_stat_tag)


def traverse_expression(config: Any, x: Any, path: AncestorPath, root: bool = False) -> Iterator[Visit]:
  """
  Enumerates the children of an expression.

  Args:
      config: The active WalkConfig.
      x: The expression node.
      path: Ancestors of ``x``.
      root: True if ``x`` is the root of the walk.

  Yields:
      Visit: One request per child to walk.
  """
  if not is_container(x):
    report(config, DiagnosticKind.INVALID, x, path, "expression", root)
    return
  yield from _dispatch(config, x, path, root, _EXPR_HANDLERS, "expression", is_expr_tag)


def traverse_block(config: Any, x: Any, path: AncestorPath, root: bool = False) -> Iterator[Visit]:
  """Walks every element of a block as a statement, with the block pushed onto the path."""
  if not is_container(x):
    report(config, DiagnosticKind.INVALID, x, path, "block", root)
    return
  inner = path.push(x)
  for stat in x:
    yield _stat(stat, inner)


def traverse_expression_list(config: Any, x: Any, path: AncestorPath, root: bool = False) -> Iterator[Visit]:
  """Walks every element of a list as an expression; the list itself never joins the path."""
  if not is_container(x):
    report(config, DiagnosticKind.INVALID, x, path, "expression list", root)
    return
  for expr in x:
    yield _expr(expr, path)

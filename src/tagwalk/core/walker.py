"""
Walker Builder and Public Entry Points.

:func:`build_walker` wraps a structural traverser with the hook protocol:

1.  Look up the kind's :class:`~tagwalk.config.HookSet` (absent = empty).
2.  If ``down`` is the literal short-circuit marker, skip the children without
    calling anything. Otherwise call ``down(node, path)``; it must return None
    (or the ``Descent.CONTINUE`` member) to descend, or ``Descent.SKIP`` (or
    the bare string ``"break"``) to skip the children. Any other value,
    including the bare string ``"continue"``, raises :class:`HookContractError`.
3.  Unless skipped, visit the children through the traverser.
4.  Call ``up(node, path)`` unconditionally.

The builder is instantiated once per kind, producing :func:`walk_statement`,
:func:`walk_expression`, :func:`walk_block` and :func:`walk_expression_list`.
:func:`guess` picks one of them from a node's tag.

Execution model:
    The walk is driven by an explicit stack of generators rather than by
    recursive calls, so AST depth is bounded by memory instead of the
    interpreter recursion limit. Hook order is identical to a naive
    depth-first recursion. Hooks may re-enter the public API (each call runs
    its own driver).

Mutation:
    A ``down`` hook may rewrite the current node in place (``Node.override``);
    the traversal of its children then follows the new content. Mutating
    siblings, ancestors or already-visited nodes is unspecified behaviour:
    the walker reads children lazily, so such edits may or may not be seen.
    Callers relying on a stable traversal order must not mutate structure
    ahead of the traversal cursor.
"""

from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from tagwalk.config import DEFAULT_CONFIG, WalkConfig
from tagwalk.core.errors import ClassificationError, HookContractError
from tagwalk.core.nodes import get_tag
from tagwalk.core.path import AncestorPath
from tagwalk.core.tags import is_expr_tag, is_stat_tag
from tagwalk.core.traversers import (
  Traverser,
  Visit,
  traverse_block,
  traverse_expression,
  traverse_expression_list,
  traverse_statement,
)
from tagwalk.enums import Descent, NodeKind

ConfigLike = Union[WalkConfig, Mapping[str, Any], None]
EntryPoint = Callable[..., None]

_TRAVERSERS: Dict[NodeKind, Traverser] = {}


def _coerce_config(config: ConfigLike) -> WalkConfig:
  if config is None:
    return DEFAULT_CONFIG
  if isinstance(config, WalkConfig):
    return config
  return WalkConfig.model_validate(config)


def _coerce_path(ancestors: tuple) -> AncestorPath:
  if len(ancestors) == 1 and isinstance(ancestors[0], AncestorPath):
    return ancestors[0]
  return AncestorPath.of(ancestors)


def _descends(config: WalkConfig, kind: NodeKind, node: Any, path: AncestorPath) -> bool:
  hooks = config.hooks_for(kind)
  if hooks.down is None:
    return True
  if hooks.skips:
    return False

  result = hooks.down(node, path)
  if result is None or result is Descent.CONTINUE:
    return True
  if isinstance(result, str) and result == Descent.SKIP.value:
    return False
  raise HookContractError(kind, node, result, config.settings.render_limit)


def _visit(config: WalkConfig, kind: NodeKind, node: Any, path: AncestorPath, root: bool = False) -> Iterator[Visit]:
  """Runs the hook protocol for one node, yielding the children to walk."""
  if _descends(config, kind, node, path):
    yield from _TRAVERSERS[kind](config, node, path, root)

  up = config.hooks_for(kind).up
  if up is not None:
    up(node, path)


def _drive(config: WalkConfig, start: Iterator[Visit]) -> None:
  stack: List[Iterator[Visit]] = [start]
  while stack:
    try:
      request = next(stack[-1])
    except StopIteration:
      stack.pop()
      continue
    stack.append(_visit(config, request.kind, request.node, request.path))


def build_walker(kind: NodeKind, traverser: Traverser) -> EntryPoint:
  """
  Wraps a structural traverser with the down/up hook protocol.

  Args:
      kind: The node kind the entry point walks.
      traverser: Generator enumerating the children of a node of that kind.

  Returns:
      EntryPoint: ``walk(config, node, *ancestors)``. ``ancestors`` are the
      enclosing nodes, nearest first, or a single ``AncestorPath`` (as
      received by a hook).
  """
  _TRAVERSERS[kind] = traverser

  def walk(config: ConfigLike, node: Any, *ancestors: Any) -> None:
    cfg = _coerce_config(config)
    _drive(cfg, _visit(cfg, kind, node, _coerce_path(ancestors), root=True))

  walk.__name__ = f"walk_{kind.name.lower()}"
  walk.__qualname__ = walk.__name__
  walk.__doc__ = f"Walks ``node`` as a {kind.name.lower().replace('_', ' ')}, firing the configured hooks."
  return walk


walk_statement = build_walker(NodeKind.STATEMENT, traverse_statement)
walk_expression = build_walker(NodeKind.EXPRESSION, traverse_expression)
walk_block = build_walker(NodeKind.BLOCK, traverse_block)
walk_expression_list = build_walker(NodeKind.EXPRESSION_LIST, traverse_expression_list)

_ENTRY_POINTS: Dict[NodeKind, EntryPoint] = {
  NodeKind.STATEMENT: walk_statement,
  NodeKind.EXPRESSION: walk_expression,
  NodeKind.BLOCK: walk_block,
  NodeKind.EXPRESSION_LIST: walk_expression_list,
}


def guess_kind(node: Any) -> Optional[NodeKind]:
  """
  Classifies a node of unknown kind from its tag.

  Expression tags win over statement tags (``Call`` and ``Invoke`` are both),
  and an absent tag means an untagged aggregate, i.e. a block.

  Args:
      node: The node to classify.

  Returns:
      Optional[NodeKind]: The kind, or None if the tag is not classified.
  """
  tag = get_tag(node)
  if is_expr_tag(tag):
    return NodeKind.EXPRESSION
  if is_stat_tag(tag):
    return NodeKind.STATEMENT
  if tag is None:
    return NodeKind.BLOCK
  return None


def walker_for(kind: NodeKind) -> EntryPoint:
  """Returns the public entry point walking ``kind``."""
  return _ENTRY_POINTS[kind]


def guess(config: ConfigLike, node: Any, *ancestors: Any) -> None:
  """
  Walks a node of unknown kind with the matching entry point.

  Args:
      config: The walk configuration.
      node: The node to walk.
      *ancestors: Enclosing nodes, nearest first, or a single AncestorPath.

  Raises:
      ClassificationError: If the node's tag is neither a statement nor an
          expression tag.
  """
  kind = guess_kind(node)
  if kind is None:
    cfg = _coerce_config(config)
    raise ClassificationError(get_tag(node), node, cfg.settings.render_limit)
  _ENTRY_POINTS[kind](config, node, *ancestors)

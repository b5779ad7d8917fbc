"""
tagwalk Package.

A generic traversal engine for tagged Statement / Expression / Block ASTs,
used as the substrate of source-to-source transformation passes ("code
walkers").

Callers register pre-order (``down``) and post-order (``up``) hooks per node
kind, may short-circuit descent into subtrees, observe every binder
introducing a local variable, and receive the full ancestor path at every
hook invocation.

Usage
-----

Simple Walk
^^^^^^^^^^^

.. code-block:: python

    import tagwalk as tw

    tree = tw.N.Call(tw.N.Id("f"), tw.N.Call(tw.N.Id("g"), tw.N.Id("x")))
    tw.walk(tree, expr_down=lambda node, path: print(node.tag, len(path)))

Explicit Configuration
^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from tagwalk import Descent, WalkConfig, walk_block

    def skip_functions(node, path):
      if node.tag == "Function":
        return Descent.SKIP

    config = WalkConfig(expr={"down": skip_functions}, binder=lambda ident, path: print(ident[0]))
    walk_block(config, block)
"""

from typing import Any, Callable, Optional

from tagwalk.analysis import IdentifierHooks, Scope, free_names, walk_identifiers
from tagwalk.config import HookSet, WalkConfig, WalkerSettings
from tagwalk.core.errors import (
  ClassificationError,
  Diagnostic,
  HookContractError,
  InvalidNodeError,
  MalformedNodeError,
  StructuralError,
  UnknownNodeError,
  WalkerError,
)
from tagwalk.core.nodes import N, Node, get_tag, is_container, is_identifier
from tagwalk.core.path import AncestorPath
from tagwalk.core.tags import EXPR_TAGS, STAT_TAGS, classify_tag, is_expr_tag, is_stat_tag
from tagwalk.core.walker import (
  build_walker,
  guess,
  guess_kind,
  walk_block,
  walk_expression,
  walk_expression_list,
  walk_statement,
  walker_for,
)
from tagwalk.enums import Descent, DiagnosticKind, NodeKind, TagClass
from tagwalk.utils.render import render_node

__version__ = "0.1.0"

Hook = Optional[Callable[..., Any]]


def walk(
  node: Any,
  kind: Optional[NodeKind] = None,
  stat_down: Hook = None,
  stat_up: Hook = None,
  expr_down: Hook = None,
  expr_up: Hook = None,
  block_down: Hook = None,
  block_up: Hook = None,
  binder: Hook = None,
  strict: bool = False,
) -> None:
  """
  Walks a tree with hooks given as keyword arguments.

  This is a convenience wrapper around `WalkConfig` and the public entry
  points. For reusable configurations or diagnostic sinks, build a
  `WalkConfig` and call ``walk_statement`` & co. directly.

  Args:
      node: The root node.
      kind (NodeKind, optional): How to walk the root. Guessed from its tag if None.
      stat_down, stat_up: Statement hooks.
      expr_down, expr_up: Expression hooks.
      block_down, block_up: Block hooks.
      binder: Called on each identifier introducing a local binding.
      strict (bool): If True, structural diagnostics raise instead of logging.

  Raises:
      ClassificationError: If ``kind`` is None and the root cannot be guessed.
      HookContractError: If a ``down`` hook returns an invalid value.
      StructuralError: For structural problems at the root (or anywhere in strict mode).
  """
  config = WalkConfig(
    stat=HookSet(down=stat_down, up=stat_up),
    expr=HookSet(down=expr_down, up=expr_up),
    block=HookSet(down=block_down, up=block_up),
    binder=binder,
    settings=WalkerSettings(strict_mode=strict),
  )
  if kind is None:
    guess(config, node)
  else:
    walker_for(kind)(config, node)


__all__ = [
  "AncestorPath",
  "ClassificationError",
  "Descent",
  "Diagnostic",
  "DiagnosticKind",
  "EXPR_TAGS",
  "HookContractError",
  "HookSet",
  "IdentifierHooks",
  "InvalidNodeError",
  "MalformedNodeError",
  "N",
  "Node",
  "NodeKind",
  "STAT_TAGS",
  "Scope",
  "StructuralError",
  "TagClass",
  "UnknownNodeError",
  "WalkConfig",
  "WalkerError",
  "WalkerSettings",
  "build_walker",
  "classify_tag",
  "free_names",
  "get_tag",
  "guess",
  "guess_kind",
  "is_container",
  "is_expr_tag",
  "is_identifier",
  "is_stat_tag",
  "render_node",
  "walk",
  "walk_block",
  "walk_expression",
  "walk_expression_list",
  "walk_identifiers",
  "walk_statement",
  "walker_for",
  "__version__",
]

"""
Scope-Aware Identifier Walking.

This module layers lexical scoping on top of the generic walker. Every ``Id``
visited as an expression is classified as *free* (no enclosing binding) or
*bound* (resolved to the ``Id`` node that introduced it), and every binder is
reported together with the binding it shadows.

Frames are opened for:

1.  **Blocks**: each block has its own frame.
2.  **Functions**: parameters live in a frame around the body.
3.  **Loops**: ``Fornum``/``Forin`` variables live in a frame around the body.
4.  **Repeat and Stat**: the trailing expression (``until`` condition, value of
    a statement-expression) shares the frame of the preceding block, so it
    sees that block's locals.

Binding timing follows the walker's binder protocol: ``Local`` names become
visible after their initialisers, ``Localrec`` names before.
"""

from typing import Any, Callable, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from tagwalk.analysis.scope import Scope
from tagwalk.config import HookSet, WalkConfig
from tagwalk.core.nodes import get_tag, is_container, is_identifier
from tagwalk.core.path import AncestorPath
from tagwalk.core.walker import guess, walker_for
from tagwalk.enums import Descent, NodeKind

_LOOP_TAGS = frozenset({"Fornum", "Forin"})


class IdentifierHooks(BaseModel):
  """
  Callbacks fired by :func:`walk_identifiers`.
  """

  model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

  free: Optional[Callable[..., Any]] = Field(None, description="free(id, path) for unbound identifiers.")
  bound: Optional[Callable[..., Any]] = Field(None, description="bound(id, path, binder) for resolved identifiers.")
  binder: Optional[Callable[..., Any]] = Field(None, description="binder(id, path, shadowed) for new bindings.")


class _ScopedWalk:
  """
  Builds a WalkConfig that maintains a Scope around a user configuration.

  User hooks are chained: scope bookkeeping runs before the user's ``down``
  hooks and after the user's ``up`` hooks, so user hooks observe the scope of
  the node they are called on.
  """

  def __init__(self, hooks: IdentifierHooks, config: WalkConfig):
    self.hooks = hooks
    self.user = config
    self.scope = Scope()
    self._owners: List[Any] = []
    self._shared_blocks: List[Tuple[Any, Any]] = []

  def _open(self, node: Any) -> None:
    self.scope.push()
    self._owners.append(node)

  def _close(self, node: Any) -> None:
    while self._shared_blocks and self._shared_blocks[-1][0] is node:
      self._shared_blocks.pop()
    if self._owners and self._owners[-1] is node:
      self._owners.pop()
      self.scope.pop()

  @staticmethod
  def _chain_down(user: HookSet, node: Any, path: AncestorPath) -> Any:
    if user.skips:
      return Descent.SKIP
    if user.down is not None:
      return user.down(node, path)
    return None

  def _block_down(self, node: Any, path: AncestorPath) -> Any:
    if self._shared_blocks and self._shared_blocks[-1][1] is node:
      self._shared_blocks.pop()
    else:
      self._open(node)
    return self._chain_down(self.user.block, node, path)

  def _block_up(self, node: Any, path: AncestorPath) -> None:
    if self.user.block.up is not None:
      self.user.block.up(node, path)
    self._close(node)

  def _stat_down(self, node: Any, path: AncestorPath) -> Any:
    tag = get_tag(node)
    if tag in _LOOP_TAGS:
      self._open(node)
    elif tag == "Repeat" and len(node) == 2 and is_container(node[0]):
      self._open(node)
      self._shared_blocks.append((node, node[0]))
    return self._chain_down(self.user.stat, node, path)

  def _stat_up(self, node: Any, path: AncestorPath) -> None:
    if self.user.stat.up is not None:
      self.user.stat.up(node, path)
    self._close(node)

  def _expr_down(self, node: Any, path: AncestorPath) -> Any:
    tag = get_tag(node)
    if tag == "Function":
      self._open(node)
    elif tag == "Stat" and len(node) == 2 and is_container(node[0]):
      self._open(node)
      self._shared_blocks.append((node, node[0]))
    elif is_identifier(node):
      binder = self.scope.lookup(node[0])
      if binder is None:
        if self.hooks.free is not None:
          self.hooks.free(node, path)
      elif self.hooks.bound is not None:
        self.hooks.bound(node, path, binder)
    return self._chain_down(self.user.expr, node, path)

  def _expr_up(self, node: Any, path: AncestorPath) -> None:
    if self.user.expr.up is not None:
      self.user.expr.up(node, path)
    self._close(node)

  def _binder(self, node: Any, path: AncestorPath) -> None:
    shadowed = self.scope.add(node)
    if self.hooks.binder is not None:
      self.hooks.binder(node, path, shadowed)
    if self.user.binder is not None:
      self.user.binder(node, path)

  def config(self) -> WalkConfig:
    """Returns the chained configuration."""
    return WalkConfig(
      stat=HookSet(down=self._stat_down, up=self._stat_up),
      expr=HookSet(down=self._expr_down, up=self._expr_up),
      block=HookSet(down=self._block_down, up=self._block_up),
      binder=self._binder,
      on_diagnostic=self.user.on_diagnostic,
      settings=self.user.settings,
    )


def walk_identifiers(
  hooks: IdentifierHooks,
  node: Any,
  kind: Optional[NodeKind] = None,
  config: Optional[WalkConfig] = None,
) -> Scope:
  """
  Walks ``node`` classifying every identifier against its lexical scope.

  Args:
      hooks: The free/bound/binder callbacks.
      node: The root node.
      kind: How to walk the root; guessed from its tag when None.
      config: Optional user configuration whose hooks are chained.

  Returns:
      Scope: The scope at the end of the walk (only the outermost frame, which
      holds top-level bindings of a walked statement or expression list).

  Raises:
      ClassificationError: If ``kind`` is None and the root cannot be guessed.
  """
  scoped = _ScopedWalk(hooks, config or WalkConfig())
  cfg = scoped.config()
  if kind is None:
    guess(cfg, node)
  else:
    walker_for(kind)(cfg, node)
  return scoped.scope


def free_names(node: Any, kind: Optional[NodeKind] = None) -> Set[str]:
  """
  Collects the names of identifiers used without an enclosing binding.

  Args:
      node: The root node.
      kind: How to walk the root; guessed when None.

  Returns:
      Set[str]: The free variable names.

  Example:
      .. code-block:: python

          free_names(N.Function([N.Id("a")], [N.Return(N.Op("add", N.Id("a"), N.Id("b")))]))
          # {"b"}
  """
  names: Set[str] = set()
  walk_identifiers(IdentifierHooks(free=lambda ident, path: names.add(ident[0])), node, kind)
  return names

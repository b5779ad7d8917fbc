"""
Tagged AST Nodes.

The walker operates on a deliberately loose tree representation: a node is an
ordered, mutable container of children carrying a ``tag`` that names its
grammar production. Children are either sub-nodes, plain lists of sub-nodes
(parameter lists, blocks, expression lists) or atoms (identifier names,
literal values, operator names).

A plain ``list`` (or a ``Node`` whose tag is ``None``) is an *untagged
aggregate*: a bare sequence of statements, used for blocks and bodies.

Example:
    ``f(g(x))`` is represented as::

        N.Call(N.Id("f"), N.Call(N.Id("g"), N.Id("x")))
"""

from typing import Any, Callable, Iterable, Optional

from tagwalk.core.tags import ALL_TAGS


class Node(list):
  """
  A tagged, ordered, mutable AST node.

  ``Node`` subclasses ``list`` so children are indexed, iterated and sliced
  like any sequence, and so that an untagged ``Node`` is interchangeable with
  a plain list wherever a block is expected.

  Attributes:
      tag (Optional[str]): The grammar production (e.g. ``"Call"``), or None for
          an untagged aggregate.
  """

  __slots__ = ("tag",)

  def __init__(self, tag: Optional[str] = None, children: Iterable[Any] = ()):
    """
    Initializes the node.

    Args:
        tag: The production name.
        children: Initial children, copied into the node.
    """
    super().__init__(children)
    self.tag = tag

  def override(self, other: Any) -> "Node":
    """
    Replaces this node's content with ``other`` while keeping its identity.

    Any holder of a reference to this node (a parent, an ancestor path, a
    symbol table) observes the rewrite.

    Args:
        other: The replacement node or untagged list.

    Returns:
        Node: ``self``, for chaining.
    """
    if other is self:
      return self
    self.tag = get_tag(other)
    self[:] = list(other)
    return self

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, list):
      return NotImplemented
    return get_tag(self) == get_tag(other) and list.__eq__(self, other)

  def __ne__(self, other: object) -> bool:
    result = self.__eq__(other)
    if result is NotImplemented:
      return result
    return not result

  __hash__ = None  # type: ignore[assignment]

  def __repr__(self) -> str:
    inner = ", ".join(repr(c) for c in self)
    if self.tag is None:
      return f"[{inner}]"
    return f"`{self.tag}{{{inner}}}"


def get_tag(value: Any) -> Optional[str]:
  """
  Returns the tag of a node-shaped value.

  Args:
      value: Any value.

  Returns:
      Optional[str]: The tag, or None for plain lists, untagged nodes and atoms.
  """
  return getattr(value, "tag", None)


def is_container(value: Any) -> bool:
  """Returns True if ``value`` is node-shaped (a tagged node or a plain list)."""
  return isinstance(value, list)


def is_identifier(value: Any) -> bool:
  """Returns True if ``value`` is an ``Id`` node carrying a string name."""
  return get_tag(value) == "Id" and len(value) == 1 and isinstance(value[0], str)


class _NodeFactory:
  """
  Attribute-based constructor namespace: ``N.Local([N.Id("x")], [N.Number(1)])``.

  Only known tags are exposed; anything else raises ``AttributeError`` so
  typos fail early. Use ``N.make(tag, ...)`` to build nodes with arbitrary
  tags (e.g. for testing unknown-node handling).

  ``True`` and ``False`` are Python keywords, so their constructors are
  spelled ``N.True_()`` and ``N.False_()``; they build nodes tagged
  ``"True"`` and ``"False"``.
  """

  _ALIASES = {"True_": "True", "False_": "False"}

  def make(self, tag: Optional[str], *children: Any) -> Node:
    """Builds a node with any tag."""
    return Node(tag, children)

  def __getattr__(self, name: str) -> Callable[..., Node]:
    tag = self._ALIASES.get(name, name)
    if tag not in ALL_TAGS:
      raise AttributeError(f"Unknown node tag: '{name}'")

    def build(*children: Any) -> Node:
      return Node(tag, children)

    build.__name__ = tag
    return build


N = _NodeFactory()

"""
Ancestor Path.

An immutable, persistent linked list of the nodes enclosing the one being
visited, nearest ancestor first. Descending into a statement or expression
extends the path by value (``push`` returns a new path); the parent's path is
never modified, so a path captured by a hook stays valid for the rest of the
walk.
"""

from typing import Any, Iterable, Iterator, Optional


class AncestorPath:
  """
  A persistent cons-list of ancestor nodes.

  ``path[0]`` is the immediate parent, ``path[-1]`` the root. The empty path
  is a singleton (``AncestorPath.EMPTY``).
  """

  __slots__ = ("_head", "_tail", "_length")

  EMPTY: "AncestorPath"

  def __init__(self, head: Any = None, tail: Optional["AncestorPath"] = None):
    self._head = head
    self._tail = tail
    self._length = 0 if tail is None else tail._length + 1

  @classmethod
  def of(cls, nodes: Iterable[Any]) -> "AncestorPath":
    """
    Builds a path from nodes ordered nearest first.

    Args:
        nodes: Ancestor nodes, immediate parent first, root last.

    Returns:
        AncestorPath: The equivalent path.
    """
    if isinstance(nodes, AncestorPath):
      return nodes
    path = cls.EMPTY
    for node in reversed(list(nodes)):
      path = path.push(node)
    return path

  def push(self, node: Any) -> "AncestorPath":
    """Returns a new path with ``node`` as the nearest ancestor."""
    return AncestorPath(node, self)

  @property
  def parent(self) -> Any:
    """The immediate parent, or None for the empty path."""
    return self._head if self._tail is not None else None

  @property
  def tail(self) -> "AncestorPath":
    """The path of the immediate parent (empty path stays empty)."""
    return self._tail if self._tail is not None else self

  def __iter__(self) -> Iterator[Any]:
    path = self
    while path._tail is not None:
      yield path._head
      path = path._tail

  def __len__(self) -> int:
    return self._length

  def __bool__(self) -> bool:
    return self._length > 0

  def __getitem__(self, index: int) -> Any:
    if index < 0:
      index += self._length
    if not 0 <= index < self._length:
      raise IndexError("ancestor path index out of range")
    for i, node in enumerate(self):
      if i == index:
        return node
    raise IndexError("ancestor path index out of range")  # pragma: no cover

  def __eq__(self, other: object) -> bool:
    if isinstance(other, AncestorPath):
      other_nodes = tuple(other)
    elif isinstance(other, (tuple, list)):
      other_nodes = tuple(other)
    else:
      return NotImplemented
    mine = tuple(self)
    return len(mine) == len(other_nodes) and all(a is b for a, b in zip(mine, other_nodes))

  __hash__ = None  # type: ignore[assignment]

  def __repr__(self) -> str:
    tags = ", ".join(str(getattr(n, "tag", None) or "[...]") for n in self)
    return f"AncestorPath({tags})"


AncestorPath.EMPTY = AncestorPath()

"""
Lexical Scope Tracking.

A :class:`Scope` is a stack of frames, each mapping a variable name to the
``Id`` node that bound it. Lookups traverse the stack from the innermost frame
outwards, so inner bindings shadow outer ones.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set


class Scope:
  """
  Represents the stack of active lexical frames.

  The outermost frame (globals of the chunk) is created with the scope and is
  never popped.
  """

  def __init__(self) -> None:
    """Initializes the scope with a single, empty outermost frame."""
    self._frames: List[Dict[str, Any]] = [{}]

  @property
  def depth(self) -> int:
    """Number of active frames, including the outermost one."""
    return len(self._frames)

  def push(self) -> None:
    """Opens a new innermost frame (e.g. entering a block or function)."""
    self._frames.append({})

  def pop(self) -> None:
    """Closes the innermost frame. The outermost frame is kept."""
    if len(self._frames) > 1:
      self._frames.pop()

  @contextmanager
  def frame(self) -> Iterator["Scope"]:
    """Context manager pushing a frame for the duration of the block."""
    self.push()
    try:
      yield self
    finally:
      self.pop()

  def add(self, binder: Any) -> Optional[Any]:
    """
    Registers a binder identifier in the innermost frame.

    Args:
        binder: An ``Id`` node; its name is ``binder[0]``.

    Returns:
        Optional[Any]: The binder previously visible under that name, if any
        (the one being shadowed or redeclared).
    """
    name = binder[0]
    previous = self.lookup(name)
    self._frames[-1][name] = binder
    return previous

  def lookup(self, name: str) -> Optional[Any]:
    """
    Resolves a name, traversing frames from inner to outer.

    Args:
        name: Variable identifier to look up.

    Returns:
        The binder ``Id`` node if the name is bound, else None.
    """
    for frame in reversed(self._frames):
      if name in frame:
        return frame[name]
    return None

  def names(self) -> Set[str]:
    """Returns every name currently visible."""
    visible: Set[str] = set()
    for frame in self._frames:
      visible.update(frame)
    return visible

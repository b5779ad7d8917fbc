"""
AST Node Rendering.

Converts tagged nodes into a compact, single-line textual form used by
diagnostics and error messages, e.g.::

    `Call{ `Id "f", `Number 1 }

Atoms are rendered with ``repr``-like quoting, untagged aggregates as
``{ ... }`` and single-atom leaves without braces.
"""

from typing import Any, List, Optional

from tagwalk.core.nodes import get_tag

_ELLIPSIS = "..."


def _render(value: Any, out: List[str], budget: List[int], seen: set) -> None:
  if budget[0] <= 0:
    return

  def emit(text: str) -> None:
    out.append(text)
    budget[0] -= len(text)

  if isinstance(value, str):
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    emit(f'"{escaped}"')
    return
  if not isinstance(value, list):
    emit(repr(value))
    return

  if id(value) in seen:
    emit("<cycle>")
    return
  seen.add(id(value))

  tag = get_tag(value)
  if tag is not None:
    emit(f"`{tag}")
    if len(value) == 0:
      seen.discard(id(value))
      return
    if len(value) == 1 and not isinstance(value[0], list):
      emit(" ")
      _render(value[0], out, budget, seen)
      seen.discard(id(value))
      return

  if not value:
    emit("{}")
    seen.discard(id(value))
    return

  emit("{ ")
  for i, child in enumerate(value):
    if i:
      emit(", ")
    _render(child, out, budget, seen)
    if budget[0] <= 0:
      break
  emit(" }")
  seen.discard(id(value))


def render_node(value: Any, limit: Optional[int] = None) -> str:
  """
  Renders a node (or any child value) as a one-line string.

  Args:
      value: The node, list or atom to render.
      limit: Maximum length of the result. Longer renderings are truncated
          and suffixed with ``...``. None means unlimited.

  Returns:
      str: The rendering.
  """
  out: List[str] = []
  budget = [limit + 1 if limit is not None else float("inf")]
  _render(value, out, budget, set())
  text = "".join(out)
  if limit is not None and len(text) > limit:
    return text[: max(limit - len(_ELLIPSIS), 0)] + _ELLIPSIS
  return text

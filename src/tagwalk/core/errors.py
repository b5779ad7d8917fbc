"""
Walker Errors and Structural Diagnostics.

Two families of problems are distinguished:

1.  **Structural diagnostics** (malformed, unknown or invalid nodes) describe
    bad *data*. They are logged as warnings and forwarded to the
    configuration's ``on_diagnostic`` callback; the offending node is treated
    as a leaf and the walk continues. They are raised as ``StructuralError``
    only when they concern the root of a walk (a precondition failure of the
    caller) or when ``strict_mode`` is enabled.
2.  **Programming errors** (a ``down`` hook returning something other than
    nothing or the short-circuit marker, or ``guess`` on an unclassifiable
    tag) always raise immediately.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from tagwalk.core.nodes import get_tag
from tagwalk.core.path import AncestorPath
from tagwalk.enums import DiagnosticKind, NodeKind
from tagwalk.utils.console import log_warning
from tagwalk.utils.render import render_node

if TYPE_CHECKING:
  from tagwalk.config import WalkConfig


@dataclass(frozen=True)
class Diagnostic:
  """
  A non-fatal structural problem found while walking.
  """

  kind: DiagnosticKind
  """The problem category."""

  node: Any
  """The offending value (node, list or atom)."""

  message: str
  """Human readable description, including the tag and rendered node."""

  path: AncestorPath
  """Ancestors of the offending value, nearest first."""

  rendered: str
  """One-line rendering of the offending value."""

  at_root: bool = False
  """True if the offending value is the node the walk was started on."""

  @property
  def tag(self) -> Optional[str]:
    """Tag of the offending node, if any."""
    return get_tag(self.node)


class WalkerError(Exception):
  """Base class for every error raised by the walker."""


class StructuralError(WalkerError, ValueError):
  """
  A structural diagnostic escalated to an exception.

  Attributes:
      diagnostic (Diagnostic): The underlying diagnostic.
  """

  def __init__(self, diagnostic: Diagnostic):
    super().__init__(diagnostic.message)
    self.diagnostic = diagnostic


class MalformedNodeError(StructuralError):
  """A classified tag whose children match none of its known shapes."""


class UnknownNodeError(StructuralError):
  """A tag belonging to neither classification set."""


class InvalidNodeError(StructuralError):
  """A value that is not node-shaped where a node or list was expected."""


class HookContractError(WalkerError, TypeError):
  """
  A ``down`` hook returned something other than None or the short-circuit marker.
  """

  def __init__(self, kind: NodeKind, node: Any, result: Any, limit: Optional[int] = None):
    self.kind = kind
    self.node = node
    self.result = result
    super().__init__(
      f"Invalid return value from '{kind.value}.down' hook on {get_tag(node) or 'untagged node'} "
      f"{render_node(node, limit)}: expected None or Descent.SKIP, got {result!r}"
    )


class ClassificationError(WalkerError, ValueError):
  """``guess`` could not decide which kind of node it was given."""

  def __init__(self, tag: Any, node: Any, limit: Optional[int] = None):
    self.tag = tag
    self.node = node
    super().__init__(f"Cannot guess the kind of node with tag {tag!r}: {render_node(node, limit)}")


_ERRORS = {
  DiagnosticKind.MALFORMED: MalformedNodeError,
  DiagnosticKind.UNKNOWN: UnknownNodeError,
  DiagnosticKind.INVALID: InvalidNodeError,
}

_TITLES = {
  DiagnosticKind.MALFORMED: "Malformed",
  DiagnosticKind.UNKNOWN: "Unknown",
  DiagnosticKind.INVALID: "Invalid",
}


def report(
  config: "WalkConfig",
  kind: DiagnosticKind,
  node: Any,
  path: AncestorPath,
  expected: str,
  root: bool = False,
) -> Diagnostic:
  """
  Emits a structural diagnostic.

  The diagnostic is logged (unless disabled in settings) and passed to
  ``config.on_diagnostic``. It is then raised as the matching
  ``StructuralError`` if it concerns the root of the walk or strict mode is on.

  Args:
      config: The active walk configuration.
      kind: The problem category.
      node: The offending value.
      path: Ancestors of the offending value.
      expected: What the walker expected instead (e.g. ``"statement"``, ``"block"``).
      root: True if ``node`` is the root of the walk. Members of a root
          aggregate or expression list share its empty path but are not roots.

  Returns:
      Diagnostic: The emitted diagnostic, when it was not escalated.

  Raises:
      StructuralError: At the root, or in strict mode.
  """
  settings = config.settings
  rendered = render_node(node, settings.render_limit)
  tag = get_tag(node)
  if kind == DiagnosticKind.INVALID:
    message = f"Invalid {expected}: expected a node-shaped container, got {type(node).__name__} {rendered}"
  elif tag is None:
    message = f"{_TITLES[kind]} {expected}: {rendered}"
  else:
    message = f"{_TITLES[kind]} {expected} '{tag}': {rendered}"

  diagnostic = Diagnostic(kind=kind, node=node, message=message, path=path, rendered=rendered, at_root=root)
  if settings.log_diagnostics:
    log_warning(message)
  if config.on_diagnostic is not None:
    config.on_diagnostic(diagnostic)
  if diagnostic.at_root or settings.strict_mode:
    raise _ERRORS[kind](diagnostic)
  return diagnostic

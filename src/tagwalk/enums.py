"""
Enumerations for tagwalk.

This module defines the standard enumerations used across the walker for
node categorisation, hook control flow and diagnostic reporting.
"""

from enum import Enum


class NodeKind(str, Enum):
  """
  The four traversal categories a node can be walked as.

  Each kind owns one public entry point (``walk_statement``, ...). Only the
  first three have a hook set in :class:`~tagwalk.config.WalkConfig`.
  """

  STATEMENT = "stat"
  EXPRESSION = "expr"
  BLOCK = "block"
  EXPRESSION_LIST = "expr_list"


class Descent(str, Enum):
  """
  Result of a ``down`` hook.

  ``SKIP`` is the short-circuit marker: the node's children are not visited,
  but its ``up`` hook still fires. Its value is the historical ``"break"``
  sentinel so hooks returning the bare string keep working.
  """

  CONTINUE = "continue"
  SKIP = "break"


class DiagnosticKind(str, Enum):
  """
  Categories of non-fatal structural problems found while walking.
  """

  MALFORMED = "malformed"  # classified tag, unexpected children
  UNKNOWN = "unknown"  # tag in neither classification set
  INVALID = "invalid"  # not a node-shaped container at all


class TagClass(str, Enum):
  """
  Classification of a tag name against the statement and expression sets.
  """

  STATEMENT = "statement"
  EXPRESSION = "expression"
  BOTH = "both"  # Call, Invoke
  NONE = "none"

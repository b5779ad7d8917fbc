"""
Node Classifier.

Static tables mapping tag names to the node kinds they can start. The sets are
built once at import time and are read-only afterwards; they are exposed so
that hook authors and collaborators (pattern matchers, scope analysers) can
branch on tag category without duplicating the grammar.
"""

from typing import Any, FrozenSet

from tagwalk.enums import TagClass

STAT_TAGS: FrozenSet[str] = frozenset(
  {
    "Do",
    "Set",
    "While",
    "Repeat",
    "Local",
    "Localrec",
    "Fornum",
    "Forin",
    "If",
    "Call",
    "Invoke",
    "Return",
    "Break",
    "Goto",
    "Label",
  }
)
"""Tags that can start a statement."""

EXPR_TAGS: FrozenSet[str] = frozenset(
  {
    "Paren",
    "Call",
    "Invoke",
    "Index",
    "Op",
    "Function",
    "Stat",
    "Table",
    "Nil",
    "Dots",
    "True",
    "False",
    "Number",
    "String",
    "Id",
  }
)
"""Tags that can start an expression."""

# Call and Invoke are statements when used for their side effect and
# expressions when used for their value.
DUAL_TAGS: FrozenSet[str] = STAT_TAGS & EXPR_TAGS

# Auxiliary tags that only appear nested inside another production.
AUX_TAGS: FrozenSet[str] = frozenset({"Pair"})

ALL_TAGS: FrozenSet[str] = STAT_TAGS | EXPR_TAGS | AUX_TAGS


def is_stat_tag(tag: Any) -> bool:
  """Returns True if ``tag`` can start a statement."""
  return isinstance(tag, str) and tag in STAT_TAGS


def is_expr_tag(tag: Any) -> bool:
  """Returns True if ``tag`` can start an expression."""
  return isinstance(tag, str) and tag in EXPR_TAGS


def classify_tag(tag: Any) -> TagClass:
  """
  Reports which classification set(s) a tag belongs to.

  Args:
      tag: The tag name (any value is accepted; non-strings are never classified).

  Returns:
      TagClass: STATEMENT, EXPRESSION, BOTH or NONE.
  """
  in_stat = is_stat_tag(tag)
  in_expr = is_expr_tag(tag)
  if in_stat and in_expr:
    return TagClass.BOTH
  if in_stat:
    return TagClass.STATEMENT
  if in_expr:
    return TagClass.EXPRESSION
  return TagClass.NONE

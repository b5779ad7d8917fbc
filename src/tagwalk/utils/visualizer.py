"""
AST Visualization Utility.

This module provides the `MermaidGenerator`, a walker client that traverses a
tagged AST and converts it into a Mermaid.js graph diagram. It is used to
inspect the structure a transformation pass sees, including where binders are
introduced.

It is also a compact example of the hook protocol: ``down`` hooks add a graph
node and push it as the parent of everything visited below it, ``up`` hooks
pop it again, and the ``binder`` hook attaches binders to the construct that
introduces them.
"""

from typing import Any, List, Optional

from tagwalk.config import HookSet, WalkConfig
from tagwalk.core.nodes import get_tag
from tagwalk.core.path import AncestorPath
from tagwalk.core.walker import guess, walker_for
from tagwalk.enums import NodeKind
from tagwalk.utils.render import render_node


class MermaidGenerator:
  """
  Generates a Mermaid ``graph TD`` string from a tagged AST.
  """

  COLORS = {
    "blue": "#4285f4",
    "green": "#34a853",
    "yellow": "#f9ab00",
    "red": "#ea4335",
    "navy": "#20344b",
    "white": "#ffffff",
  }

  STYLES = f"""
    %% Styles
    classDef default color:{COLORS["navy"]},stroke:{COLORS["navy"]};
    classDef blockNode fill:{COLORS["navy"]},stroke:{COLORS["navy"]},color:{COLORS["white"]},rx:5px;
    classDef statNode fill:{COLORS["white"]},stroke:{COLORS["navy"]},stroke-dasharray: 2 2,color:{COLORS["navy"]};
    classDef exprNode fill:{COLORS["blue"]},stroke:{COLORS["navy"]},color:{COLORS["white"]},rx:5px;
    classDef binderNode fill:{COLORS["yellow"]},stroke:{COLORS["navy"]},color:{COLORS["navy"]},rx:2px;
    """

  STYLE_CLASSES = {
    NodeKind.STATEMENT: "statNode",
    NodeKind.EXPRESSION: "exprNode",
    NodeKind.BLOCK: "blockNode",
  }

  def __init__(self, label_limit: int = 40):
    """
    Initializes the generator with empty buffers.

    Args:
        label_limit: Maximum length of a node label.
    """
    self.label_limit = label_limit
    self.nodes: List[str] = []
    self.edges: List[str] = []
    self.stack: List[str] = []
    self._counter = 0

  def generate(self, tree: Any, kind: Optional[NodeKind] = None) -> str:
    """
    Converts a tagged AST into a Mermaid graph definition string.

    Args:
        tree: The root node.
        kind: How to walk the root; guessed from its tag when None.

    Returns:
        str: A complete Mermaid.js graph definition including styles.
    """
    self.nodes = []
    self.edges = []
    self.stack = []
    self._counter = 0

    config = WalkConfig(
      stat=self._hooks(NodeKind.STATEMENT),
      expr=self._hooks(NodeKind.EXPRESSION),
      block=self._hooks(NodeKind.BLOCK),
      binder=self._binder,
    )
    if kind is None:
      guess(config, tree)
    else:
      walker_for(kind)(config, tree)

    return f"graph TD\n{self.STYLES}\n" + "\n".join(self.nodes + self.edges)

  def _hooks(self, kind: NodeKind) -> HookSet:
    style_class = self.STYLE_CLASSES[kind]

    def down(node: Any, path: AncestorPath) -> None:
      self.stack.append(self._add_node(self._label(node, kind), style_class))

    def up(node: Any, path: AncestorPath) -> None:
      if self.stack:
        self.stack.pop()

    return HookSet(down=down, up=up)

  def _binder(self, node: Any, path: AncestorPath) -> None:
    self._add_node(f"bind {node[0]}", "binderNode")

  def _label(self, node: Any, kind: NodeKind) -> str:
    tag = get_tag(node)
    if kind == NodeKind.BLOCK or tag is None:
      return "Block"
    if tag in ("Id", "Number", "String"):
      return render_node(node)
    if tag == "Op" and node and isinstance(node[0], str):
      return f"Op {node[0]}"
    return tag

  def _add_node(self, label: str, style_class: str = "default") -> str:
    """
    Registers a node in the graph and links it to its parent.

    Args:
        label (str): Text display for the node.
        style_class (str): CSS class for styling (defined in STYLES).

    Returns:
        str: The ID generated for this node.
    """
    node_id = f"n{self._counter}"
    self._counter += 1
    clean_label = label.replace('"', "'").replace("\n", " ").strip()

    if len(clean_label) > self.label_limit:
      clean_label = clean_label[: self.label_limit - 3] + "..."

    self.nodes.append(f'{node_id}["{clean_label}"]:::{style_class}')

    if self.stack:
      self.edges.append(f"{self.stack[-1]} --> {node_id}")

    return node_id

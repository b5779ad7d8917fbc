"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Snapshot testing fixture for visual verification.
- An event recorder building configurations that log every hook call.
- Console isolation so tests capturing log output do not leak backends.
"""

import sys
import pytest
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

# Add src to path so we can import 'tagwalk' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from tagwalk.config import HookSet, WalkConfig
from tagwalk.core.nodes import get_tag
from tagwalk.utils.console import reset_console


def label(node: Any) -> str:
  """Short, stable label for a node: ``Id x``, ``Number 1``, ``Call``, ``Block``."""
  tag = get_tag(node)
  if tag is None:
    return "Block"
  if tag in ("Id", "Number", "String") and len(node) == 1:
    return f"{tag} {node[0]}"
  if tag == "Op" and node:
    return f"Op {node[0]}"
  return tag


class EventRecorder:
  """
  Records hook invocations as ``(phase, kind, label)`` tuples.

  Paths received by hooks are stored by node identity in ``paths``.
  """

  def __init__(self):
    self.events: List[Tuple[str, str, str]] = []
    self.paths: Dict[int, Tuple[Any, ...]] = {}

  def _make(self, phase: str, kind: str, result: Optional[Callable[[Any], Any]] = None):
    def hook(node, path):
      self.events.append((phase, kind, label(node)))
      self.paths[id(node)] = tuple(path)
      if result is not None:
        return result(node)
      return None

    return hook

  def config(self, down_result: Optional[Callable[[Any], Any]] = None, **overrides: Any) -> WalkConfig:
    """
    Builds a configuration recording every hook.

    Args:
        down_result: Optional function computing the return value of every ``down`` hook.
        **overrides: Extra WalkConfig fields (e.g. ``settings``).
    """
    kinds = {}
    for kind in ("stat", "expr", "block"):
      kinds[kind] = HookSet(down=self._make("down", kind, down_result), up=self._make("up", kind))

    def binder(node, path):
      self.events.append(("bind", "binder", label(node)))
      self.paths[id(node)] = tuple(path)

    params = {**kinds, "binder": binder, **overrides}
    return WalkConfig(**params)

  def labels(self, phase: Optional[str] = None, kind: Optional[str] = None) -> List[str]:
    """Labels of recorded events, optionally filtered."""
    return [e[2] for e in self.events if (phase is None or e[0] == phase) and (kind is None or e[1] == kind)]


@pytest.fixture
def recorder() -> EventRecorder:
  """Fresh event recorder."""
  return EventRecorder()


@pytest.fixture
def recorder_factory():
  """Factory for independent event recorders."""
  return EventRecorder


class SnapshotAssert:
  """
  Simple snapshot comparison logic to verify rendered output stability.
  """

  def __init__(self, request: pytest.FixtureRequest):
    self.request = request
    self.test_name = request.node.name
    self.module_path = Path(request.node.fspath).parent
    self.snapshot_dir = self.module_path / "__snapshots__"
    self.update_mode = request.config.getoption("--update-snapshots", default=False)

  def assert_match(self, content: str, extension: str = "txt") -> None:
    """
    Compares content against the stored file, creating it on first use.

    Args:
        content: The actual output string.
        extension: File extension (default 'txt').
    """
    if not self.snapshot_dir.exists():
      self.snapshot_dir.mkdir(parents=True)

    snapshot_file = self.snapshot_dir / f"{self.test_name}.{extension}"
    content = content.replace("\r\n", "\n")

    if self.update_mode or not snapshot_file.exists():
      snapshot_file.write_text(content, encoding="utf-8")
      if self.update_mode:
        return

    expected = snapshot_file.read_text(encoding="utf-8").replace("\r\n", "\n")
    assert content == expected, (
      f"Snapshot mismatch for {snapshot_file.name}. Run pytest with --update-snapshots to accept changes."
    )


@pytest.fixture
def snapshot(request):
  """Fixture to assert text matches a stored snapshot."""
  return SnapshotAssert(request)


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the default console backend after each test."""
  yield
  reset_console()


def pytest_addoption(parser):
  """Add CLI flag to update snapshots."""
  parser.addoption("--update-snapshots", action="store_true", default=False, help="Update snapshots for visual tests")

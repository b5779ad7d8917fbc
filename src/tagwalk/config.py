"""
Walk Configuration Store.

A :class:`WalkConfig` is built once by the caller and passed by reference
through a whole traversal. It holds one :class:`HookSet` per hookable node
kind (``stat``, ``expr``, ``block``), the ``binder`` hook, an optional
diagnostic sink and the ambient :class:`WalkerSettings`.

All models are frozen pydantic models: hook shapes are validated at
construction time and the walker can never mutate them.
"""

import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tagwalk.enums import Descent, NodeKind
from tagwalk.utils.console import log_warning

Hook = Callable[..., Any]
"""A hook callable: ``hook(node, path)`` (binder hooks receive the identifier)."""


class HookSet(BaseModel):
  """
  Pre-order and post-order hooks for one node kind.
  """

  model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

  down: Optional[Union[Descent, Hook]] = Field(
    None,
    description="Pre-order hook, or Descent.SKIP to never descend into this kind.",
  )
  up: Optional[Hook] = Field(None, description="Post-order hook, fired even when descent was skipped.")

  @field_validator("down", mode="before")
  @classmethod
  def validate_down(cls, v: Any) -> Any:
    """
    Accepts a callable, the short-circuit marker (``Descent.SKIP`` or ``"break"``) or None.

    Args:
        v: The raw value.

    Returns:
        The callable, ``Descent.SKIP`` or None.

    Raises:
        ValueError: For any other value.
    """
    if v is None or callable(v):
      return v
    if isinstance(v, str) and v == Descent.SKIP.value:
      return Descent.SKIP
    raise ValueError(f"'down' must be a callable or the short-circuit marker {Descent.SKIP.value!r}, got {v!r}")

  @field_validator("up", mode="before")
  @classmethod
  def validate_up(cls, v: Any) -> Any:
    """
    Ensures ``up`` is callable.

    Args:
        v: The raw value.

    Returns:
        The callable or None.
    """
    if v is None or callable(v):
      return v
    raise ValueError(f"'up' must be a callable, got {v!r}")

  @property
  def skips(self) -> bool:
    """True if ``down`` is the literal short-circuit marker."""
    return self.down is Descent.SKIP


EMPTY_HOOKS = HookSet()


class WalkerSettings(BaseModel):
  """
  Ambient walker behaviour, loadable from ``[tool.tagwalk]`` in ``pyproject.toml``.
  """

  model_config = ConfigDict(frozen=True)

  strict_mode: bool = Field(False, description="If True, structural diagnostics raise instead of logging.")
  render_limit: int = Field(120, ge=16, description="Maximum length of a node rendered inside a diagnostic.")
  log_diagnostics: bool = Field(True, description="Emit structural diagnostics on the 'tagwalk' logger.")

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "WalkerSettings":
    """
    Loads settings from the nearest pyproject.toml and applies overrides.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        **overrides: Explicit values; None values are ignored.

    Returns:
        WalkerSettings: The fully resolved settings.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)
    explicit = {k: v for k, v in overrides.items() if v is not None}
    return cls.model_validate({**toml_config, **explicit})


class WalkConfig(BaseModel):
  """
  Hook configuration for a walk.

  Example:
      .. code-block:: python

          seen = []
          cfg = WalkConfig(expr={"down": lambda node, path: seen.append(node.tag)})
          walk_expression(cfg, N.Call(N.Id("f"), N.Number(1)))
          # seen == ["Call", "Id", "Number"]
  """

  model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

  stat: HookSet = Field(default_factory=HookSet, description="Hooks fired on statements.")
  expr: HookSet = Field(default_factory=HookSet, description="Hooks fired on expressions.")
  block: HookSet = Field(default_factory=HookSet, description="Hooks fired on blocks.")
  binder: Optional[Hook] = Field(None, description="Called on each identifier introducing a local binding.")
  on_diagnostic: Optional[Hook] = Field(None, description="Receives every structural Diagnostic.")
  settings: WalkerSettings = Field(default_factory=WalkerSettings, description="Ambient walker settings.")

  @field_validator("stat", "expr", "block", mode="before")
  @classmethod
  def validate_hook_set(cls, v: Any) -> Any:
    """Treats an absent sub-configuration as an empty one."""
    if v is None:
      return EMPTY_HOOKS
    return v

  @field_validator("binder", "on_diagnostic", mode="before")
  @classmethod
  def validate_callable(cls, v: Any) -> Any:
    """Ensures single hooks are callable."""
    if v is None or callable(v):
      return v
    raise ValueError(f"Expected a callable, got {v!r}")

  def hooks_for(self, kind: NodeKind) -> HookSet:
    """
    Returns the hook set for a node kind.

    Args:
        kind: The node kind being walked.

    Returns:
        HookSet: The configured hooks; expression lists never have hooks.
    """
    if kind == NodeKind.STATEMENT:
      return self.stat
    if kind == NodeKind.EXPRESSION:
      return self.expr
    if kind == NodeKind.BLOCK:
      return self.block
    return EMPTY_HOOKS


DEFAULT_CONFIG = WalkConfig()


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches parents for 'pyproject.toml' and extracts the ``[tool.tagwalk]`` table.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {e}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("tagwalk", {}), parent

  return {}, None

"""
Central Logging and Console Utilities.

This module routes the package's diagnostics through the Python standard
`logging` library, rendered by `rich`.

It serves two purposes:
1.  **Standard Logging Integration**: Provides the package logger (``tagwalk``)
    and adapter functions (`log_info`, `log_warning`, `log_error`) used by the
    walker to report structural diagnostics.
2.  **Environment Injection**: Implements a Proxy pattern for the Rich Console,
    so the output destination (stderr, file, or in-memory buffer) can be
    swapped at runtime via `set_console`, e.g. to capture a walk's warnings.

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
    logger (logging.Logger): The package logger.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "tagwalk"

logger = logging.getLogger(LOGGER_NAME)

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "tag": "bold magenta",
    "node": "bold blue",
  }
)


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the 'backend' Console. When the
  backend changes, the package logger's RichHandler is rebuilt so that
  records follow the new destination.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    """Initializes the proxy with a default standard error console."""
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Resets the proxy to use a fresh standard error console."""
    self._backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    """The currently active Console."""
    return self._backend

  def _configure_logging(self) -> None:
    """
    Attaches a RichHandler bound to the current backend to the package logger.

    The logger keeps propagating to the root logger, so applications (and
    pytest's ``caplog``) still see every record.
    """
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=False,
      rich_tracebacks=True,
    )
    if logger.level == logging.NOTSET:
      logger.setLevel(logging.INFO)
    logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards `print` calls to the active backend."""
    self._backend.print(*args, **kwargs)

  def export_text(self, **kwargs: Any) -> str:
    """
    Forwards `export_text` (requires a backend created with ``record=True``).

    Args:
        **kwargs: Options passed to console.export_text.

    Returns:
        str: The captured text output.
    """
    return self._backend.export_text(**kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Global helper to reset logging output to standard error."""
  console.reset()


def get_console() -> Console:
  """Retrieves the currently active console backend."""
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs an informational message on the package logger.

  Args:
      msg (str): The message content.
  """
  logger.info(msg)


def log_warning(msg: str) -> None:
  """
  Logs a warning message on the package logger.

  Args:
      msg (str): The message content.
  """
  logger.warning(msg)


def log_error(msg: str) -> None:
  """
  Logs an error message on the package logger.

  Args:
      msg (str): The message content.
  """
  logger.error(msg)

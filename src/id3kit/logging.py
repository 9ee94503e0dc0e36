"""Logging utilities for id3kit.

This module provides a custom BUILD log level and a context manager for
enabling/disabling id3kit logging with loguru.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) to
    prevent duplicate output when ``enable_logging()`` adds its own handler.
    If your application configures loguru handlers *before* importing id3kit,
    handler 0 may no longer be the default; in that case the removal is a
    no-op (the ``ValueError`` is suppressed). Configure loguru handlers
    *after* importing id3kit, or re-add a stderr handler explicitly if needed.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

# Handler ID 0 is the default stderr handler loguru creates at import time.
with contextlib.suppress(ValueError):
    logger.remove(0)

# Register custom BUILD level (between INFO=20 and WARNING=30)
BUILD_LEVEL: Final[str] = "BUILD"
BUILD_LEVEL_NUMBER: Final[int] = 25


def _register_build_level() -> None:
    """Register the BUILD custom log level with loguru.

    Attempts to look up the BUILD level. If it does not exist, registers it
    with the configured numeric value. If it already exists with a different
    numeric value, emits a UserWarning because loguru does not permit changing
    the numeric value of an existing level.
    """
    try:
        existing_level = logger.level(BUILD_LEVEL)
    except ValueError:
        logger.level(BUILD_LEVEL, no=BUILD_LEVEL_NUMBER, icon="🌳")
    else:
        if existing_level.no != BUILD_LEVEL_NUMBER:
            msg = f"BUILD level already registered with numeric value {existing_level.no}, expected {BUILD_LEVEL_NUMBER}"
            warnings.warn(msg, stacklevel=2)


_register_build_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "BUILD",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{function}</cyan> - "
    "<level>{message}</level> {extra}"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> {extra}"
)


class LoggingHandle:
    """Handle for managing id3kit logging lifecycle.

    Stores the handler ID from logger.add() and provides cleanup via disable()
    or automatic cleanup through context manager protocol.

    Examples:
        >>> with enable_logging():  # doctest: +SKIP
        ...     tree = build_decision_tree(examples)

        >>> handle = enable_logging(level="DEBUG")  # doctest: +SKIP
        >>> tree = build_decision_tree(examples)  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the logging handle.

        Args:
            handler_id (int): The loguru handler ID from logger.add().
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove the handler associated with this logging handle.

        When this is the last active handle, ``logger.disable("id3kit")`` is
        called to suppress id3kit log messages, including messages routed to
        handlers added independently via ``logger.enable("id3kit")``.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Enter context manager.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and disable logging.

        Args:
            exc_type (type[BaseException] | None): The exception type, if raised.
            exc_val (BaseException | None): The exception instance, if raised.
            exc_tb (TracebackType | None): The traceback, if raised.
        """
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return the number of currently active logging handles.

        Returns:
            int: Count of active handles that have not been disabled.
        """
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel | None = None,
    log_format: LogFormat | None = None,
) -> LoggingHandle:
    """Enable id3kit logging on stderr.

    Each call returns an independent handle that manages its own handler; use
    the handle's disable() method or context manager protocol to clean up.

    Args:
        level (LogLevel | None): Minimum log level to display. "BUILD" surfaces
            calls to the public entry points (tree construction, evaluation).
            Lower to "DEBUG" to see every node and split decision. Defaults to
            `ID3Settings.log_level`.
        log_format (LogFormat | None): "short" shows only the function name;
            "full" adds module and line. Defaults to `ID3Settings.log_format`.

    Returns:
        LoggingHandle: Independent handle for managing the logging handler.

    Note:
        This function calls ``logger.enable("id3kit")``. When the last active
        ``LoggingHandle`` is disabled, ``logger.disable("id3kit")`` is called
        automatically.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = build_decision_tree(examples)
    """
    from id3kit.settings import get_settings  # noqa: PLC0415 - settings imports LogLevel from this module

    settings = get_settings()
    resolved_level = level if level is not None else settings.log_level
    resolved_format = log_format if log_format is not None else settings.log_format

    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=resolved_level,
        filter=_is_id3kit_record,
        format=_SHORT_FORMAT if resolved_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_id3kit_record(record: Record) -> bool:
    """Filter to pass all id3kit module records.

    Args:
        record (Record): The loguru Record object to filter.

    Returns:
        bool: True if the record is from the id3kit package, False otherwise.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)

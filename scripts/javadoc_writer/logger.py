#!/usr/bin/env python3
"""
Logging module with GitHub Actions support.

Messages go to stdout/stderr with a level prefix. When running inside a
GitHub Actions workflow, warnings, errors and notices are emitted as
workflow commands so they show up as annotations on the changed file:

- ::error file=X,line=N::message
- ::warning file=X,line=N::message
- ::notice file=X,line=N::message
- ::group:: / ::endgroup:: - Collapsible log sections

Usage:
    from logger import get_logger

    logger = get_logger(__name__)
    logger.info("Processing Foo.java")
    logger.warning("Cannot reformat", file="Foo.java", line=12)
"""

import os
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for structured logging."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class Logger:
    """
    Logger with GitHub Actions support.

    The same instance is shared by every module (see get_logger), so changing
    the level affects the whole tool.
    """

    def __init__(self, name: str, level: LogLevel = LogLevel.INFO):
        """
        Initialize logger.

        Args:
            name: Logger name (typically module name)
            level: Minimum log level to display
        """
        self.name = name
        self.level = level
        self.is_github_actions = os.environ.get('GITHUB_ACTIONS') == 'true'
        self._group_stack = []

    def _should_log(self, level: LogLevel) -> bool:
        return level.value >= self.level.value

    def _annotate(self, command: str, message: str, file: Optional[str], line: Optional[int]) -> str:
        """Build a GitHub Actions workflow command for the message."""
        annotation = f"::{command}"
        if file:
            annotation += f" file={file}"
            if line:
                annotation += f",line={line}"
        return f"{annotation}::{message}"

    def _emit(self, level: LogLevel, command: str, prefix: str, message: str,
              file: Optional[str] = None, line: Optional[int] = None, stream=None):
        if not self._should_log(level):
            return
        if self.is_github_actions and command:
            print(self._annotate(command, message, file, line), file=sys.stdout)
            return
        location = ""
        if file:
            location = f"{file}:{line}: " if line else f"{file}: "
        print(f"{prefix}{location}{message}", file=stream or sys.stdout)

    def debug(self, message: str):
        """Log debug message (only in DEBUG mode)."""
        self._emit(LogLevel.DEBUG, "", "[DEBUG] ", message)

    def info(self, message: str):
        """Log informational message."""
        self._emit(LogLevel.INFO, "", "", message)

    def success(self, message: str):
        """Log success message (info level with checkmark)."""
        self._emit(LogLevel.INFO, "", "✅ ", message)

    def warning(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        """
        Log warning message.

        Args:
            message: Warning message
            file: Optional file path for GitHub Actions annotation
            line: Optional line number for GitHub Actions annotation
        """
        self._emit(LogLevel.WARNING, "warning", "⚠️  ", message, file, line, sys.stderr)

    def error(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        """
        Log error message.

        Args:
            message: Error message
            file: Optional file path for GitHub Actions annotation
            line: Optional line number for GitHub Actions annotation
        """
        self._emit(LogLevel.ERROR, "error", "❌ ", message, file, line, sys.stderr)

    def notice(self, message: str, file: Optional[str] = None, line: Optional[int] = None):
        """Log notice message (GitHub Actions annotation, plain info otherwise)."""
        self._emit(LogLevel.INFO, "notice", "ℹ️  ", message, file, line)

    def group(self, title: str):
        """
        Start a collapsible group in GitHub Actions logs.

        Args:
            title: Group title
        """
        self._group_stack.append(title)
        if self.is_github_actions:
            print(f"::group::{title}", file=sys.stdout)
        elif self._should_log(LogLevel.INFO):
            print(f"\n{'=' * 60}", file=sys.stdout)
            print(title, file=sys.stdout)
            print('=' * 60, file=sys.stdout)

    def endgroup(self):
        """End the current collapsible group."""
        if self._group_stack:
            self._group_stack.pop()
            if self.is_github_actions:
                print("::endgroup::", file=sys.stdout)

    def set_level(self, level: LogLevel):
        """Change the minimum log level."""
        self.level = level


# Global logger instance
_default_logger: Optional[Logger] = None


def get_logger(name: str = "javadoc", level: Optional[LogLevel] = None) -> Logger:
    """
    Get or create the shared logger instance.

    Args:
        name: Logger name (typically module name)
        level: Optional log level (defaults to INFO, or DEBUG if JAVADOC_DEBUG env var is set)

    Returns:
        Logger instance
    """
    global _default_logger

    if _default_logger is None:
        if level is None:
            level = LogLevel.DEBUG if os.environ.get('JAVADOC_DEBUG') == 'true' else LogLevel.INFO
        _default_logger = Logger(name, level)

    return _default_logger


def configure_logging(level: LogLevel):
    """
    Configure global logging level.

    Args:
        level: Log level to set
    """
    get_logger().set_level(level)

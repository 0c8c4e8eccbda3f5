#!/usr/bin/env python3
"""
User-facing failure channel.

The writer reports every failure that the user has to know about through a
Messages instance. The default one prints through the logger; callers can
pass their own (tests use a recording one).
"""

from logger import get_logger

logger = get_logger(__name__)


class Messages:
    """Reports failures to the user as a single human-readable message."""

    def show_error(self, message: str, title: str):
        logger.error(f"[{title}] {message}")


class RecordingMessages(Messages):
    """Keeps every reported message instead of printing it."""

    def __init__(self):
        self.errors = []

    def show_error(self, message: str, title: str):
        self.errors.append((title, message))

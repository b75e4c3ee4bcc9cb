#!/usr/bin/env python3
"""
Error taxonomy for the cafe menu monitor.

Fetch and parse errors end the current polling cycle, publish errors are
handled post-by-post, and persistence errors are logged and left for the next
cycle to repair.
"""


class MenuMonitorError(Exception):
    """Base class for all monitor errors."""


class FetchError(MenuMonitorError):
    """The menu provider could not be reached or answered with an error status."""

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class ParseError(MenuMonitorError):
    """The menu payload was not valid JSON or did not have the expected shape."""


class PublishError(MenuMonitorError):
    """A single post could not be published."""

    def __init__(self, message: str, reply_to_id: str = None):
        super().__init__(message)
        self.reply_to_id = reply_to_id


class PersistenceError(MenuMonitorError):
    """The last-posted meal record could not be written."""

"""Errors raised while building formatters."""

from __future__ import annotations


class FormatterError(Exception):
    """Base class for chronofmt errors."""


class InvalidPattern(FormatterError, ValueError):
    """A pattern string could not be compiled into a formatter."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid date pattern {pattern!r}: {reason}.")
        self.pattern = pattern
        self.reason = reason


class UnknownLocale(FormatterError, ValueError):
    def __init__(self, locale: str) -> None:
        super().__init__(f"Unknown locale: {locale!r}.")
        self.locale = locale

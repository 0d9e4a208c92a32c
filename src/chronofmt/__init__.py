"""Cached, immutable CLDR date formatters."""

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.errors import FormatterError, InvalidPattern, UnknownLocale
from chronofmt.lib.handle import FormatterHandle, compile_handle, render
from chronofmt.lib.helpers import DateFormattingHelper
from chronofmt.lib.types import FormatPattern

__version__ = "0.1.0"

__all__ = [
    "DateFormattingHelper",
    "FormatPattern",
    "FormatterCache",
    "FormatterError",
    "FormatterHandle",
    "InvalidPattern",
    "UnknownLocale",
    "__version__",
    "compile_handle",
    "render",
]

"""Core chronofmt library exports."""

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.handle import FormatterHandle
from chronofmt.lib.types import FormatPattern

__all__ = ["FormatPattern", "FormatterCache", "FormatterHandle"]

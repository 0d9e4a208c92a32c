"""Stable domain identifier newtypes."""

from typing import NewType

FormatPattern = NewType("FormatPattern", str)

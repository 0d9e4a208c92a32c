"""Shared pytest fixtures for formatter tests."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC

import pytest
import structlog

from chronofmt.lib.cache import FormatterCache
from chronofmt.lib.helpers import DateFormattingHelper
from chronofmt.lib.logging import reset_logging


@pytest.fixture
def cache() -> FormatterCache:
    return FormatterCache(locale="en_US", zone=UTC)


@pytest.fixture
def helper(cache: FormatterCache) -> DateFormattingHelper:
    return DateFormattingHelper(cache)


@pytest.fixture
def reset_log_config() -> Iterator[None]:
    yield
    reset_logging()
    structlog.reset_defaults()

"""Pattern-keyed cache of immutable formatter handles."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, tzinfo
from functools import partial
from threading import Lock

from babel import Locale

from chronofmt.lib.handle import (
    DEFAULT_LOCALE,
    FormatterHandle,
    Instant,
    compile_handle,
    resolve_locale,
)
from chronofmt.lib.types import FormatPattern

logger = logging.getLogger(__name__)

type HandleFactory = Callable[[FormatPattern], FormatterHandle]


class FormatterCache:
    """Build each formatter handle once per pattern and reuse it.

    The cache is an ordinary object: construct one and pass it to whatever
    needs formatting. Entries are never evicted. Lookups of known patterns
    skip the lock; building a new entry happens under it, so concurrent
    first use of a pattern constructs exactly one handle.
    """

    def __init__(
        self,
        *,
        locale: Locale | str = DEFAULT_LOCALE,
        zone: tzinfo = UTC,
        factory: HandleFactory | None = None,
    ) -> None:
        self._locale = resolve_locale(locale)
        self._zone = zone
        self._factory: HandleFactory = factory or partial(
            compile_handle,
            locale=self._locale,
            zone=zone,
        )
        self._lock = Lock()
        self._handles: dict[FormatPattern, FormatterHandle] = {}

    @property
    def locale(self) -> Locale:
        return self._locale

    @property
    def zone(self) -> tzinfo:
        return self._zone

    def get(self, pattern: str) -> FormatterHandle:
        """Return the handle for `pattern`, building it on first request.

        `InvalidPattern` from the factory propagates and nothing is stored.
        """

        key = FormatPattern(pattern)
        handle = self._handles.get(key)
        if handle is not None:
            return handle
        with self._lock:
            return self._get_or_build_locked(key)

    def format(self, pattern: str, instant: Instant) -> str:
        return self.get(pattern).render(instant)

    def patterns(self) -> tuple[FormatPattern, ...]:
        """Cached patterns in the order they were first requested."""

        with self._lock:
            return tuple(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._handles

    def _get_or_build_locked(self, key: FormatPattern) -> FormatterHandle:
        handle = self._handles.get(key)
        if handle is not None:
            return handle

        handle = self._factory(key)
        self._handles[key] = handle
        logger.debug(
            "Built date formatter.",
            extra={"pattern": key, "entries": len(self._handles)},
        )
        return handle

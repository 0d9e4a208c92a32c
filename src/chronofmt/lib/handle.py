"""Immutable formatter handles bound to one CLDR date pattern."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, tzinfo

from babel import Locale, UnknownLocaleError
from babel.dates import PATTERN_CHARS, DateTimePattern, parse_pattern

from chronofmt.lib.errors import InvalidPattern, UnknownLocale
from chronofmt.lib.types import FormatPattern

type Instant = datetime | date

DEFAULT_LOCALE = "en_US"

# Trial render target; every supported field can format it.
_REFERENCE_INSTANT = datetime(2001, 2, 3, 4, 5, 6, 789000, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class FormatterHandle:
    """Formatter whose pattern, locale and zone are fixed at construction.

    Rendering reads only these fields, so one handle can be shared freely
    between threads.
    """

    pattern: FormatPattern
    compiled: DateTimePattern
    locale: Locale
    zone: tzinfo

    def render(self, instant: Instant) -> str:
        """Render one date or datetime using the bound pattern."""

        return self.compiled.apply(localize(instant, self.zone), self.locale)


def render(handle: FormatterHandle, instant: Instant) -> str:
    return handle.render(instant)


def localize(instant: Instant, zone: tzinfo) -> datetime:
    """Return `instant` as an aware datetime in `zone`.

    Naive datetimes are read as wall-clock time in `zone` and bare dates as
    midnight in `zone`. Aware datetimes are converted.
    """

    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=zone)
        return instant.astimezone(zone)
    if isinstance(instant, date):
        return datetime.combine(instant, time(), tzinfo=zone)
    raise TypeError(f"Expected datetime or date, got {type(instant).__name__}.")


def resolve_locale(locale: Locale | str) -> Locale:
    """Resolve a CLDR locale identifier (`en_US` or `en-US`)."""

    if isinstance(locale, Locale):
        return locale
    try:
        return Locale.parse(locale.strip().replace("-", "_"))
    except (UnknownLocaleError, ValueError) as error:
        raise UnknownLocale(locale) from error


def _check_fields(pattern: str) -> None:
    # Babel renders unknown letters verbatim; LDML reserves all ASCII letters.
    in_quote = False
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "'":
            if pattern[index + 1 : index + 2] == "'":
                index += 2
                continue
            in_quote = not in_quote
        elif not in_quote and char.isascii() and char.isalpha() and char not in PATTERN_CHARS:
            raise InvalidPattern(pattern, f"unknown field letter {char!r}")
        index += 1
    if in_quote:
        raise InvalidPattern(pattern, "unterminated quoted literal")


def compile_handle(
    pattern: str,
    *,
    locale: Locale | str = DEFAULT_LOCALE,
    zone: tzinfo = UTC,
) -> FormatterHandle:
    """Parse `pattern` and bind it to a locale and zone.

    Raises `InvalidPattern` for an empty pattern, an unterminated quote, an
    unknown field letter, a field repeated an unsupported number of times, or
    a field Babel parses but cannot render.
    """

    if not pattern:
        raise InvalidPattern(pattern, "pattern is empty")
    _check_fields(pattern)
    try:
        compiled = parse_pattern(pattern)
    except ValueError as error:
        raise InvalidPattern(pattern, str(error)) from error

    resolved = resolve_locale(locale)
    try:
        compiled.apply(localize(_REFERENCE_INSTANT, zone), resolved)
    except KeyError as error:
        detail = error.args[0] if error.args else "unknown field"
        raise InvalidPattern(pattern, f"unsupported field: {detail}") from error

    return FormatterHandle(
        pattern=FormatPattern(pattern),
        compiled=compiled,
        locale=resolved,
        zone=zone,
    )

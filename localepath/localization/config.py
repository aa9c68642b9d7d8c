"""Locale resolution configuration."""

import os
import re
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from dotenv import load_dotenv

from localepath.localization.utils import compile_locale_pattern, compile_wildcard

load_dotenv()

DEFAULT_LOCALE = "en"
DEFAULT_LOCALE_NAME = "_language"
DEFAULT_COOKIE_DURATION = timedelta(days=30)

LocalesArg = Union[Mapping[str, str], Iterable[str]]


def _normalize_locales(locales: LocalesArg) -> Dict[str, str]:
    """Turn a code list or a code -> locale mapping into an ordered dict."""
    if isinstance(locales, Mapping):
        normalized = {str(code): str(value) for code, value in locales.items()}
    else:
        normalized = {str(code): str(code) for code in locales}

    for code in normalized:
        if not code:
            raise ValueError("Locale codes must not be empty")
    return normalized


def parse_bool(value: Optional[str], default: bool) -> bool:
    """Parse a boolean environment value."""
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def parse_locales(value: str) -> Dict[str, str]:
    """Parse ``en:en-US,fr:fr-FR`` (or plain ``en,fr``) into a locale map."""
    locales: Dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        if ":" in item:
            code, locale = (part.strip() for part in item.split(":", 1))
            if not code or not locale:
                raise ValueError(f"Invalid locale entry: {item!r}")
            locales[code] = locale
        else:
            locales[item] = item
    return locales


@dataclass(frozen=True)
class LocaleConfig:
    """Immutable settings for locale resolution.

    Use the ``with_*`` methods to derive a changed copy.
    """

    default_locale: str = DEFAULT_LOCALE
    locales: Dict[str, str] = field(default_factory=dict)
    query_parameter_name: str = DEFAULT_LOCALE_NAME
    session_name: str = DEFAULT_LOCALE_NAME
    cookie_duration: Optional[timedelta] = DEFAULT_COOKIE_DURATION
    cookie_secure: bool = False
    enable_save_locale: bool = True
    enable_detect_locale: bool = False
    ignored_requests: Tuple[str, ...] = ()

    locale_pattern: Optional[re.Pattern] = field(
        init=False, default=None, repr=False, compare=False
    )
    ignored_patterns: Tuple[re.Pattern, ...] = field(
        init=False, default=(), repr=False, compare=False
    )

    def __post_init__(self) -> None:
        locales = _normalize_locales(self.locales)
        ignored = tuple(self.ignored_requests)

        # Frozen: derived values are set once here and on every replace()
        object.__setattr__(self, "locales", locales)
        object.__setattr__(self, "ignored_requests", ignored)
        object.__setattr__(
            self,
            "locale_pattern",
            compile_locale_pattern(list(locales)) if locales else None,
        )
        object.__setattr__(
            self,
            "ignored_patterns",
            tuple(compile_wildcard(pattern) for pattern in ignored),
        )

    @property
    def cookie_max_age(self) -> Optional[int]:
        """Cookie max-age in seconds, or None for a session cookie."""
        if self.cookie_duration is None:
            return None
        return int(self.cookie_duration.total_seconds())

    def with_locales(self, locales: LocalesArg) -> "LocaleConfig":
        return replace(self, locales=_normalize_locales(locales))

    def with_default_locale(self, default_locale: str) -> "LocaleConfig":
        return replace(self, default_locale=default_locale)

    def with_query_parameter_name(self, query_parameter_name: str) -> "LocaleConfig":
        return replace(self, query_parameter_name=query_parameter_name)

    def with_session_name(self, session_name: str) -> "LocaleConfig":
        return replace(self, session_name=session_name)

    def with_enable_save_locale(self, enable_save_locale: bool) -> "LocaleConfig":
        return replace(self, enable_save_locale=enable_save_locale)

    def with_enable_detect_locale(self, enable_detect_locale: bool) -> "LocaleConfig":
        return replace(self, enable_detect_locale=enable_detect_locale)

    def with_ignored_requests(self, ignored_requests: Iterable[str]) -> "LocaleConfig":
        return replace(self, ignored_requests=tuple(ignored_requests))

    def with_cookie_secure(self, secure: bool) -> "LocaleConfig":
        return replace(self, cookie_secure=secure)

    def with_cookie_duration(self, duration: Optional[timedelta]) -> "LocaleConfig":
        return replace(self, cookie_duration=duration)

    @classmethod
    def from_env(cls) -> "LocaleConfig":
        """Build the configuration from ``LOCALE_*`` environment variables."""
        duration_days = os.getenv("LOCALE_COOKIE_DURATION_DAYS")
        if duration_days is None:
            cookie_duration: Optional[timedelta] = DEFAULT_COOKIE_DURATION
        elif duration_days.strip() == "":
            cookie_duration = None
        else:
            cookie_duration = timedelta(days=int(duration_days))

        ignored = os.getenv("LOCALE_IGNORED_REQUESTS", "")

        return cls(
            default_locale=os.getenv("LOCALE_DEFAULT", DEFAULT_LOCALE),
            locales=parse_locales(os.getenv("LOCALE_LOCALES", "")),
            query_parameter_name=os.getenv("LOCALE_QUERY_PARAMETER", DEFAULT_LOCALE_NAME),
            session_name=os.getenv("LOCALE_SESSION_NAME", DEFAULT_LOCALE_NAME),
            cookie_duration=cookie_duration,
            cookie_secure=parse_bool(os.getenv("LOCALE_COOKIE_SECURE"), False),
            enable_save_locale=parse_bool(os.getenv("LOCALE_SAVE"), True),
            enable_detect_locale=parse_bool(os.getenv("LOCALE_DETECT"), False),
            ignored_requests=tuple(
                pattern.strip() for pattern in ignored.split(",") if pattern.strip()
            ),
        )

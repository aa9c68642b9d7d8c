"""Locale parsing and request matching utilities."""

import fnmatch
import re
from typing import Mapping, Optional, Sequence, Tuple

ParsedLocale = Tuple[str, Optional[str]]


def parse_locale(locale: str, locales: Mapping[str, str]) -> ParsedLocale:
    """Split a raw locale string into a (language, region) pair.

    ``pt-BR`` and ``pt_BR`` both give ``("pt", "BR")``. A bare code that is
    configured with a canonical value such as ``pt-BR`` is expanded through
    that value; anything else has no region.
    """
    if "-" in locale:
        language, region = locale.split("-", 1)
        return language, region

    if "_" in locale:
        language, region = locale.split("_", 1)
        return language, region

    canonical = locales.get(locale)
    if canonical is not None and "-" in canonical:
        language, region = canonical.split("-", 1)
        return language, region

    return locale, None


def is_default_locale(language: str, region: Optional[str], default_locale: str) -> bool:
    """Check whether a parsed locale is the configured default locale."""
    return language == default_locale or (
        region is not None and default_locale == f"{language}-{region}"
    )


def compile_locale_pattern(codes: Sequence[str]) -> re.Pattern:
    """Compile the path prefix pattern for the configured locale codes.

    Codes are tried in the given order. Matching is case-insensitive and
    anchored at the start of the path. A code must fill the whole first
    path segment, so ``en`` does not match ``/en-US/...``.
    """
    alternation = "|".join(re.escape(code) for code in codes)
    return re.compile(rf"^/({alternation})(?=/|$)", re.IGNORECASE)


def compile_wildcard(pattern: str) -> re.Pattern:
    """Compile a shell-style wildcard (``*``, ``?``, ``[...]``) into a matcher.

    Matching is case-sensitive; ``*`` also matches ``/``.
    """
    return re.compile(fnmatch.translate(pattern))


def parse_accept_language(accept_language: Optional[str] = None) -> list[tuple[str, float]]:
    """Parse Accept-Language header and return ordered list of (locale, quality) pairs.

    Entries keep their region and the order they were sent in when qualities
    are equal. Wildcards and entries with zero quality are dropped.
    """
    if not accept_language:
        return []

    languages = []
    for lang_range in accept_language.split(","):
        lang_range = lang_range.strip()
        if not lang_range:
            continue
        if ";" in lang_range:
            lang, params = lang_range.split(";", 1)
            quality = 1.0
            params = params.strip()
            if params.startswith("q="):
                try:
                    quality = float(params[2:])
                except ValueError:
                    quality = 1.0
        else:
            lang = lang_range
            quality = 1.0

        lang = lang.strip()
        if lang == "*" or quality <= 0:
            continue
        languages.append((lang, quality))

    # Sort by quality score (highest first)
    return sorted(languages, key=lambda x: x[1], reverse=True)

"""Localization package.

The middleware lives in ``localepath.localization.middleware``; it depends on
the request context, which in turn uses the translator exported here.
"""

from .config import DEFAULT_LOCALE, LocaleConfig
from .utils import (
    is_default_locale,
    parse_accept_language,
    parse_locale,
)
from .translator import Translator, load_translations

__all__ = [
    "DEFAULT_LOCALE",
    "LocaleConfig",
    "is_default_locale",
    "parse_accept_language",
    "parse_locale",
    "Translator",
    "load_translations",
]

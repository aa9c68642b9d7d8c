"""Babel-backed translator bound to a single request."""

import logging
import os
from io import BytesIO
from typing import Dict, Optional, Tuple

from babel.messages.mofile import write_mo
from babel.messages.pofile import read_po
from babel.support import NullTranslations, Translations

from localepath.localization.config import DEFAULT_LOCALE

logger = logging.getLogger(__name__)

DOMAIN = "messages"

# Store loaded translations, keyed by (directory, language)
_translations: Dict[Tuple[str, str], NullTranslations] = {}


def get_locale_path() -> str:
    """Get the path to the bundled locales directory."""
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), "locales")


def load_translations(language: str, directory: Optional[str] = None) -> NullTranslations:
    """Load the message catalog for a language.

    A compiled ``.mo`` file is preferred; a ``.po`` file is compiled in memory
    when no ``.mo`` exists. Unknown languages get an identity catalog.
    """
    directory = directory or get_locale_path()
    key = (directory, language)
    if key in _translations:
        return _translations[key]

    catalog_dir = os.path.join(directory, language, "LC_MESSAGES")
    mo_path = os.path.join(catalog_dir, f"{DOMAIN}.mo")
    po_path = os.path.join(catalog_dir, f"{DOMAIN}.po")

    translations: NullTranslations
    if os.path.isfile(mo_path):
        with open(mo_path, "rb") as mo_file:
            translations = Translations(mo_file, domain=DOMAIN)
    elif os.path.isfile(po_path):
        with open(po_path, "rb") as po_file:
            catalog = read_po(po_file, domain=DOMAIN)
        buffer = BytesIO()
        write_mo(buffer, catalog)
        buffer.seek(0)
        translations = Translations(buffer, domain=DOMAIN)
    else:
        logger.debug(f"No catalog for language '{language}' in {directory}")
        translations = NullTranslations()

    _translations[key] = translations
    return translations


class Translator:
    """Translates messages into the locale chosen for the current request."""

    def __init__(self, locale: str = DEFAULT_LOCALE, directory: Optional[str] = None) -> None:
        self.directory = directory
        self._locale = locale

    @property
    def locale(self) -> str:
        return self._locale

    def set_locale(self, locale: str) -> None:
        self._locale = locale

    def gettext(self, message: str, **params: object) -> str:
        """Translate a message and interpolate ``{name}`` parameters."""
        translated = load_translations(self._locale, self.directory).gettext(message)
        if params:
            return translated.format(**params)
        return translated

    def ngettext(self, singular: str, plural: str, n: int, /, **params: object) -> str:
        """Translate a plural message. ``{n}`` is always the count."""
        translated = load_translations(self._locale, self.directory).ngettext(
            singular, plural, n
        )
        return translated.format(**{**params, "n": n})

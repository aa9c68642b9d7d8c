"""Secure session configuration."""

import logging
import os
import secrets
from typing import Optional

from dotenv import load_dotenv

from localepath.localization.config import parse_bool

load_dotenv()

logger = logging.getLogger(__name__)


class SecureSessionConfig:
    """Configuration for the session middleware backing the saved locale."""

    # Session settings
    SESSION_COOKIE_NAME: str = "session"
    SESSION_MAX_AGE: int = 30 * 24 * 3600  # Same lifetime as the locale cookie
    SESSION_COOKIE_SECURE: bool = parse_bool(os.getenv("SESSION_COOKIE_SECURE"), True)
    SESSION_COOKIE_SAMESITE: str = "lax"  # Locale redirects are top-level navigations
    SESSION_COOKIE_PATH: str = "/"
    SESSION_COOKIE_DOMAIN: Optional[str] = os.getenv("SESSION_COOKIE_DOMAIN")

    @classmethod
    def get_secret_key(cls) -> str:
        """Get the session signing key.

        Without SECRET_KEY a random key is generated, so sessions do not
        survive a restart.
        """
        secret_key = os.getenv("SECRET_KEY")
        if not secret_key:
            logger.warning("SECRET_KEY is not set, using a random session key")
            secret_key = secrets.token_urlsafe(32)
        return secret_key

    @classmethod
    def get_session_middleware_kwargs(cls) -> dict:
        """Get kwargs for SessionMiddleware configuration."""
        return {
            "secret_key": cls.get_secret_key(),
            "max_age": cls.SESSION_MAX_AGE,
            "session_cookie": cls.SESSION_COOKIE_NAME,
            "https_only": cls.SESSION_COOKIE_SECURE,
            "same_site": cls.SESSION_COOKIE_SAMESITE,
            "path": cls.SESSION_COOKIE_PATH,
            "domain": cls.SESSION_COOKIE_DOMAIN,
        }


session_config = SecureSessionConfig()

"""Localization middleware resolving the locale of each request."""

import logging
from typing import Callable, Optional, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from localepath.context import (
    get_query_string,
    get_request_context,
    get_request_path,
    prepend_request_path,
)
from localepath.localization.config import LocaleConfig
from localepath.localization.utils import (
    is_default_locale,
    parse_accept_language,
    parse_locale,
)

logger = logging.getLogger(__name__)

ResolvedLocale = Tuple[Optional[str], Optional[str]]

NO_LOCALE: ResolvedLocale = (None, None)


class LocaleMiddleware(BaseHTTPMiddleware):
    """Middleware to resolve the request locale and keep it in the URL.

    The locale is taken from the first path segment, then from the saved
    cookie or the query string, then from the Accept-Language header. Requests
    for a non-default locale found outside the path are redirected to the
    locale-prefixed URL; everything else is routed internally under the
    default locale prefix.
    """

    def __init__(self, app, config: Optional[LocaleConfig] = None) -> None:
        super().__init__(app)
        self.config = config or LocaleConfig()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Resolve the locale and rewrite or redirect the request."""
        config = self.config
        if not config.locales:
            return await call_next(request)

        context = get_request_context(request)
        path = get_request_path(request)
        query = get_query_string(request)

        matched = self._get_locale_from_path(path)
        if matched is not None:
            code, (locale, region) = matched
            context.translator.set_locale(locale)
            context.url_generator.set_default_argument(config.query_parameter_name, locale)

            response = await call_next(request)
            new_path = None
            if request.method == "GET" and is_default_locale(
                locale, region, config.default_locale
            ):
                new_path = path[len(code) + 1 :]
            return self._apply_locale_from_path(request, locale, response, query, new_path)

        locale, region = NO_LOCALE
        if config.enable_save_locale:
            locale, region = self._get_locale_from_request(request)
        if locale is None and config.enable_detect_locale:
            locale, region = self._detect_locale(request)

        if (
            locale is None
            or is_default_locale(locale, region, config.default_locale)
            or self.is_request_ignored(path)
        ):
            context.translator.set_locale(config.default_locale)
            context.url_generator.set_default_argument(config.query_parameter_name, None)
            prepend_request_path(request, f"/{config.default_locale}")
            return await call_next(request)

        context.translator.set_locale(locale)
        context.url_generator.set_default_argument(config.query_parameter_name, locale)

        if request.method == "GET":
            return RedirectResponse(
                url=context.url_generator.get_uri_prefix()
                + f"/{locale}{path}"
                + (f"?{query}" if query else ""),
                status_code=302,
            )

        return await call_next(request)

    def _apply_locale_from_path(
        self,
        request: Request,
        locale: str,
        response: Response,
        query: str,
        new_path: Optional[str] = None,
    ) -> Response:
        """Redirect default-locale URLs to their unprefixed form and save the locale."""
        if new_path == "":
            new_path = "/"

        if new_path is not None:
            # Redirects are outgoing links: keep the subfolder prefix
            prefix = get_request_context(request).url_generator.get_uri_prefix()
            response = RedirectResponse(
                url=prefix + new_path + (f"?{query}" if query else ""),
                status_code=302,
            )
        if self.config.enable_save_locale:
            response = self.save_locale(request, locale, response)
        return response

    def _get_locale_from_path(self, path: str) -> Optional[Tuple[str, ResolvedLocale]]:
        """Find a configured locale code at the start of the path."""
        pattern = self.config.locale_pattern
        if pattern is None:
            return None

        match = pattern.match(path)
        if match is None:
            return None

        code = match.group(1)
        locale, region = parse_locale(code, self.config.locales)
        if locale not in self.config.locales:
            return None

        logger.debug(f"Locale '{locale}' found in URL")
        return code, (locale, region)

    def _get_locale_from_request(self, request: Request) -> ResolvedLocale:
        """Read a saved locale from the cookies, then from the query string."""
        config = self.config
        cookie_value = request.cookies.get(config.session_name)
        if cookie_value:
            logger.debug(f"Locale '{cookie_value}' found in cookies")
            return self._parse_known_locale(cookie_value)

        query_value = request.query_params.get(config.query_parameter_name)
        if query_value:
            logger.debug(f"Locale '{query_value}' found in query string")
            return self._parse_known_locale(query_value)

        return NO_LOCALE

    def _detect_locale(self, request: Request) -> ResolvedLocale:
        """Take the preferred entry of the Accept-Language header."""
        languages = parse_accept_language(request.headers.get("accept-language"))
        if not languages:
            return NO_LOCALE

        language = languages[0][0]
        logger.debug(f"Locale '{language}' detected from Accept-Language")
        return self._parse_known_locale(language)

    def _parse_known_locale(self, value: str) -> ResolvedLocale:
        """Parse a locale, treating languages that are not configured as a miss."""
        locale, region = parse_locale(value, self.config.locales)
        if locale not in self.config.locales:
            logger.debug(f"Locale '{value}' is not configured, ignoring")
            return NO_LOCALE
        return locale, region

    def is_request_ignored(self, path: str) -> bool:
        """Check the path against the ignored request patterns."""
        return any(pattern.match(path) for pattern in self.config.ignored_patterns)

    def save_locale(self, request: Request, locale: str, response: Response) -> Response:
        """Store the locale in the session and in a cookie on the response."""
        config = self.config
        logger.debug("Saving found locale to cookies")

        try:
            request.session[config.session_name] = locale
        except (AttributeError, AssertionError):
            # Session not available, the cookie alone keeps the locale
            logger.debug("Session not available, locale saved to cookie only")

        response.set_cookie(
            key=config.session_name,
            value=locale,
            max_age=config.cookie_max_age,
            secure=config.cookie_secure,
        )
        return response


def get_request_locale(request: Request) -> str:
    """Get the locale for the current request."""
    return get_request_context(request).translator.locale

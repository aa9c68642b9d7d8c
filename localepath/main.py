"""Main FastAPI application module."""

import logging
import os
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from localepath.context import get_request_context
from localepath.localization.config import LocaleConfig
from localepath.localization.middleware import LocaleMiddleware, get_request_locale
from localepath.security.session import session_config
from localepath.subfolder.config import SubFolderConfig
from localepath.subfolder.middleware import SubFolderMiddleware
from localepath.templates.utils import LocalizedTemplates


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(levelname)s: %(name)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Used when LOCALE_LOCALES is not set
LANGUAGES: Dict[str, str] = {"en": "en-US", "fr": "fr-FR", "ru": "ru-RU"}

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


def create_app(
    locale_config: Optional[LocaleConfig] = None,
    subfolder_config: Optional[SubFolderConfig] = None,
    session_kwargs: Optional[Dict[str, Any]] = None,
) -> FastAPI:
    """Create the application with the locale middleware chain installed."""
    if locale_config is None:
        locale_config = LocaleConfig.from_env()
        if not locale_config.locales:
            locale_config = locale_config.with_locales(LANGUAGES)
    if subfolder_config is None:
        subfolder_config = SubFolderConfig.from_env()
    if session_kwargs is None:
        session_kwargs = session_config.get_session_middleware_kwargs()

    app = FastAPI(
        title="localepath",
        description="Locale and subfolder aware URL routing",
        version="1.0.0",
    )

    # Middleware, the last one added runs first:
    # SubFolderMiddleware -> SessionMiddleware -> LocaleMiddleware -> routes
    app.add_middleware(LocaleMiddleware, config=locale_config)
    app.add_middleware(SessionMiddleware, **session_kwargs)
    app.add_middleware(SubFolderMiddleware, config=subfolder_config)

    templates = LocalizedTemplates(directory=TEMPLATES_DIR)
    logger.info(
        f"Serving locales {', '.join(locale_config.locales)} "
        f"(default '{locale_config.default_locale}')"
    )

    # Every route lives under the locale segment: LocaleMiddleware routes
    # unprefixed requests internally to /<default locale>/...
    @app.get("/{_language}/", response_class=HTMLResponse)
    async def home_page(request: Request) -> HTMLResponse:
        """Render the home page in the request locale."""
        return templates.TemplateResponse(
            request,
            "pages/home.html",
            {"title": "Welcome", "languages": list(locale_config.locales)},
        )

    @app.get("/{_language}/lang/{language}")
    async def set_language(language: str, request: Request) -> RedirectResponse:
        """Switch to another language by redirecting into its URL space."""
        if language not in locale_config.locales:
            raise HTTPException(status_code=400, detail="Unsupported language")

        url_generator = get_request_context(request).url_generator
        return RedirectResponse(
            url=url_generator.generate("/{_language}/", {"_language": language}),
            status_code=302,
        )

    @app.get("/{_language}/health")
    async def health_check(request: Request) -> dict[str, object]:
        """Health check endpoint reporting the resolved locale."""
        return {"status": "healthy", "locale": get_request_locale(request)}

    return app


app = create_app()

"""Template utilities for localized responses."""

import os
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from localepath.context import get_request_context


class LocalizedTemplates:
    """Template manager that renders with the request's translator and URLs."""

    def __init__(self, directory: str):
        self.templates = Jinja2Templates(directory=directory)

    def TemplateResponse(
        self,
        request: Request,
        name: str,
        context: Dict[str, Any],
        status_code: int = 200,
    ) -> HTMLResponse:
        """Create a template response with automatic localization."""
        request_context = get_request_context(request)

        # Per-request helpers go into the context, not the shared environment
        context.setdefault("_", request_context.translator.gettext)
        context.setdefault("url", request_context.url_generator.generate)
        context.setdefault("alias", request_context.aliases.get)
        context.setdefault("get_locale", lambda: request_context.translator.locale)
        context["version"] = os.getenv("APP_VERSION", "1.0.0")

        return self.templates.TemplateResponse(
            request, name, context, status_code=status_code
        )

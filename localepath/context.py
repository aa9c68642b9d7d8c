"""Request-scoped collaborators shared along the middleware chain."""

from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import quote

from starlette.requests import Request

from localepath.localization.translator import Translator
from localepath.routing.aliases import Aliases
from localepath.routing.url_generator import UrlGenerator

DEFAULT_ALIASES: Dict[str, str] = {"@web": "/"}


@dataclass
class RequestContext:
    """Translator, URL generator and aliases owned by one request.

    Middlewares update these instead of shared application objects, so
    concurrent requests never see each other's locale or prefix.
    """

    translator: Translator = field(default_factory=Translator)
    url_generator: UrlGenerator = field(default_factory=UrlGenerator)
    aliases: Aliases = field(default_factory=lambda: Aliases(DEFAULT_ALIASES))


def get_request_context(request: Request) -> RequestContext:
    """Get the context of a request, creating it on first use."""
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext()
        request.state.context = context
    return context


def get_request_path(request: Request) -> str:
    """Get the current (possibly rewritten) request path."""
    return request.scope["path"]


def get_query_string(request: Request) -> str:
    return request.scope.get("query_string", b"").decode("latin-1")


def replace_request_path(
    request: Request, path: str, raw_path: Optional[bytes] = None
) -> None:
    """Rewrite the path that downstream handlers and routing will see.

    Without an explicit ``raw_path`` the raw path is re-encoded from ``path``.
    """
    request.scope["path"] = path
    if "raw_path" in request.scope:
        if raw_path is None:
            raw_path = quote(path).encode("ascii")
        request.scope["raw_path"] = raw_path


def prepend_request_path(request: Request, prefix: str) -> None:
    """Put ``prefix`` in front of the request path, keeping the raw encoding."""
    raw_path = request.scope.get("raw_path")
    if raw_path is not None:
        raw_path = quote(prefix).encode("ascii") + raw_path
    replace_request_path(request, prefix + get_request_path(request), raw_path)


def strip_request_path(request: Request, prefix: str) -> None:
    """Remove ``prefix`` from the request path, keeping the raw encoding.

    An empty remainder becomes ``/``.
    """
    new_path = get_request_path(request)[len(prefix) :] or "/"
    raw_path = request.scope.get("raw_path")
    raw_prefix = quote(prefix).encode("ascii")
    if raw_path is not None and raw_path.startswith(raw_prefix):
        raw_path = raw_path[len(raw_prefix) :] or b"/"
    else:
        raw_path = None
    replace_request_path(request, new_path, raw_path)

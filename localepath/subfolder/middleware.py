"""Middleware for applications served from a subfolder of the web root."""

import logging
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from localepath.context import get_request_context, get_request_path, strip_request_path
from localepath.subfolder.config import SubFolderConfig

logger = logging.getLogger(__name__)


class BadUriPrefixError(ValueError):
    """Raised when the configured URI prefix does not fit the request."""


class SubFolderMiddleware(BaseHTTPMiddleware):
    """Middleware to strip the subfolder prefix from the request path.

    The prefix is registered with the request URL generator so generated
    links keep pointing into the subfolder.
    """

    def __init__(self, app, config: Optional[SubFolderConfig] = None) -> None:
        super().__init__(app)
        self.config = config or SubFolderConfig()

    def get_script_name(self, request: Request) -> Optional[str]:
        """Get the script path used to detect the prefix automatically."""
        if self.config.script_name is not None:
            return self.config.script_name

        root_path = request.scope.get("root_path", "")
        if root_path:
            # root_path is the mount directory, not a script inside it
            return root_path.rstrip("/") + "/"
        return None

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Strip the prefix and pass the request on.

        Raises:
            BadUriPrefixError: If an explicit prefix is malformed or does not
                match the request path.
        """
        path = get_request_path(request)
        prefix = self.config.prefix
        auto = prefix is None

        if auto:
            prefix = ""
            script_name = self.get_script_name(request)
            if script_name and "/" in script_name:
                candidate = script_name[: script_name.rindex("/")]
                if path.startswith(candidate):
                    prefix = candidate
        elif prefix:
            if prefix.endswith("/"):
                raise BadUriPrefixError("Wrong URI prefix value.")
            if not path.startswith(prefix):
                raise BadUriPrefixError("URI prefix does not match.")

        if prefix:
            new_path = path[len(prefix) :] or "/"

            if not new_path.startswith("/"):
                if not auto:
                    raise BadUriPrefixError("URI prefix does not match completely.")
                logger.debug(f"Detected prefix '{prefix}' does not end on a path segment")
            else:
                strip_request_path(request, prefix)
                context = get_request_context(request)
                context.url_generator.set_uri_prefix(prefix)

                if self.config.alias is not None:
                    context.aliases.set(self.config.alias, prefix + "/")

        return await call_next(request)

"""URL generation for the current request."""

import re
from typing import Dict, Mapping, Optional
from urllib.parse import quote, urlencode

PLACEHOLDER_SEGMENT = re.compile(r"/\{(\w+)\}")


class UrlGenerator:
    """Builds links from path templates such as ``/{_language}/users``.

    Default arguments fill placeholders that are not given explicitly. A
    placeholder segment without a value is dropped, so ``/{_language}/users``
    renders as ``/users`` when no locale argument is set. The URI prefix is
    prepended to every generated link.
    """

    def __init__(self, uri_prefix: str = "") -> None:
        self._uri_prefix = uri_prefix
        self._default_arguments: Dict[str, Optional[str]] = {}

    def set_default_argument(self, name: str, value: Optional[str]) -> None:
        self._default_arguments[name] = value

    def get_default_argument(self, name: str) -> Optional[str]:
        return self._default_arguments.get(name)

    def set_uri_prefix(self, prefix: str) -> None:
        self._uri_prefix = prefix

    def get_uri_prefix(self) -> str:
        return self._uri_prefix

    def generate(
        self,
        path: str,
        arguments: Optional[Mapping[str, Optional[str]]] = None,
        query: Optional[Mapping[str, object]] = None,
    ) -> str:
        """Render a path template into a URL."""
        values = {**self._default_arguments, **(arguments or {})}

        def substitute(match: re.Match) -> str:
            value = values.get(match.group(1))
            if value is None or value == "":
                return ""
            return "/" + quote(str(value), safe="")

        rendered = PLACEHOLDER_SEGMENT.sub(substitute, path)
        if not rendered.startswith("/"):
            rendered = "/" + rendered

        url = self._uri_prefix + rendered
        if query:
            url += "?" + urlencode(query, doseq=True)
        return url

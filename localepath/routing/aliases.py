"""Named path aliases (``@web``, ``@assets`` ...)."""

from typing import Dict, Mapping, Optional


class Aliases:
    """Registry of path aliases.

    Alias names start with ``@``. ``get("@web/css/site.css")`` resolves the
    ``@web`` alias and appends the rest of the path.
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None) -> None:
        self._aliases: Dict[str, str] = {}
        for name, value in (aliases or {}).items():
            self.set(name, value)

    @staticmethod
    def _check_name(name: str) -> None:
        if not name.startswith("@") or len(name) < 2 or "/" in name:
            raise ValueError(f"Invalid alias name: {name!r}")

    def set(self, name: str, value: str) -> None:
        self._check_name(name)
        self._aliases[name] = value

    def remove(self, name: str) -> None:
        self._aliases.pop(name, None)

    def has(self, name: str) -> bool:
        return name.split("/", 1)[0] in self._aliases

    def get(self, alias: str) -> str:
        """Resolve an alias, optionally followed by a sub-path."""
        if not alias.startswith("@"):
            return alias

        root, _, rest = alias.partition("/")
        if root not in self._aliases:
            raise KeyError(f"Unknown alias: {root}")

        value = self._aliases[root]
        if not rest:
            return value
        return value.rstrip("/") + "/" + rest

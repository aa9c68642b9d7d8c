"""Subfolder (URI prefix) configuration."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class SubFolderConfig:
    """Settings for serving the application below a URI prefix.

    ``prefix`` usually begins with a slash and must not end with one. When it
    is ``None`` the prefix is detected from ``script_name`` or, when that is
    not set either, from the ASGI ``root_path``.
    """

    prefix: Optional[str] = None
    alias: Optional[str] = None
    script_name: Optional[str] = None

    def with_prefix(self, prefix: Optional[str]) -> "SubFolderConfig":
        return replace(self, prefix=prefix)

    def with_alias(self, alias: Optional[str]) -> "SubFolderConfig":
        return replace(self, alias=alias)

    def with_script_name(self, script_name: Optional[str]) -> "SubFolderConfig":
        return replace(self, script_name=script_name)

    @classmethod
    def from_env(cls) -> "SubFolderConfig":
        """Build the configuration from environment variables."""
        return cls(
            prefix=os.getenv("SUBFOLDER_PREFIX"),
            alias=os.getenv("SUBFOLDER_ALIAS", "@web") or None,
            script_name=os.getenv("SCRIPT_NAME") or None,
        )

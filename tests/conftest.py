"""Pytest configuration and shared fixtures."""

from typing import Callable, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from localepath.localization.config import LocaleConfig
from localepath.main import create_app
from localepath.subfolder.config import SubFolderConfig

RequestFactory = Callable[..., Request]


@pytest.fixture
def sample_secret_key() -> str:
    """Provide a sample secret key for testing."""
    return "test-secret-key-12345"


@pytest.fixture
def session_kwargs(sample_secret_key: str) -> Dict[str, object]:
    """Provide SessionMiddleware kwargs usable over plain HTTP."""
    return {"secret_key": sample_secret_key, "https_only": False}


@pytest.fixture
def locale_config() -> LocaleConfig:
    """Provide a locale configuration with a few locales."""
    return LocaleConfig(locales={"en": "en-US", "fr": "fr-FR", "pt": "pt-BR"})


@pytest.fixture
def make_request() -> RequestFactory:
    """Provide a factory for Starlette requests built from a raw scope."""

    def factory(
        path: str = "/",
        method: str = "GET",
        query_string: str = "",
        headers: Optional[Dict[str, str]] = None,
        cookies: Optional[Dict[str, str]] = None,
        root_path: str = "",
        with_session: bool = True,
        raw_path: Optional[bytes] = None,
    ) -> Request:
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        if cookies:
            cookie_header = "; ".join(f"{name}={value}" for name, value in cookies.items())
            raw_headers.append((b"cookie", cookie_header.encode("latin-1")))

        scope = {
            "type": "http",
            "http_version": "1.1",
            "method": method,
            "scheme": "http",
            "server": ("testserver", 80),
            "client": ("testclient", 50000),
            "path": path,
            "raw_path": path.encode("utf-8") if raw_path is None else raw_path,
            "root_path": root_path,
            "query_string": query_string.encode("latin-1"),
            "headers": raw_headers,
        }
        if with_session:
            scope["session"] = {}
        return Request(scope)

    return factory


@pytest.fixture
def test_client(
    locale_config: LocaleConfig, session_kwargs: Dict[str, object]
) -> Generator[TestClient, None, None]:
    """Provide a test client for an application served from the web root."""
    app = create_app(
        locale_config=locale_config,
        subfolder_config=SubFolderConfig(),
        session_kwargs=session_kwargs,
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture
def subfolder_client(
    locale_config: LocaleConfig, session_kwargs: Dict[str, object]
) -> Generator[TestClient, None, None]:
    """Provide a test client for an application served below /app."""
    app = create_app(
        locale_config=locale_config,
        subfolder_config=SubFolderConfig(prefix="/app", alias="@web"),
        session_kwargs=session_kwargs,
    )
    with TestClient(app) as client:
        yield client

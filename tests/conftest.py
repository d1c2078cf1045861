from __future__ import annotations

from collections.abc import Generator

import pytest

_SATPAM_ENV = (
    "SATPAM_COOKIE_NAME",
    "SATPAM_URL_CHECK",
    "SATPAM_AUTO_SET_COOKIE",
    "SATPAM_COOKIE_PATH",
    "SATPAM_COOKIE_DOMAIN",
    "SATPAM_COOKIE_MAX_AGE",
    "SATPAM_COOKIE_SECURE",
    "SATPAM_COOKIE_HTTP_ONLY",
    "SATPAM_COOKIE_SAME_SITE",
)


@pytest.fixture(autouse=True)
def clean_satpam_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for name in _SATPAM_ENV:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def anyio_backend() -> str:
    # Force AnyIO-managed tests to use asyncio only
    return "asyncio"

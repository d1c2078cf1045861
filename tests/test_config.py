from __future__ import annotations

import pytest
from pydantic import ValidationError

from satpam.config import SatpamSettings
from satpam.domain.session import CookieOptions, SatpamOptions


def test_defaults_match_resolver_defaults() -> None:
    settings = SatpamSettings()

    assert settings.to_options() == SatpamOptions()
    assert settings.cookie_options() == CookieOptions(path="/", same_site="lax", http_only=True)


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SATPAM_COOKIE_NAME", "sid")
    monkeypatch.setenv("SATPAM_URL_CHECK", "access_token")
    monkeypatch.setenv("SATPAM_AUTO_SET_COOKIE", "false")
    monkeypatch.setenv("SATPAM_COOKIE_SECURE", "true")
    monkeypatch.setenv("SATPAM_COOKIE_MAX_AGE", "3600")
    monkeypatch.setenv("SATPAM_COOKIE_SAME_SITE", "strict")

    settings = SatpamSettings()

    assert settings.to_options() == SatpamOptions(
        name="sid", url_check="access_token", auto_set_cookie=False
    )
    cookie_options = settings.cookie_options()
    assert cookie_options.secure is True
    assert cookie_options.max_age == 3600
    assert cookie_options.same_site == "strict"


def test_settings_reject_invalid_same_site(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SATPAM_COOKIE_SAME_SITE", "sometimes")

    with pytest.raises(ValidationError):
        SatpamSettings()


def test_settings_reject_empty_cookie_name() -> None:
    with pytest.raises(ValidationError):
        SatpamSettings(SATPAM_COOKIE_NAME="")

"""Environment-driven settings for resolvers built by the integrations."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from satpam.domain.session import DEFAULT_COOKIE_NAME, CookieOptions, SameSite, SatpamOptions


class SatpamSettings(BaseSettings):
    """Cookie name, URL fallback parameter and cookie attributes."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    cookie_name: str = Field(default=DEFAULT_COOKIE_NAME, alias="SATPAM_COOKIE_NAME", min_length=1)
    url_check: str = Field(
        default="",
        alias="SATPAM_URL_CHECK",
        description="Query/fragment parameter consulted when no cookie is present.",
    )
    auto_set_cookie: bool = Field(default=True, alias="SATPAM_AUTO_SET_COOKIE")

    cookie_path: str | None = Field(default="/", alias="SATPAM_COOKIE_PATH")
    cookie_domain: str | None = Field(default=None, alias="SATPAM_COOKIE_DOMAIN")
    cookie_max_age: int | None = Field(default=None, alias="SATPAM_COOKIE_MAX_AGE", ge=0)
    cookie_secure: bool = Field(default=False, alias="SATPAM_COOKIE_SECURE")
    cookie_http_only: bool = Field(default=True, alias="SATPAM_COOKIE_HTTP_ONLY")
    cookie_same_site: SameSite | None = Field(default="lax", alias="SATPAM_COOKIE_SAME_SITE")

    def to_options(self) -> SatpamOptions:
        return SatpamOptions(
            name=self.cookie_name,
            url_check=self.url_check,
            auto_set_cookie=self.auto_set_cookie,
        )

    def cookie_options(self) -> CookieOptions:
        return CookieOptions(
            domain=self.cookie_domain,
            path=self.cookie_path,
            max_age=self.cookie_max_age,
            same_site=self.cookie_same_site,
            secure=self.cookie_secure,
            http_only=self.cookie_http_only,
        )


__all__ = ["SatpamSettings"]

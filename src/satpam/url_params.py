"""Token lookup in URL query strings and fragments.

Query and fragment text is split on ``&`` and ``=`` without percent-decoding;
a repeated key keeps its last value and a pair without ``=`` maps to ``""``.
Structured URL objects use their own query-parameter collection instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

import httpx
from starlette.datastructures import URL, QueryParams

UrlTokenSource = Literal["query", "fragment"]


@dataclass(frozen=True, slots=True)
class UrlTokenMatch:
    token: str
    source: UrlTokenSource


def parse_param_string(params: str) -> dict[str, str]:
    """Split ``a=1&b=2`` into a mapping, last duplicate winning."""
    parsed: dict[str, str] = {}
    for item in params.split("&"):
        key, _, value = item.partition("=")
        parsed[key] = value
    return parsed


def find_url_token(url: Any, param: str) -> UrlTokenMatch | None:
    """Return the first non-empty ``param`` value in the URL's query, then fragment."""
    if not param or not url:
        return None
    if isinstance(url, str):
        return _find_in_string(url, param)
    return _find_in_structured(url, param)


def _segment_after(url: str, marker: str, stops: str) -> str:
    """Text after the first ``marker``, cut at the next character in ``stops``."""
    _, found, rest = url.partition(marker)
    if not found:
        return ""
    for stop in stops:
        rest = rest.partition(stop)[0]
    return rest


def _find_in_string(url: str, param: str) -> UrlTokenMatch | None:
    # A "#" before the first "?" does not end the query: "/app#/cb?token=A" is a hash route.
    query = _segment_after(url, "?", "?#")
    fragment = _segment_after(url, "#", "#")

    if query:
        token = parse_param_string(query).get(param, "")
        if token:
            return UrlTokenMatch(token=token, source="query")

    if fragment:
        token = parse_param_string(fragment).get(param, "")
        if token:
            return UrlTokenMatch(token=token, source="fragment")

    return None


def _find_in_structured(url: Any, param: str) -> UrlTokenMatch | None:
    params = _query_params(url)
    token = params.get(param) or ""
    if token:
        return UrlTokenMatch(token=str(token), source="query")

    fragment = str(getattr(url, "fragment", "") or "").lstrip("#")
    if fragment:
        token = parse_param_string(fragment).get(param, "")
        if token:
            return UrlTokenMatch(token=token, source="fragment")

    return None


def _query_params(url: Any) -> Mapping[str, Any]:
    if isinstance(url, httpx.URL):
        return url.params
    if isinstance(url, URL):
        return QueryParams(url.query)
    for attr in ("params", "query_params"):
        params = getattr(url, attr, None)
        if isinstance(params, Mapping):
            return params
    query = getattr(url, "query", "")
    if isinstance(query, bytes):
        query = query.decode("ascii", errors="replace")
    return QueryParams(query or "")


__all__ = [
    "UrlTokenMatch",
    "UrlTokenSource",
    "find_url_token",
    "parse_param_string",
]

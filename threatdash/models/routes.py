"""Route classification models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator

WILDCARD_SEGMENT = "[*]"


class RouteClass(str, Enum):
    PUBLIC = "public"
    AUTH_ENTRY = "auth_entry"
    PROTECTED = "protected"


def _normalize_path(path: str) -> str:
    cleaned = "/" + path.strip().strip("/")
    return cleaned


def path_matches(pattern: str, path: str) -> bool:
    """Match a path against a route pattern.

    A trailing ``[*]`` segment matches one or more further segments, so
    ``/blog/[*]`` matches ``/blog/post-1`` and ``/blog/2026/post-1`` but not
    ``/blog`` itself.
    """
    normalized_pattern = _normalize_path(pattern)
    normalized_path = _normalize_path(path)
    if normalized_pattern.endswith("/" + WILDCARD_SEGMENT):
        prefix = normalized_pattern[: -len(WILDCARD_SEGMENT)]
        if prefix == "/":
            return normalized_path != "/"
        return normalized_path.startswith(prefix) and len(normalized_path) > len(prefix)
    return normalized_path == normalized_pattern


class RouteTable(BaseModel):
    """Static route configuration consulted by the auth layer."""

    default_login_redirect: str = "/dashboard"
    api_auth_prefix: str = "/api/auth"
    auth_routes: list[str] = Field(default_factory=list)
    public_routes: list[str] = Field(default_factory=list)

    @field_validator("default_login_redirect", "api_auth_prefix")
    @classmethod
    def validate_absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Route path must start with '/': {value}")
        return value.rstrip("/") or "/"

    @field_validator("auth_routes", "public_routes")
    @classmethod
    def validate_route_patterns(cls, values: list[str]) -> list[str]:
        for value in values:
            if not value.startswith("/"):
                raise ValueError(f"Route pattern must start with '/': {value}")
        return values

    def is_api_auth_route(self, path: str) -> bool:
        normalized = _normalize_path(path)
        return normalized == self.api_auth_prefix or normalized.startswith(self.api_auth_prefix + "/")

    def classify(self, path: str) -> RouteClass:
        """Classify a request path; auth-entry routes win over public patterns."""
        if any(path_matches(pattern, path) for pattern in self.auth_routes):
            return RouteClass.AUTH_ENTRY
        if self.is_api_auth_route(path):
            return RouteClass.PUBLIC
        if any(path_matches(pattern, path) for pattern in self.public_routes):
            return RouteClass.PUBLIC
        return RouteClass.PROTECTED

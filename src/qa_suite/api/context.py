# src/qa_suite/api/context.py
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from qa_suite.core.config import ApiSettings, ProjectConfig, load_api_settings

BASE_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
)


@dataclass(frozen=True)
class ApiContext:
    """
    Shared, immutable HTTP test context.

    - base_url: prefix for relative endpoints (no trailing slash)
    - default_headers: sent on every call; per-call headers win on collision
    - timeout_ms: per-request timeout
    """

    base_url: str
    default_headers: Mapping[str, str]
    timeout_ms: int

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000.0


def build_default_headers(settings: ApiSettings) -> Dict[str, str]:
    headers: Dict[str, str] = dict(BASE_HEADERS)
    headers.update(settings.api_headers)
    if settings.api_token:
        headers["Authorization"] = f"Bearer {settings.api_token}"
    return headers


def resolve_api_context(
    project: Optional[ProjectConfig] = None,
    settings: Optional[ApiSettings] = None,
) -> ApiContext:
    """
    Resolve base URL, headers and timeout.

    `settings` wins outright when given (tests pass a fully-built one);
    otherwise they are loaded from the environment with the project's
    api_* fields applied as the highest-priority overrides.
    """
    if settings is None:
        overrides = project.api_overrides() if project is not None else {}
        settings = load_api_settings(overrides)

    return ApiContext(
        base_url=settings.api_url.rstrip("/"),
        default_headers=MappingProxyType(build_default_headers(settings)),
        timeout_ms=int(settings.api_timeout),
    )

# src/qa_suite/core/config.py
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from qa_suite.core.errors import ConfigError

Pathish = Union[str, Path]

DEFAULT_API_URL = "https://reqres.in/api"
DEFAULT_API_TIMEOUT_MS = 30000
DEFAULT_PROJECT_NAME = "chromium"
DEFAULT_PROJECTS_FILE = "config/projects.yaml"

PROJECT_ENV = "QA_PROJECT"
PROJECTS_FILE_ENV = "QA_PROJECTS_FILE"


# -------------------------
# Environment-backed settings
# -------------------------


class ApiSettings(BaseSettings):
    """
    Effective API settings.

    Precedence (lowest -> highest):
      1) hardcoded defaults below
      2) environment variables (API_URL, API_TIMEOUT, API_TOKEN, ...) / .env
      3) explicit init kwargs, i.e. per-project overrides

    pydantic-settings already gives init kwargs priority over the environment,
    so project overrides are simply passed to the constructor.
    """

    api_url: str = Field(default=DEFAULT_API_URL)
    api_timeout: int = Field(default=DEFAULT_API_TIMEOUT_MS, gt=0, description="Request timeout (ms)")
    api_token: Optional[str] = Field(default=None)
    api_headers: Dict[str, str] = Field(default_factory=dict)

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("QA_LOG_LEVEL", "log_level"),
    )

    @field_validator("api_url", mode="after")
    @classmethod
    def _strip_url(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("api_url must be non-empty")
        return s

    @field_validator("api_token", mode="after")
    @classmethod
    def _blank_token_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        s = v.strip()
        return s or None

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


def load_api_settings(overrides: Optional[Dict[str, Any]] = None) -> ApiSettings:
    try:
        return ApiSettings(**(overrides or {}))
    except (ValidationError, SettingsError) as e:
        raise ConfigError(f"Invalid API settings: {e}") from e


# -------------------------
# Env expansion for YAML values
# -------------------------

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def _expand_env_str(s: str) -> str:
    """
    Expand ${VAR}, ${VAR:-default} and $VAR from os.environ.
    Unset variables without a default expand to "".
    """

    def _sub(m: "re.Match[str]") -> str:
        name = m.group(1) or m.group(3)
        default = m.group(2)
        v = os.environ.get(name)
        if v is None or (v == "" and default is not None):
            return default or ""
        return v

    return _ENV_REF.sub(_sub, s)


def _expand_env(obj: Any) -> Any:
    if isinstance(obj, str):
        return _expand_env_str(obj)
    if isinstance(obj, dict):
        return {k: _expand_env(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env(v) for v in obj]
    return obj


# -------------------------
# Project profiles
# -------------------------


class ProjectConfig(BaseModel):
    """
    One named project from projects.yaml.

    Browser fields drive the UI fixtures; the api_* fields are explicit
    overrides layered on top of ApiSettings.
    """

    name: str
    base_url: Optional[str] = None
    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True

    api_url: Optional[str] = None
    api_timeout: Optional[int] = Field(default=None, gt=0)
    api_headers: Dict[str, str] = Field(default_factory=dict)

    def api_overrides(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.api_url:
            out["api_url"] = self.api_url
        if self.api_timeout:
            out["api_timeout"] = self.api_timeout
        if self.api_headers:
            out["api_headers"] = dict(self.api_headers)
        return out


@dataclass(frozen=True)
class ProjectCatalog:
    default_project: Optional[str] = None
    projects: Dict[str, ProjectConfig] = field(default_factory=dict)


def default_projects_path(root: Optional[Pathish] = None) -> Path:
    env = (os.getenv(PROJECTS_FILE_ENV, "") or "").strip()
    if env:
        return Path(env)
    base = Path(root) if root is not None else Path.cwd()
    return base / DEFAULT_PROJECTS_FILE


def load_projects(path: Pathish) -> ProjectCatalog:
    """
    Load projects.yaml.

    Missing file or a non-mapping document -> empty catalog.
    A project entry that fails validation -> ConfigError.
    """
    p = Path(path)
    if not p.exists():
        return ProjectCatalog()

    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        return ProjectCatalog()
    raw = _expand_env(raw)

    entries = raw.get("projects") or {}
    if not isinstance(entries, dict):
        raise ConfigError(f"{p}: 'projects' must be a mapping")

    projects: Dict[str, ProjectConfig] = {}
    for name, body in entries.items():
        body = dict(body or {})
        body["name"] = str(name)
        try:
            projects[str(name)] = ProjectConfig.model_validate(body)
        except ValidationError as e:
            raise ConfigError(f"{p}: invalid project '{name}': {e}") from e

    default = raw.get("default_project")
    return ProjectCatalog(
        default_project=str(default).strip() if default else None,
        projects=projects,
    )


def select_project(catalog: ProjectCatalog, name: Optional[str] = None) -> ProjectConfig:
    """
    Pick the active project.

    Priority:
      - explicit name (e.g. --project)
      - QA_PROJECT
      - catalog default_project
      - "chromium"

    With an empty catalog and no explicit choice, a bare profile is returned
    so API-only runs need no projects file.
    """
    explicit = (name or "").strip() or (os.getenv(PROJECT_ENV, "") or "").strip()
    chosen = explicit or catalog.default_project or DEFAULT_PROJECT_NAME

    project = catalog.projects.get(chosen)
    if project is not None:
        return project
    if not explicit and not catalog.projects:
        return ProjectConfig(name=chosen)

    known = ", ".join(sorted(catalog.projects)) or "<none>"
    raise ConfigError(f"Unknown project '{chosen}' (known: {known})")

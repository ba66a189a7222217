# src/qa_suite/api/models.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field

UserId = Union[int, str]


class User(BaseModel):
    """
    reqres.in user as returned by list/read/update endpoints.
    Every field is optional; unknown fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[UserId] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    avatar: Optional[str] = None

    name: Optional[str] = None
    job: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class CreatedUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: UserId
    name: Optional[str] = None
    job: Optional[str] = None
    createdAt: Optional[str] = None


class RegisteredUser(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: UserId
    token: str


class UsersPage(BaseModel):
    model_config = ConfigDict(extra="allow")

    page: int
    per_page: int
    total: int
    total_pages: int
    data: List[User] = Field(default_factory=list)


# -------------------------
# (response, payload) pairs
# -------------------------


@dataclass(frozen=True)
class CreatedUserResult:
    response: httpx.Response
    user: CreatedUser


@dataclass(frozen=True)
class RegisteredUserResult:
    response: httpx.Response
    user: RegisteredUser


@dataclass(frozen=True)
class UsersPageResult:
    response: httpx.Response
    data: UsersPage

# src/qa_suite/api/helpers.py
from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union
from urllib.parse import urlencode

import httpx

from qa_suite.api.context import ApiContext
from qa_suite.api.models import (
    CreatedUser,
    CreatedUserResult,
    RegisteredUser,
    RegisteredUserResult,
    UserId,
    UsersPage,
    UsersPageResult,
)
from qa_suite.core.errors import ConditionTimeoutError, ParseError, StatusMismatchError
from qa_suite.core.logging import get_logger

logger = get_logger("api")

RequestData = Union[Mapping[str, Any], list, str, bytes, int, float, bool, None]
Params = Mapping[str, Any]
CheckFn = Callable[[], Union[bool, Awaitable[bool]]]

DEFAULT_JOB = "QA Engineer"
DEFAULT_POLL_TIMEOUT_MS = 30000
DEFAULT_POLL_INTERVAL_MS = 1000


class ApiHelpers:
    """
    Thin facade over an injected httpx.AsyncClient.

    - Every verb resolves the URL against ApiContext.base_url, merges headers
      (context defaults first, per-call headers last) and applies the context
      timeout.
    - Verbs never raise for non-2xx statuses; they return the raw response.
    - expect_json / the domain helpers are the only places that assert.

    The client is owned by the caller (usually a session fixture).
    """

    def __init__(self, context: ApiContext, client: httpx.AsyncClient) -> None:
        self.context = context
        self._client = client

    # -------------------------
    # Request plumbing
    # -------------------------

    def build_url(self, endpoint: str, params: Optional[Params] = None) -> str:
        url = endpoint if endpoint.startswith("http") else f"{self.context.base_url}{endpoint}"
        if not params:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode(params)}"

    def _merge_headers(self, headers: Optional[Mapping[str, str]]) -> httpx.Headers:
        merged = httpx.Headers(dict(self.context.default_headers))
        if headers:
            # Headers.update replaces case-insensitively.
            merged.update(headers)
        return merged

    @staticmethod
    def _body_kwargs(data: RequestData) -> Dict[str, Any]:
        if data is None:
            return {}
        if isinstance(data, (str, bytes)):
            return {"content": data}
        return {"json": data}

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        data: RequestData = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        url = self.build_url(endpoint, params)
        t0 = time.perf_counter()
        response = await self._client.request(
            method,
            url,
            headers=self._merge_headers(headers),
            timeout=self.context.timeout_s,
            **self._body_kwargs(data),
        )
        latency_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "%s %s -> %s latency_ms=%.2f", method, url, response.status_code, latency_ms
        )
        return response

    async def get(
        self,
        endpoint: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        return await self._request("GET", endpoint, headers=headers, params=params)

    async def post(
        self,
        endpoint: str,
        *,
        data: RequestData = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        return await self._request("POST", endpoint, data=data, headers=headers, params=params)

    async def put(
        self,
        endpoint: str,
        *,
        data: RequestData = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        return await self._request("PUT", endpoint, data=data, headers=headers, params=params)

    async def patch(
        self,
        endpoint: str,
        *,
        data: RequestData = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        return await self._request("PATCH", endpoint, data=data, headers=headers, params=params)

    async def delete(
        self,
        endpoint: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Params] = None,
    ) -> httpx.Response:
        return await self._request("DELETE", endpoint, headers=headers, params=params)

    # -------------------------
    # Response assertions
    # -------------------------

    @staticmethod
    def parse_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
            raise ParseError(f"{type(e).__name__}: {e}", response_text=response.text) from e

    @classmethod
    def expect_json(cls, response: httpx.Response, expected_status: int = 200) -> Any:
        if response.status_code != expected_status:
            raise StatusMismatchError(
                expected_status=expected_status,
                actual_status=response.status_code,
                response_text=response.text,
            )
        return cls.parse_json(response)

    # -------------------------
    # Domain helpers (reqres.in)
    # -------------------------

    async def create_test_user(
        self, user_data: Optional[Mapping[str, Any]] = None
    ) -> CreatedUserResult:
        """
        POST /users with a timestamped default name, expecting 201.
        Caller fields override the defaults key by key.
        """
        payload: Dict[str, Any] = {
            "name": f"Test User {int(time.time() * 1000)}",
            "job": DEFAULT_JOB,
        }
        if user_data:
            payload.update(user_data)

        response = await self.post("/users", data=payload)
        body = self.expect_json(response, 201)
        user = CreatedUser.model_validate(body)
        logger.info("created test user id=%s name=%s", user.id, user.name)
        return CreatedUserResult(response=response, user=user)

    async def register_user(self, email: str, password: str) -> RegisteredUserResult:
        response = await self.post("/register", data={"email": email, "password": password})
        body = self.expect_json(response, 200)
        return RegisteredUserResult(response=response, user=RegisteredUser.model_validate(body))

    async def delete_test_user(self, user_id: UserId) -> httpx.Response:
        """DELETE /users/{id}. Status is left to the caller (reqres answers 204)."""
        return await self.delete(f"/users/{user_id}")

    async def get_users(self, page: int = 1, per_page: int = 6) -> UsersPageResult:
        response = await self.get("/users", params={"page": str(page), "per_page": str(per_page)})
        body = self.expect_json(response)
        return UsersPageResult(response=response, data=UsersPage.model_validate(body))

    async def authenticate(
        self,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        login_endpoint: str = "/auth/login",
    ) -> str:
        """
        Return a bearer token.

        An explicit token short-circuits the login call. Otherwise the login
        endpoint must answer 200 with JSON carrying `token` or `access_token`.
        When it carries neither, "" is returned and a warning is logged;
        callers must treat "" as "not authenticated".
        """
        if token:
            return token

        response = await self.post(
            login_endpoint, data={"username": username, "password": password}
        )
        body = self.expect_json(response)

        found = ""
        if isinstance(body, dict):
            found = body.get("token") or body.get("access_token") or ""
        if not found:
            logger.warning(
                "login at %s returned no token/access_token; using empty token", login_endpoint
            )
        return str(found)

    # -------------------------
    # Polling
    # -------------------------

    @staticmethod
    async def wait_for_condition(
        check_fn: CheckFn,
        *,
        timeout_ms: int = DEFAULT_POLL_TIMEOUT_MS,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> None:
        """
        Poll `check_fn` until it returns truthy or `timeout_ms` elapses.

        `check_fn` may be a plain or async callable. It always runs at least
        once, and once more at the deadline when the last sleep is clamped.
        Raises ConditionTimeoutError on expiry.
        """
        deadline = time.monotonic() + timeout_ms / 1000.0
        interval_s = max(0.0, interval_ms / 1000.0)

        while True:
            result = check_fn()
            if inspect.isawaitable(result):
                result = await result
            if result:
                return

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise ConditionTimeoutError(timeout_ms)
            await asyncio.sleep(min(interval_s, remaining))

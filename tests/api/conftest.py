from __future__ import annotations

from typing import AsyncIterator

import pytest
import pytest_asyncio

from qa_suite.api.cleanup import CreatedUsers
from qa_suite.api.helpers import ApiHelpers


@pytest.fixture(autouse=True)
def _live_api(require_live_api: None) -> None:
    return None


@pytest_asyncio.fixture(loop_scope="session")
async def created_users(api_helpers: ApiHelpers) -> AsyncIterator[CreatedUsers]:
    """Users tracked here are deleted after the test, best-effort."""
    users = CreatedUsers()
    yield users
    await users.cleanup(api_helpers)

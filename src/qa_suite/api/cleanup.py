# src/qa_suite/api/cleanup.py
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List

from qa_suite.api.models import UserId
from qa_suite.core.logging import get_logger

if TYPE_CHECKING:
    from qa_suite.api.helpers import ApiHelpers

logger = get_logger("cleanup")

_OK_DELETE_STATUSES = (200, 202, 204)


class CreatedUsers:
    """
    Ids of remote users created during one fixture scope (a test or a module).

    cleanup() is best-effort: a failed delete is logged and skipped so the
    suite tolerates orphaned remote users instead of failing on teardown.
    """

    def __init__(self) -> None:
        self._ids: List[UserId] = []

    def track(self, user_id: UserId) -> UserId:
        self._ids.append(user_id)
        return user_id

    def __iter__(self) -> Iterator[UserId]:
        return iter(list(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    async def cleanup(self, helpers: "ApiHelpers") -> List[UserId]:
        """Delete every tracked id; returns the ids that could not be deleted."""
        failed: List[UserId] = []
        ids, self._ids = self._ids, []

        for user_id in ids:
            try:
                r = await helpers.delete_test_user(user_id)
            except Exception as e:
                logger.warning("failed to delete test user id=%s: %s: %s", user_id, type(e).__name__, e)
                failed.append(user_id)
                continue

            if r.status_code in _OK_DELETE_STATUSES:
                logger.info("deleted test user id=%s", user_id)
            else:
                logger.warning(
                    "failed to delete test user id=%s: status=%s body=%s",
                    user_id,
                    r.status_code,
                    (r.text or "")[:200],
                )
                failed.append(user_id)

        return failed

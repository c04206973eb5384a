"""Staff authentication for pasteq

Moderation actions (redact, re-render) are only honoured for callers that
present the staff API key. Everyone else is treated as an anonymous
submitter; nothing here ever rejects a request by itself.
"""

from __future__ import annotations

import os
import secrets

from fastapi import Header

from pasteq.observability.logging import get_logger

logger = get_logger(__name__)


class StaffAuth:
    """
    Bearer-token check for staff actions.

    The key comes from PASTEQ_ADMIN_API_KEY. With no key configured nobody is
    staff: unlike read-only admin endpoints, moderation must fail closed.
    """

    def __init__(self, api_key: str | None = None):
        self.api_key = api_key if api_key is not None else os.getenv("PASTEQ_ADMIN_API_KEY")
        if not self.api_key:
            logger.warning("PASTEQ_ADMIN_API_KEY not set - staff moderation actions are disabled")

    def is_privileged(self, authorization: str | None) -> bool:
        """
        True if `authorization` is "Bearer <staff key>".

        Uses secrets.compare_digest() so the key can't be recovered by timing.
        """
        if not self.api_key or not authorization:
            return False

        try:
            scheme, token = authorization.split()
        except ValueError:
            return False
        if scheme.lower() != "bearer":
            return False

        return secrets.compare_digest(token, self.api_key)

    def staff_identity(self, authorization: str | None = Header(None)) -> str | None:
        """
        FastAPI dependency: "staff" for privileged callers, None otherwise.

        Usage:
            @router.post("/Edit/{paste_id}")
            async def edit(staff: str | None = Depends(auth.staff_identity)):
                ...
        """
        return "staff" if self.is_privileged(authorization) else None


# Global auth instance
auth = StaffAuth()


def get_staff_identity(authorization: str | None = Header(None)) -> str | None:
    return auth.staff_identity(authorization)

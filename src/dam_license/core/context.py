"""The Context every repository operation runs in."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.models.auth import EPersonComponent

if TYPE_CHECKING:
    from dam_license.functions.file_storage_resource import FileStorageResource

logger = logging.getLogger(__name__)


class Context:
    """
    A database session together with the user operations are attributed to.

    Authorization checks can be switched off for the duration of a block with
    :meth:`authorization_ignored`; blocks may be nested.

    Stored content orphaned by the operations is only deleted once the
    transaction has committed; see :meth:`schedule_content_deletion`.
    """

    def __init__(self, session: AsyncSession, current_user: EPersonComponent | None = None):
        """Initialize the context with an active session."""
        self.session = session
        self.current_user = current_user
        self._ignore_authorization_depth = 0
        self.pending_content_deletions: dict[str, "FileStorageResource"] = {}

    @property
    def current_user_id(self) -> int | None:
        """Return the entity id of the current user, or None when anonymous."""
        return self.current_user.entity_id if self.current_user is not None else None

    @property
    def ignores_authorization(self) -> bool:
        """Whether authorization checks are currently switched off."""
        return self._ignore_authorization_depth > 0

    @contextmanager
    def authorization_ignored(self) -> Iterator["Context"]:
        """Switch authorization checks off until the block exits."""
        self._ignore_authorization_depth += 1
        try:
            yield self
        finally:
            self._ignore_authorization_depth -= 1

    def schedule_content_deletion(self, content_hash: str, storage: "FileStorageResource") -> None:
        """Delete stored content after commit, unless a bitstream still references it by then."""
        self.pending_content_deletions[content_hash] = storage

    async def flush(self) -> None:
        """Flush the underlying session to persist changes within the current transaction."""
        await self.session.flush()

    def __repr__(self) -> str:
        user = self.current_user.email if self.current_user is not None else "anonymous"
        return f"<Context user={user!r} ignore_authorization={self.ignores_authorization}>"

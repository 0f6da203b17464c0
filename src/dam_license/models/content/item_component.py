"""Defines the ItemComponent model."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import UniqueComponent


class ItemComponent(UniqueComponent):
    """Marks an entity as a repository item, the unit that carries metadata and bundles."""

    __tablename__ = "component_item"

    handle: Mapped[str | None] = mapped_column(String(256), unique=True, nullable=True, default=None)
    in_archive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default_factory=lambda: datetime.now(UTC)
    )

    def __repr__(self) -> str:
        return f"<ItemComponent entity_id={self.entity_id} handle={self.handle!r}>"

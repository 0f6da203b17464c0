"""Defines the BundleComponent model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import ID_TYPE, UniqueComponent


class BundleComponent(UniqueComponent):
    """A named group of bitstreams owned by an item, e.g. ``ORIGINAL`` or ``CC-LICENSE``."""

    __tablename__ = "component_bundle"

    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    item_entity_id: Mapped[int] = mapped_column(
        ID_TYPE,
        ForeignKey("entities.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
        comment="The ID of the item Entity owning this bundle.",
    )

    def __repr__(self) -> str:
        return f"<BundleComponent entity_id={self.entity_id} name={self.name!r} item={self.item_entity_id}>"

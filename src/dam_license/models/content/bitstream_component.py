"""Defines the BitstreamComponent model."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import ID_TYPE, UniqueComponent


class BitstreamComponent(UniqueComponent):
    """
    A stored binary file inside a bundle.

    The content itself lives in content-addressable storage; ``checksum`` is its
    SHA256 hex digest and ``storage_suffix`` the path relative to the storage root.
    """

    __tablename__ = "component_bitstream"

    bundle_entity_id: Mapped[int] = mapped_column(
        ID_TYPE,
        ForeignKey("entities.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
        comment="The ID of the bundle Entity containing this bitstream.",
    )
    size_bytes: Mapped[int] = mapped_column(BigInteger, nullable=False)
    checksum: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    storage_suffix: Mapped[str] = mapped_column(String(256), nullable=False)
    name: Mapped[str | None] = mapped_column(String(256), nullable=True, default=None)
    source: Mapped[str | None] = mapped_column(String(256), nullable=True, default=None)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True, default=None)
    format_entity_id: Mapped[int | None] = mapped_column(
        ID_TYPE,
        ForeignKey("entities.id"),
        nullable=True,
        default=None,
        comment="The ID of the Entity holding the BitstreamFormatComponent.",
    )
    sequence_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<BitstreamComponent entity_id={self.entity_id} name={self.name!r} "
            f"bundle={self.bundle_entity_id} size={self.size_bytes}>"
        )

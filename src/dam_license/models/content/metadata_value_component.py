"""Defines the MetadataValueComponent model."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import BaseComponent


class MetadataValueComponent(BaseComponent):
    """
    One value of a qualified metadata field on an item.

    A field is identified by ``schema.element[.qualifier]``. An item may carry
    any number of values per field; ``place`` keeps their order.
    """

    __tablename__ = "component_metadata_value"

    schema: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    element: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    qualifier: Mapped[str | None] = mapped_column(String(64), nullable=True, default=None)
    language: Mapped[str | None] = mapped_column(String(32), nullable=True, default=None)
    place: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def field_name(self) -> str:
        """Return the dotted field name, e.g. ``dc.rights.uri``."""
        parts = [self.schema, self.element]
        if self.qualifier:
            parts.append(self.qualifier)
        return ".".join(parts)

    def __repr__(self) -> str:
        return f"<MetadataValueComponent entity_id={self.entity_id} {self.field_name}[{self.place}]={self.value!r}>"

"""Defines the ResourcePolicyComponent model."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import ID_TYPE, BaseComponent


class ResourcePolicyComponent(BaseComponent):
    """
    Grants one action on the entity it is attached to.

    A policy without an ``eperson_entity_id`` applies to everybody, anonymous users included.
    """

    __tablename__ = "component_resource_policy"

    action: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    eperson_entity_id: Mapped[int | None] = mapped_column(
        ID_TYPE, ForeignKey("entities.id", ondelete="CASCADE"), nullable=True, default=None, index=True
    )

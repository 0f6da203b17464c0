"""Defines the EPersonComponent model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import UniqueComponent


class EPersonComponent(UniqueComponent):
    """A user account that actions in a Context are attributed to."""

    __tablename__ = "component_eperson"

    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

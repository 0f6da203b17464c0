"""Defines the BitstreamFormatComponent model."""

from enum import IntEnum

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from dam_license.models.core import UniqueComponent


class SupportLevel(IntEnum):
    """How well the repository supports a format."""

    UNKNOWN = 0
    KNOWN = 1
    SUPPORTED = 2


class BitstreamFormatComponent(UniqueComponent):
    """A registry entry describing a bitstream format, looked up by its short description."""

    __tablename__ = "component_bitstream_format"

    short_description: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    mime_type: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True, default=None)
    support_level: Mapped[int] = mapped_column(Integer, nullable=False, default=SupportLevel.UNKNOWN)
    internal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

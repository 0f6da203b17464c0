"""Data model for the core Entity."""

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base_class import Base


class Entity(Base):
    """Represents a unique entity in a repository, acting as a container for components."""

    __tablename__ = "entities"

    # SQLite only autoincrements INTEGER primary keys.
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True, init=False
    )

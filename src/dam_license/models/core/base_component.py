"""Base classes for data components attached to repository entities."""

import logging
from typing import Any

from sqlalchemy import BigInteger, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base_class import Base

# Populated by Component.__init_subclass__; used when an entity is deleted.
REGISTERED_COMPONENT_TYPES: list[type["Component"]] = []

logger = logging.getLogger(__name__)

ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class Component(Base):
    """A common, abstract base for all component types."""

    __abstract__ = True

    entity_id: Mapped[int]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Register concrete component subclasses."""
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("__abstract__", False):
            if cls not in REGISTERED_COMPONENT_TYPES:
                REGISTERED_COMPONENT_TYPES.append(cls)
                logger.debug("Registered component: %s", cls.__name__)
        else:
            logger.debug("Not registering abstract class: %s", cls.__name__)


class BaseComponent(Component):
    """
    Abstract base class for components an entity may carry several of.

    Provides the surrogate ``id`` and the ``entity_id`` link to the owning Entity.
    """

    __abstract__ = True

    entity_id: Mapped[int] = mapped_column(ID_TYPE, ForeignKey("entities.id"), index=True, nullable=False, init=False)

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True, init=False)


class UniqueComponent(Component):
    """
    Abstract base class for components that are unique to an entity.

    The entity_id serves as the primary key.
    """

    __abstract__ = True

    entity_id: Mapped[int] = mapped_column(ID_TYPE, ForeignKey("entities.id"), primary_key=True, init=False)

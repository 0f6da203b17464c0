"""
Entity and component persistence helpers.

All functions take the `AsyncSession` of the target world. The caller owns the
transaction (commit/rollback).
"""

import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.models.core import REGISTERED_COMPONENT_TYPES, Component, Entity

T = TypeVar("T", bound=Component)

logger = logging.getLogger(__name__)


async def create_entity(session: AsyncSession) -> Entity:
    """Create a new Entity, add it to the session and flush so it gets an id."""
    entity = Entity()
    session.add(entity)
    await session.flush()
    return entity


async def get_entity(session: AsyncSession, entity_id: int) -> Entity | None:
    """Retrieve an entity by its ID."""
    return await session.get(Entity, entity_id)


async def add_component_to_entity(session: AsyncSession, entity_id: int, component_instance: T, flush: bool = True) -> T:
    """
    Add a component instance to an entity.

    Raises:
        ValueError: If the entity is not found.

    """
    entity = await get_entity(session, entity_id)
    if not entity:
        raise ValueError(f"Entity with ID {entity_id} not found in the provided session.")

    component_instance.entity_id = entity.id
    session.add(component_instance)
    if flush:
        await session.flush()
    return component_instance


async def get_component(session: AsyncSession, entity_id: int, component_type: type[T]) -> T | None:
    """Retrieve the single component of a type for an entity."""
    stmt = select(component_type).where(component_type.entity_id == entity_id)
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_components(session: AsyncSession, entity_id: int, component_type: type[T]) -> list[T]:
    """Retrieve all components of a type for an entity."""
    stmt = select(component_type).where(component_type.entity_id == entity_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def find_components_by_value(session: AsyncSession, component_type: type[T], **attributes: Any) -> list[T]:
    """Find components of a type whose attributes equal all given values."""
    stmt = select(component_type)
    for name, value in attributes.items():
        stmt = stmt.where(getattr(component_type, name) == value)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def remove_component(session: AsyncSession, component: Component, flush: bool = False) -> None:
    """Delete a component instance."""
    await session.delete(component)
    if flush:
        await session.flush()


async def delete_entity(session: AsyncSession, entity_id: int, flush: bool = True) -> bool:
    """
    Delete an entity and all its components.

    Returns:
        True if the entity was found and deleted, False otherwise.

    """
    entity = await get_entity(session, entity_id)
    if not entity:
        return False

    for component_type in REGISTERED_COMPONENT_TYPES:
        for component in await get_components(session, entity_id, component_type):
            await remove_component(session, component)

    # Components must be gone before the entity row they reference.
    await session.flush()
    await session.delete(entity)
    if flush:
        await session.flush()
    logger.debug("Deleted entity %s", entity_id)
    return True

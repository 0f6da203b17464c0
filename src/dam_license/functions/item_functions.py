"""Functions for managing items and their metadata values."""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.context import Context
from dam_license.core.exceptions import ItemNotFoundError
from dam_license.enums import Action
from dam_license.functions import authorize_functions, ecs_functions
from dam_license.models.content import ItemComponent, MetadataValueComponent

logger = logging.getLogger(__name__)

ANY = "*"
"""Wildcard matching any element, qualifier or language."""


# --- Item Functions ---


async def create_item(session: AsyncSession, handle: str | None = None) -> ItemComponent:
    """Create a new item entity."""
    entity = await ecs_functions.create_entity(session)
    item = await ecs_functions.add_component_to_entity(session, entity.id, ItemComponent(handle=handle))
    logger.info("Created item %s (handle: %s).", entity.id, handle)
    return item


async def get_item(session: AsyncSession, item_id: int) -> ItemComponent:
    """
    Retrieve an item by its entity id.

    Raises:
        ItemNotFoundError: If the entity is not an item.

    """
    item = await ecs_functions.get_component(session, item_id, ItemComponent)
    if item is None:
        raise ItemNotFoundError(f"Item {item_id} not found.")
    return item


async def find_item_by_handle(session: AsyncSession, handle: str) -> ItemComponent | None:
    """Retrieve an item by its handle."""
    items = await ecs_functions.find_components_by_value(session, ItemComponent, handle=handle)
    return items[0] if items else None


async def list_items(session: AsyncSession) -> list[ItemComponent]:
    """Return all items, oldest first."""
    result = await session.execute(select(ItemComponent).order_by(ItemComponent.entity_id))
    return list(result.scalars().all())


async def touch_item(session: AsyncSession, item: ItemComponent) -> None:
    """Record that the item was modified."""
    item.last_modified = datetime.now(UTC)
    session.add(item)


# --- Metadata Functions ---


def parse_field_name(field_name: str) -> tuple[str, str, str | None]:
    """
    Split ``schema.element[.qualifier]`` into its parts.

    Raises:
        ValueError: If the name has fewer than two or more than three parts.

    """
    parts = field_name.split(".")
    if len(parts) < 2 or len(parts) > 3 or not all(parts):
        raise ValueError(f"Invalid metadata field name '{field_name}'. Expected schema.element[.qualifier].")
    return parts[0], parts[1], parts[2] if len(parts) == 3 else None


def _field_matches(
    value: MetadataValueComponent,
    schema: str,
    element: str,
    qualifier: str | None,
    language: str | None,
) -> bool:
    if schema != ANY and value.schema != schema:
        return False
    if element != ANY and value.element != element:
        return False
    if qualifier != ANY and value.qualifier != qualifier:
        return False
    return language == ANY or value.language == language


async def get_all_metadata(session: AsyncSession, item_id: int) -> list[MetadataValueComponent]:
    """Return every metadata value of an item ordered by field and place."""
    stmt = (
        select(MetadataValueComponent)
        .where(MetadataValueComponent.entity_id == item_id)
        .order_by(
            MetadataValueComponent.schema,
            MetadataValueComponent.element,
            MetadataValueComponent.qualifier,
            MetadataValueComponent.place,
            MetadataValueComponent.id,
        )
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_metadata(
    session: AsyncSession,
    item_id: int,
    schema: str,
    element: str,
    qualifier: str | None = ANY,
    language: str | None = ANY,
) -> list[MetadataValueComponent]:
    """
    Return the metadata values of an item matching a field.

    `ANY` matches every element, qualifier or language; a `None` qualifier or
    language only matches values that have none.
    """
    values = await get_all_metadata(session, item_id)
    return [v for v in values if _field_matches(v, schema, element, qualifier, language)]


async def get_metadata_values(
    session: AsyncSession,
    item_id: int,
    schema: str,
    element: str,
    qualifier: str | None = ANY,
    language: str | None = ANY,
) -> list[str]:
    """Return the plain string values of a field, in order."""
    return [v.value for v in await get_metadata(session, item_id, schema, element, qualifier, language)]


async def add_metadata(
    context: Context,
    item_id: int,
    schema: str,
    element: str,
    qualifier: str | None,
    language: str | None,
    values: str | Iterable[str],
) -> list[MetadataValueComponent]:
    """
    Append values to a metadata field of an item.

    Raises:
        ItemNotFoundError: If the entity is not an item.
        AuthorizeError: If the current user may not write the item.

    """
    if ANY in (schema, element, qualifier):
        raise ValueError("Cannot add metadata to a wildcard field.")
    if language == ANY:
        language = None

    item = await get_item(context.session, item_id)
    await authorize_functions.authorize_action(context, item_id, Action.WRITE)

    if isinstance(values, str):
        values = [values]

    stmt = select(func.max(MetadataValueComponent.place)).where(
        MetadataValueComponent.entity_id == item_id,
        MetadataValueComponent.schema == schema,
        MetadataValueComponent.element == element,
        MetadataValueComponent.qualifier.is_(None) if qualifier is None else MetadataValueComponent.qualifier == qualifier,
    )
    max_place = (await context.session.execute(stmt)).scalar_one_or_none()
    place = 0 if max_place is None else max_place + 1

    added: list[MetadataValueComponent] = []
    for value in values:
        component = MetadataValueComponent(
            schema=schema, element=element, qualifier=qualifier, language=language, value=value, place=place
        )
        added.append(await ecs_functions.add_component_to_entity(context.session, item_id, component, flush=False))
        place += 1

    await touch_item(context.session, item)
    await context.flush()
    logger.debug("Added %d value(s) to %s.%s.%s of item %s.", len(added), schema, element, qualifier, item_id)
    return added


async def clear_metadata(
    context: Context,
    item_id: int,
    schema: str,
    element: str,
    qualifier: str | None = ANY,
    language: str | None = ANY,
) -> int:
    """
    Remove every value of an item matching a field.

    Returns:
        The number of values removed.

    Raises:
        ItemNotFoundError: If the entity is not an item.
        AuthorizeError: If the current user may not write the item.

    """
    item = await get_item(context.session, item_id)
    await authorize_functions.authorize_action(context, item_id, Action.WRITE)

    matching = await get_metadata(context.session, item_id, schema, element, qualifier, language)
    for value in matching:
        await ecs_functions.remove_component(context.session, value)

    if matching:
        await touch_item(context.session, item)
        await context.flush()
        logger.debug("Cleared %d value(s) of %s.%s.%s from item %s.", len(matching), schema, element, qualifier, item_id)
    return len(matching)

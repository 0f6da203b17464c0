"""Functions for managing the bundles of an item and the bitstreams inside them."""

import logging
from typing import BinaryIO

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.context import Context
from dam_license.enums import Action
from dam_license.functions import authorize_functions, ecs_functions, item_functions
from dam_license.functions.file_storage_resource import FileStorageResource
from dam_license.models.content import BitstreamComponent, BundleComponent

logger = logging.getLogger(__name__)


# --- Bundle Functions ---


async def get_bundles(session: AsyncSession, item_id: int, name: str | None = None) -> list[BundleComponent]:
    """Return the bundles of an item, optionally only those with a given name, oldest first."""
    stmt = select(BundleComponent).where(BundleComponent.item_entity_id == item_id)
    if name is not None:
        stmt = stmt.where(BundleComponent.name == name)
    result = await session.execute(stmt.order_by(BundleComponent.entity_id))
    return list(result.scalars().all())


async def create_bundle(context: Context, item_id: int, name: str) -> BundleComponent:
    """
    Create a named bundle on an item. The bundle inherits the item's policies.

    Raises:
        ItemNotFoundError: If the entity is not an item.
        AuthorizeError: If the current user may not add to the item.

    """
    item = await item_functions.get_item(context.session, item_id)
    await authorize_functions.authorize_action(context, item_id, Action.ADD)

    entity = await ecs_functions.create_entity(context.session)
    bundle = await ecs_functions.add_component_to_entity(
        context.session, entity.id, BundleComponent(name=name, item_entity_id=item_id)
    )
    await authorize_functions.inherit_policies(context.session, item_id, entity.id)
    await item_functions.touch_item(context.session, item)
    logger.info("Created bundle '%s' (%s) on item %s.", name, entity.id, item_id)
    return bundle


async def remove_bundle(
    context: Context, item_id: int, bundle: BundleComponent, storage: FileStorageResource
) -> None:
    """
    Remove a bundle from an item, deleting its bitstreams.

    Raises:
        AuthorizeError: If the current user may not remove from the item.

    """
    item = await item_functions.get_item(context.session, item_id)
    await authorize_functions.authorize_action(context, item_id, Action.REMOVE)

    for bitstream in await get_bitstreams(context.session, bundle.entity_id):
        await delete_bitstream(context, bitstream, storage)

    bundle_id, bundle_name = bundle.entity_id, bundle.name
    await ecs_functions.delete_entity(context.session, bundle_id)
    await item_functions.touch_item(context.session, item)
    logger.info("Removed bundle '%s' (%s) from item %s.", bundle_name, bundle_id, item_id)


# --- Bitstream Functions ---


async def get_bitstreams(session: AsyncSession, bundle_id: int) -> list[BitstreamComponent]:
    """Return the bitstreams of a bundle in sequence order."""
    stmt = (
        select(BitstreamComponent)
        .where(BitstreamComponent.bundle_entity_id == bundle_id)
        .order_by(BitstreamComponent.sequence_id, BitstreamComponent.entity_id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_bitstream_by_name(session: AsyncSession, bundle_id: int, name: str) -> BitstreamComponent | None:
    """Return the first bitstream of a bundle with the given name, or None."""
    for bitstream in await get_bitstreams(session, bundle_id):
        if bitstream.name == name:
            return bitstream
    return None


async def create_bitstream(
    context: Context,
    bundle_id: int,
    content: bytes | BinaryIO,
    storage: FileStorageResource,
    name: str | None = None,
) -> BitstreamComponent:
    """
    Store content and attach it to a bundle as a new bitstream.

    The bitstream inherits the bundle's policies.

    Raises:
        AuthorizeError: If the current user may not add to the bundle.
        OSError: If the content cannot be read or stored.

    """
    await authorize_functions.authorize_action(context, bundle_id, Action.ADD)

    data = content if isinstance(content, bytes) else content.read()
    checksum, storage_suffix = storage.store(data, name=name)

    stmt = select(func.max(BitstreamComponent.sequence_id)).where(BitstreamComponent.bundle_entity_id == bundle_id)
    max_sequence = (await context.session.execute(stmt)).scalar_one_or_none()

    entity = await ecs_functions.create_entity(context.session)
    bitstream = BitstreamComponent(
        bundle_entity_id=bundle_id,
        size_bytes=len(data),
        checksum=checksum,
        storage_suffix=storage_suffix,
        name=name,
        sequence_id=0 if max_sequence is None else max_sequence + 1,
    )
    await ecs_functions.add_component_to_entity(context.session, entity.id, bitstream)
    await authorize_functions.inherit_policies(context.session, bundle_id, entity.id)
    logger.info("Created bitstream %s (%d bytes) in bundle %s.", entity.id, len(data), bundle_id)
    return bitstream


async def read_bitstream(context: Context, bitstream: BitstreamComponent, storage: FileStorageResource) -> bytes:
    """
    Return the content of a bitstream.

    Raises:
        AuthorizeError: If the current user may not read the bitstream.
        OSError: If the stored content cannot be read.

    """
    await authorize_functions.authorize_action(context, bitstream.entity_id, Action.READ)
    return storage.read(bitstream.checksum)


async def delete_bitstream(context: Context, bitstream: BitstreamComponent, storage: FileStorageResource) -> None:
    """
    Delete a bitstream.

    Its stored content is removed once the context's transaction commits, unless
    another bitstream still shares it by then.
    """
    checksum, bitstream_id = bitstream.checksum, bitstream.entity_id
    await ecs_functions.delete_entity(context.session, bitstream_id)
    context.schedule_content_deletion(checksum, storage)
    logger.debug("Deleted bitstream %s.", bitstream_id)

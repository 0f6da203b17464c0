import io

import pytest

from dam_license.core.context import Context
from dam_license.core.exceptions import AuthorizeError, BitstreamFormatNotFoundError
from dam_license.core.world import World
from dam_license.enums import Action
from dam_license.functions import authorize_functions, bundle_functions, format_functions, item_functions
from dam_license.functions.file_storage_resource import FileStorageResource
from dam_license.models.content import ItemComponent


@pytest.mark.asyncio
async def test_create_bundle_and_bitstreams(world: World, admin_context: Context, item: ItemComponent) -> None:
    storage = world.get_resource(FileStorageResource)
    bundle = await bundle_functions.create_bundle(admin_context, item.entity_id, "ORIGINAL")

    first = await bundle_functions.create_bitstream(admin_context, bundle.entity_id, b"one", storage, name="one.txt")
    second = await bundle_functions.create_bitstream(
        admin_context, bundle.entity_id, io.BytesIO(b"two"), storage, name="two.txt"
    )

    assert [b.name for b in await bundle_functions.get_bundles(admin_context.session, item.entity_id)] == ["ORIGINAL"]
    bitstreams = await bundle_functions.get_bitstreams(admin_context.session, bundle.entity_id)
    assert [b.entity_id for b in bitstreams] == [first.entity_id, second.entity_id]
    assert [b.sequence_id for b in bitstreams] == [0, 1]
    assert second.size_bytes == 3
    assert await bundle_functions.read_bitstream(admin_context, second, storage) == b"two"
    assert await bundle_functions.get_bitstream_by_name(admin_context.session, bundle.entity_id, "one.txt") is first
    assert await bundle_functions.get_bitstream_by_name(admin_context.session, bundle.entity_id, "x") is None


@pytest.mark.asyncio
async def test_get_bundles_by_name(admin_context: Context, item: ItemComponent) -> None:
    await bundle_functions.create_bundle(admin_context, item.entity_id, "ORIGINAL")
    license_bundle = await bundle_functions.create_bundle(admin_context, item.entity_id, "CC-LICENSE")

    bundles = await bundle_functions.get_bundles(admin_context.session, item.entity_id, "CC-LICENSE")
    assert bundles == [license_bundle]


@pytest.mark.asyncio
async def test_remove_bundle_deletes_unshared_content_after_commit(world: World) -> None:
    storage = world.get_resource(FileStorageResource)
    async with world.context(ignore_authorization=True) as context:
        item = await item_functions.create_item(context.session)
        keep = await bundle_functions.create_bundle(context, item.entity_id, "ORIGINAL")
        drop = await bundle_functions.create_bundle(context, item.entity_id, "CC-LICENSE")
        shared = await bundle_functions.create_bitstream(context, keep.entity_id, b"shared", storage)
        await bundle_functions.create_bitstream(context, drop.entity_id, b"shared", storage)
        only = await bundle_functions.create_bitstream(context, drop.entity_id, b"only here", storage)
        item_id, drop_id = item.entity_id, drop.entity_id
        shared_checksum, only_checksum = shared.checksum, only.checksum

    async with world.context(ignore_authorization=True) as context:
        drop = (await bundle_functions.get_bundles(context.session, item_id, "CC-LICENSE"))[0]
        await bundle_functions.remove_bundle(context, item_id, drop, storage)

        assert await bundle_functions.get_bundles(context.session, item_id, "CC-LICENSE") == []
        assert await bundle_functions.get_bitstreams(context.session, drop_id) == []
        assert storage.has(only_checksum)

    assert storage.has(shared_checksum)
    assert not storage.has(only_checksum)


@pytest.mark.asyncio
async def test_remove_bundle_keeps_content_on_rollback(world: World) -> None:
    storage = world.get_resource(FileStorageResource)
    async with world.context(ignore_authorization=True) as context:
        item = await item_functions.create_item(context.session)
        bundle = await bundle_functions.create_bundle(context, item.entity_id, "ORIGINAL")
        bitstream = await bundle_functions.create_bitstream(context, bundle.entity_id, b"content", storage)
        item_id, bundle_id, checksum = item.entity_id, bundle.entity_id, bitstream.checksum

    with pytest.raises(RuntimeError):
        async with world.context(ignore_authorization=True) as context:
            bundle = (await bundle_functions.get_bundles(context.session, item_id))[0]
            await bundle_functions.remove_bundle(context, item_id, bundle, storage)
            raise RuntimeError("abort")

    assert storage.has(checksum)
    async with world.context(ignore_authorization=True) as context:
        bitstreams = await bundle_functions.get_bitstreams(context.session, bundle_id)
        assert [b.checksum for b in bitstreams] == [checksum]
        assert await bundle_functions.read_bitstream(context, bitstreams[0], storage) == b"content"


@pytest.mark.asyncio
async def test_bundle_inherits_item_policies(admin_context: Context, item: ItemComponent) -> None:
    await authorize_functions.add_policy(admin_context.session, item.entity_id, Action.READ)

    bundle = await bundle_functions.create_bundle(admin_context, item.entity_id, "ORIGINAL")

    policies = await authorize_functions.get_policies(admin_context.session, bundle.entity_id)
    assert [p.action for p in policies] == ["READ"]


@pytest.mark.asyncio
async def test_create_bundle_requires_add(world: World) -> None:
    async with world.context(ignore_authorization=True) as context:
        item = await item_functions.create_item(context.session)
        item_id = item.entity_id

    async with world.context() as context:
        with pytest.raises(AuthorizeError) as exc_info:
            await bundle_functions.create_bundle(context, item_id, "ORIGINAL")
    assert exc_info.value.action == "ADD"


@pytest.mark.asyncio
async def test_get_or_create_default_format(admin_context: Context) -> None:
    fmt = await format_functions.get_or_create_format(admin_context.session, "RDF XML")
    again = await format_functions.get_or_create_format(admin_context.session, "RDF XML")

    assert fmt is again
    assert fmt.mime_type.startswith("application/rdf+xml")


@pytest.mark.asyncio
async def test_unknown_format_is_not_created(admin_context: Context) -> None:
    with pytest.raises(BitstreamFormatNotFoundError):
        await format_functions.get_or_create_format(admin_context.session, "Nonexistent Format")


@pytest.mark.asyncio
async def test_set_bitstream_format(world: World, admin_context: Context, item: ItemComponent) -> None:
    storage = world.get_resource(FileStorageResource)
    bundle = await bundle_functions.create_bundle(admin_context, item.entity_id, "ORIGINAL")
    bitstream = await bundle_functions.create_bitstream(admin_context, bundle.entity_id, b"x", storage)
    assert await format_functions.get_bitstream_format(admin_context.session, bitstream) is None

    fmt = await format_functions.register_format(admin_context.session, "Plain Text", "text/plain")
    format_functions.set_bitstream_format(bitstream, fmt)

    assert await format_functions.get_bitstream_format(admin_context.session, bitstream) is fmt

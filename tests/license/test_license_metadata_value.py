import pytest

from dam_license.core.context import Context
from dam_license.functions import item_functions
from dam_license.license import LicenseMetadataValue
from dam_license.models.content import ItemComponent

CC_URI = "http://creativecommons.org/licenses/by/4.0/"
CC_NAME = "Attribution 4.0 International"


async def _values(context: Context, item: ItemComponent, field_name: str) -> list[str]:
    schema, element, qualifier = item_functions.parse_field_name(field_name)
    return await item_functions.get_metadata_values(context.session, item.entity_id, schema, element, qualifier)


def test_parses_field_name() -> None:
    field = LicenseMetadataValue("dc.rights.uri")

    assert (field.schema, field.element, field.qualifier) == ("dc", "rights", "uri")
    assert field.language == "*"
    assert not field.is_empty


def test_invalid_field_name() -> None:
    with pytest.raises(ValueError):
        LicenseMetadataValue("rights")


@pytest.mark.asyncio
async def test_cc_item_value(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue("dc.rights.uri")
    assert await field.cc_item_value(admin_context.session, item) is None

    await field.add_item_value(admin_context, item, "http://example.org/other-license")
    await field.add_item_value(admin_context, item, CC_URI)

    assert await field.cc_item_value(admin_context.session, item) == CC_URI


@pytest.mark.asyncio
async def test_cc_item_value_matches_any_language(admin_context: Context, item: ItemComponent) -> None:
    await item_functions.add_metadata(admin_context, item.entity_id, "dc", "rights", "uri", "en", CC_URI)

    assert await LicenseMetadataValue("dc.rights.uri").cc_item_value(admin_context.session, item) == CC_URI


@pytest.mark.asyncio
async def test_keyed_item_value(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue("dc.rights")
    await field.add_item_value(admin_context, item, "All rights reserved")
    await field.add_item_value(admin_context, item, CC_NAME)

    assert await field.keyed_item_value(admin_context.session, item, CC_URI) == CC_NAME
    assert await field.keyed_item_value(admin_context.session, item, "http://example.org/") is None


@pytest.mark.asyncio
async def test_keyed_item_value_with_custom_resolver(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue("dc.rights", name_resolver=lambda uri: "Custom" if uri == "urn:x" else None)
    await field.add_item_value(admin_context, item, "Custom")

    assert await field.keyed_item_value(admin_context.session, item, "urn:x") == "Custom"


@pytest.mark.asyncio
async def test_remove_item_value_keeps_order(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue("dc.rights")
    for value in ["first", CC_NAME, "second", CC_NAME, "third"]:
        await field.add_item_value(admin_context, item, value)

    await field.remove_item_value(admin_context, item, CC_NAME)

    assert await _values(admin_context, item, "dc.rights") == ["first", "second", "third"]


@pytest.mark.asyncio
async def test_remove_item_value_only_touches_its_field(admin_context: Context, item: ItemComponent) -> None:
    await LicenseMetadataValue("dc.rights").add_item_value(admin_context, item, "x")
    await LicenseMetadataValue("dc.rights.uri").add_item_value(admin_context, item, "x")

    await LicenseMetadataValue("dc.rights").remove_item_value(admin_context, item, "x")

    assert await _values(admin_context, item, "dc.rights") == []
    assert await _values(admin_context, item, "dc.rights.uri") == ["x"]
    assert await _values(admin_context, item, "dc.title") == ["A test item"]


@pytest.mark.asyncio
async def test_remove_none_is_a_no_op(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue("dc.rights")
    await field.add_item_value(admin_context, item, "kept")

    await field.remove_item_value(admin_context, item, None)

    assert await _values(admin_context, item, "dc.rights") == ["kept"]


@pytest.mark.asyncio
async def test_empty_field_reference(admin_context: Context, item: ItemComponent) -> None:
    field = LicenseMetadataValue(None)

    assert field.is_empty
    assert await field.cc_item_value(admin_context.session, item) is None
    await field.add_item_value(admin_context, item, CC_URI)
    await field.remove_item_value(admin_context, item, CC_URI)
    assert await item_functions.get_metadata_values(admin_context.session, item.entity_id, "*", "*") == [
        "A test item"
    ]

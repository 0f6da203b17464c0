"""Defines the CLI for managing items."""

from typing import Annotated

import typer
from rich.table import Table

from dam_license.cli.async_typer import AsyncTyper
from dam_license.cli.common import console, open_world
from dam_license.functions import bundle_functions, item_functions

app = AsyncTyper(name="item", help="Commands for managing items.", add_completion=False, no_args_is_help=True)


@app.command(name="create")
async def create_item(
    handle: Annotated[str | None, typer.Option("--handle", help="Persistent identifier of the item.")] = None,
) -> None:
    """Create a new, empty item and print its id."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        item = await item_functions.create_item(context.session, handle=handle)
        item_id = item.entity_id
    console.print(f"Created item {item_id}.")


@app.command(name="add-metadata")
async def add_metadata(
    item_id: Annotated[int, typer.Argument(help="Id of the item.")],
    field: Annotated[str, typer.Argument(help="Field name, e.g. dc.title.")],
    values: Annotated[list[str], typer.Argument(help="Values to append.")],
    language: Annotated[str | None, typer.Option("--language", help="Language of the values.")] = None,
) -> None:
    """Append values to a metadata field of an item."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        schema, element, qualifier = item_functions.parse_field_name(field)
        await item_functions.add_metadata(context, item_id, schema, element, qualifier, language, values)
    console.print(f"Added {len(values)} value(s) to {field} of item {item_id}.")


@app.command(name="show")
async def show_item(item_id: Annotated[int, typer.Argument(help="Id of the item.")]) -> None:
    """Show the metadata and bundles of an item."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        item = await item_functions.get_item(context.session, item_id)
        metadata = await item_functions.get_all_metadata(context.session, item_id)
        bundles = await bundle_functions.get_bundles(context.session, item_id)
        bitstreams = {b.entity_id: await bundle_functions.get_bitstreams(context.session, b.entity_id) for b in bundles}

    console.print(f"Item {item.entity_id} (handle: {item.handle or '-'})")

    table = Table(title="Metadata")
    table.add_column("Field")
    table.add_column("Value")
    table.add_column("Language")
    for value in metadata:
        table.add_row(value.field_name, value.value, value.language or "")
    console.print(table)

    for bundle in bundles:
        console.print(f"Bundle {bundle.name} ({bundle.entity_id})")
        for bitstream in bitstreams[bundle.entity_id]:
            console.print(f"  {bitstream.name or '-'}: {bitstream.size_bytes} bytes, sha256 {bitstream.checksum}")

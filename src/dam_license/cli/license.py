"""Defines the CLI for managing Creative Commons licenses."""

import mimetypes
from pathlib import Path
from typing import Annotated

import typer

from dam_license.cli.async_typer import AsyncTyper
from dam_license.cli.common import CLI_ERRORS, console, fail, open_world
from dam_license.functions import item_functions
from dam_license.license import fetch_license_rdf
from dam_license.services import CreativeCommonsService

app = AsyncTyper(
    name="license", help="Commands for managing Creative Commons licenses.", add_completion=False, no_args_is_help=True
)

ExistingFile = Annotated[Path, typer.Argument(exists=True, file_okay=True, dir_okay=False, readable=True)]


@app.command(name="set-rdf")
async def set_license_rdf(item_id: int, rdf_file: ExistingFile) -> None:
    """Replace the license of an item with an RDF file."""
    license_rdf = rdf_file.read_text(encoding="utf-8")
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        item = await item_functions.get_item(context.session, item_id)
        await world.get_resource(CreativeCommonsService).set_license_rdf(context, item, license_rdf)
    console.print(f"License RDF set on item {item_id}.")


@app.command(name="set")
async def set_license(
    item_id: int,
    license_file: ExistingFile,
    mime_type: Annotated[
        str | None, typer.Option("--mime-type", help="Type of the license file; guessed from its name if omitted.")
    ] = None,
) -> None:
    """Replace the license of an item with a license file."""
    mime_type = mime_type or mimetypes.guess_type(license_file.name)[0] or "text/plain"
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        item = await item_functions.get_item(context.session, item_id)
        with license_file.open("rb") as stream:
            await world.get_resource(CreativeCommonsService).set_license(context, item, stream, mime_type)
    console.print(f"License set on item {item_id} ({mime_type}).")


@app.command(name="set-uri")
async def set_license_uri(
    item_id: int,
    license_uri: str,
    name: Annotated[str | None, typer.Option("--name", help="License name; looked up from the URI if omitted.")] = None,
) -> None:
    """Record a license URI, and its name, in the license fields of an item."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        item = await item_functions.get_item(context.session, item_id)
        await world.get_resource(CreativeCommonsService).add_license_info(context, item, license_uri, name)
    console.print(f"License {license_uri} recorded on item {item_id}.")


@app.command(name="remove")
async def remove_license(
    item_id: int,
    keep_metadata: Annotated[
        bool, typer.Option("--keep-metadata", help="Only remove the license bundle, not the license fields.")
    ] = False,
) -> None:
    """Remove the license of an item."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        service = world.get_resource(CreativeCommonsService)
        item = await item_functions.get_item(context.session, item_id)
        if not keep_metadata:
            await service.remove_license_info(context, service.get_cc_field("uri"), service.get_cc_field("name"), item)
        await service.remove_license(context, item)
    console.print(f"License removed from item {item_id}.")


@app.command(name="show")
async def show_license(item_id: int) -> None:
    """Show the license of an item."""
    async with open_world() as world, world.context(ignore_authorization=True) as context:
        service = world.get_resource(CreativeCommonsService)
        item = await item_functions.get_item(context.session, item_id)
        has_license = await service.has_license(context, item)
        license_url = await service.get_license_url(context, item)
        license_rdf = await service.get_license_rdf(context, item)

    if not service.is_enabled():
        console.print("[yellow]Creative Commons licensing is disabled for this world.[/yellow]")
    console.print(f"Has license: {'yes' if has_license else 'no'}")
    console.print(f"License URL: {license_url or '-'}", highlight=False)
    if license_rdf:
        console.print(license_rdf, markup=False, highlight=False)


@app.command(name="extract-rdf")
def extract_rdf(document: ExistingFile) -> None:
    """Print the RDF part of a Creative Commons license document."""
    try:
        rdf = fetch_license_rdf(document.read_text(encoding="utf-8"))
    except CLI_ERRORS as e:
        fail(e)
    if not rdf:
        fail(ValueError(f"{document} contains no license RDF."))
    console.print(rdf, markup=False, highlight=False)

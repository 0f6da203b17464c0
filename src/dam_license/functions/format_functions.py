"""Functions for the bitstream format registry."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.exceptions import BitstreamFormatNotFoundError
from dam_license.functions import ecs_functions
from dam_license.models.content import BitstreamComponent, BitstreamFormatComponent, SupportLevel

logger = logging.getLogger(__name__)

# short description -> (mime type, description, support level, internal)
DEFAULT_FORMATS: dict[str, tuple[str, str, SupportLevel, bool]] = {
    "License": ("text/plain; charset=utf-8", "Item-specific license agreed upon to submission", SupportLevel.KNOWN, True),
    "CC License": ("text/xml", "Item-specific Creative Commons license agreed upon to submission", SupportLevel.KNOWN, True),
    "RDF XML": ("application/rdf+xml; charset=utf-8", "RDF serialized in XML", SupportLevel.KNOWN, False),
    "Unknown": ("application/octet-stream", "Unknown data format", SupportLevel.UNKNOWN, False),
}


async def find_format_by_short_description(session: AsyncSession, short_description: str) -> BitstreamFormatComponent:
    """
    Retrieve a registered format by its short description.

    Raises:
        BitstreamFormatNotFoundError: If no such format is registered.

    """
    stmt = select(BitstreamFormatComponent).where(BitstreamFormatComponent.short_description == short_description)
    result = await session.execute(stmt)
    fmt = result.scalar_one_or_none()
    if fmt is None:
        raise BitstreamFormatNotFoundError(f"Bitstream format '{short_description}' not found.")
    return fmt


async def register_format(
    session: AsyncSession,
    short_description: str,
    mime_type: str,
    description: str | None = None,
    support_level: SupportLevel = SupportLevel.UNKNOWN,
    internal: bool = False,
) -> BitstreamFormatComponent:
    """Register a new bitstream format."""
    entity = await ecs_functions.create_entity(session)
    fmt = BitstreamFormatComponent(
        short_description=short_description,
        mime_type=mime_type,
        description=description,
        support_level=support_level,
        internal=internal,
    )
    await ecs_functions.add_component_to_entity(session, entity.id, fmt)
    logger.info("Registered bitstream format '%s' (%s) as entity %s.", short_description, mime_type, entity.id)
    return fmt


async def get_or_create_format(session: AsyncSession, short_description: str) -> BitstreamFormatComponent:
    """
    Retrieve a format, registering it first when it is one of the built-in defaults.

    Raises:
        BitstreamFormatNotFoundError: If the format is neither registered nor a default.

    """
    try:
        return await find_format_by_short_description(session, short_description)
    except BitstreamFormatNotFoundError:
        if short_description not in DEFAULT_FORMATS:
            raise
        logger.info("BitstreamFormat '%s' not found, creating.", short_description)

    mime_type, description, support_level, internal = DEFAULT_FORMATS[short_description]
    return await register_format(session, short_description, mime_type, description, support_level, internal)


async def get_bitstream_format(session: AsyncSession, bitstream: BitstreamComponent) -> BitstreamFormatComponent | None:
    """Return the format of a bitstream, if one is set."""
    if bitstream.format_entity_id is None:
        return None
    return await ecs_functions.get_component(session, bitstream.format_entity_id, BitstreamFormatComponent)


def set_bitstream_format(bitstream: BitstreamComponent, fmt: BitstreamFormatComponent) -> None:
    """Point a bitstream at a format."""
    bitstream.format_entity_id = fmt.entity_id

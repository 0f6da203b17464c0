"""A reference to the metadata field holding one piece of license information."""

import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.context import Context
from dam_license.functions import item_functions
from dam_license.functions.item_functions import ANY
from dam_license.license.lookup import license_name_for_uri
from dam_license.models.content import ItemComponent, MetadataValueComponent

logger = logging.getLogger(__name__)

CC_SHIBBOLETH = "creativecommons"
"""Marker every Creative Commons license URI contains."""


class LicenseMetadataValue:
    """
    Reads and writes the values of one metadata field, e.g. ``dc.rights.uri``.

    Values are matched in any language. A reference built from an empty field
    name matches nothing and ignores writes.
    """

    def __init__(
        self,
        field_name: str | None,
        name_resolver: Callable[[str], str | None] = license_name_for_uri,
    ):
        self.field_name = field_name or ""
        self.name_resolver = name_resolver
        self.schema: str | None = None
        self.element: str | None = None
        self.qualifier: str | None = None
        self.language = ANY
        if self.field_name:
            self.schema, self.element, self.qualifier = item_functions.parse_field_name(self.field_name)

    @property
    def is_empty(self) -> bool:
        """Whether this reference names no field."""
        return self.schema is None or self.element is None

    async def _values(self, session: AsyncSession, item: ItemComponent) -> list[MetadataValueComponent]:
        if self.schema is None or self.element is None:
            return []
        return await item_functions.get_metadata(
            session, item.entity_id, self.schema, self.element, self.qualifier, self.language
        )

    async def cc_item_value(self, session: AsyncSession, item: ItemComponent) -> str | None:
        """Return the first value that looks like a Creative Commons license, or None."""
        for value in await self._values(session, item):
            if CC_SHIBBOLETH in value.value:
                return value.value
        return None

    async def keyed_item_value(self, session: AsyncSession, item: ItemComponent, key: str) -> str | None:
        """Return the value equal to the license name that `key` (a license URI) resolves to, or None."""
        match_value = self.name_resolver(key)
        if match_value is None:
            return None
        for value in await self._values(session, item):
            if value.value == match_value:
                return value.value
        return None

    async def remove_item_value(self, context: Context, item: ItemComponent, value: str | None) -> None:
        """Remove every occurrence of `value` from the field, keeping the order of the other values."""
        if value is None or self.schema is None or self.element is None:
            return

        remaining = [(v.value, v.language) for v in await self._values(context.session, item) if v.value != value]
        await item_functions.clear_metadata(
            context, item.entity_id, self.schema, self.element, self.qualifier, self.language
        )
        for kept_value, language in remaining:
            await item_functions.add_metadata(
                context, item.entity_id, self.schema, self.element, self.qualifier, language, kept_value
            )
        logger.debug("Removed '%s' from %s of item %s.", value, self.field_name, item.entity_id)

    async def add_item_value(self, context: Context, item: ItemComponent, value: str) -> None:
        """Append `value` to the field."""
        if self.schema is None or self.element is None:
            logger.warning("Ignoring value added to an empty license field reference.")
            return
        await item_functions.add_metadata(
            context, item.entity_id, self.schema, self.element, self.qualifier, None, value
        )

    def __repr__(self) -> str:
        return f"<LicenseMetadataValue field={self.field_name!r}>"

"""
The Creative Commons license service.

An item's license lives in two places: the license URI and name metadata fields,
and the bitstreams of its ``CC-LICENSE`` bundle (the license RDF and, for older
submissions, the license text or URL).
"""

import logging
import warnings
import xml.etree.ElementTree as ET
from typing import BinaryIO

from dam_license.core.config import CreativeCommonsSettings
from dam_license.core.context import Context
from dam_license.core.exceptions import AuthorizeError
from dam_license.functions import bundle_functions, format_functions
from dam_license.functions.file_storage_resource import FileStorageResource
from dam_license.license.license_metadata_value import LicenseMetadataValue
from dam_license.license.lookup import license_name_for_uri
from dam_license.license.rdf import fetch_license_rdf
from dam_license.models.content import BitstreamComponent, ItemComponent

logger = logging.getLogger(__name__)

CC_BUNDLE_NAME = "CC-LICENSE"

BSN_LICENSE_URL = "license_url"
"""Bitstream holding the license URI; only written by old submission interfaces."""
BSN_LICENSE_TEXT = "license_text"
BSN_LICENSE_RDF = "license_rdf"

BITSTREAM_SOURCE = "org.dspace.license.CreativeCommons"

FORMAT_CC_LICENSE = "CC License"
FORMAT_RDF_XML = "RDF XML"
FORMAT_LICENSE = "License"

_RDF_MIME_TYPES = ("text/xml", "text/rdf")


def format_for_mime_type(mime_type: str | None) -> str:
    """Return the short description of the bitstream format a license of `mime_type` is stored as."""
    normalized = (mime_type or "").strip().lower()
    if normalized == "text/xml":
        return FORMAT_CC_LICENSE
    if normalized == "text/rdf":
        return FORMAT_RDF_XML
    return FORMAT_LICENSE


class CreativeCommonsService:
    """Attaches, reads and removes Creative Commons licenses on items."""

    def __init__(self, settings: CreativeCommonsSettings, storage: FileStorageResource):
        self.settings = settings
        self.storage = storage
        self._cc_fields: dict[str, LicenseMetadataValue] = {}

    def is_enabled(self) -> bool:
        """Whether Creative Commons licensing is switched on."""
        return self.settings.enabled

    # --- License bitstreams ---

    async def _replace_license_bundle(self, context: Context, item: ItemComponent) -> int:
        await self.remove_license(context, item)
        bundle = await bundle_functions.create_bundle(context, item.entity_id, CC_BUNDLE_NAME)
        return bundle.entity_id

    async def _add_license_bitstream(
        self,
        context: Context,
        bundle_id: int,
        content: bytes | BinaryIO,
        name: str,
        format_name: str,
    ) -> BitstreamComponent:
        bitstream = await bundle_functions.create_bitstream(context, bundle_id, content, self.storage, name=name)
        bitstream.source = BITSTREAM_SOURCE
        fmt = await format_functions.get_or_create_format(context.session, format_name)
        format_functions.set_bitstream_format(bitstream, fmt)
        context.session.add(bitstream)
        await context.flush()
        return bitstream

    async def set_license_rdf(self, context: Context, item: ItemComponent, license_rdf: str) -> None:
        """
        Replace the item's license bitstreams with the given license RDF.

        Raises:
            AuthorizeError: If the current user may not change the item's bundles.
            OSError: If the RDF cannot be stored.

        """
        bundle_id = await self._replace_license_bundle(context, item)
        await self._add_license_bitstream(
            context, bundle_id, license_rdf.encode("utf-8"), BSN_LICENSE_RDF, FORMAT_RDF_XML
        )
        logger.info("Set license RDF on item %s.", item.entity_id)

    async def set_license(
        self, context: Context, item: ItemComponent, license_stream: bytes | BinaryIO, mime_type: str
    ) -> None:
        """
        Replace the item's license bitstreams with a single license file.

        ``text/xml`` and ``text/rdf`` content is stored as the license RDF, anything
        else as the license text.
        """
        is_rdf = (mime_type or "").strip().lower() in _RDF_MIME_TYPES
        name = BSN_LICENSE_RDF if is_rdf else BSN_LICENSE_TEXT

        bundle_id = await self._replace_license_bundle(context, item)
        await self._add_license_bitstream(context, bundle_id, license_stream, name, format_for_mime_type(mime_type))
        logger.info("Set license '%s' (%s) on item %s.", name, mime_type, item.entity_id)

    async def remove_license(self, context: Context, item: ItemComponent) -> None:
        """Remove every CC-LICENSE bundle of the item along with its bitstreams."""
        bundles = await bundle_functions.get_bundles(context.session, item.entity_id, CC_BUNDLE_NAME)
        for bundle in bundles:
            await bundle_functions.remove_bundle(context, item.entity_id, bundle, self.storage)
        if bundles:
            logger.info("Removed %d license bundle(s) from item %s.", len(bundles), item.entity_id)

    async def _get_license_bitstream(self, context: Context, item: ItemComponent, name: str) -> BitstreamComponent | None:
        bundles = await bundle_functions.get_bundles(context.session, item.entity_id, CC_BUNDLE_NAME)
        if not bundles:
            return None
        return await bundle_functions.get_bitstream_by_name(context.session, bundles[0].entity_id, name)

    async def _get_string_from_bitstream(self, context: Context, item: ItemComponent, name: str) -> str | None:
        bitstream = await self._get_license_bitstream(context, item, name)
        if bitstream is None:
            return None
        content = await bundle_functions.read_bitstream(context, bitstream, self.storage)
        return content.decode("utf-8")

    async def get_license_rdf_bitstream(self, context: Context, item: ItemComponent) -> BitstreamComponent | None:
        """Return the license RDF bitstream of the item, or None."""
        return await self._get_license_bitstream(context, item, BSN_LICENSE_RDF)

    async def get_license_text_bitstream(self, context: Context, item: ItemComponent) -> BitstreamComponent | None:
        """
        Return the license text bitstream of the item, or None.

        .. deprecated:: License text is no longer stored; use the license RDF.
        """
        warnings.warn(
            "get_license_text_bitstream is deprecated; license text is no longer stored.",
            DeprecationWarning,
            stacklevel=2,
        )
        return await self._get_license_bitstream(context, item, BSN_LICENSE_TEXT)

    async def get_license_rdf(self, context: Context, item: ItemComponent) -> str | None:
        """
        Return the license RDF of the item, or None when it has none.

        Raises:
            AuthorizeError: If the current user may not read the RDF bitstream.
            OSError: If the stored content cannot be read.

        """
        return await self._get_string_from_bitstream(context, item, BSN_LICENSE_RDF)

    # --- License metadata ---

    async def get_license_url(self, context: Context, item: ItemComponent) -> str | None:
        """
        Return the license URI of the item.

        The URI field is checked first; items submitted through old interfaces
        carry it in a ``license_url`` bitstream instead.
        """
        license_uri = await self.get_cc_field("uri").cc_item_value(context.session, item)
        if license_uri and license_uri.strip():
            return license_uri
        return await self._get_string_from_bitstream(context, item, BSN_LICENSE_URL)

    async def has_license(self, context: Context, item: ItemComponent) -> bool:
        """Whether the item has a license bundle and a license URI the current user can read."""
        if not await bundle_functions.get_bundles(context.session, item.entity_id, CC_BUNDLE_NAME):
            return False
        try:
            license_url = await self.get_license_url(context, item)
        except AuthorizeError:
            return False
        return bool(license_url and license_url.strip())

    def get_cc_field(self, field_id: str) -> LicenseMetadataValue:
        """Return the reference to the metadata field configured for `field_id` (``uri`` or ``name``)."""
        field = self._cc_fields.get(field_id)
        if field is None:
            field = LicenseMetadataValue(self.settings.fields.get(field_id))
            self._cc_fields[field_id] = field
        return field

    def fetch_license_rdf(self, license_document: ET.ElementTree | ET.Element | str) -> str:
        """Return the RDF part of a license document as a string."""
        return fetch_license_rdf(license_document)

    async def add_license_info(
        self, context: Context, item: ItemComponent, license_uri: str, license_name: str | None = None
    ) -> None:
        """
        Record a license URI, and its name, in the item's license fields.

        The name is looked up from the URI when not given, and only written when
        setting license names on submission is switched on.
        """
        await self.get_cc_field("uri").add_item_value(context, item, license_uri)
        if not self.settings.submit_set_name:
            return
        name = license_name or license_name_for_uri(license_uri)
        if name:
            await self.get_cc_field("name").add_item_value(context, item, name)
        else:
            logger.warning("No license name known for %s; name field left unchanged.", license_uri)

    async def remove_license_info(
        self,
        context: Context,
        uri_field: LicenseMetadataValue,
        name_field: LicenseMetadataValue,
        item: ItemComponent,
    ) -> None:
        """
        Remove the item's Creative Commons license from the given fields.

        Depending on the settings the matching license name and the license
        bitstreams are removed as well. Items without a Creative Commons license
        URI are left unchanged.
        """
        license_uri = await uri_field.cc_item_value(context.session, item)
        if license_uri is None:
            logger.debug("Item %s has no Creative Commons license URI.", item.entity_id)
            return

        await uri_field.remove_item_value(context, item, license_uri)
        if self.settings.submit_set_name:
            license_name = await name_field.keyed_item_value(context.session, item, license_uri)
            await name_field.remove_item_value(context, item, license_name)
        if self.settings.submit_add_bitstream:
            await self.remove_license(context, item)
        logger.info("Removed license %s from item %s.", license_uri, item.entity_id)

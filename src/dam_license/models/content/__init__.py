"""Content models: items, their metadata, bundles and bitstreams."""

from .bitstream_component import BitstreamComponent
from .bitstream_format_component import BitstreamFormatComponent, SupportLevel
from .bundle_component import BundleComponent
from .item_component import ItemComponent
from .metadata_value_component import MetadataValueComponent

__all__ = [
    "BitstreamComponent",
    "BitstreamFormatComponent",
    "BundleComponent",
    "ItemComponent",
    "MetadataValueComponent",
    "SupportLevel",
]

"""License metadata references, license name lookup and RDF extraction."""

from .license_metadata_value import CC_SHIBBOLETH, LicenseMetadataValue
from .lookup import license_name_for_uri
from .rdf import fetch_license_rdf, find_rdf_element

__all__ = [
    "CC_SHIBBOLETH",
    "LicenseMetadataValue",
    "fetch_license_rdf",
    "find_rdf_element",
    "license_name_for_uri",
]

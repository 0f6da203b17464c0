"""Resolve Creative Commons license URIs to their human-readable names."""

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

CC_HOST = "creativecommons.org"

LICENSE_CODES = {
    "by": "Attribution",
    "by-sa": "Attribution-ShareAlike",
    "by-nd": "Attribution-NoDerivatives",
    "by-nc": "Attribution-NonCommercial",
    "by-nc-sa": "Attribution-NonCommercial-ShareAlike",
    "by-nc-nd": "Attribution-NonCommercial-NoDerivatives",
}

# Before 4.0 "NoDerivs" was used in the names.
LEGACY_NAME_OVERRIDES = {
    "by-nd": "Attribution-NoDerivs",
    "by-nc-nd": "Attribution-NonCommercial-NoDerivs",
}

PUBLIC_DOMAIN_TOOLS = {
    "zero": "CC0",
    "mark": "Public Domain Mark",
}

JURISDICTIONS = {
    "at": "Austria",
    "au": "Australia",
    "br": "Brazil",
    "ca": "Canada",
    "ch": "Switzerland",
    "de": "Germany",
    "es": "Spain",
    "fr": "France",
    "igo": "IGO",
    "it": "Italy",
    "jp": "Japan",
    "nl": "Netherlands",
    "nz": "New Zealand",
    "scotland": "Scotland",
    "uk": "England and Wales",
    "us": "United States",
}


def _unported_label(version: str) -> str:
    if version.startswith("4"):
        return "International"
    if version.startswith("3"):
        return "Unported"
    return "Generic"


def license_name_for_uri(uri: str | None) -> str | None:
    """
    Return the name of the license a Creative Commons URI points to.

    ``https://creativecommons.org/licenses/by-nc-sa/4.0/`` resolves to
    ``Attribution-NonCommercial-ShareAlike 4.0 International``. URIs outside
    creativecommons.org, or with an unknown license code, resolve to None.
    """
    if not uri:
        return None

    parsed = urlparse(uri.strip())
    host = parsed.netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    if host != CC_HOST:
        return None

    segments = [s for s in parsed.path.lower().split("/") if s]
    if len(segments) < 3:
        logger.debug("Creative Commons URI too short to resolve: %s", uri)
        return None

    kind, code, version = segments[0], segments[1], segments[2]
    jurisdiction = segments[3] if len(segments) > 3 else None

    if kind == "publicdomain":
        tool = PUBLIC_DOMAIN_TOOLS.get(code)
        if tool is None:
            return None
        return f"{tool} {version} Universal" if code == "zero" else f"{tool} {version}"

    if kind != "licenses" or code not in LICENSE_CODES:
        logger.debug("Unknown Creative Commons license code in %s", uri)
        return None

    name = LICENSE_CODES[code]
    if not version.startswith("4"):
        name = LEGACY_NAME_OVERRIDES.get(code, name)

    # Trailing deed and legalcode pages may carry a language, as in "deed.en".
    if jurisdiction and jurisdiction.split(".")[0] not in ("deed", "legalcode", "rdf"):
        label = JURISDICTIONS.get(jurisdiction, jurisdiction.upper())
    else:
        label = _unported_label(version)
    return f"{name} {version} {label}"

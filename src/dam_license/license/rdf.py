"""Reduces a Creative Commons license document to its RDF description."""

import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
CC_NS = "http://creativecommons.org/ns#"
DC_NS = "http://purl.org/dc/elements/1.1/"

RDF_TAG = f"{{{RDF_NS}}}RDF"

for _prefix, _uri in (("rdf", RDF_NS), ("cc", CC_NS), ("dc", DC_NS)):
    ET.register_namespace(_prefix, _uri)


def _as_root(document: ET.ElementTree | ET.Element | str | bytes) -> ET.Element:
    if isinstance(document, (str, bytes)):
        return ET.fromstring(document)
    if isinstance(document, ET.ElementTree):
        root = document.getroot()
        if root is None:
            raise ValueError("License document has no root element.")
        return root
    return document


def find_rdf_element(document: ET.ElementTree | ET.Element | str | bytes) -> ET.Element | None:
    """
    Locate the ``rdf:RDF`` element of a license document.

    The license web service wraps it as ``result/rdf/rdf:RDF``; plain RDF
    documents have it as their root. Otherwise the first one found anywhere
    below the root is used.

    Raises:
        xml.etree.ElementTree.ParseError: If a string document is not well-formed XML.

    """
    root = _as_root(document)
    if root.tag == RDF_TAG:
        return root

    wrapped = root.find(f"rdf/{RDF_TAG}") if root.tag == "result" else None
    if wrapped is not None:
        return wrapped
    return root.find(f".//{RDF_TAG}")


def fetch_license_rdf(document: ET.ElementTree | ET.Element | str | bytes) -> str:
    """
    Serialise the ``rdf:RDF`` part of a license document.

    Returns:
        The RDF as an XML string, or an empty string when the document holds none.

    """
    rdf = find_rdf_element(document)
    if rdf is None:
        logger.debug("License document contains no rdf:RDF element.")
        return ""
    return ET.tostring(rdf, encoding="unicode")

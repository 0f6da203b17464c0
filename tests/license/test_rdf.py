import xml.etree.ElementTree as ET

from dam_license.license.rdf import RDF_TAG, fetch_license_rdf, find_rdf_element

WEB_SERVICE_ANSWER = """<result>
  <license-uri>http://creativecommons.org/licenses/by/4.0/</license-uri>
  <license-name>Attribution 4.0 International</license-name>
  <rdf>
    <rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#" xmlns:cc="http://creativecommons.org/ns#">
      <cc:License rdf:about="http://creativecommons.org/licenses/by/4.0/"/>
    </rdf:RDF>
  </rdf>
  <html>ignored</html>
</result>"""


def test_extracts_rdf_from_web_service_answer() -> None:
    rdf = fetch_license_rdf(WEB_SERVICE_ANSWER)

    assert rdf.startswith("<rdf:RDF")
    assert "license-name" not in rdf
    assert "ignored" not in rdf
    parsed = ET.fromstring(rdf)
    assert parsed.tag == RDF_TAG
    assert parsed.find("{http://creativecommons.org/ns#}License") is not None


def test_accepts_element_tree_and_element() -> None:
    root = ET.fromstring(WEB_SERVICE_ANSWER)

    assert fetch_license_rdf(ET.ElementTree(root)) == fetch_license_rdf(root) == fetch_license_rdf(WEB_SERVICE_ANSWER)


def test_rdf_document_root(license_rdf: str) -> None:
    rdf = fetch_license_rdf(license_rdf)

    assert ET.fromstring(rdf).tag == RDF_TAG
    assert "cc:License" in rdf


def test_rdf_nested_anywhere() -> None:
    document = (
        '<wrapper><inner><rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"/></inner></wrapper>'
    )
    element = find_rdf_element(document)

    assert element is not None
    assert element.tag == RDF_TAG


def test_no_rdf_gives_empty_string() -> None:
    assert fetch_license_rdf("<result><license-name>x</license-name></result>") == ""

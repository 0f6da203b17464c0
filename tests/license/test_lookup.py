import pytest

from dam_license.license.lookup import license_name_for_uri


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("http://creativecommons.org/licenses/by-nc-sa/4.0/", "Attribution-NonCommercial-ShareAlike 4.0 International"),
        ("https://creativecommons.org/licenses/by/4.0/legalcode", "Attribution 4.0 International"),
        ("https://www.creativecommons.org/licenses/by-nd/4.0/", "Attribution-NoDerivatives 4.0 International"),
        ("http://creativecommons.org/licenses/by-nd/3.0/", "Attribution-NoDerivs 3.0 Unported"),
        ("http://creativecommons.org/licenses/by-sa/2.5/", "Attribution-ShareAlike 2.5 Generic"),
        ("http://creativecommons.org/licenses/by/3.0/de/", "Attribution 3.0 Germany"),
        ("http://creativecommons.org/licenses/by/3.0/xx/", "Attribution 3.0 XX"),
        ("https://creativecommons.org/licenses/by/4.0/deed.en", "Attribution 4.0 International"),
        ("https://creativecommons.org/licenses/by-sa/3.0/legalcode.de", "Attribution-ShareAlike 3.0 Unported"),
        ("http://creativecommons.org/licenses/by/3.0/de/deed.en", "Attribution 3.0 Germany"),
        ("http://creativecommons.org/publicdomain/zero/1.0/", "CC0 1.0 Universal"),
        ("https://creativecommons.org/publicdomain/mark/1.0/", "Public Domain Mark 1.0"),
    ],
)
def test_license_name_for_uri(uri: str, expected: str) -> None:
    assert license_name_for_uri(uri) == expected


@pytest.mark.parametrize(
    "uri",
    [
        None,
        "",
        "http://example.org/licenses/by/4.0/",
        "http://creativecommons.org/licenses/",
        "http://creativecommons.org/licenses/unknown/4.0/",
        "http://creativecommons.org/publicdomain/other/1.0/",
    ],
)
def test_unresolvable_uris(uri: str | None) -> None:
    assert license_name_for_uri(uri) is None

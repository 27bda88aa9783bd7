import pytest

from bookmarkdb.services.common import validate_url
from bookmarkdb.services.exceptions import (
    InvalidURL,
    UnsupportedScheme,
    ValidationError,
)


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com",
        "http://example.com/path?q=1",
        "https://Example.COM/Some/Path/",
        "HTTPS://example.com",
        "http://localhost:8080/",
        "https://user@example.com/a#frag",
        "https://example.com/caf%C3%A9",
        "https://example.com/search?q=100%",
    ],
)
def test_validate_url_returns_input_unchanged(url):
    assert validate_url(url) == url


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not-a-url",
        "/relative/path",
        "example.com/page",
        "http://",
        "https:///no-host",
        "http://[::1",
        "http://example.com:notaport/",
        "http://exa mple.com/",
        "https://example.com/\nline",
        "http://example.com/%zz",
        "http://example.com/100%",
        "http://exa%2mple.com/",
        "mailto:someone@example.com",
    ],
)
def test_validate_url_rejects_malformed_urls(url):
    with pytest.raises(InvalidURL):
        validate_url(url)


@pytest.mark.parametrize(
    "url",
    ["ftp://example.com/file", "file://server/share", "javascript://example.com/"],
)
def test_validate_url_rejects_other_schemes(url):
    with pytest.raises(UnsupportedScheme) as excinfo:
        validate_url(url)
    assert excinfo.value.message == "Unsupported URL scheme"


def test_validation_errors_share_a_base_class():
    assert issubclass(InvalidURL, ValidationError)
    assert issubclass(UnsupportedScheme, ValidationError)
    assert str(InvalidURL()) == "Invalid URL"


def test_validate_url_rejects_non_strings():
    with pytest.raises(InvalidURL):
        validate_url(None)

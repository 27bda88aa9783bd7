import re
from urllib.parse import urlparse

from bookmarkdb.services.exceptions import InvalidURL, UnsupportedScheme

ALLOWED_SCHEMES = {"http", "https"}
BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _has_control_chars(value: str) -> bool:
    return any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value)


# Validation only: case, trailing slashes and query order are kept exactly as
# submitted, so two spellings of the same page are two URLs.
def validate_url(url: str) -> str:
    if not isinstance(url, str) or not url or _has_control_chars(url):
        raise InvalidURL()

    # The query string is stored raw; everything before it must unescape.
    if BAD_ESCAPE_RE.search(url.split("?", 1)[0]):
        raise InvalidURL()

    try:
        parsed = urlparse(url)
        # Touching .port validates it; urlparse itself is lazy about it.
        parsed.port
    except ValueError as exc:
        raise InvalidURL() from exc

    if not parsed.scheme or not parsed.hostname:
        raise InvalidURL()
    if any(ch.isspace() for ch in parsed.netloc):
        raise InvalidURL()

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise UnsupportedScheme(parsed.scheme)

    return url

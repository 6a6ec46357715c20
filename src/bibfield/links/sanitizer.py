"""Link cleaning for URLs found in bibliographic metadata.

Both public functions are pure and never raise: every internal failure
(bad escapes, invalid UTF-8, malformed URL syntax, invalid DOIs) falls
back to the best string produced so far.
"""

from urllib.parse import quote, unquote_plus, urlsplit

from bibfield.normalize._helpers import (
    DOI_SCHEME_RE,
    HTTP_RE,
    INVALID_ESCAPE_RE,
    SEARCH_REDIRECT_RE,
    URL_RE,
    URL_WRAPPER_PREFIX,
)
from bibfield.normalize.doi import DOI, InvalidDOIError

__all__ = ["clean_search_redirect", "sanitize_url", "is_url"]

# Characters legal in a URI (RFC 2396 reserved + unreserved, RFC 2732 brackets)
# plus '#' so fragments survive; everything else is percent-encoded.
_URI_SAFE = ";/?:@&=+$,-_.!~*'()[]#"


def is_url(text: str) -> bool:
    """Check whether text is an absolute http, https or ftp URL.

    Parameters
    ----------
    text : str
        Candidate URL.

    Returns
    -------
    bool
        True if text looks like an absolute URL.
    """
    return URL_RE.fullmatch(text) is not None


def clean_search_redirect(url: str) -> str:
    """Unwrap a search-engine result link.

    Links copied from search results point at a redirect page that carries
    the real destination in its ``url`` query parameter, e.g.
    ``https://www.google.de/url?sa=t&url=http%3A%2F%2Fexample.com%2Fa.pdf``.

    Parameters
    ----------
    url : str
        Candidate redirect URL.

    Returns
    -------
    str
        Decoded destination URL, or ``url`` unchanged if it is not a
        redirect link or carries no usable destination.
    """
    if not SEARCH_REDIRECT_RE.match(url):
        return url

    try:
        query = urlsplit(url).query
    except ValueError:
        return url

    if not query:
        return url

    for pair in query.split("&"):
        if not pair.startswith("url="):
            continue
        try:
            target = _form_decode(pair[len("url=") :])
        except ValueError:
            return url
        if is_url(target):
            return target

    return url


def sanitize_url(link: str) -> str:
    """Normalize a link so it can be stored and opened portably.

    Steps, in order:

    1. Trim surrounding whitespace.
    2. Remove a ``\\url{...}`` wrapper.
    3. Resolve ``doi:`` links to their resolver URL.
    4. Resolve bare DOIs (anything that is not already an http(s) URL).
    5. Protect literal ``+`` as ``%2B``.
    6. Percent-decode.
    7. Re-encode as an ASCII-safe URI.

    Parameters
    ----------
    link : str
        Raw link text.

    Returns
    -------
    str
        Sanitized link. Never raises; failing steps are skipped.
    """
    link = link.strip()

    if link.startswith(URL_WRAPPER_PREFIX) and link.endswith("}"):
        link = link[len(URL_WRAPPER_PREFIX) : -1]

    if DOI_SCHEME_RE.match(link):
        try:
            link = DOI.parse(DOI_SCHEME_RE.sub("", link, count=1)).url_as_ascii()
        except InvalidDOIError:
            pass
    else:
        # Full http links are left alone: DOIs pulled out of publisher URLs
        # often carry trailing path segments that do not resolve.
        doi = DOI.build(link)
        if doi is not None and not HTTP_RE.match(link):
            link = doi.url_as_ascii()

    link = link.replace("+", "%2B")

    try:
        link = _form_decode(link)
    except ValueError:
        pass

    try:
        return _to_ascii_uri(link)
    except ValueError:
        return link


def _form_decode(value: str) -> str:
    """Decode application/x-www-form-urlencoded text.

    Raises
    ------
    ValueError
        On a '%' that does not start a two-digit hex escape, or on escapes
        that do not decode as UTF-8.
    """
    if INVALID_ESCAPE_RE.search(value):
        raise ValueError(f"Malformed percent escape in {value!r}")
    return unquote_plus(value, errors="strict")


def _to_ascii_uri(link: str) -> str:
    encoded = quote(link, safe=_URI_SAFE)
    # Raises ValueError on unparseable authorities (e.g., broken IPv6 hosts)
    urlsplit(encoded)
    return encoded

"""Compiled regex patterns and small text helpers for normalization.

Patterns are compiled once at import time and shared by the field
normalizers and the link sanitizer.
"""

import re

# Pre-compiled regex patterns
DOI_CORE = r"(?:urn:)?(?:doi:)?(10(?:\.[0-9]+)+[/:](?:.+))"
DOI_RE = re.compile(r"^(?:https?://[^\s]+?)?" + DOI_CORE + r"$", re.IGNORECASE)
DOI_HTTP_RE = re.compile(r"^https?://[^\s]+?" + DOI_CORE + r"$", re.IGNORECASE)
DOI_SCHEME_RE = re.compile(r"^doi:/*")
HTTP_RE = re.compile(r"^https?://.*", re.DOTALL)
URL_RE = re.compile(r"^(https?|ftp)://.+")
SEARCH_REDIRECT_RE = re.compile(r"^https?://(?:www\.)?google\.[.a-z]+?/url.*", re.DOTALL)
URL_WRAPPER_PREFIX = "\\url{"
INVALID_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

AND_SPLIT_RE = re.compile(r"\s+and\s+", re.IGNORECASE)
BRACES_RE = re.compile(r"[{}]")
SUFFIX_RE = re.compile(r"^(Jr\.?|Sr\.?|II|III|IV|V)$", re.IGNORECASE)
MONTH_MARKUP_RE = re.compile(r"[#{}\s.]")

# Three-letter month abbreviations, in calendar order
MONTHS = (
    "jan",
    "feb",
    "mar",
    "apr",
    "may",
    "jun",
    "jul",
    "aug",
    "sep",
    "oct",
    "nov",
    "dec",
)


def strip_braces(text: str) -> str:
    """Remove BibTeX grouping braces and collapse whitespace.

    Parameters
    ----------
    text : str
        Raw field text.

    Returns
    -------
    str
        Text without braces.
    """
    return " ".join(BRACES_RE.sub("", text).split())

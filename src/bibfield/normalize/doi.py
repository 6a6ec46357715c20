"""DOI parsing and canonical resolver URLs."""

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from ._helpers import DOI_HTTP_RE, DOI_RE

__all__ = ["DOI", "DOI_RESOLVER", "InvalidDOIError"]

DOI_RESOLVER = "https://doi.org"

# Characters allowed unescaped in a URI path segment (RFC 2396 pchar + '/' + ';')
_PATH_SAFE = "/:@&=+$,;!*'()"


class InvalidDOIError(ValueError):
    """Raised when a string does not contain a valid DOI."""


@dataclass(frozen=True)
class DOI:
    """Digital Object Identifier.

    Accepts bare DOIs ('10.1000/xyz'), 'doi:' and 'urn:doi:' forms, and
    http(s) resolver URLs. Query strings and fragments of resolver URLs
    are dropped and the path is percent-decoded before matching.

    Attributes
    ----------
    doi : str
        The bare DOI (directory indicator, registrant code and suffix).
    """

    doi: str

    @classmethod
    def parse(cls, text: str) -> "DOI":
        """Parse a DOI-looking string.

        Parameters
        ----------
        text : str
            Candidate DOI or DOI URL.

        Returns
        -------
        DOI
            Parsed DOI.

        Raises
        ------
        InvalidDOIError
            If no DOI can be extracted.
        """
        value = text.strip()

        if DOI_HTTP_RE.match(value):
            try:
                parsed = urlsplit(value)
            except ValueError as e:
                raise InvalidDOIError(f"{value} is not a valid HTTP DOI.") from e
            value = f"{parsed.scheme}://{parsed.hostname or ''}{unquote(parsed.path)}"

        match = DOI_RE.match(value)
        if not match:
            raise InvalidDOIError(f"{value} is not a valid DOI.")
        return cls(match.group(1))

    @classmethod
    def build(cls, text: str | None) -> "DOI | None":
        """Parse a DOI, returning None instead of raising.

        Parameters
        ----------
        text : str | None
            Candidate DOI or DOI URL.

        Returns
        -------
        DOI | None
            Parsed DOI, or None if the input is missing or invalid.
        """
        if text is None:
            return None
        try:
            return cls.parse(text)
        except InvalidDOIError:
            return None

    @property
    def url(self) -> str:
        """Canonical resolver URL for this DOI."""
        return self.url_as_ascii()

    def url_as_ascii(self) -> str:
        """Render the resolver URL with all unsafe characters escaped.

        Returns
        -------
        str
            ASCII-only URL (e.g., 'https://doi.org/10.1000/xyz').
        """
        return f"{DOI_RESOLVER}/{quote(self.doi, safe=_PATH_SAFE)}"

    def __str__(self) -> str:
        return self.doi

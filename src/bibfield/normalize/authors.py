"""Author name alphabetization keys."""

from dataclasses import dataclass

from ._helpers import AND_SPLIT_RE, SUFFIX_RE, strip_braces


@dataclass(frozen=True)
class NameParts:
    """Structured BibTeX name.

    Attributes
    ----------
    first : str | None
        Given name(s).
    von : str | None
        Lower-case particle (e.g., 'van der').
    last : str
        Family name.
    jr : str | None
        Suffix (e.g., 'Jr.', 'III').
    """

    first: str | None
    von: str | None
    last: str
    jr: str | None


def fix_author_for_alphabetization(names: str) -> str:
    """Rewrite a BibTeX name list into last-name-first sort keys.

    Each name becomes ``von Last, Jr, F. M.`` with given names reduced to
    initials, so that "Smith, John" and "John Smith" produce the same key.

    Parameters
    ----------
    names : str
        Name list separated by ' and '.

    Returns
    -------
    str
        Alphabetization keys joined with ' and '.
    """
    keys = []
    for name in AND_SPLIT_RE.split(names.strip()):
        name = strip_braces(name)
        if name:
            keys.append(_render_for_alphabetization(parse_name(name)))
    return " and ".join(keys)


def parse_name(name: str) -> NameParts:
    """Parse one name in any of the three BibTeX forms.

    Supported forms: "First von Last", "von Last, First" and
    "von Last, Jr, First".
    """
    if "," in name:
        parts = [part.strip() for part in name.split(",")]
        von, last = _split_von_last(parts[0].split())
        if len(parts) >= 3:
            return NameParts(first=parts[2] or None, von=von, last=last, jr=parts[1] or None)
        return NameParts(first=parts[1] or None, von=von, last=last, jr=None)

    words = name.split()
    jr = None
    # "John Smith Jr." is not BibTeX syntax but shows up in exported data
    if len(words) > 2 and SUFFIX_RE.match(words[-1]):
        jr = words.pop()

    if len(words) == 1:
        return NameParts(first=None, von=None, last=words[0], jr=jr)

    von_start = next(
        (i for i, word in enumerate(words[:-1]) if word[:1].islower()),
        len(words) - 1,
    )
    first = " ".join(words[:von_start]) or None
    von, last = _split_von_last(words[von_start:])
    return NameParts(first=first, von=von, last=last, jr=jr)


def _split_von_last(words: list[str]) -> tuple[str | None, str]:
    if not words:
        return None, ""
    von_words = []
    idx = 0
    while idx < len(words) - 1 and words[idx][:1].islower():
        von_words.append(words[idx])
        idx += 1
    return (" ".join(von_words) or None), " ".join(words[idx:])


def _abbreviate(first: str) -> str:
    initials = []
    for word in first.split():
        pieces = [piece for piece in word.split("-") if piece]
        initials.append("-".join(f"{piece[0]}." for piece in pieces))
    return " ".join(i for i in initials if i)


def _render_for_alphabetization(parts: NameParts) -> str:
    key = f"{parts.von} {parts.last}" if parts.von else parts.last
    if parts.jr:
        key += f", {parts.jr}"
    if parts.first:
        key += f", {_abbreviate(parts.first)}"
    return key

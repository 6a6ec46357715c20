"""Year and month normalization for sorting."""

from datetime import UTC, datetime

from ._helpers import MONTH_MARKUP_RE, MONTHS

# Two-digit years within this many years ahead of the reference year
# are read as the near future, everything else as the past.
_FUTURE_WINDOW = 30


def to_four_digit_year(year: str, this_year: int | None = None) -> str:
    """Expand a two-digit year to four digits.

    Parameters
    ----------
    year : str
        Raw year value.
    this_year : int | None, optional
        Reference year, by default the current UTC year.

    Returns
    -------
    str
        Four-digit year for two-digit numeric input, otherwise the input
        unchanged.

    Examples
    --------
        >>> to_four_digit_year("99", this_year=2026)
        '1999'
        >>> to_four_digit_year("05", this_year=2026)
        '2005'
    """
    if len(year) != 2 or not year.isdecimal():
        return year

    if this_year is None:
        this_year = datetime.now(UTC).year

    this_two_digits = this_year % 100
    this_century = this_year - this_two_digits
    year_number = int(year)

    if year_number == this_two_digits:
        return str(this_year)

    if (year_number + 100 - this_two_digits) % 100 > _FUTURE_WINDOW:
        # Past: same century if already behind us, otherwise previous one
        if year_number < this_two_digits:
            return str(this_century + year_number)
        return str(this_century - 100 + year_number)

    if year_number < this_two_digits:
        return str(this_century + 100 + year_number)
    return str(this_century + year_number)


def get_month_number(month: str) -> int:
    """Map a month name or number to 1-12.

    Accepts BibTeX macros ('#jan#'), braced or abbreviated names
    ('{January}', 'Sept.') and numbers ('3', '03').

    Parameters
    ----------
    month : str
        Raw month value.

    Returns
    -------
    int
        Month number 1-12, or 0 if unrecognized.
    """
    value = MONTH_MARKUP_RE.sub("", month).lower()
    if not value:
        return 0

    if value.isdecimal():
        number = int(value)
        return number if 1 <= number <= 12 else 0

    for number, abbrev in enumerate(MONTHS, start=1):
        if value.startswith(abbrev):
            return number
    return 0

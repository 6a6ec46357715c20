"""Field normalizers consumed by sorting and link cleaning.

- authors: last-name-first alphabetization keys
- dates: four-digit years and month numbers
- doi: DOI parsing and resolver URLs
"""

from bibfield.normalize.authors import fix_author_for_alphabetization, parse_name
from bibfield.normalize.dates import get_month_number, to_four_digit_year
from bibfield.normalize.doi import DOI, DOI_RESOLVER, InvalidDOIError

__all__ = [
    "fix_author_for_alphabetization",
    "parse_name",
    "to_four_digit_year",
    "get_month_number",
    "DOI",
    "DOI_RESOLVER",
    "InvalidDOIError",
]

"""Field comparator for sorting bibliographic records.

A FieldComparator orders two records by one named field. The field name
is classified once, at construction, into a FieldComparisonRule; each
rule has a transform that turns raw field text into a tagged comparison
value (NumericValue or TextValue). The final ordering of two tagged
values is shared by all rules.

Ordering conventions
--------------------
- Records with the field unset sort after records that have it, under
  an ascending comparator.
- Numeric values (years, month numbers) compare in descending order
  under an ascending comparator, so the most recent year comes first.
- Months are the exception: their sign is inverted once more, so months
  come out in calendar order.
- Text compares case-insensitively.

Comparators hold no mutable state and may be shared between threads
and reused across sorts.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from functools import cmp_to_key
from typing import Any

from bibfield.models.records import TYPE_HEADER, BibRecord
from bibfield.normalize.authors import fix_author_for_alphabetization
from bibfield.normalize.dates import get_month_number, to_four_digit_year

__all__ = [
    "FieldComparator",
    "FieldComparisonRule",
    "NumericValue",
    "TextValue",
    "compare_values",
]


class FieldComparisonRule(StrEnum):
    """Comparison rule derived from a field name.

    Attributes
    ----------
    TYPE_HEADER : str
        Sort by entry type name.
    AUTHOR_LIST : str
        Sort person-name lists by last name.
    YEAR : str
        Sort by four-digit year, most recent first.
    MONTH : str
        Sort by month number, in calendar order.
    GENERIC : str
        Case-insensitive text comparison.
    """

    TYPE_HEADER = "type_header"
    AUTHOR_LIST = "author_list"
    YEAR = "year"
    MONTH = "month"
    GENERIC = "generic"

    @classmethod
    def for_field(cls, field_name: str) -> "FieldComparisonRule":
        """Classify a field name.

        Parameters
        ----------
        field_name : str
            Field name, or the entry type pseudo-field.

        Returns
        -------
        FieldComparisonRule
            Rule for the field.
        """
        name = field_name.lower()
        if name == TYPE_HEADER:
            return cls.TYPE_HEADER
        return _FIELD_RULES.get(name, cls.GENERIC)


_FIELD_RULES = {
    "author": FieldComparisonRule.AUTHOR_LIST,
    "editor": FieldComparisonRule.AUTHOR_LIST,
    "year": FieldComparisonRule.YEAR,
    "month": FieldComparisonRule.MONTH,
}


@dataclass(frozen=True, slots=True)
class NumericValue:
    """Comparison value known to be an integer."""

    value: int


@dataclass(frozen=True, slots=True)
class TextValue:
    """Comparison value compared as text."""

    text: str


ComparisonValue = NumericValue | TextValue


def _year_value(raw: str) -> ComparisonValue:
    year = to_four_digit_year(raw.strip())
    return NumericValue(int(year)) if year.isdecimal() else TextValue(year)


_TRANSFORMS: dict[FieldComparisonRule, Callable[[str], ComparisonValue]] = {
    FieldComparisonRule.TYPE_HEADER: TextValue,
    FieldComparisonRule.AUTHOR_LIST: lambda raw: TextValue(fix_author_for_alphabetization(raw)),
    FieldComparisonRule.YEAR: _year_value,
    FieldComparisonRule.MONTH: lambda raw: NumericValue(get_month_number(raw)),
    FieldComparisonRule.GENERIC: TextValue,
}

# Rules whose numeric result is inverted once more on top of the multiplier
_INVERTED_RULES = frozenset({FieldComparisonRule.MONTH})


def _sign(number: int) -> int:
    return (number > 0) - (number < 0)


def compare_values(first: ComparisonValue, second: ComparisonValue) -> int:
    """Three-way comparison of two tagged values.

    Numbers compare in descending order. When only one side is numeric,
    the text side is parsed with int(); a ValueError from that parse
    propagates to the caller. Text compares case-insensitively.

    In practice the mixed case comes from the year rule: a year such as
    "in press" or "n.d." compared with a numeric year raises, and the
    whole sort fails. JabRef compared such years as plain strings and
    never failed here; clean or drop non-numeric years before sorting.

    Parameters
    ----------
    first : ComparisonValue
        Left value.
    second : ComparisonValue
        Right value.

    Returns
    -------
    int
        -1, 0 or 1.

    Raises
    ------
    ValueError
        If a text value must be read as a number and is not integer-shaped.
    """
    if isinstance(first, NumericValue) and isinstance(second, NumericValue):
        return -_sign(first.value - second.value)
    if isinstance(second, NumericValue):
        return -_sign(int(first.text) - second.value)
    if isinstance(first, NumericValue):
        return -_sign(first.value - int(second.text))

    ours, theirs = first.text.lower(), second.text.lower()
    return (ours > theirs) - (ours < theirs)


class FieldComparator:
    """Three-way comparator for records on one field.

    Parameters
    ----------
    field_name : str
        Field to compare, or ``TYPE_HEADER`` to compare entry types.
    reverse : bool, optional
        Invert the ordering, by default False.

    Examples
    --------
        >>> by_year = FieldComparator("year")
        >>> sorted(records, key=by_year.key())
    """

    __slots__ = ("_field_name", "_rule", "_multiplier")

    def __init__(self, field_name: str, reverse: bool = False) -> None:
        self._field_name = field_name
        self._rule = FieldComparisonRule.for_field(field_name)
        self._multiplier = -1 if reverse else 1

    @property
    def field_name(self) -> str:
        """Field this comparator compares by."""
        return self._field_name

    @property
    def rule(self) -> FieldComparisonRule:
        """Comparison rule chosen at construction."""
        return self._rule

    @property
    def multiplier(self) -> int:
        """Ordering multiplier: 1 ascending, -1 reversed."""
        return self._multiplier

    @property
    def reverse(self) -> bool:
        """True if the ordering is reversed."""
        return self._multiplier < 0

    def get_field_name(self) -> str:
        """Return the field this comparator compares by."""
        return self._field_name

    def compare(self, first: BibRecord, second: BibRecord) -> int:
        """Compare two records on this comparator's field.

        Parameters
        ----------
        first : BibRecord
            Left record.
        second : BibRecord
            Right record.

        Returns
        -------
        int
            Negative, zero or positive.

        Raises
        ------
        ValueError
            If one value is numeric and the other is not integer-shaped.
        """
        f1 = self._extract(first)
        f2 = self._extract(second)

        # Unset values sort last under an ascending comparator
        if f1 is None:
            return 0 if f2 is None else self._multiplier
        if f2 is None:
            return -self._multiplier

        transform = _TRANSFORMS[self._rule]
        result = compare_values(transform(f1), transform(f2))

        multiplier = self._multiplier
        if self._rule in _INVERTED_RULES:
            multiplier = -multiplier
        return result * multiplier

    def key(self) -> Any:
        """Return a sort key wrapper for sorted() and list.sort()."""
        return cmp_to_key(self.compare)

    def _extract(self, record: BibRecord) -> str | None:
        if self._rule is FieldComparisonRule.TYPE_HEADER:
            return record.type_name
        return record.get_field(self._field_name)

    def __call__(self, first: BibRecord, second: BibRecord) -> int:
        return self.compare(first, second)

    def __repr__(self) -> str:
        return f"FieldComparator({self._field_name!r}, reverse={self.reverse})"

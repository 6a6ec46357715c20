"""Record ordering by field.

Main Components
---------------
- FieldComparator: three-way comparison of two records on one field
- FieldComparatorStack: several comparators consulted in priority order
- sort_records: convenience sort over a sequence of records
"""

from bibfield.sorting.comparator import (
    FieldComparator,
    FieldComparisonRule,
    NumericValue,
    TextValue,
    compare_values,
)
from bibfield.sorting.stack import (
    FieldComparatorStack,
    SortKey,
    parse_sort_keys,
    sort_records,
)

__all__ = [
    "FieldComparator",
    "FieldComparisonRule",
    "NumericValue",
    "TextValue",
    "compare_values",
    "FieldComparatorStack",
    "SortKey",
    "parse_sort_keys",
    "sort_records",
]

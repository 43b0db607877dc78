"""
Column type inference for Map Studio Ingest.

Classifies every column of a parsed dataset into one of ``number``, ``date``,
``state``, ``country`` or ``text``. The first value seen for a column decides
its type for the whole pass; later rows never revisit it. A mostly-text column
whose first value happens to be ``"100"`` therefore stays ``number``. That is
the accepted cost of a single cheap pass and is relied on by the column
mapping UI, so it is not corrected here.

Functions:
    looks_numeric: Whether a string converts cleanly to a number
    classify_value: Type of a single cell value
    infer_column_types: Infer a ColumnTypeMap from rows
    merge_inferred_types: Combine confirmed and freshly inferred types
"""

import numbers
import re
from collections.abc import Mapping
from datetime import date
from typing import Any, Dict, Iterable

from utils.logger import get_logger

logger = get_logger(__name__)

_DECIMAL_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$')
_RADIX_PATTERN = re.compile(r'^0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$')
_INFINITY_PATTERN = re.compile(r'^[+-]?Infinity$')

STATE_TOKENS = ('province', 'state')
COUNTRY_TOKENS = ('country', 'nation')


def looks_numeric(value: str) -> bool:
    """
    Whether ``value`` converts to a number under spreadsheet-paste rules.

    Accepts surrounding whitespace, decimal and exponent notation, 0x/0o/0b
    literals and ``Infinity``. A blank string counts as numeric (it reads as
    zero), while thousands separators, currency symbols and Python-only forms
    such as ``nan`` or ``1_000`` do not.

    Example:
        >>> looks_numeric(' 1e3 ')
        True
        >>> looks_numeric('1,000')
        False
    """
    stripped = value.strip()
    if not stripped:
        return True
    return bool(
        _DECIMAL_PATTERN.match(stripped)
        or _RADIX_PATTERN.match(stripped)
        or _INFINITY_PATTERN.match(stripped)
    )


def classify_value(value: Any) -> str:
    """
    Classify one cell value.

    Priority: native numbers (any ``numbers.Number`` except bool, so
    Decimal, Fraction and numpy scalars too), then native dates, then for
    strings the state/province keywords, the country/nation keywords,
    numeric text and finally plain text. Anything else is text.
    """
    if isinstance(value, bool):
        return 'text'
    if isinstance(value, numbers.Number):
        return 'number'
    if isinstance(value, date):
        return 'date'
    if isinstance(value, str):
        lowered = value.lower()
        if any(token in lowered for token in STATE_TOKENS):
            return 'state'
        if any(token in lowered for token in COUNTRY_TOKENS):
            return 'country'
        if looks_numeric(value):
            return 'number'
        return 'text'
    return 'text'


def infer_column_types(rows: Iterable[Mapping]) -> Dict[str, str]:
    """
    Infer a type for every column that appears in ``rows``.

    Rows are walked in order and each column is typed from the first value it
    has; ``None`` values are treated as absent and do not lock the column.

    Parameters:
    -----------
    rows : Iterable[Mapping]
        Parsed rows (string values) or records carrying native values

    Returns:
    --------
    Dict[str, str]
        Column name -> one of number/date/state/country/text

    Example:
        >>> infer_column_types([{'col': '5'}, {'col': 'hello'}])
        {'col': 'number'}
    """
    inferred: Dict[str, str] = {}

    for row in rows:
        for column, value in row.items():
            if column in inferred or value is None:
                continue
            inferred[column] = classify_value(value)

    logger.debug(f"Inferred column types: {inferred}")
    return inferred


def merge_inferred_types(existing: Mapping, inferred: Mapping) -> Dict[str, str]:
    """
    Union of two type maps where ``existing`` entries win on conflicts.

    ``existing`` holds types the user has confirmed or overridden; fresh
    inference only fills in columns it does not mention.
    """
    merged = dict(inferred)
    merged.update(existing)
    return merged


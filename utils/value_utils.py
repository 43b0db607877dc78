"""
Cell value utilities for Map Studio Ingest.

Parsed datasets hold every cell as text, so anything numeric or date-like has
to be recovered from strings such as ``"1,200"``, ``"$3.5"`` or ``"1.5K"``.
This module normalises those values and formats them for legends and labels
the way the map preview displays them (US English conventions).

Functions:
    parse_compact_number: Parse K/M/B-suffixed numbers
    normalize_numeric_value: Best-effort number from a cell value
    get_numeric_bounds: Min/max of a column's numeric values
    get_unique_string_values: Sorted distinct non-blank values of a column
    format_number: Format a value with a number format preset
    parse_date_input: Best-effort date from a cell value
    format_date: Format a value with a date format preset
"""

import math
import re
import warnings
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd

Number = Union[int, float]

COMPACT_MULTIPLIERS = {
    'K': 1_000,
    'M': 1_000_000,
    'B': 1_000_000_000,
}

_COMPACT_PATTERN = re.compile(r'^(\d+(\.\d+)?)([KMB])$', re.IGNORECASE)
_FLOAT_PREFIX_PATTERN = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_NUMERIC_NOISE_PATTERN = re.compile(r'[,$%]')
_ISO_DATE_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')

MONTH_ABBR = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
              'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')
MONTH_NAMES = ('January', 'February', 'March', 'April', 'May', 'June', 'July',
               'August', 'September', 'October', 'November', 'December')


def parse_compact_number(value: str) -> Optional[float]:
    """
    Parse a compact number such as ``1.5K``, ``20M`` or ``3b``.

    Returns:
        The expanded value, or None if ``value`` is not in compact form
    """
    match = _COMPACT_PATTERN.match(value)
    if not match:
        return None

    number_portion = float(match.group(1))
    factor = COMPACT_MULTIPLIERS[match.group(3).upper()]
    return number_portion * factor if math.isfinite(number_portion) else None


def _parse_float_prefix(text: str) -> Optional[float]:
    match = _FLOAT_PREFIX_PATTERN.match(text.lstrip())
    if not match:
        return None
    parsed = float(match.group(0))
    return parsed if math.isfinite(parsed) else None


def normalize_numeric_value(value: Any) -> Optional[Number]:
    """
    Recover a finite number from a cell value.

    Numbers pass through (non-finite ones are rejected). Text is trimmed,
    tried as a compact number, then stripped of ``,``, ``$`` and ``%`` and
    read up to the first character that cannot belong to a number.

    Example:
        >>> normalize_numeric_value('$1,200.50')
        1200.5
        >>> normalize_numeric_value('n/a') is None
        True
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None

    if value is None:
        return None

    str_value = str(value).strip()
    if not str_value:
        return None

    compact = parse_compact_number(str_value)
    if compact is not None:
        return compact

    return _parse_float_prefix(_NUMERIC_NOISE_PATTERN.sub('', str_value))


def get_numeric_bounds(rows: Sequence[Mapping], column: str) -> Dict[str, Number]:
    """
    Min and max of the numeric values in ``column``.

    Falls back to ``{'min': 0, 'max': 100}`` when there is no column, no rows,
    or no value in the column can be read as a number.
    """
    if not column or not rows:
        return {'min': 0, 'max': 100}

    values = [normalize_numeric_value(row.get(column)) for row in rows]
    values = [v for v in values if v is not None]

    if not values:
        return {'min': 0, 'max': 100}

    return {'min': min(values), 'max': max(values)}


def get_unique_string_values(rows: Sequence[Mapping], column: str) -> List[str]:
    if not column or not rows:
        return []

    values = set()
    for row in rows:
        raw = row.get(column)
        text = ('' if raw is None else str(raw)).strip()
        if text:
            values.add(text)
    return sorted(values)


def _number_to_text(num: Number) -> str:
    """Shortest text for a number, without a trailing ``.0`` on integers."""
    if isinstance(num, float) and num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    return str(num)


def _to_fixed(num: Number, digits: int) -> str:
    """Fixed-point text rounded half away from zero on the exact binary value."""
    exact = Decimal(num)
    with localcontext() as ctx:
        ctx.prec = max(28, exact.adjusted() + digits + 2)
        return str(exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP))


def _group(num: Number, min_fraction: int = 0, max_fraction: int = 20) -> str:
    """
    Thousands-grouped text with between ``min_fraction`` and ``max_fraction``
    decimals, rounding the shortest decimal form of ``num``.
    """
    decimal_value = Decimal(repr(float(num))) if isinstance(num, float) else Decimal(num)
    with localcontext() as ctx:
        ctx.prec = max(28, decimal_value.adjusted() + max_fraction + 2)
        rounded = decimal_value.quantize(Decimal(1).scaleb(-max_fraction), rounding=ROUND_HALF_UP)
    sign = '-' if rounded < 0 else ''
    int_part, _, fraction = f"{abs(rounded):f}".partition('.')
    fraction = fraction.rstrip('0')
    if len(fraction) < min_fraction:
        fraction = fraction.ljust(min_fraction, '0')
    grouped = f"{int(int_part):,}"
    return f"{sign}{grouped}.{fraction}" if fraction else f"{sign}{grouped}"


def format_number(value: Any, fmt: str) -> str:
    """
    Format a cell value with a number format preset.

    Presets: raw, comma, compact, currency, percent, 0-decimals, 1-decimal,
    2-decimals. Values that cannot be read as numbers come back as text.

    Example:
        >>> format_number('1234.5', 'currency')
        '$1,234.50'
        >>> format_number('2500', 'compact')
        '2.5K'
    """
    num = normalize_numeric_value(value)
    if num is None:
        return '' if value is None else str(value)

    if fmt == 'comma':
        return _group(num)
    if fmt == 'compact':
        if abs(num) >= 1e9:
            return _to_fixed(num / 1e9, 1) + 'B'
        if abs(num) >= 1e6:
            return _to_fixed(num / 1e6, 1) + 'M'
        if abs(num) >= 1e3:
            return _to_fixed(num / 1e3, 1) + 'K'
        return _number_to_text(num)
    if fmt == 'currency':
        text = _group(num, 2, 2)
        return f"-${text[1:]}" if text.startswith('-') else f"${text}"
    if fmt == 'percent':
        return _to_fixed(num * 100, 0) + '%'
    if fmt == '0-decimals':
        return _group(math.floor(num + 0.5))
    if fmt == '1-decimal':
        return _group(num, 1, 1)
    if fmt == '2-decimals':
        return _group(num, 2, 2)
    return _number_to_text(num)


def parse_date_input(value: Any) -> Optional[date]:
    """
    Best-effort date from a cell value.

    ``YYYY-MM-DD`` strings are read as calendar dates directly; anything else
    goes through pandas' lenient parser. Returns None when nothing parses.
    """
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        return None

    trimmed = value.strip()
    if not trimmed:
        return None

    iso_match = _ISO_DATE_PATTERN.match(trimmed)
    if iso_match:
        year, month, day = (int(part) for part in iso_match.groups())
        try:
            return date(year, month, day)
        except ValueError:
            return None

    with warnings.catch_warnings():
        warnings.simplefilter('ignore')
        try:
            parsed = pd.to_datetime(trimmed, errors='coerce')
        except (ValueError, TypeError, OverflowError):
            return None

    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def format_date(value: Any, fmt: str) -> str:
    """
    Format a cell value with a date format preset.

    Presets: yyyy-mm-dd, mm/dd/yyyy, dd/mm/yyyy, mmm-dd-yyyy, mmmm-dd-yyyy,
    dd-mmm-yyyy, yyyy, mmm-yyyy, mm/dd/yy, dd/mm/yy. Blank values give an
    empty string and unparseable ones come back unchanged as text.

    Example:
        >>> format_date('2024-06-01', 'mm/dd/yyyy')
        '6/1/2024'
    """
    if value is None or value == '':
        return ''

    parsed = parse_date_input(value)
    if parsed is None:
        return str(value)

    day = parsed.day
    month = parsed.month
    year = parsed.year

    if fmt == 'mm/dd/yyyy':
        return f"{month}/{day}/{year}"
    if fmt == 'dd/mm/yyyy':
        return f"{day:02d}/{month:02d}/{year}"
    if fmt == 'mmm-dd-yyyy':
        return f"{MONTH_ABBR[month - 1]} {day:02d}, {year}"
    if fmt == 'mmmm-dd-yyyy':
        return f"{MONTH_NAMES[month - 1]} {day:02d}, {year}"
    if fmt == 'dd-mmm-yyyy':
        return f"{day:02d} {MONTH_ABBR[month - 1]} {year}"
    if fmt == 'yyyy':
        return str(year)
    if fmt == 'mmm-yyyy':
        return f"{MONTH_ABBR[month - 1]} {year}"
    if fmt == 'mm/dd/yy':
        return f"{month}/{day}/{year % 100:02d}"
    if fmt == 'dd/mm/yy':
        return f"{day:02d}/{month:02d}/{year % 100:02d}"
    if isinstance(parsed, datetime):
        parsed = parsed.date()
    return parsed.isoformat()

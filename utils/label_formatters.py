"""
Label and legend formatting utilities for Map Studio Ingest.

This module turns raw cell values into the text shown in legends and symbol
or region labels, based on each column's inferred type and the format the
user picked for it. State and province values are geography-aware: the same
``"ON"`` is Ontario on the Canadian map and passes through untouched on the
US map.

Constants:
    STATE_CODE_MAP: US state abbreviation -> name
    PROVINCE_CODE_MAP: Canadian province/territory abbreviation -> name
    SGC_TO_PROVINCE_MAP: Statistics Canada SGC code -> province abbreviation

Functions:
    get_default_format: Default format preset for a column type
    format_state: Abbreviate or expand a state/province value
    format_legend_value: Format a value according to its column type
    render_label_preview: Fill a label template from the first data row
"""

import re
from typing import Any, Mapping, Optional

from utils.value_utils import format_date, format_number

STATE_CODE_MAP = {
    'AL': 'Alabama', 'AK': 'Alaska', 'AZ': 'Arizona', 'AR': 'Arkansas',
    'CA': 'California', 'CO': 'Colorado', 'CT': 'Connecticut', 'DE': 'Delaware',
    'FL': 'Florida', 'GA': 'Georgia', 'HI': 'Hawaii', 'ID': 'Idaho',
    'IL': 'Illinois', 'IN': 'Indiana', 'IA': 'Iowa', 'KS': 'Kansas',
    'KY': 'Kentucky', 'LA': 'Louisiana', 'ME': 'Maine', 'MD': 'Maryland',
    'MA': 'Massachusetts', 'MI': 'Michigan', 'MN': 'Minnesota', 'MS': 'Mississippi',
    'MO': 'Missouri', 'MT': 'Montana', 'NE': 'Nebraska', 'NV': 'Nevada',
    'NH': 'New Hampshire', 'NJ': 'New Jersey', 'NM': 'New Mexico', 'NY': 'New York',
    'NC': 'North Carolina', 'ND': 'North Dakota', 'OH': 'Ohio', 'OK': 'Oklahoma',
    'OR': 'Oregon', 'PA': 'Pennsylvania', 'RI': 'Rhode Island', 'SC': 'South Carolina',
    'SD': 'South Dakota', 'TN': 'Tennessee', 'TX': 'Texas', 'UT': 'Utah',
    'VT': 'Vermont', 'VA': 'Virginia', 'WA': 'Washington', 'WV': 'West Virginia',
    'WI': 'Wisconsin', 'WY': 'Wyoming',
}

PROVINCE_CODE_MAP = {
    'AB': 'Alberta',
    'BC': 'British Columbia',
    'MB': 'Manitoba',
    'NB': 'New Brunswick',
    'NL': 'Newfoundland and Labrador',
    'NS': 'Nova Scotia',
    'ON': 'Ontario',
    'PE': 'Prince Edward Island',
    'QC': 'Quebec',
    'SK': 'Saskatchewan',
    'NT': 'Northwest Territories',
    'NU': 'Nunavut',
    'YT': 'Yukon',
}

SGC_TO_PROVINCE_MAP = {
    '10': 'NL', '11': 'PE', '12': 'NS', '13': 'NB', '24': 'QC', '35': 'ON',
    '46': 'MB', '47': 'SK', '48': 'AB', '59': 'BC', '60': 'YT', '61': 'NT',
    '62': 'NU',
}

REVERSE_STATE_MAP = {name.lower(): abbr for abbr, name in STATE_CODE_MAP.items()}
REVERSE_PROVINCE_MAP = {name.lower(): abbr for abbr, name in PROVINCE_CODE_MAP.items()}

DEFAULT_FORMATS = {
    'number': 'raw',
    'date': 'yyyy-mm-dd',
    'state': 'abbreviated',
    'coordinate': 'raw',
    'country': 'raw',
}

NO_PREVIEW_MESSAGE = 'No data or template to preview.'

_PLACEHOLDER_PATTERN = re.compile(r'\{([^}]+)\}')


def get_default_format(column_type: str) -> str:
    return DEFAULT_FORMATS.get(column_type, 'raw')


def _format_region(text: str, fmt: str, code_map: Mapping, reverse_map: Mapping,
                   code: Optional[str] = None) -> str:
    code = text if code is None else code

    if fmt == 'abbreviated':
        if len(code) == 2 and code.upper() in code_map:
            return code.upper()
        return reverse_map.get(text.lower(), text)

    if fmt == 'full':
        if len(code) == 2:
            return code_map.get(code.upper(), text)
        return next((name for name in code_map.values() if name.lower() == text.lower()), text)

    return text


def format_state(value: Any, fmt: str, selected_geography: str) -> str:
    """
    Format a state or province value as an abbreviation or full name.

    On the Canadian provinces map numeric SGC codes (``"24"``) are accepted
    as well as abbreviations and names; everywhere else US state codes and
    names are used. Unknown values pass through unchanged.

    Examples:
        >>> format_state('California', 'abbreviated', 'usa-states')
        'CA'
        >>> format_state('24', 'full', 'canada-provinces')
        'Quebec'
    """
    if value is None or value == '':
        return ''

    text = str(value).strip()

    if selected_geography == 'canada-provinces':
        code = SGC_TO_PROVINCE_MAP.get(text, text)
        return _format_region(text, fmt, PROVINCE_CODE_MAP, REVERSE_PROVINCE_MAP, code)

    return _format_region(text, fmt, STATE_CODE_MAP, REVERSE_STATE_MAP)


def format_legend_value(value: Any, column: str, column_types: Mapping,
                        column_formats: Mapping, selected_geography: str) -> str:
    """
    Format a value for a legend or label according to its column.

    The column's type (default ``text``) picks the formatter and the column's
    chosen format (default per type) picks the preset.
    """
    column_type = column_types.get(column) or 'text'
    fmt = column_formats.get(column) or get_default_format(column_type)

    if column_type == 'number':
        return format_number(value, fmt)
    if column_type == 'date':
        return format_date(value, fmt)
    if column_type == 'state':
        return format_state(value, fmt, selected_geography)
    return '' if value is None else str(value)


def render_label_preview(template: str, first_row: Optional[Mapping], column_types: Mapping,
                         column_formats: Mapping, selected_geography: str) -> str:
    """
    Render a label template against the first data row.

    ``{column}`` placeholders are replaced with the formatted value of that
    column (missing columns render empty) and newlines become ``<br/>``.

    Example:
        >>> render_label_preview('Pop: {population}', {'population': '2500'},
        ...                      {'population': 'number'}, {'population': 'compact'},
        ...                      'usa-states')
        'Pop: 2.5K'
    """
    if not template or first_row is None:
        return NO_PREVIEW_MESSAGE

    def _substitute(match: re.Match) -> str:
        column = match.group(1)
        value = first_row.get(column)
        if value is None:
            return ''
        return format_legend_value(value, column, column_types, column_formats, selected_geography)

    preview = _PLACEHOLDER_PATTERN.sub(_substitute, template)
    return preview.replace('\n', '<br/>')

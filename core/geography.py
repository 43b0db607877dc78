"""
Geography and projection inference for Map Studio Ingest.

Guesses which basemap a freshly parsed dataset belongs on from its column
names and a handful of sample rows. The checks run in a fixed order and the
first one that fires wins; the order is what callers depend on, so it must not
be rearranged:

    1. country/nation column or world-country sample tokens -> world / equalEarth
    2. province/territory column or Canadian sample tokens  -> canada-provinces / mercator
    3. county/fips column or a 5-digit sample token         -> usa-counties / albersUsa
    4. state/province column or US-state sample tokens      -> usa-states / albersUsa
    5. lat* and lon* columns                                 -> world / mercator
    6. nothing matched                                       -> usa-states / albersUsa

Functions:
    has_column_containing: Any column contains any of the substrings
    sample_rows_to_text: Lower-cased JSON blob of the first sample rows
    resolve_geography: Infer a GeographyGuess
"""

import json
import re
from collections.abc import Mapping
from typing import Iterable, Sequence

from core.models import GeographyGuess
from utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SAMPLE_LIMIT = 10

WORLD_COUNTRY_TOKENS = ('canada', 'china', 'india', 'brazil')
US_STATE_TOKENS = ('california', 'texas', 'new york', 'florida')
CANADA_PROVINCE_TOKENS = ('ontario', 'quebec', 'alberta')
COUNTY_FIPS_PATTERN = re.compile(r'\b\d{5}\b', re.ASCII)


def has_column_containing(columns: Iterable[str], substrings: Sequence[str]) -> bool:
    return any(sub in column for column in columns for sub in substrings)


def sample_rows_to_text(rows: Sequence[Mapping], limit: int = DEFAULT_SAMPLE_LIMIT) -> str:
    """
    Serialise up to ``limit`` rows to one lower-cased JSON string.

    Keys are included along with values, so a column called ``county_fips``
    with value ``06037`` contributes both to the search text.
    """
    records = [dict(row) for row in rows[:max(0, limit)]]
    return json.dumps(records, ensure_ascii=False, separators=(',', ':'), default=str).lower()


def resolve_geography(
    columns: Sequence[str],
    sample_rows: Sequence[Mapping],
    sample_limit: int = DEFAULT_SAMPLE_LIMIT
) -> GeographyGuess:
    """
    Infer the geography and default projection for a dataset.

    Never fails: without any evidence the US-states map is returned.

    Parameters:
    -----------
    columns : Sequence[str]
        Column names of the dataset
    sample_rows : Sequence[Mapping]
        Parsed rows; only the first ``sample_limit`` are inspected
    sample_limit : int
        How many rows go into the value-based evidence

    Returns:
    --------
    GeographyGuess
        geography key and projection type

    Example:
        >>> resolve_geography(['country', 'state'], [])
        GeographyGuess(geography='world', projection='equalEarth')
    """
    lowered_columns = [column.lower() for column in columns]
    sample_text = sample_rows_to_text(sample_rows, sample_limit)

    has_country_column = has_column_containing(lowered_columns, ('country', 'nation'))
    has_state_column = has_column_containing(lowered_columns, ('state', 'province'))
    has_county_column = has_column_containing(lowered_columns, ('county', 'fips'))
    has_lat_lon = (
        has_column_containing(lowered_columns, ('lat',))
        and has_column_containing(lowered_columns, ('lon',))
    )
    has_canada_province_column = has_column_containing(lowered_columns, ('province', 'territory'))

    contains_world_countries = any(token in sample_text for token in WORLD_COUNTRY_TOKENS)
    contains_us_states = any(token in sample_text for token in US_STATE_TOKENS)
    contains_canada_provinces = any(token in sample_text for token in CANADA_PROVINCE_TOKENS)
    contains_us_counties = COUNTY_FIPS_PATTERN.search(sample_text) is not None

    if has_country_column or contains_world_countries:
        guess = GeographyGuess('world', 'equalEarth')
    elif has_canada_province_column or contains_canada_provinces:
        guess = GeographyGuess('canada-provinces', 'mercator')
    elif has_county_column or contains_us_counties:
        guess = GeographyGuess('usa-counties', 'albersUsa')
    elif has_state_column or contains_us_states:
        guess = GeographyGuess('usa-states', 'albersUsa')
    elif has_lat_lon:
        guess = GeographyGuess('world', 'mercator')
    else:
        guess = GeographyGuess('usa-states', 'albersUsa')

    logger.debug(
        f"Geography resolved to {guess.geography} ({guess.projection}) "
        f"from {len(lowered_columns)} column(s)"
    )
    return guess

"""
Value types shared by the Map Studio ingest core.

Every type here is a plain value: parsing, inference and reconciliation
functions build new instances rather than mutating the ones they are given.

Classes:
    Row: Read-only column -> string mapping for one parsed line
    ParsedDataset: Rows plus their ordered header columns
    GeographyGuess: Inferred geography and its projection
    DataState: Previously retained data for one map type
    CategoricalColor: Value -> colour pair for categorical scales
    SymbolDimensionSettings: Encodings for the symbol overlay
    ChoroplethDimensionSettings: Encodings for choropleth/custom overlays
    DimensionSettings: All three overlays plus the selected geography
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

COLUMN_TYPES = ('number', 'date', 'state', 'country', 'text')

GEOGRAPHY_KEYS = (
    'world',
    'usa-states',
    'usa-counties',
    'usa-nation',
    'canada-provinces',
    'canada-nation',
)

PROJECTION_TYPES = ('mercator', 'equalEarth', 'albersUsa')

MAP_TYPES = ('symbol', 'choropleth', 'custom')

COLOR_SCALE_TYPES = ('linear', 'categorical')


class Row(Mapping):
    """
    One parsed data line keyed by column name.

    Built from (column, value) pairs, so a repeated header keeps the value
    of its last occurrence.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Iterable[Tuple[str, Any]]] = None):
        if isinstance(values, Mapping):
            values = values.items()
        self._values: Dict[str, Any] = dict(values or ())

    def __getitem__(self, column: str) -> Any:
        return self._values[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Row({self._values!r})"

    def has_column(self, column: str) -> bool:
        return column in self._values

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)


@dataclass(frozen=True)
class ParsedDataset:
    """Rows of a delimited-text parse and the header they were aligned to."""
    rows: Tuple[Row, ...] = ()
    columns: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.columns

    def sample(self, limit: int = 10) -> List[Row]:
        return list(self.rows[:max(0, limit)])

    def to_records(self) -> List[Dict[str, Any]]:
        """Plain dict copies of every row, in order (JSON serialisable)."""
        return [row.to_dict() for row in self.rows]


@dataclass(frozen=True)
class GeographyGuess:
    """Geography a dataset most likely belongs on, with its projection."""
    geography: str
    projection: str


@dataclass(frozen=True)
class DataState:
    """Data previously loaded for one map type and kept in the background."""
    parsed_data: Sequence[Mapping] = ()
    custom_map_data: str = ''
    columns: Sequence[str] = ()
    raw_data: str = ''


@dataclass(frozen=True)
class CategoricalColor:
    value: str
    color: str


@dataclass(frozen=True)
class SymbolDimensionSettings:
    latitude: str = ''
    longitude: str = ''
    size_by: str = ''
    size_min: float = 5
    size_max: float = 20
    size_min_value: float = 0
    size_max_value: float = 100
    color_by: str = ''
    color_scale: str = 'linear'
    color_palette: str = 'Blues'
    color_min_value: float = 0
    color_mid_value: float = 50
    color_max_value: float = 100
    color_min_color: str = '#f7fbff'
    color_mid_color: str = '#6baed6'
    color_max_color: str = '#08519c'
    categorical_colors: Tuple[CategoricalColor, ...] = ()
    label_template: str = ''


@dataclass(frozen=True)
class ChoroplethDimensionSettings:
    state_column: str = ''
    color_by: str = ''
    color_scale: str = 'linear'
    color_palette: str = 'Blues'
    color_min_value: float = 0
    color_mid_value: float = 50
    color_max_value: float = 100
    color_min_color: str = '#f7fbff'
    color_mid_color: str = '#6baed6'
    color_max_color: str = '#08519c'
    categorical_colors: Tuple[CategoricalColor, ...] = ()
    label_template: str = ''


@dataclass(frozen=True)
class DimensionSettings:
    """
    Encoding configuration for every overlay at once.

    Only one map type is active at a time, but all three sub-records are kept
    so switching overlays does not throw away the user's styling.
    """
    symbol: SymbolDimensionSettings = field(default_factory=SymbolDimensionSettings)
    choropleth: ChoroplethDimensionSettings = field(default_factory=ChoroplethDimensionSettings)
    custom: ChoroplethDimensionSettings = field(default_factory=ChoroplethDimensionSettings)
    selected_geography: str = 'usa-states'

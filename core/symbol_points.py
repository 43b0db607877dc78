"""
Symbol point builder for Map Studio Ingest.

Symbol maps place one marker per data row at the row's latitude/longitude.
This module turns the coordinate columns chosen in the symbol dimension
settings into a GeoDataFrame of WGS84 points that a renderer can project.

Functions:
    parse_coordinate: Read a latitude or longitude from a cell
    geometry_column_for: Point column name that avoids data columns
    build_symbol_geodataframe: GeoDataFrame of symbol points from a dataset
"""

from typing import Any, Optional

import geopandas as gpd
import pandas as pd
from shapely.geometry import Point

from core.models import ParsedDataset
from utils.logger import get_logger
from utils.value_utils import normalize_numeric_value

logger = get_logger(__name__)

WGS84 = 'EPSG:4326'
GEOMETRY_COLUMN = 'geometry'


def parse_coordinate(value: Any, limit: float) -> Optional[float]:
    """
    Read a coordinate, rejecting values outside ``[-limit, limit]``.

    Args:
        value: Cell value, e.g. ``"40.7128"``
        limit: 90 for latitude, 180 for longitude

    Returns:
        Coordinate as float, or None if missing, non-numeric or out of range
    """
    number = normalize_numeric_value(value)
    if number is None or abs(number) > limit:
        return None
    return float(number)


def geometry_column_for(columns) -> str:
    """
    Name for the point geometry column that does not collide with data.

    A dataset column called ``geometry`` keeps its values; the points then go
    to ``symbol_geometry`` (or ``symbol_symbol_geometry`` and so on).
    """
    name = GEOMETRY_COLUMN
    while name in columns:
        name = f"symbol_{name}"
    return name


def build_symbol_geodataframe(
    dataset: ParsedDataset,
    latitude_column: str,
    longitude_column: str
) -> gpd.GeoDataFrame:
    """
    Build a point GeoDataFrame from a dataset's coordinate columns.

    Rows whose coordinates are missing, non-numeric or out of range are
    skipped. Every column of the dataset is carried over as an attribute;
    the points live in the column named by ``geometry_column_for``.

    Parameters:
    -----------
    dataset : ParsedDataset
        Parsed tabular data
    latitude_column : str
        Column holding latitudes
    longitude_column : str
        Column holding longitudes

    Returns:
    --------
    gpd.GeoDataFrame
        Points in EPSG:4326 (empty when either column is not in the dataset)

    Example:
        >>> gdf = build_symbol_geodataframe(dataset, 'lat', 'lon')
        >>> gdf.crs.to_epsg()
        4326
    """
    columns = list(dict.fromkeys(dataset.columns))
    geometry_name = geometry_column_for(columns)
    if geometry_name != GEOMETRY_COLUMN:
        logger.warning(
            f"Dataset already has a '{GEOMETRY_COLUMN}' column; "
            f"symbol points stored in '{geometry_name}'"
        )

    records = []
    geometries = []
    skipped = 0

    if latitude_column in columns and longitude_column in columns:
        for row in dataset.rows:
            lat = parse_coordinate(row.get(latitude_column), 90.0)
            lon = parse_coordinate(row.get(longitude_column), 180.0)
            if lat is None or lon is None:
                skipped += 1
                continue
            records.append({column: row.get(column, '') for column in columns})
            geometries.append(Point(lon, lat))
    else:
        logger.debug(
            f"Coordinate columns not found: lat={latitude_column!r}, lon={longitude_column!r}"
        )

    if skipped:
        logger.info(f"  - Skipped {skipped} row(s) without usable coordinates")
    logger.debug(f"Built {len(geometries)} symbol point(s)")

    frame = pd.DataFrame(records, columns=columns)
    frame[geometry_name] = gpd.GeoSeries(geometries, index=frame.index, crs=WGS84)
    return gpd.GeoDataFrame(frame, geometry=geometry_name, crs=WGS84)

"""
Projection catalogue for Map Studio Ingest.

Maps every geography to its default projection and every projection to the
pyproj CRS a downstream renderer (or a GeoDataFrame reprojection) should use.
The user may later pick another projection; that choice is not made here.

Constants:
    DEFAULT_PROJECTIONS: GeographyKey -> ProjectionType
    PROJECTION_EPSG: ProjectionType -> EPSG code

Functions:
    default_projection_for: Default projection of a geography
    get_projection_crs: pyproj CRS for a projection type
"""

from pyproj import CRS

from core.models import GEOGRAPHY_KEYS, PROJECTION_TYPES

DEFAULT_PROJECTIONS = {
    'world': 'equalEarth',
    'usa-states': 'albersUsa',
    'usa-counties': 'albersUsa',
    'usa-nation': 'albersUsa',
    'canada-provinces': 'mercator',
    'canada-nation': 'mercator',
}

# Web Mercator, Equal Earth (Greenwich) and CONUS Albers equal-area
PROJECTION_EPSG = {
    'mercator': 3857,
    'equalEarth': 8857,
    'albersUsa': 5070,
}


def default_projection_for(geography: str) -> str:
    """
    Default projection type for a geography key.

    Raises:
        ValueError: If ``geography`` is not a known GeographyKey
    """
    if geography not in GEOGRAPHY_KEYS:
        raise ValueError(f"Unknown geography: {geography!r}")
    return DEFAULT_PROJECTIONS[geography]


def get_projection_crs(projection: str) -> CRS:
    """
    Build the pyproj CRS for a projection type.

    Parameters:
    -----------
    projection : str
        One of 'mercator', 'equalEarth', 'albersUsa'

    Returns:
    --------
    CRS
        Projected coordinate reference system

    Raises:
    -------
    ValueError
        If ``projection`` is not a known ProjectionType

    Example:
        >>> get_projection_crs('albersUsa').to_epsg()
        5070
    """
    if projection not in PROJECTION_TYPES:
        raise ValueError(f"Unknown projection: {projection!r}")
    return CRS.from_epsg(PROJECTION_EPSG[projection])

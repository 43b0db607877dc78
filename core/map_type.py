"""
Active map-type resolution for Map Studio Ingest.

After a load finishes the UI has to decide which overlay to show. Data loaded
earlier for another map type stays in the background, so the decision looks
at both the fresh load and the retained datasets.

Classes:
    MapTypeResolutionContext: Inputs describing the load that just completed

Functions:
    has_custom_map: Whether custom map artwork is available
    has_choropleth_records: Whether choropleth rows are available
    resolve_active_map_type: Pick the active MapType
"""

from dataclasses import dataclass, field
from typing import Optional

from core.models import DataState
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MapTypeResolutionContext:
    """
    State right after an asynchronous load completes.

    Attributes:
        loaded_type: Map type the user just loaded data for
        parsed_data_length: Number of rows the fresh parse produced
        custom_map_data: Markup loaded alongside, if any
        existing_choropleth_data: Choropleth data retained from earlier
        existing_custom_data: Custom map data retained from earlier
    """
    loaded_type: str
    parsed_data_length: int = 0
    custom_map_data: Optional[str] = None
    existing_choropleth_data: DataState = field(default_factory=DataState)
    existing_custom_data: DataState = field(default_factory=DataState)


def has_custom_map(ctx: MapTypeResolutionContext) -> bool:
    if ctx.loaded_type == 'custom':
        return bool(ctx.custom_map_data)
    return len(ctx.existing_custom_data.custom_map_data) > 0


def has_choropleth_records(ctx: MapTypeResolutionContext) -> bool:
    if ctx.loaded_type == 'choropleth':
        return ctx.parsed_data_length > 0
    return len(ctx.existing_choropleth_data.parsed_data) > 0


def resolve_active_map_type(ctx: MapTypeResolutionContext) -> str:
    """
    Decide which map type should be active after a load.

    A custom map layered over choropleth data takes precedence whenever both
    are available. Otherwise a fresh, non-empty choropleth load wins, then any
    available custom map, and finally the loaded type is passed through.

    Parameters:
    -----------
    ctx : MapTypeResolutionContext
        The load that just completed plus retained datasets

    Returns:
    --------
    str
        'symbol', 'choropleth' or 'custom'
    """
    custom_available = has_custom_map(ctx)
    choropleth_available = has_choropleth_records(ctx)

    if choropleth_available and custom_available:
        active = 'custom'
    elif ctx.loaded_type == 'choropleth' and ctx.parsed_data_length > 0:
        active = 'choropleth'
    elif custom_available:
        active = 'custom'
    else:
        active = ctx.loaded_type

    logger.debug(
        f"Active map type: {active} (loaded={ctx.loaded_type}, "
        f"choropleth_available={choropleth_available}, custom_available={custom_available})"
    )
    return active

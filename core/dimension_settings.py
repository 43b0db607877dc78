"""
Dimension-settings defaults and reconciliation for Map Studio Ingest.

Dimension settings say which columns drive which visual encodings for each of
the three overlays (symbol, choropleth, custom). All three are kept at once;
switching the active map type only clears the data-driven column choices of
the overlay being switched to, since those columns may not exist in the newly
active dataset. Cosmetic choices (palette, scale type, breakpoints, colours)
survive so toggling back and forth does not force the user to re-style.

Functions:
    create_default_dimension_settings: Fresh settings for a new session
    reset_dimension_for_map_type: Clear column bindings for a map-type switch
"""

from dataclasses import replace
from typing import Dict, Optional

from core.models import (
    ChoroplethDimensionSettings,
    DimensionSettings,
    SymbolDimensionSettings,
)
from utils.logger import get_logger

logger = get_logger(__name__)


def create_default_dimension_settings(defaults: Optional[Dict] = None) -> DimensionSettings:
    """
    Build the settings a new session starts from.

    Args:
        defaults: Cosmetic overrides, typically from
            ``config.config_loader.load_dimension_defaults`` (palette, colours
            and symbol size range). Built-in values are used when omitted.

    Returns:
        DimensionSettings with empty column bindings and US states selected
    """
    defaults = defaults or {}
    colors = {
        'color_palette': defaults.get('color_palette', 'Blues'),
        'color_min_color': defaults.get('color_min_color', '#f7fbff'),
        'color_mid_color': defaults.get('color_mid_color', '#6baed6'),
        'color_max_color': defaults.get('color_max_color', '#08519c'),
    }

    symbol = SymbolDimensionSettings(
        size_min=defaults.get('size_min', 5),
        size_max=defaults.get('size_max', 20),
        **colors
    )
    choropleth = ChoroplethDimensionSettings(**colors)

    return DimensionSettings(
        symbol=symbol,
        choropleth=choropleth,
        custom=replace(choropleth),
        selected_geography='usa-states'
    )


def reset_dimension_for_map_type(settings: DimensionSettings, map_type: str) -> DimensionSettings:
    """
    Return new settings with the column bindings of ``map_type`` cleared.

    - symbol: clears ``color_by`` and ``size_by``
    - choropleth: clears ``color_by``
    - custom, or any unrecognised map type: clears ``custom.color_by``

    Sub-records that are not touched are carried over as the same objects,
    and ``settings`` itself is never modified.

    Example:
        >>> nxt = reset_dimension_for_map_type(settings, 'symbol')
        >>> nxt.symbol.color_by
        ''
        >>> nxt.choropleth is settings.choropleth
        True
    """
    if map_type == 'symbol':
        result = replace(settings, symbol=replace(settings.symbol, color_by='', size_by=''))
    elif map_type == 'choropleth':
        result = replace(settings, choropleth=replace(settings.choropleth, color_by=''))
    else:
        result = replace(settings, custom=replace(settings.custom, color_by=''))

    logger.debug(f"Dimension bindings reset for map type: {map_type}")
    return result

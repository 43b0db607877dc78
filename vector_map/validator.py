"""
Custom vector-map validation for Map Studio Ingest.

A custom map is only usable if its artwork follows the layer structure the
renderer binds data to:

    <svg>
      <g id="Map">
        <g id="Nations"> (or Countries)
          <path id="Country-US"/> (or Nation-US)
        </g>
        <g id="States"> (or Provinces, Regions)
          <path id="State-XX"/> ...
        </g>
      </g>
    </svg>

Validation stops at the first broken rule and returns a message naming that
requirement, worded so it can be shown to the user as-is. It never raises.

Classes:
    ValidationResult: Outcome of a validation

Functions:
    validate_custom_svg: Check markup against the required structure
"""

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from utils.logger import get_logger
from vector_map.markup_query import find_all_with_id_prefix, find_first, local_name

logger = get_logger(__name__)

MAP_GROUP_IDS = ('Map',)
NATION_GROUP_IDS = ('Nations', 'Countries')
REGION_GROUP_IDS = ('States', 'Provinces', 'Regions')
US_NATION_PATH_IDS = ('Country-US', 'Nation-US')
REGION_PATH_PREFIXES = ('State-', 'Nation-', 'Country-', 'Province-', 'Region-')

MSG_EMPTY = 'SVG code cannot be empty.'
MSG_ROOT = 'Root element must be <svg>.'
MSG_MAP_GROUP = "Missing required <g id='Map'> group."
MSG_NATION_GROUP = "Missing required <g id='Nations'> or <g id='Countries'> group inside #Map."
MSG_REGION_GROUP = (
    "Missing required <g id='States'>, <g id='Provinces'>, or <g id='Regions'> group inside #Map."
)
MSG_US_PATH = (
    "Missing required <path id='Country-US'> or <path id='Nation-US'> inside Nations/Countries group."
)
MSG_REGION_PATHS = (
    "No <path id='State-XX'>, <path id='Nation-XX'>, <path id='Country-XX'>, "
    "<path id='Province-XX'>, or <path id='Region-XX'> elements found inside "
    "States/Provinces/Regions group."
)
MSG_VALID = 'SVG is valid.'


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    message: str


def _invalid(message: str) -> ValidationResult:
    logger.debug(f"Custom map rejected: {message}")
    return ValidationResult(False, message)


def validate_custom_svg(markup: str) -> ValidationResult:
    """
    Validate custom map markup against the required group/path structure.

    Checks, in order: non-empty input, well-formed markup, ``svg`` root,
    ``g#Map``, a Nations/Countries group and a States/Provinces/Regions group
    inside it, a US nation path inside the nations group, and at least one
    region path inside the regions group.

    Parameters:
    -----------
    markup : str
        User-supplied SVG markup

    Returns:
    --------
    ValidationResult
        ``is_valid`` plus the first failed requirement (or 'SVG is valid.')
    """
    if not markup or not markup.strip():
        return _invalid(MSG_EMPTY)

    try:
        root = ET.fromstring(markup)
    except ET.ParseError as e:
        return _invalid(f"Invalid SVG format: {e}")
    except Exception as e:
        return _invalid(f"Error parsing SVG: {e}")

    if local_name(root).lower() != 'svg':
        return _invalid(MSG_ROOT)

    map_group = find_first(root, 'g', MAP_GROUP_IDS)
    if map_group is None:
        return _invalid(MSG_MAP_GROUP)

    nations_group = find_first(map_group, 'g', NATION_GROUP_IDS)
    if nations_group is None:
        return _invalid(MSG_NATION_GROUP)

    regions_group = find_first(map_group, 'g', REGION_GROUP_IDS)
    if regions_group is None:
        return _invalid(MSG_REGION_GROUP)

    if find_first(nations_group, 'path', US_NATION_PATH_IDS) is None:
        return _invalid(MSG_US_PATH)

    if not find_all_with_id_prefix(regions_group, 'path', REGION_PATH_PREFIXES):
        return _invalid(MSG_REGION_PATHS)

    return ValidationResult(True, MSG_VALID)

"""
Vector-map normalisation for Map Studio Ingest.

Custom map artwork pasted by users often has open outlines (paths that never
return to their start) and arbitrary whitespace. This module closes every open
path and re-flows the markup to one tag per line so the map editor can show a
stable, diffable document.

Normalisation never raises. Markup that cannot be parsed goes through a plain
line-breaking pass instead and reports zero closed paths.

Classes:
    NormalizedMarkup: Reformatted markup plus the number of paths closed

Functions:
    parse_keeping_prefixes: Parse markup, keeping its declared namespace prefixes
    close_open_paths: Append ``Z`` to every path whose outline is open
    format_markup: One-tag-per-line reflow of serialised markup
    fallback_format: Line-breaking pass for unparseable markup
    ensure_paths_closed_and_format: Close paths and reformat, degrading safely
"""

import re
from dataclasses import dataclass
from xml.etree import ElementTree as ET

from utils.logger import get_logger
from vector_map.markup_query import local_name

logger = get_logger(__name__)

SVG_NAMESPACE = 'http://www.w3.org/2000/svg'

# ElementTree keeps one process-wide prefix table for serialising; these
# defaults keep common SVG prefixes readable instead of ns0/ns1
ET.register_namespace('', SVG_NAMESPACE)
ET.register_namespace('xlink', 'http://www.w3.org/1999/xlink')
ET.register_namespace('inkscape', 'http://www.inkscape.org/namespaces/inkscape')
ET.register_namespace('sodipodi', 'http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd')

_RESERVED_PREFIX = re.compile(r'ns\d+$')

_WHITESPACE_RUN = re.compile(r'\s+')
_OPENING_TAG = re.compile(r'(<[^/][^>]*>)(?!<)')
_CLOSING_TAG = re.compile(r'(</[^>]+>)')
_SELF_CLOSING_TAG = re.compile(r'(<[^>]*/>)')
_BLANK_LINES = re.compile(r'\n\s*\n')


@dataclass(frozen=True)
class NormalizedMarkup:
    normalized_markup: str
    closed_path_count: int


def parse_keeping_prefixes(markup: str) -> ET.Element:
    """
    Parse markup and register the namespace prefixes it declares.

    ElementTree drops prefixes on parse and renames unknown ones to ``ns0``,
    ``ns1``... on serialisation. Registering each declared ``prefix:uri``
    pair first lets ``<a:path xmlns:a="urn:x">`` come back as ``a:path``.
    The registration is process-wide and the last document to declare a
    prefix wins. SVG itself always stays the unprefixed default (Inkscape
    also declares it as ``svg:``); other default namespaces and ``nsN``
    prefixes are left to ElementTree.

    Raises:
        ET.ParseError: If the markup is not well-formed
    """
    parser = ET.XMLPullParser(events=('start', 'start-ns'))
    parser.feed(markup)
    parser.close()

    root = None
    for event, item in parser.read_events():
        if event == 'start-ns':
            prefix, uri = item
            if prefix and uri != SVG_NAMESPACE and not _RESERVED_PREFIX.match(prefix):
                ET.register_namespace(prefix, uri)
        elif root is None:
            root = item
    return root


def close_open_paths(root: ET.Element) -> int:
    """
    Close every ``path`` under (and including) ``root`` in place.

    A path is open when its trimmed ``d`` attribute does not end with a
    close-path command (``Z`` or ``z``). Open paths get an uppercase ``Z``
    appended; paths without a ``d`` attribute are left alone.

    Returns:
        Number of paths that were closed
    """
    closed = 0
    for element in root.iter():
        if local_name(element) != 'path':
            continue
        d = element.get('d')
        if d and not d.strip().lower().endswith('z'):
            element.set('d', f"{d.strip()}Z")
            closed += 1
    return closed


def _non_blank_lines(text: str) -> str:
    return '\n'.join(line.strip() for line in text.split('\n') if line.strip())


def format_markup(markup: str) -> str:
    """
    Re-flow markup to one tag per line.

    Whitespace runs collapse to single spaces, then line breaks are inserted
    after opening tags (unless another tag follows directly), around closing
    tags and after self-closing tags. Lines are trimmed and blank lines
    dropped.
    """
    formatted = _WHITESPACE_RUN.sub(' ', markup.strip())
    formatted = _OPENING_TAG.sub('\\1\n', formatted)
    formatted = _CLOSING_TAG.sub('\n\\1\n', formatted)
    formatted = _SELF_CLOSING_TAG.sub('\\1\n', formatted)
    formatted = _BLANK_LINES.sub('\n', formatted)
    return _non_blank_lines(formatted)


def fallback_format(markup: str) -> str:
    """Break between adjacent tags, trim each line and drop blank ones."""
    return _non_blank_lines(markup.replace('><', '>\n<'))


def ensure_paths_closed_and_format(markup: str) -> NormalizedMarkup:
    """
    Close open paths in custom map markup and reformat it.

    Parameters:
    -----------
    markup : str
        User-supplied SVG markup

    Returns:
    --------
    NormalizedMarkup
        Reformatted markup and how many paths were closed. When the markup
        cannot be parsed, the fallback formatting is returned with a count of
        zero.

    Example:
        >>> result = ensure_paths_closed_and_format('<svg><path d="M0 0 L1 1"/></svg>')
        >>> result.closed_path_count
        1
    """
    markup = markup or ''
    try:
        root = parse_keeping_prefixes(markup)
        closed_count = close_open_paths(root)
        serialized = ET.tostring(root, encoding='unicode')
        formatted = format_markup(serialized)
        logger.debug(f"Closed {closed_count} open path(s) in custom map markup")
        return NormalizedMarkup(formatted, closed_count)
    except Exception as e:
        logger.warning(f"Could not parse custom map markup, using basic formatting: {e}")
        return NormalizedMarkup(fallback_format(markup), 0)

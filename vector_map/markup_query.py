"""
Read-only queries over parsed vector-map markup.

SVG exported from illustration tools is usually namespaced
(``{http://www.w3.org/2000/svg}g``) while hand-written snippets often are not,
so every lookup here compares local tag names only.

Functions:
    local_name: Tag name without its namespace
    iter_descendants: Elements below a node, in document order
    find_first: First descendant with a tag and one of several ids
    find_all_with_id_prefix: Descendants with a tag and an id prefix
"""

from itertools import islice
from typing import Iterable, Iterator, List, Optional
from xml.etree import ElementTree as ET


def local_name(element: ET.Element) -> str:
    tag = element.tag
    if not isinstance(tag, str):
        # Comments and processing instructions carry a factory as their tag
        return ''
    return tag.rsplit('}', 1)[-1]


def iter_descendants(element: ET.Element) -> Iterator[ET.Element]:
    """Every element below ``element`` in document order, excluding itself."""
    return islice(element.iter(), 1, None)


def find_first(element: ET.Element, tag: str, ids: Iterable[str]) -> Optional[ET.Element]:
    """
    First descendant (document order) named ``tag`` whose id is in ``ids``.

    Matches the way a CSS selector list such as ``g#Nations, g#Countries``
    resolves: whichever candidate appears first in the document wins.
    """
    wanted = set(ids)
    for child in iter_descendants(element):
        if local_name(child) == tag and child.get('id') in wanted:
            return child
    return None


def find_all_with_id_prefix(element: ET.Element, tag: str, prefixes: Iterable[str]) -> List[ET.Element]:
    prefixes = tuple(prefixes)
    return [
        child for child in iter_descendants(element)
        if local_name(child) == tag and (child.get('id') or '').startswith(prefixes)
    ]

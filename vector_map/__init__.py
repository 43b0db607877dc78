"""
Vector Map Processing Package

This package checks and tidies user-supplied custom map artwork (SVG). It is
independent of the tabular ingest pipeline and is only used when a user
uploads their own map.

Modules:
    markup_query: Namespace-agnostic, read-only element lookups
    normalizer: Close open paths and reflow markup one tag per line
    validator: Verify the required Map/Nations/States group structure

Usage:
    from vector_map import ensure_paths_closed_and_format, validate_custom_svg

    result = validate_custom_svg(svg_text)
    if result.is_valid:
        normalized = ensure_paths_closed_and_format(svg_text)
"""

from vector_map.normalizer import NormalizedMarkup, ensure_paths_closed_and_format
from vector_map.validator import ValidationResult, validate_custom_svg

__all__ = [
    'NormalizedMarkup',
    'ensure_paths_closed_and_format',
    'ValidationResult',
    'validate_custom_svg'
]

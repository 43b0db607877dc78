"""
Core modules for Map Studio Ingest.

This package contains the tabular ingest pipeline and the state reconcilers
that sit between it and the map studio.

Modules:
    models: Value types shared across the core
    delimited_parser: Parse pasted CSV/TSV text
    type_inference: Classify column types
    geography: Infer geography and projection
    projections: Default projections and their pyproj CRS
    dimension_settings: Default and reset dimension settings
    map_type: Resolve the active map type after a load
    symbol_points: Build symbol point GeoDataFrames
    ingest_pipeline: Run the tabular stages in order
"""

__version__ = '1.0.0'

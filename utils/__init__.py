"""
Utility modules for Map Studio Ingest.

This package contains utility functions and helpers used throughout the application.

Modules:
    logger: Logging configuration and setup
    value_utils: Numeric/date recovery and formatting of cell values
    label_formatters: Legend and label text formatting
    color_schemes: Named palettes and preset application
"""

__version__ = '1.0.0'

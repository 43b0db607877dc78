"""
Configuration package for Map Studio Ingest.

This package contains configuration loading and validation.

Modules:
    config_loader: Load and validate ingest configuration from JSON
"""

__version__ = '1.0.0'

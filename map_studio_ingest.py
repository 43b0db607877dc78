#!/usr/bin/env python
"""
Map Studio Ingest
=================
Turns user-supplied tabular data and custom map artwork into a validated,
typed, geography-aware model that the map studio renderer can consume:
delimited-text parsing, column type inference, geography/projection
inference, and custom SVG map validation/normalisation.

License: MIT
"""

import argparse
import time
from dataclasses import replace
from pathlib import Path
from typing import Dict, Optional

# Import logging first
from utils.logger import setup_logging, get_logger

from config.config_loader import load_config, load_inference_settings, load_dimension_defaults

from core.dimension_settings import create_default_dimension_settings, reset_dimension_for_map_type
from core.ingest_pipeline import ingest_text
from core.map_type import MapTypeResolutionContext, resolve_active_map_type
from core.models import DataState
from core.projections import get_projection_crs
from vector_map import ensure_paths_closed_and_format, validate_custom_svg


def _read_text(path: str) -> str:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return file_path.read_text(encoding='utf-8-sig')


def _logging_settings(config_path: Optional[str]) -> Dict:
    """
    Logging settings from the config, or the built-in defaults when the
    config cannot be read. Config errors are reported once logging is up.
    """
    try:
        return load_inference_settings(load_config(Path(config_path) if config_path else None))
    except (OSError, KeyError, ValueError):
        return load_inference_settings({'settings': {}})


def main(data_file: str, svg_file: Optional[str] = None,
         config_path: Optional[str] = None) -> Optional[Dict]:
    """
    Main execution workflow for Map Studio Ingest.

    Workflow Steps:
    1. Setup logging to console and file
    2. Load configuration
    3. Parse the data file, infer column types and geography
    4. Validate and normalise the custom map, if one was supplied
    5. Resolve the active map type and reset its column bindings

    Parameters:
    -----------
    data_file : str
        Path to a CSV or TSV file
    svg_file : Optional[str]
        Path to custom map artwork (SVG)
    config_path : Optional[str]
        Alternate ingest configuration file

    Returns:
    --------
    Optional[Dict]
        Summary of the ingest if successful, None if failed

    Example:
        >>> summary = main('population.csv')
        >>> summary['geography']
        'usa-states'
    """
    workflow_start_time = time.time()

    log_settings = _logging_settings(config_path)
    log_file = setup_logging(
        Path(log_settings['log_dir']).resolve(),
        console_level=log_settings['console_log_level'],
        file_level=log_settings['file_log_level']
    )
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("MAP STUDIO INGEST")
    logger.info("=" * 80)
    logger.info(f"Log file: {log_file}")
    logger.info("")

    try:
        config = load_config(Path(config_path) if config_path else None)
        settings = load_inference_settings(config)

        # Step 1: Tabular data
        result = ingest_text(_read_text(data_file), sample_limit=settings['sample_row_limit'])
        projection_crs = get_projection_crs(result.geography.projection)
        logger.info(f"  - Column types: {result.column_types}")
        logger.info(f"  - Projection CRS: {projection_crs.name}")

        # Step 2: Custom map artwork
        custom_markup = ''
        closed_paths = 0
        if svg_file:
            raw_markup = _read_text(svg_file)
            validation = validate_custom_svg(raw_markup)
            if validation.is_valid:
                normalized = ensure_paths_closed_and_format(raw_markup)
                custom_markup = normalized.normalized_markup
                closed_paths = normalized.closed_path_count
                logger.info(f"  ✓ Custom map valid ({closed_paths} open path(s) closed)")
            else:
                logger.warning(f"⚠ Custom map rejected: {validation.message}")

        # Step 3: Active map type and dimension bindings
        # With a custom map the tabular rows act as the retained choropleth data
        loaded_type = 'custom' if custom_markup else 'choropleth'
        active_type = resolve_active_map_type(MapTypeResolutionContext(
            loaded_type=loaded_type,
            parsed_data_length=len(result.dataset.rows),
            custom_map_data=custom_markup,
            existing_choropleth_data=DataState(
                parsed_data=result.dataset.rows,
                columns=result.dataset.columns
            )
        ))
        dimension_settings = replace(
            reset_dimension_for_map_type(
                create_default_dimension_settings(load_dimension_defaults(config)),
                active_type
            ),
            selected_geography=result.geography.geography
        )

        total_execution_time = time.time() - workflow_start_time

        logger.info("")
        logger.info("✓ INGEST COMPLETE")
        logger.info(f"✓ Active map type: {active_type}")
        logger.info(f"✓ Total execution time: {total_execution_time:.2f} seconds")
        logger.info("")

        return {
            'rows': len(result.dataset.rows),
            'columns': list(result.dataset.columns),
            'column_types': result.column_types,
            'geography': result.geography.geography,
            'projection': result.geography.projection,
            'projection_epsg': projection_crs.to_epsg(),
            'active_map_type': active_type,
            'selected_geography': dimension_settings.selected_geography,
            'custom_map': custom_markup,
            'closed_path_count': closed_paths,
        }

    except Exception as e:
        elapsed_time = time.time() - workflow_start_time

        logger.error("")
        logger.error("=" * 80)
        logger.error("✗ INGEST FAILED")
        logger.error("=" * 80)
        logger.error(f"Error: {str(e)}", exc_info=True)
        logger.error(f"Ingest failed after {elapsed_time:.2f} seconds")
        logger.error(f"See log file for details: {log_file}")
        return None


def cli():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="Ingest tabular data and custom map artwork")
    parser.add_argument('data_file', help="CSV or TSV file")
    parser.add_argument('--svg', dest='svg_file', help="Custom map SVG file")
    parser.add_argument('--config', dest='config_path', help="Alternate ingest_config.json")
    args = parser.parse_args()

    summary = main(args.data_file, args.svg_file, args.config_path)

    if summary:
        print(f"\n✓ Success! {summary['rows']} row(s) on {summary['geography']} ({summary['projection']}).")
    else:
        print("\n✗ Ingest failed. Check log file for details.")


if __name__ == "__main__":
    cli()

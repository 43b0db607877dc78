"""
Test suite for core.ingest_pipeline and the map_studio_ingest entry point
"""

import json
import logging
import tempfile
import unittest
from pathlib import Path

from core.ingest_pipeline import ingest_text
from core.models import GeographyGuess
from map_studio_ingest import main
from utils.logger import ROOT_LOGGER_NAME


class TestIngestText(unittest.TestCase):

    def test_state_dataset(self):
        result = ingest_text("state,population\nTexas,100\nOhio,50")

        self.assertEqual(result.dataset.columns, ('state', 'population'))
        self.assertEqual(result.column_types, {'state': 'text', 'population': 'number'})
        self.assertEqual(result.geography, GeographyGuess('usa-states', 'albersUsa'))

    def test_confirmed_types_win(self):
        result = ingest_text("state,population\nTexas,100", existing_types={'state': 'state'})
        self.assertEqual(result.column_types['state'], 'state')

    def test_world_dataset(self):
        result = ingest_text("Country\tGDP\nChina\t17.7\nIndia\t3.4")

        # Types come from values, so country names themselves are plain text
        self.assertEqual(result.column_types, {'Country': 'text', 'GDP': 'number'})
        self.assertEqual(result.geography, GeographyGuess('world', 'equalEarth'))

    def test_empty_text(self):
        result = ingest_text("   ")

        self.assertTrue(result.dataset.is_empty)
        self.assertEqual(result.column_types, {})
        self.assertEqual(result.geography, GeographyGuess('usa-states', 'albersUsa'))


VALID_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg"><g id="Map">'
    '<g id="Nations"><path id="Country-US" d="M0 0 L10 0 L10 10"/></g>'
    '<g id="States"><path id="State-TX" d="M0 0 L5 5"/></g>'
    '</g></svg>'
)


class TestMain(unittest.TestCase):
    """End-to-end runs of the entry point against temporary files."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        self.config_path = self.dir / 'ingest_config.json'
        self.config_path.write_text(json.dumps({
            'settings': {'sample_row_limit': 10, 'log_dir': str(self.dir / 'logs')},
        }), encoding='utf-8')
        self.data_path = self.dir / 'data.csv'
        self.data_path.write_text("state,value\nTexas,10\nOhio,20\n", encoding='utf-8')

    def tearDown(self):
        logger = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        self.temp_dir.cleanup()

    def test_tabular_only(self):
        summary = main(str(self.data_path), config_path=str(self.config_path))

        self.assertIsNotNone(summary)
        self.assertEqual(summary['rows'], 2)
        self.assertEqual(summary['geography'], 'usa-states')
        self.assertEqual(summary['projection_epsg'], 5070)
        self.assertEqual(summary['active_map_type'], 'choropleth')
        self.assertTrue(list((self.dir / 'logs').glob('mapstudio_*.log')))

    def test_with_custom_map(self):
        svg_path = self.dir / 'map.svg'
        svg_path.write_text(VALID_SVG, encoding='utf-8')

        summary = main(str(self.data_path), str(svg_path), str(self.config_path))

        self.assertEqual(summary['active_map_type'], 'custom')
        self.assertEqual(summary['closed_path_count'], 2)
        self.assertIn('L5 5Z', summary['custom_map'])

    def test_invalid_custom_map_is_ignored(self):
        svg_path = self.dir / 'map.svg'
        svg_path.write_text('<svg><g id="Map"/></svg>', encoding='utf-8')

        summary = main(str(self.data_path), str(svg_path), str(self.config_path))

        self.assertEqual(summary['active_map_type'], 'choropleth')
        self.assertEqual(summary['custom_map'], '')

    def test_missing_data_file_returns_none(self):
        self.assertIsNone(main(str(self.dir / 'absent.csv'), config_path=str(self.config_path)))

    def test_missing_config_returns_none(self):
        self.assertIsNone(main(str(self.data_path), config_path=str(self.dir / 'absent.json')))

    def test_config_without_settings_returns_none(self):
        broken = self.dir / 'broken.json'
        broken.write_text(json.dumps({'dimension_defaults': {}}), encoding='utf-8')

        self.assertIsNone(main(str(self.data_path), config_path=str(broken)))

    def test_selected_geography_follows_inference(self):
        summary = main(str(self.data_path), config_path=str(self.config_path))
        self.assertEqual(summary['selected_geography'], summary['geography'])

        world_path = self.dir / 'world.csv'
        world_path.write_text("country,gdp\nChina,17.7\nIndia,3.4\n", encoding='utf-8')
        summary = main(str(world_path), config_path=str(self.config_path))

        self.assertEqual(summary['geography'], 'world')
        self.assertEqual(summary['selected_geography'], 'world')
        self.assertEqual(summary['projection'], 'equalEarth')

    def test_log_levels_from_config(self):
        self.config_path.write_text(json.dumps({
            'settings': {
                'log_dir': str(self.dir / 'logs'),
                'console_log_level': 'warning',
                'file_log_level': 'info',
            },
        }), encoding='utf-8')

        main(str(self.data_path), config_path=str(self.config_path))

        levels = sorted(h.level for h in logging.getLogger(ROOT_LOGGER_NAME).handlers)
        self.assertEqual(levels, [logging.INFO, logging.WARNING])


if __name__ == '__main__':
    unittest.main()

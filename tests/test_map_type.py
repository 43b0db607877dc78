"""
Test suite for core.map_type
"""

import unittest

from core.map_type import (
    MapTypeResolutionContext, has_choropleth_records, has_custom_map, resolve_active_map_type
)
from core.models import DataState

CUSTOM_STATE = DataState(custom_map_data='<svg/>')
CHOROPLETH_STATE = DataState(parsed_data=({'state': 'TX', 'value': '1'},), columns=('state', 'value'))


class TestAvailability(unittest.TestCase):

    def test_custom_from_fresh_load(self):
        ctx = MapTypeResolutionContext('custom', custom_map_data='<svg/>')
        self.assertTrue(has_custom_map(ctx))

    def test_fresh_custom_load_ignores_retained_markup(self):
        ctx = MapTypeResolutionContext('custom', custom_map_data='', existing_custom_data=CUSTOM_STATE)
        self.assertFalse(has_custom_map(ctx))

    def test_custom_from_retained_data(self):
        ctx = MapTypeResolutionContext('symbol', existing_custom_data=CUSTOM_STATE)
        self.assertTrue(has_custom_map(ctx))

    def test_choropleth_from_fresh_rows(self):
        self.assertTrue(has_choropleth_records(MapTypeResolutionContext('choropleth', parsed_data_length=3)))
        self.assertFalse(has_choropleth_records(MapTypeResolutionContext('choropleth', parsed_data_length=0)))

    def test_choropleth_from_retained_rows(self):
        ctx = MapTypeResolutionContext('custom', existing_choropleth_data=CHOROPLETH_STATE)
        self.assertTrue(has_choropleth_records(ctx))


class TestResolveActiveMapType(unittest.TestCase):

    def test_both_available_after_choropleth_load(self):
        ctx = MapTypeResolutionContext(
            'choropleth', parsed_data_length=3, existing_custom_data=CUSTOM_STATE
        )
        self.assertEqual(resolve_active_map_type(ctx), 'custom')

    def test_both_available_after_custom_load(self):
        ctx = MapTypeResolutionContext(
            'custom', custom_map_data='<svg/>', existing_choropleth_data=CHOROPLETH_STATE
        )
        self.assertEqual(resolve_active_map_type(ctx), 'custom')

    def test_both_retained_after_symbol_load(self):
        ctx = MapTypeResolutionContext(
            'symbol', existing_choropleth_data=CHOROPLETH_STATE, existing_custom_data=CUSTOM_STATE
        )
        self.assertEqual(resolve_active_map_type(ctx), 'custom')

    def test_fresh_choropleth_only(self):
        ctx = MapTypeResolutionContext('choropleth', parsed_data_length=3)
        self.assertEqual(resolve_active_map_type(ctx), 'choropleth')

    def test_empty_choropleth_with_retained_custom(self):
        ctx = MapTypeResolutionContext('choropleth', parsed_data_length=0, existing_custom_data=CUSTOM_STATE)
        self.assertEqual(resolve_active_map_type(ctx), 'custom')

    def test_pass_through(self):
        self.assertEqual(resolve_active_map_type(MapTypeResolutionContext('symbol')), 'symbol')
        self.assertEqual(resolve_active_map_type(MapTypeResolutionContext('custom')), 'custom')
        self.assertEqual(resolve_active_map_type(MapTypeResolutionContext('choropleth')), 'choropleth')


if __name__ == '__main__':
    unittest.main()

"""
Test suite for core.symbol_points
"""

import unittest

from core.delimited_parser import parse_delimited_text
from core.symbol_points import build_symbol_geodataframe, geometry_column_for, parse_coordinate


class TestParseCoordinate(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(parse_coordinate('40.7128', 90), 40.7128)
        self.assertEqual(parse_coordinate(-74, 180), -74.0)

    def test_out_of_range_and_invalid(self):
        self.assertIsNone(parse_coordinate('95', 90))
        self.assertIsNone(parse_coordinate('north', 90))
        self.assertIsNone(parse_coordinate('', 180))
        self.assertIsNone(parse_coordinate(None, 180))


class TestBuildSymbolGeoDataFrame(unittest.TestCase):

    def setUp(self):
        self.dataset = parse_delimited_text(
            "city,lat,lon,population\n"
            "New York,40.7128,-74.0060,8336817\n"
            "Nowhere,bad,10,1\n"
            "Pole,95,10,0\n"
            "Austin,30.2672,-97.7431,961855"
        )

    def test_valid_rows_become_points(self):
        gdf = build_symbol_geodataframe(self.dataset, 'lat', 'lon')

        self.assertEqual(len(gdf), 2)
        self.assertEqual(gdf.crs.to_epsg(), 4326)
        self.assertEqual(list(gdf['city']), ['New York', 'Austin'])
        self.assertAlmostEqual(gdf.geometry.iloc[0].x, -74.0060)
        self.assertAlmostEqual(gdf.geometry.iloc[0].y, 40.7128)

    def test_attributes_are_carried_over(self):
        gdf = build_symbol_geodataframe(self.dataset, 'lat', 'lon')

        for column in ('city', 'lat', 'lon', 'population'):
            self.assertIn(column, gdf.columns)

    def test_missing_column_gives_empty_frame(self):
        gdf = build_symbol_geodataframe(self.dataset, 'latitude', 'lon')

        self.assertEqual(len(gdf), 0)
        self.assertEqual(gdf.crs.to_epsg(), 4326)

    def test_geometry_column_in_data_is_kept(self):
        dataset = parse_delimited_text("geometry,lat,lon\nx,1,2")
        gdf = build_symbol_geodataframe(dataset, 'lat', 'lon')

        self.assertEqual(list(gdf['geometry']), ['x'])
        self.assertEqual(gdf.geometry.name, 'symbol_geometry')
        self.assertAlmostEqual(gdf.geometry.iloc[0].x, 2.0)
        self.assertAlmostEqual(gdf.geometry.iloc[0].y, 1.0)
        self.assertEqual(gdf.crs.to_epsg(), 4326)


class TestGeometryColumnFor(unittest.TestCase):

    def test_default_name(self):
        self.assertEqual(geometry_column_for(['lat', 'lon']), 'geometry')

    def test_collisions_are_prefixed(self):
        self.assertEqual(geometry_column_for(['geometry']), 'symbol_geometry')
        self.assertEqual(
            geometry_column_for(['geometry', 'symbol_geometry']),
            'symbol_symbol_geometry'
        )


if __name__ == '__main__':
    unittest.main()

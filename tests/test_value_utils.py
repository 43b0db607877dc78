"""
Test suite for utils.value_utils
"""

import unittest
from datetime import date

from utils.value_utils import (
    parse_compact_number, normalize_numeric_value, get_numeric_bounds,
    get_unique_string_values, format_number, format_date, parse_date_input
)

ROWS = [
    {'population': '1,200', 'name': 'Alpha', 'updated': '2024-01-01'},
    {'population': '850', 'name': 'Beta', 'updated': '2024-02-15'},
    {'population': '1.5K', 'name': 'Alpha', 'updated': '2024-02-15'},
]


class TestNumericParsing(unittest.TestCase):

    def test_parse_compact_number(self):
        self.assertEqual(parse_compact_number('1.5K'), 1500.0)
        self.assertEqual(parse_compact_number('2m'), 2_000_000.0)
        self.assertEqual(parse_compact_number('3B'), 3_000_000_000.0)
        self.assertIsNone(parse_compact_number('1.5'))
        self.assertIsNone(parse_compact_number('K'))

    def test_normalize_numeric_value(self):
        self.assertEqual(normalize_numeric_value('$1,200.50'), 1200.5)
        self.assertEqual(normalize_numeric_value(' 45% '), 45.0)
        self.assertEqual(normalize_numeric_value('12abc'), 12.0)
        self.assertEqual(normalize_numeric_value(7), 7)
        self.assertIsNone(normalize_numeric_value('n/a'))
        self.assertIsNone(normalize_numeric_value(''))
        self.assertIsNone(normalize_numeric_value(None))
        self.assertIsNone(normalize_numeric_value(float('inf')))
        self.assertIsNone(normalize_numeric_value(True))


class TestColumnHelpers(unittest.TestCase):

    def test_numeric_bounds_from_numeric_like_strings(self):
        self.assertEqual(get_numeric_bounds(ROWS, 'population'), {'min': 850, 'max': 1500})

    def test_numeric_bounds_fallback(self):
        self.assertEqual(get_numeric_bounds([], 'population'), {'min': 0, 'max': 100})
        self.assertEqual(get_numeric_bounds(ROWS, ''), {'min': 0, 'max': 100})
        self.assertEqual(get_numeric_bounds(ROWS, 'name'), {'min': 0, 'max': 100})

    def test_unique_string_values_sorted(self):
        self.assertEqual(get_unique_string_values(ROWS, 'name'), ['Alpha', 'Beta'])

    def test_unique_string_values_skip_blanks(self):
        rows = [{'a': ' x '}, {'a': ''}, {'a': None}, {}]
        self.assertEqual(get_unique_string_values(rows, 'a'), ['x'])


class TestFormatNumber(unittest.TestCase):

    def test_currency(self):
        self.assertEqual(format_number('1234.5', 'currency'), '$1,234.50')
        self.assertEqual(format_number(-5, 'currency'), '-$5.00')

    def test_presets(self):
        cases = [
            ('1234567.891', 'comma', '1,234,567.891'),
            ('2500', 'compact', '2.5K'),
            (2500000, 'compact', '2.5M'),
            (999, 'compact', '999'),
            ('0.256', 'percent', '26%'),
            (2.5, '0-decimals', '3'),
            ('3.14159', '1-decimal', '3.1'),
            ('1000', '2-decimals', '1,000.00'),
            ('1,200', 'raw', '1200'),
        ]
        for value, fmt, expected in cases:
            with self.subTest(value=value, fmt=fmt):
                self.assertEqual(format_number(value, fmt), expected)

    def test_non_numeric_passes_through(self):
        self.assertEqual(format_number('abc', 'comma'), 'abc')


class TestFormatDate(unittest.TestCase):

    def test_iso_string_with_preset(self):
        self.assertEqual(format_date('2024-06-01', 'mm/dd/yyyy'), '6/1/2024')

    def test_presets(self):
        cases = [
            ('yyyy-mm-dd', '2024-06-01'),
            ('dd/mm/yyyy', '01/06/2024'),
            ('mmm-dd-yyyy', 'Jun 01, 2024'),
            ('mmmm-dd-yyyy', 'June 01, 2024'),
            ('dd-mmm-yyyy', '01 Jun 2024'),
            ('yyyy', '2024'),
            ('mmm-yyyy', 'Jun 2024'),
            ('mm/dd/yy', '6/1/24'),
            ('dd/mm/yy', '01/06/24'),
        ]
        for fmt, expected in cases:
            with self.subTest(fmt=fmt):
                self.assertEqual(format_date('2024-06-01', fmt), expected)

    def test_native_date(self):
        self.assertEqual(format_date(date(2023, 12, 25), 'mmm-yyyy'), 'Dec 2023')

    def test_blank_and_unparseable(self):
        self.assertEqual(format_date('', 'yyyy'), '')
        self.assertEqual(format_date(None, 'yyyy'), '')
        self.assertEqual(format_date('not a date', 'yyyy'), 'not a date')

    def test_parse_date_input(self):
        self.assertEqual(parse_date_input('2024-02-01'), date(2024, 2, 1))
        self.assertIsNone(parse_date_input('2024-02-30'))
        self.assertIsNone(parse_date_input('   '))
        self.assertIsNone(parse_date_input(42))


if __name__ == '__main__':
    unittest.main()

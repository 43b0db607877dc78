"""
Test suite for core.type_inference
"""

import unittest
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction

from core.type_inference import (
    looks_numeric, classify_value, infer_column_types, merge_inferred_types
)


class TestLooksNumeric(unittest.TestCase):

    def test_accepted_forms(self):
        for text in ('5', ' 12 ', '-3.5', '.5', '1e3', '0x1F', '0b101', 'Infinity', ''):
            with self.subTest(text=text):
                self.assertTrue(looks_numeric(text))

    def test_rejected_forms(self):
        for text in ('1,000', '$5', '12abc', 'nan', '1_000', 'abc'):
            with self.subTest(text=text):
                self.assertFalse(looks_numeric(text))


class TestClassifyValue(unittest.TestCase):

    def test_native_values(self):
        self.assertEqual(classify_value(5), 'number')
        self.assertEqual(classify_value(2.5), 'number')
        self.assertEqual(classify_value(date(2024, 1, 1)), 'date')
        self.assertEqual(classify_value(datetime(2024, 1, 1, 12)), 'date')
        self.assertEqual(classify_value(True), 'text')
        self.assertEqual(classify_value([1, 2]), 'text')

    def test_other_numeric_types(self):
        self.assertEqual(classify_value(Decimal('1.5')), 'number')
        self.assertEqual(classify_value(Fraction(1, 3)), 'number')
        self.assertEqual(classify_value(False), 'text')

    def test_state_keyword_outranks_country_keyword(self):
        self.assertEqual(classify_value('Nation State'), 'state')

    def test_keywords_are_case_insensitive(self):
        self.assertEqual(classify_value('PROVINCE of Ontario'), 'state')
        self.assertEqual(classify_value('Home Country'), 'country')

    def test_substring_match_on_names(self):
        """'United States' contains 'state' and is classified as a state."""
        self.assertEqual(classify_value('United States'), 'state')

    def test_numeric_and_text(self):
        self.assertEqual(classify_value('42'), 'number')
        self.assertEqual(classify_value('hello'), 'text')


class TestInferColumnTypes(unittest.TestCase):

    def test_first_value_locks_type(self):
        rows = [{'col': '5'}, {'col': 'hello'}]
        self.assertEqual(infer_column_types(rows), {'col': 'number'})

    def test_columns_first_seen_in_later_rows(self):
        rows = [{'a': '1'}, {'a': 'x', 'b': 'Texas'}]
        self.assertEqual(infer_column_types(rows), {'a': 'number', 'b': 'text'})

    def test_none_values_do_not_lock(self):
        rows = [{'c': None}, {'c': 'abc'}]
        self.assertEqual(infer_column_types(rows), {'c': 'text'})

    def test_empty_rows(self):
        self.assertEqual(infer_column_types([]), {})


class TestMergeInferredTypes(unittest.TestCase):

    def test_prefers_existing_entries(self):
        merged = merge_inferred_types(
            {'population': 'number', 'state': 'state'},
            {'population': 'text', 'region': 'text'}
        )
        self.assertEqual(merged, {'population': 'number', 'state': 'state', 'region': 'text'})

    def test_inputs_not_modified(self):
        existing = {'a': 'number'}
        inferred = {'a': 'text', 'b': 'date'}
        merge_inferred_types(existing, inferred)

        self.assertEqual(existing, {'a': 'number'})
        self.assertEqual(inferred, {'a': 'text', 'b': 'date'})


if __name__ == '__main__':
    unittest.main()

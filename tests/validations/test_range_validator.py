"""Unit tests for the range validator."""
import unittest

from field_rules import Mode, RangeValidator, TypeMismatchError, normalize_range
from field_rules.range_validator import parse_number


class TestTextRange(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = RangeValidator()

    def test_length_within_bounds_is_valid(self) -> None:
        config = normalize_range({"mode": "text", "min_range": 3, "max_range": 10})
        self.assertTrue(self.validator.evaluate("hello", config).valid)

    def test_length_below_min_is_invalid(self) -> None:
        config = normalize_range({"mode": "text", "min_range": 3})
        result = self.validator.evaluate("ab", config)
        self.assertFalse(result.valid)
        self.assertIn("minimum", result.reason)

    def test_bounds_are_inclusive(self) -> None:
        config = normalize_range({"min_range": 3, "max_range": 5})
        self.assertTrue(self.validator.evaluate("abc", config).valid)
        self.assertTrue(self.validator.evaluate("abcde", config).valid)
        self.assertFalse(self.validator.evaluate("abcdef", config).valid)

    def test_only_max_bound(self) -> None:
        config = normalize_range({"max_range": 2})
        self.assertTrue(self.validator.evaluate("", config).valid)
        self.assertFalse(self.validator.evaluate("abc", config).valid)

    def test_digits_are_counted_not_parsed(self) -> None:
        config = normalize_range({"mode": Mode.TEXT, "max_range": 3})
        self.assertTrue(self.validator.evaluate("999", config).valid)

    def test_non_string_raises_type_mismatch(self) -> None:
        config = normalize_range({"mode": "text", "min_range": 1})
        with self.assertRaises(TypeMismatchError):
            self.validator.evaluate(12345, config)
        with self.assertRaises(TypeMismatchError):
            self.validator.evaluate(None, config)


class TestNumberRange(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = RangeValidator()
        self.config = normalize_range({"mode": "number", "min_range": 0, "max_range": 100})

    def test_inside_range_is_valid(self) -> None:
        self.assertTrue(self.validator.evaluate(42, self.config).valid)

    def test_above_range_is_invalid(self) -> None:
        result = self.validator.evaluate(150, self.config)
        self.assertFalse(result.valid)
        self.assertIn("maximum", result.reason)

    def test_floats_and_numeric_text(self) -> None:
        self.assertTrue(self.validator.evaluate(99.5, self.config).valid)
        self.assertFalse(self.validator.evaluate(100.01, self.config).valid)
        self.assertTrue(self.validator.evaluate(" 42 ", self.config).valid)
        self.assertFalse(self.validator.evaluate("-0.5", self.config).valid)

    def test_non_numeric_text_raises_type_mismatch(self) -> None:
        config = normalize_range({"mode": "number", "min_range": 0})
        with self.assertRaises(TypeMismatchError):
            self.validator.evaluate("abc", config)

    def test_empty_and_odd_values_raise_type_mismatch(self) -> None:
        for value in ("", "1_000", "nan", "inf", True, None, [1]):
            with self.subTest(value=value):
                with self.assertRaises(TypeMismatchError):
                    self.validator.evaluate(value, self.config)

    def test_parse_number_keeps_ints(self) -> None:
        self.assertEqual(parse_number("7"), 7)
        self.assertIsInstance(parse_number("7"), int)
        self.assertEqual(parse_number("7.25"), 7.25)


class TestRangeResult(unittest.TestCase):
    def test_result_carries_message_and_group(self) -> None:
        config = normalize_range({"min_range": 1, "message_id": "msg", "group_id": "grp"})
        result = RangeValidator().evaluate("", config)
        self.assertEqual(result.message_id, "msg")
        self.assertEqual(result.group_id, "grp")
        self.assertIsNone(result.failed_index)

    def test_evaluate_is_repeatable(self) -> None:
        config = normalize_range({"mode": "number", "min_range": 0, "max_range": 10})
        validator = RangeValidator()
        self.assertEqual(validator.evaluate("11", config), validator.evaluate("11", config))
        self.assertEqual(validator.evaluate(5, config), validator.evaluate(5, config))


if __name__ == "__main__":
    unittest.main()

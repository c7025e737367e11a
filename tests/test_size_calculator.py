"""Tests for size calculator utilities."""

import json

import pytest

from json_compressor.utils.size_calculator import SizeCalculator


class TestSizeCalculator:
    """Tests for SizeCalculator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.calculator = SizeCalculator()

    @pytest.mark.parametrize("text,expected", [
        ("", 0),
        (None, 0),
        ("abc", 3),
        ("ä", 2),
        ("世界", 6),
        ("🌍", 4),
    ])
    def test_calculate_byte_size(self, text, expected):
        assert self.calculator.calculate_byte_size(text) == expected

    def test_calculate_json_size_simple(self):
        data = {"key": "value", "number": 42}
        expected_size = len(json.dumps(data, separators=(',', ':')).encode('utf-8'))

        assert self.calculator.calculate_json_size(data) == expected_size

    def test_calculate_json_size_unicode(self):
        data = {"message": "Hello 世界"}
        expected_size = len(json.dumps(data, ensure_ascii=False, separators=(',', ':')).encode('utf-8'))

        assert self.calculator.calculate_json_size(data) == expected_size

    def test_calculate_json_size_non_serializable(self):
        class NonSerializable:
            pass

        with pytest.raises(ValueError, match="not JSON serializable"):
            self.calculator.calculate_json_size({"invalid": NonSerializable()})

    def test_calculate_formatted_json_size(self):
        data = {"key": "value", "nested": {"inner": "data"}}

        compact_size = self.calculator.calculate_json_size(data)
        formatted_size = self.calculator.calculate_formatted_json_size(data, indent=2)

        assert formatted_size > compact_size

    def test_calculate_reduction(self):
        assert self.calculator.calculate_reduction(200, 50) == pytest.approx(75.0)
        assert self.calculator.calculate_reduction(100, 150) == pytest.approx(-50.0)

    @pytest.mark.parametrize("original,result", [(0, 10), (10, 0), (0, 0)])
    def test_calculate_reduction_without_sizes(self, original, result):
        assert self.calculator.calculate_reduction(original, result) is None

    def test_format_reduction(self):
        assert self.calculator.format_reduction(300, 100) == "66.67% reduction"
        assert self.calculator.format_reduction(0, 100) == "N/A"

    @pytest.mark.parametrize("size,expected", [
        (512, "512 B"),
        (1536, "1.5 KB"),
        (3 * 1024 * 1024, "3.0 MB"),
    ])
    def test_format_size(self, size, expected):
        assert SizeCalculator.format_size(size) == expected

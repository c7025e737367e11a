"""Size calculation utilities for input and output texts."""

import json
import logging
from typing import Any, Optional


class SizeCalculator:
    """
    Utility class for byte sizes of texts and JSON values.

    All sizes are UTF-8 byte counts, matching what a file holding the text
    would occupy on disk.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the size calculator.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def calculate_byte_size(self, text: Optional[str]) -> int:
        """
        Calculate the UTF-8 encoded length of a text.

        Args:
            text: Text to measure

        Returns:
            Size in bytes, 0 for empty or missing text
        """
        if not text:
            return 0
        return len(text.encode('utf-8', errors='surrogatepass'))

    def calculate_json_size(self, data: Any) -> int:
        """
        Calculate the size of data when serialized to compact JSON in UTF-8 bytes.

        Raises:
            ValueError: If data is not JSON serializable
        """
        try:
            json_string = json.dumps(data, ensure_ascii=False, separators=(',', ':'))
            return self.calculate_byte_size(json_string)
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Data is not JSON serializable: {str(e)}")

    def calculate_formatted_json_size(self, data: Any, indent: int = 2) -> int:
        """
        Calculate the size of data when serialized to formatted JSON.

        Args:
            data: Data to calculate size for
            indent: Indentation level for formatting

        Returns:
            Size in bytes
        """
        try:
            json_string = json.dumps(data, ensure_ascii=False, indent=indent)
            return self.calculate_byte_size(json_string)
        except (TypeError, ValueError, RecursionError) as e:
            raise ValueError(f"Data is not JSON serializable: {str(e)}")

    def calculate_reduction(self, original_size: int, result_size: int) -> Optional[float]:
        """
        Calculate the size reduction in percent.

        Returns:
            Percentage saved (negative when the result is larger), or None
            when either size is zero
        """
        if original_size <= 0 or result_size <= 0:
            return None
        return (1 - result_size / original_size) * 100

    def format_reduction(self, original_size: int, result_size: int) -> str:
        """Format the reduction as ``"xx.xx% reduction"`` or ``"N/A"``."""
        reduction = self.calculate_reduction(original_size, result_size)
        if reduction is None:
            return "N/A"
        return f"{reduction:.2f}% reduction"

    @staticmethod
    def format_size(size: int) -> str:
        """Human-readable size, e.g. ``"512 B"`` or ``"1.5 KB"``."""
        if size < 1024:
            return f"{size} B"
        if size < 1024 * 1024:
            return f"{size / 1024:.1f} KB"
        return f"{size / 1024 / 1024:.1f} MB"

"""JSON parser and serializer used by the classifier and the transform engine."""

import json
import logging
from typing import Any, Dict, Optional


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON value: {name}")


class JSONParser:
    """
    Strict JSON parser with compact and pretty serialization.

    Parsing follows the standard JSON grammar: the non-standard constants
    ``NaN``, ``Infinity`` and ``-Infinity`` that :mod:`json` accepts by default
    are rejected.
    """

    PRETTY_INDENT = 2

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: str) -> Any:
        """
        Parse a JSON string.

        Args:
            json_string: JSON string to parse

        Returns:
            Parsed value

        Raises:
            ValueError: If the text is not valid JSON
        """
        try:
            return json.loads(json_string, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}")
        except RecursionError:
            raise ValueError("JSON parsing failed: nesting too deep")

    def try_parse(self, json_string: str) -> Optional[Any]:
        """Parse a JSON string, returning None instead of raising."""
        try:
            return self.parse(json_string)
        except ValueError as e:
            self.logger.debug(f"Not valid JSON: {e}")
            return None

    def is_valid(self, json_string: str) -> bool:
        try:
            self.parse(json_string)
        except ValueError:
            return False
        return True

    @staticmethod
    def is_composite(data: Any) -> bool:
        """Return True for objects and arrays, False for bare scalars."""
        return isinstance(data, (dict, list))

    def serialize_compact(self, data: Any) -> str:
        """Serialize without inserted whitespace."""
        return json.dumps(data, ensure_ascii=False, separators=(',', ':'))

    def serialize_pretty(self, data: Any) -> str:
        """Serialize with stable 2-space indentation."""
        return json.dumps(data, ensure_ascii=False, indent=self.PRETTY_INDENT)

    def get_structure_statistics(self, data: Any) -> Dict[str, Any]:
        """
        Get statistics about a parsed value.

        Args:
            data: Parsed data to analyze

        Returns:
            Dictionary with structure statistics
        """
        stats = {
            "max_depth": self._calculate_nesting_depth(data),
            "dict_count": 0,
            "list_count": 0,
            "primitive_count": 0,
            "total_keys": 0,
            "total_items": 0,
        }
        self._count_elements(data, stats)
        return stats

    def _calculate_nesting_depth(self, data: Any, current_depth: int = 0) -> int:
        """Calculate maximum nesting depth of data structure."""
        if not isinstance(data, (dict, list)):
            return current_depth

        children = data.values() if isinstance(data, dict) else data
        max_child_depth = current_depth + 1
        for child in children:
            max_child_depth = max(max_child_depth, self._calculate_nesting_depth(child, current_depth + 1))

        return max_child_depth

    def _count_elements(self, data: Any, stats: Dict[str, Any]) -> None:
        """Recursively count different types of elements."""
        if isinstance(data, dict):
            stats["dict_count"] += 1
            stats["total_keys"] += len(data)

            for value in data.values():
                self._count_elements(value, stats)

        elif isinstance(data, list):
            stats["list_count"] += 1
            stats["total_items"] += len(data)

            for item in data:
                self._count_elements(item, stats)

        else:
            stats["primitive_count"] += 1

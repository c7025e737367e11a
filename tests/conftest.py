"""Pytest configuration and fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from json_compressor.config import CompressorConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def inline_config(temp_dir):
    """Config with defaults, inline execution and no config file."""
    config = CompressorConfig(temp_dir / "missing.config.json")
    config.set('execution', 'use_worker', False)
    return config


@pytest.fixture
def sample_dict_json():
    """Sample nested dictionary for testing."""
    return {
        "users": {
            "user1": {
                "name": "Alice",
                "email": "alice@example.com",
                "profile": {
                    "age": 30,
                    "city": "New York"
                }
            },
            "user2": {
                "name": "Bob",
                "email": "bob@example.com",
                "profile": {
                    "age": 25,
                    "city": "San Francisco"
                }
            }
        },
        "settings": {
            "theme": "dark",
            "notifications": True
        }
    }


@pytest.fixture
def sample_list_json():
    """Sample list JSON for testing."""
    return [
        {"id": 1, "name": "Item 1", "value": 100},
        {"id": 2, "name": "Item 2", "value": 200},
        {"id": 3, "name": "Item 3", "value": 300},
    ]


@pytest.fixture
def sample_mixed_json():
    """Sample mixed structure JSON with unicode and special values."""
    return {
        "metadata": {
            "version": "1.0",
            "created": "2024-01-01",
            "title": "Grüße aus Köln ✓"
        },
        "data": [
            {"type": "A", "values": [1, 2.5, -3]},
            {"type": "B", "values": [], "extra": None},
        ],
        "flags": [True, False],
        "empty": {}
    }


@pytest.fixture
def large_json_data():
    """Generate large JSON data for size testing."""
    data = {}
    for i in range(50):
        data[f"section_{i}"] = {
            f"item_{j}": f"value_{j}_" + "x" * 50
            for j in range(20)
        }
    return data


@pytest.fixture
def scenario_json_text():
    """The reference document used throughout the round-trip scenarios."""
    return '{"a":1,"b":[2,3]}'


@pytest.fixture
def sample_json_texts(sample_dict_json, sample_list_json, sample_mixed_json):
    """Serialized sample documents."""
    return [
        json.dumps(sample_dict_json),
        json.dumps(sample_list_json, indent=4),
        json.dumps(sample_mixed_json, ensure_ascii=False),
    ]

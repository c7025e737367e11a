"""
JSON Compressor configuration.

Defaults merged with an optional JSON config file. Load once at startup and
pass to the components that need it.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .utils.validation import ValidationUtils

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "json_compressor.config.json"

# Default config values
DEFAULTS: Dict[str, Any] = {
    "execution": {
        "use_worker": True,
        "worker_backend": "thread",
        "worker_join_timeout": 1.0
    },
    "logging": {
        "level": "INFO"
    }
}


class CompressorConfig:
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self._config = copy.deepcopy(DEFAULTS)

        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.cwd() / CONFIG_FILENAME

        if self.config_path.exists():
            self._load()
        else:
            logger.debug(f"No config file found at {self.config_path}, using defaults")

    def _load(self):
        """Load and merge config file over defaults"""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                user_config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}, using defaults")
            return
        except OSError as e:
            logger.error(f"Failed to read config: {e}, using defaults")
            return

        if not isinstance(user_config, dict):
            logger.error(f"Config file {self.config_path} must hold a JSON object, using defaults")
            return

        merged = copy.deepcopy(self._config)
        self._deep_merge(merged, user_config)

        execution = merged.get("execution", {})
        validation = ValidationUtils.validate_worker_settings(
            execution.get("worker_backend"), execution.get("worker_join_timeout")
        )
        for warning in validation.warnings:
            logger.warning(warning)
        if not validation.is_valid:
            for error in validation.errors:
                logger.error(f"Invalid config value at {error.location}: {error.message}")
            logger.error("Ignoring config file, using defaults")
            return

        self._config = merged
        logger.info(f"Loaded config from {self.config_path}")

    def save(self, path: Optional[Union[str, Path]] = None):
        """Save current config to file"""
        out_path = Path(path) if path else self.config_path
        with open(out_path, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2)
        logger.info(f"Config saved to {out_path}")

    def get(self, *keys, default=None):
        """
        Get a nested config value by key path.
        e.g. config.get('execution', 'worker_backend')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, *keys_and_value):
        """
        Set a nested config value.
        e.g. config.set('execution', 'use_worker', False)
        """
        *keys, value = keys_and_value
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    def as_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    # ── Convenience properties ─────────────────────────────────────────────

    @property
    def use_worker(self) -> bool:
        return bool(self.get('execution', 'use_worker', default=True))

    @property
    def worker_backend(self) -> str:
        return self.get('execution', 'worker_backend', default='thread')

    @property
    def worker_join_timeout(self) -> float:
        return float(self.get('execution', 'worker_join_timeout', default=1.0))

    @property
    def log_level(self) -> str:
        return str(self.get('logging', 'level', default='INFO')).upper()

    # ── Helpers ────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: dict, override: dict):
        """Merge override into base recursively, modifying base in place"""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                CompressorConfig._deep_merge(base[key], value)
            else:
                base[key] = value


__all__ = ["CompressorConfig", "DEFAULTS", "CONFIG_FILENAME"]

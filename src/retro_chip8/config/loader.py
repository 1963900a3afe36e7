import logging
from dataclasses import fields
from typing import Any, Dict

import yaml

from retro_chip8.core.errors import ConfigError
from .models import QuirkConfig, SystemConfig, TimingConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            config = self._parse_config(self._safe_load(f))
        logger.info("Loaded configuration from %s: %s", path, config)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(self._safe_load(text))

    def _safe_load(self, stream) -> Dict[str, Any]:
        try:
            return yaml.safe_load(stream) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML: {e}") from e

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"'{name}' section must be a mapping, got {type(section).__name__}")
        return section

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}")

        quirks = self._parse_quirks(self._section(data, "quirks"))

        timing_data = self._section(data, "timing")
        defaults = TimingConfig()
        timing = TimingConfig(
            instructions_per_second=self._parse_int(
                timing_data.get("instructions_per_second", defaults.instructions_per_second)),
            timer_hz=self._parse_int(timing_data.get("timer_hz", defaults.timer_hz)),
        )
        if timing.instructions_per_second <= 0 or timing.timer_hz <= 0:
            raise ConfigError("Timing rates must be positive integers.")

        seed = data.get("seed")
        return SystemConfig(
            quirks=quirks,
            timing=timing,
            seed=self._parse_int(seed) if seed is not None else None,
        )

    # @intent:responsibility Quirk設定を解析します。未知のキーは設定ミスとして拒否します。
    def _parse_quirks(self, quirk_data: Dict[str, Any]) -> QuirkConfig:
        known = {f.name for f in fields(QuirkConfig)}
        unknown = set(quirk_data) - known
        if unknown:
            raise ConfigError(f"Unknown quirk(s): {', '.join(sorted(unknown))}")
        for name, value in quirk_data.items():
            if not isinstance(value, bool):
                raise ConfigError(f"Quirk '{name}' must be a boolean, got {value!r}")
        return QuirkConfig(**quirk_data)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                raise ConfigError(f"Invalid integer format: {value}") from None
        raise ConfigError(f"Invalid integer format: {value}")

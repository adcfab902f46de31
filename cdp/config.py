"""Codec configuration with defaults, loadable from YAML."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass
class CodecConfig:
    strict_symbols: bool = True  # False accepts 00/11 as 01


@dataclass
class SelfTestConfig:
    size: int = 4096
    seed: int | None = None


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class CdpConfig:
    codec: CodecConfig = field(default_factory=CodecConfig)
    selftest: SelfTestConfig = field(default_factory=SelfTestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | Path | None = None) -> CdpConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        return CdpConfig()

    path = Path(path)
    if not path.exists():
        log.warning("config file not found: %s, using defaults", path)
        return CdpConfig()

    try:
        import yaml  # type: ignore[import-untyped]

        with open(path) as f:
            raw = yaml.safe_load(f) or {}

        cfg = CdpConfig()
        for section_name in ("codec", "selftest", "logging"):
            if section_name in raw:
                section = getattr(cfg, section_name)
                for k, v in raw[section_name].items():
                    if hasattr(section, k):
                        setattr(section, k, v)
                    else:
                        log.warning("unknown config key %s.%s", section_name, k)

        log.info("config loaded from %s", path)
        return cfg
    except Exception as e:
        log.warning("config load error: %s, using defaults", e)
        return CdpConfig()

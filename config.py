"""Environment-driven defaults for the prayer times service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

__all__ = ["Settings", "load_settings"]


@dataclass(frozen=True)
class Settings:
    method: str = "Tehran"
    asr_method: str = "Standard"
    high_latitude_rule: str = "NightMiddle"
    time_format: str = "24h"
    log_level: int = logging.INFO


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read ``PRAYTIMES_*`` variables, falling back to the built-in defaults."""

    env = os.environ if environ is None else environ
    defaults = Settings()
    level_name = env.get("PRAYTIMES_LOG_LEVEL", "").strip().upper()
    log_level = logging.getLevelName(level_name) if level_name else defaults.log_level
    if not isinstance(log_level, int):
        log_level = defaults.log_level
    return Settings(
        method=env.get("PRAYTIMES_METHOD") or defaults.method,
        asr_method=env.get("PRAYTIMES_ASR_METHOD") or defaults.asr_method,
        high_latitude_rule=env.get("PRAYTIMES_HIGH_LATITUDE_RULE") or defaults.high_latitude_rule,
        time_format=env.get("PRAYTIMES_TIME_FORMAT") or defaults.time_format,
        log_level=log_level,
    )

"""
Runtime settings read from the environment.

Environment Variables:
    SHELLTABLE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    SHELLTABLE_LOG_FORMAT: Log format (json, text) - default: json
    SHELLTABLE_DELIMITER: Delimiter for delimited input/output - default: ","
    SHELLTABLE_NULL_TEXT: Text stored for NULL query results - default: ""

Malformed values fall back to their defaults.
"""

import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "json"
    delimiter: str = ","
    null_text: str = ""

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("SHELLTABLE_LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            log_level = "INFO"

        log_format = os.getenv("SHELLTABLE_LOG_FORMAT", "json").lower()
        if log_format not in LOG_FORMATS:
            log_format = "json"

        delimiter = os.getenv("SHELLTABLE_DELIMITER") or ","

        return Settings(
            log_level=log_level,
            log_format=log_format,
            delimiter=delimiter[0],
            null_text=os.getenv("SHELLTABLE_NULL_TEXT", ""),
        )

"""
Centralized configuration for winmail_parser
All configurable values consolidated in one place, overridable from the environment
"""

import os
from typing import Any, Dict


def _split_env(name: str, default: str):
    return [item.strip().lower() for item in os.getenv(name, default).split(",") if item.strip()]


class WinmailParserConfig:
    """Configuration management with environment variable override support"""

    def __init__(self):
        # Input limits
        self.MAX_FILE_SIZE_MB = int(os.getenv('WP_MAX_FILE_SIZE_MB', 50))

        # Output
        self.BODY_PREVIEW_CHARS = int(os.getenv('WP_BODY_PREVIEW_CHARS', 500))
        self.DEFAULT_INCLUDE_DATA = os.getenv('WP_DEFAULT_INCLUDE_DATA', 'false').lower() == 'true'

        # Logging
        self.VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
        self.DEFAULT_LOG_LEVEL = os.getenv('WP_DEFAULT_LOG_LEVEL', 'WARNING').upper()

        # File names and extensions that usually carry TNEF
        self.TNEF_FILENAMES = _split_env('WP_TNEF_FILENAMES', 'winmail.dat,win.dat')
        self.TNEF_EXTENSIONS = _split_env('WP_TNEF_EXTENSIONS', '.tnef,.dat')

    @property
    def max_file_size_bytes(self) -> int:
        return self.MAX_FILE_SIZE_MB * 1024 * 1024

    def get_config_dict(self) -> Dict[str, Any]:
        """Get all configuration values as a dictionary"""
        return {
            'max_file_size_mb': self.MAX_FILE_SIZE_MB,
            'body_preview_chars': self.BODY_PREVIEW_CHARS,
            'default_include_data': self.DEFAULT_INCLUDE_DATA,
            'valid_log_levels': self.VALID_LOG_LEVELS,
            'default_log_level': self.DEFAULT_LOG_LEVEL,
            'tnef_filenames': self.TNEF_FILENAMES,
            'tnef_extensions': self.TNEF_EXTENSIONS,
        }


# Create a singleton instance
config = WinmailParserConfig()

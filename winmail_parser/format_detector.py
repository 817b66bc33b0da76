from __future__ import annotations

import logging
import os
import struct
from typing import Optional, Tuple

from .config import config
from .constants import TNEF_SIGNATURE


class TnefFormatDetector:
    """Detect TNEF content using the magic number and file name hints."""

    MAGIC_SIGNATURE = struct.pack("<I", TNEF_SIGNATURE)

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def detect_by_magic_bytes(self, data: bytes) -> bool:
        return len(data) >= 4 and data.startswith(self.MAGIC_SIGNATURE)

    def detect_by_filename(self, filename: str | None) -> bool:
        if not filename:
            return False
        lower = os.path.basename(filename).lower()
        if lower in config.TNEF_FILENAMES:
            return True
        return os.path.splitext(lower)[1] in config.TNEF_EXTENSIONS

    def detect_format(self, data: bytes, filename: str | None = None) -> Tuple[bool, float]:
        if self.detect_by_magic_bytes(data):
            return True, 0.95
        if self.detect_by_filename(filename):
            self.logger.debug(f"{filename} looks like TNEF by name but lacks the signature")
            return False, 0.3
        return False, 0.0

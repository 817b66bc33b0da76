# ============================================================================
# winmail_parser/interfaces.py
# ============================================================================

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple


class ContainerFormatParser(ABC):
    """Interface for format-specific container decoders."""

    @abstractmethod
    def can_parse(self, data: bytes, filename: Optional[str] = None) -> Tuple[bool, float]:
        """Check if this parser can handle the data. Returns (can_parse, confidence)."""
        pass

    @abstractmethod
    def parse(self, data: bytes, filename: Optional[str] = None) -> Any:
        """Decode the data into a result object."""
        pass

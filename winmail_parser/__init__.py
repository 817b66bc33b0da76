# ============================================================================
# winmail_parser/__init__.py - Factory and DI setup
# ============================================================================

import logging
import sys

from .converters import HtmlToTextConverter
from .exceptions import TnefError, TnefSignatureError, UnexpectedEndError
from .format_detector import TnefFormatDetector
from .models import TnefAttachment, TnefParseResult
from .parser import WinmailParser, decode_tnef
from .parsers.mapi_decoder import MapiPropertyDecoder
from .parsers.tnef_parser import TnefFormatParser

__version__ = "0.1.0"

__all__ = [
    "create_tnef_parser",
    "decode_tnef",
    "WinmailParser",
    "TnefFormatParser",
    "TnefParseResult",
    "TnefAttachment",
    "TnefError",
    "TnefSignatureError",
    "UnexpectedEndError",
]


def create_tnef_parser(log_level: int = logging.INFO) -> WinmailParser:
    """Factory function to create a fully configured WinmailParser."""
    # Setup logging
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logger = logging.getLogger(__name__)

    # Create dependencies
    format_detector = TnefFormatDetector(logger)
    mapi_decoder = MapiPropertyDecoder(logger)
    format_parser = TnefFormatParser(logger, mapi_decoder, format_detector)
    html_converter = HtmlToTextConverter(logger)

    return WinmailParser(format_parser, html_converter, logger)

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from .config import config
from .converters import HtmlToTextConverter
from .error_handler import ErrorHandler
from .exceptions import TnefSignatureError
from .models import TnefParseResult
from .parsers.tnef_parser import TnefFormatParser


def decode_tnef(data: bytes, logger: Optional[logging.Logger] = None) -> TnefParseResult:
    """Decode a TNEF buffer into a ``TnefParseResult``.

    Raises ``TnefSignatureError`` when the data is not a TNEF container.
    """
    return TnefFormatParser(logger).parse(data)


class WinmailParser:
    """High level API for decoding winmail.dat files into plain dictionaries."""

    def __init__(self, format_parser: Optional[TnefFormatParser] = None,
                 html_converter: Optional[HtmlToTextConverter] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.format_parser = format_parser or TnefFormatParser(self.logger)
        self.html_converter = html_converter or HtmlToTextConverter(self.logger)

    # ------------------------------------------------------------------
    def parse(self, input_data: Union[str, bytes], filename: str | None = None,
              include_data: bool = False) -> Dict[str, Any]:
        return self.decode(input_data, filename, include_data)[1]

    def decode(self, input_data: Union[str, bytes], filename: str | None = None,
               include_data: bool = False) -> Tuple[Optional[TnefParseResult], Dict[str, Any]]:
        """Decode and summarize; the result object is None when decoding failed."""
        if isinstance(input_data, str):
            try:
                data_bytes = input_data.encode("latin-1")
            except UnicodeEncodeError as e:
                return None, ErrorHandler.handle_invalid_input_error(str(e), filename)
        else:
            data_bytes = input_data

        if not data_bytes:
            return None, ErrorHandler.handle_empty_input_error(filename)
        if len(data_bytes) > config.max_file_size_bytes:
            return None, ErrorHandler.handle_file_size_error(
                len(data_bytes), config.max_file_size_bytes, filename
            )

        _, confidence = self.format_parser.can_parse(data_bytes, filename)
        try:
            result = self.format_parser.parse(data_bytes, filename)
        except TnefSignatureError as e:
            return None, ErrorHandler.handle_not_tnef_error(str(e), filename)
        except Exception as e:  # pragma: no cover - decoder absorbs malformed input
            self.logger.exception("Unexpected failure decoding TNEF")
            return None, ErrorHandler.handle_unexpected_error(str(e), filename)

        return result, {
            "status": "success",
            "detected_format": "tnef",
            "format_confidence": confidence,
            "source": filename,
            "codepage": result.codepage,
            "result": result.to_dict(include_data),
            "body_preview": self.body_text(result)[:config.BODY_PREVIEW_CHARS],
            "warnings": list(result.warnings),
        }

    def parse_file(self, path: Union[str, Path], include_data: bool = False) -> Dict[str, Any]:
        path = Path(path)
        return self.parse(path.read_bytes(), path.name, include_data)

    # ------------------------------------------------------------------
    def body_text(self, result: TnefParseResult) -> str:
        """Plain body, or the HTML body rendered as text when no plain body exists."""
        if result.body:
            return result.body
        return self.html_converter.convert(result.body_html)

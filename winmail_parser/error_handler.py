"""Error responses for the winmail parser facade and CLI."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class ErrorHandler:
    """Centralized error handling for TNEF decoding failures."""

    @staticmethod
    def handle_not_tnef_error(error_message: str, source: Optional[str] = None) -> Dict[str, Any]:
        """Handle input that does not carry the TNEF signature."""
        return ErrorHandler._build_error_response(
            code="NOT_TNEF",
            message="Input is not a recognized TNEF (winmail.dat) container",
            details=error_message,
            source=source,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_empty_input_error(source: Optional[str] = None) -> Dict[str, Any]:
        """Handle empty input data."""
        return ErrorHandler._build_error_response(
            code="EMPTY_INPUT",
            message="Input data is empty",
            details="No bytes were provided",
            source=source,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_invalid_input_error(error_message: str, source: Optional[str] = None) -> Dict[str, Any]:
        """Handle text input that cannot stand for raw bytes."""
        return ErrorHandler._build_error_response(
            code="INVALID_INPUT",
            message="Input text does not map onto raw bytes",
            details=error_message,
            source=source,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_file_size_error(file_size: int, max_size: int, source: Optional[str] = None) -> Dict[str, Any]:
        """Handle file size limit errors."""
        return ErrorHandler._build_error_response(
            code="FILE_TOO_LARGE",
            message="Input exceeds size limit",
            details=f"File size: {file_size} bytes, Maximum allowed: {max_size} bytes",
            source=source,
            log_level=logging.WARNING
        )

    @staticmethod
    def handle_unexpected_error(error_message: str, source: Optional[str] = None) -> Dict[str, Any]:
        """Handle unexpected internal errors."""
        return ErrorHandler._build_error_response(
            code="INTERNAL_ERROR",
            message="An unexpected error occurred during decoding",
            details=f"Internal error: {error_message}",
            source=source,
            log_level=logging.ERROR
        )

    @staticmethod
    def _build_error_response(
        code: str,
        message: str,
        details: str,
        source: Optional[str] = None,
        log_level: int = logging.ERROR
    ) -> Dict[str, Any]:
        """
        Build a standardized error response.

        Args:
            code: Error code for categorization
            message: User-friendly error message
            details: Detailed error information
            source: Input file name, if known
            log_level: Logging level for this error

        Returns:
            Standardized error response dictionary
        """
        logging.getLogger(__name__).log(
            log_level, f"{source or '<input>'} error [{code}]: {message} - {details}"
        )

        return {
            "status": "failed",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": source,
            "error": {
                "code": code,
                "message": message,
                "details": details
            },
            "troubleshooting": ErrorHandler._get_troubleshooting_info(code)
        }

    @staticmethod
    def _get_troubleshooting_info(error_code: str) -> Dict[str, Any]:
        """Get troubleshooting information for specific error codes."""
        troubleshooting_guide = {
            "NOT_TNEF": {
                "common_causes": [
                    "File is not a winmail.dat attachment",
                    "Attachment was re-encoded (base64 or quoted-printable) and not decoded",
                    "File was truncated before the first four bytes"
                ],
                "solutions": [
                    "Save the raw application/ms-tnef attachment from the mail client",
                    "Decode any transfer encoding before parsing",
                    "Check that the file starts with the bytes 78 9f 3e 22"
                ]
            },
            "EMPTY_INPUT": {
                "common_causes": ["Empty file", "Attachment body missing"],
                "solutions": ["Verify the input path", "Re-export the attachment"]
            },
            "INVALID_INPUT": {
                "common_causes": ["Binary data was decoded to text before parsing"],
                "solutions": [
                    "Pass the file contents as bytes",
                    "Read the file in binary mode"
                ]
            },
            "FILE_TOO_LARGE": {
                "common_causes": ["Very large attachments inside the container"],
                "solutions": [
                    "Raise WP_MAX_FILE_SIZE_MB",
                    "Extract attachments with another tool"
                ]
            },
            "INTERNAL_ERROR": {
                "common_causes": ["Unexpected system error", "Code bug or edge case"],
                "solutions": [
                    "Run again with --log-level DEBUG",
                    "Report the issue with a sample file if possible"
                ]
            }
        }

        return troubleshooting_guide.get(error_code, {
            "common_causes": ["Unknown error"],
            "solutions": ["Run again with --log-level DEBUG"]
        })

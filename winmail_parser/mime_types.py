# ============================================================================
# winmail_parser/mime_types.py - Extension based MIME type lookup
# ============================================================================

from typing import Dict, Optional

from .constants import DEFAULT_MIME_TYPE

EXTENSION_MIME_TYPES: Dict[str, str] = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "svg": "image/svg+xml",
    "txt": "text/plain",
    "html": "text/html",
    "htm": "text/html",
    "csv": "text/csv",
    "xml": "text/xml",
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "mp3": "audio/mpeg",
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
    "eml": "message/rfc822",
    "msg": "application/vnd.ms-outlook",
    "ics": "text/calendar",
    "vcf": "text/vcard",
}


def guess_mime_type(name: str, extension: Optional[str] = None) -> str:
    """Guess a MIME type from an explicit extension or the file name."""
    ext = extension or name.rsplit(".", 1)[-1]
    ext = ext.lower().lstrip(".")
    return EXTENSION_MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)

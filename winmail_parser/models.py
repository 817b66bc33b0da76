from __future__ import annotations

import base64
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from .constants import DEFAULT_MIME_TYPE

PropertyValue = Union[int, str, bytes, None]


@dataclass
class Attribute:
    """One top-level record of the attribute stream."""

    level: int
    attr_id: int
    payload: bytes
    length: int


@dataclass
class MapiProperty:
    prop_type: int
    prop_id: int
    value: PropertyValue = None


@dataclass
class SkippedProperty:
    prop_type: int
    prop_id: int
    reason: str

    def describe(self) -> str:
        return f"property 0x{self.prop_id:04x} (type 0x{self.prop_type:04x}): {self.reason}"


@dataclass
class MapiBlockResult:
    """Fields recovered from one MAPI property block, plus what was dropped."""

    fields: Dict[str, Any] = field(default_factory=dict)
    properties: List[MapiProperty] = field(default_factory=list)
    skipped: List[SkippedProperty] = field(default_factory=list)
    stopped_early: bool = False
    error: Optional[str] = None

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass
class AttachmentFields:
    """Accumulator for one attachment, open between two REND_DATA markers."""

    legacy_name: str = ""
    mapi_filename: str = ""
    mapi_long_filename: str = ""
    mapi_display_name: str = ""
    data: Optional[bytes] = None
    mime_type: str = DEFAULT_MIME_TYPE
    extension: str = ""
    size: int = 0

    def set_data(self, data: bytes) -> None:
        self.data = data
        self.size = len(data)


@dataclass
class TnefAttachment:
    name: str
    size: int
    data: bytes
    mime_type: str

    def to_dict(self, include_data: bool = False) -> Dict[str, Any]:
        info: Dict[str, Any] = {
            "name": self.name,
            "size": self.size,
            "mimeType": self.mime_type,
        }
        if include_data:
            info["data"] = base64.b64encode(self.data).decode("ascii")
        return info


@dataclass
class TnefParseResult:
    subject: str = ""
    sender: str = ""
    body: str = ""
    body_html: str = ""
    attachments: List[TnefAttachment] = field(default_factory=list)
    date_sent: Optional[datetime] = None
    codepage: str = ""
    warnings: List[str] = field(default_factory=list)

    def to_dict(self, include_data: bool = False) -> Dict[str, Any]:
        return {
            "subject": self.subject,
            "from": self.sender,
            "body": self.body,
            "bodyHtml": self.body_html,
            "dateSent": self.date_sent.isoformat() if self.date_sent else None,
            "attachments": [a.to_dict(include_data) for a in self.attachments],
        }

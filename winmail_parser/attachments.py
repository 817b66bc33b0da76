# ============================================================================
# winmail_parser/attachments.py - Attachment accumulation state machine
# ============================================================================

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from .constants import DEFAULT_ATTACHMENT_NAME, DEFAULT_MIME_TYPE, AttachAttr
from .cursor import decode_ansi
from .mime_types import guess_mime_type
from .models import AttachmentFields, Attribute, MapiBlockResult, TnefAttachment

if TYPE_CHECKING:
    from .parsers.mapi_decoder import MapiPropertyDecoder


class AssemblerState(Enum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


# MAPI attachment field -> accumulator attribute
MAPI_FIELD_TARGETS = {
    "long_filename": "mapi_long_filename",
    "filename": "mapi_filename",
    "display_name": "mapi_display_name",
    "mime_type": "mime_type",
    "extension": "extension",
}

# (state, attribute id) -> handler name; ids missing here are ignored
TRANSITIONS: Dict[Tuple[AssemblerState, int], str] = {
    (AssemblerState.IDLE, AttachAttr.REND_DATA): "_open",
    (AssemblerState.ACCUMULATING, AttachAttr.REND_DATA): "_flush_and_open",
    (AssemblerState.IDLE, AttachAttr.TITLE): "_ignore",
    (AssemblerState.ACCUMULATING, AttachAttr.TITLE): "_on_title",
    (AssemblerState.IDLE, AttachAttr.DATA): "_ignore",
    (AssemblerState.ACCUMULATING, AttachAttr.DATA): "_on_data",
    (AssemblerState.IDLE, AttachAttr.MAPI_PROPS): "_ignore",
    (AssemblerState.ACCUMULATING, AttachAttr.MAPI_PROPS): "_on_mapi_props",
}


def resolve_name(fields: AttachmentFields) -> str:
    """Pick the best available file name for an attachment."""
    return (
        fields.mapi_long_filename
        or fields.mapi_filename
        or fields.mapi_display_name
        or fields.legacy_name
        or DEFAULT_ATTACHMENT_NAME
    )


class AttachmentAssembler:
    """Collect attachment attributes between ``attAttachRendData`` markers.

    The assembler is either IDLE (no attachment open) or ACCUMULATING into
    one ``AttachmentFields`` record. Every REND_DATA marker closes the open
    record and starts a new one.
    """

    def __init__(self, mapi_decoder: MapiPropertyDecoder,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.mapi_decoder = mapi_decoder
        self.state = AssemblerState.IDLE
        self._current: Optional[AttachmentFields] = None
        self._collected: List[AttachmentFields] = []

    @property
    def collected(self) -> List[AttachmentFields]:
        return list(self._collected)

    # ------------------------------------------------------------------
    def handle(self, attr: Attribute, encoding: str) -> Optional[MapiBlockResult]:
        """Apply one attachment-level attribute; returns the MAPI block result if any."""
        handler_name = TRANSITIONS.get((self.state, attr.attr_id))
        if handler_name is None:
            self.logger.debug(f"Ignoring attachment attribute 0x{attr.attr_id:04x}")
            return None
        handler: Callable[[Attribute, str], Optional[MapiBlockResult]] = getattr(self, handler_name)
        return handler(attr, encoding)

    def finalize(self) -> List[TnefAttachment]:
        """Flush the open record and build the final attachment list."""
        self._flush()
        attachments = []
        for fields in self._collected:
            if not fields.data:
                self.logger.debug("Dropping attachment without data")
                continue
            name = resolve_name(fields)
            mime_type = fields.mime_type
            if mime_type == DEFAULT_MIME_TYPE:
                mime_type = guess_mime_type(name, fields.extension)
            attachments.append(TnefAttachment(
                name=name,
                size=fields.size,
                data=fields.data,
                mime_type=mime_type,
            ))
        return attachments

    # ------------------------------------------------------------------
    def _flush(self) -> None:
        if self._current is not None:
            self._collected.append(self._current)
        self._current = None
        self.state = AssemblerState.IDLE

    def _open(self, attr: Attribute, encoding: str) -> None:
        self._current = AttachmentFields()
        self.state = AssemblerState.ACCUMULATING

    def _flush_and_open(self, attr: Attribute, encoding: str) -> None:
        self._flush()
        self._open(attr, encoding)

    def _ignore(self, attr: Attribute, encoding: str) -> None:
        self.logger.debug(f"Attachment attribute 0x{attr.attr_id:04x} outside an attachment")

    def _on_title(self, attr: Attribute, encoding: str) -> None:
        self._current.legacy_name = decode_ansi(attr.payload, encoding)

    def _on_data(self, attr: Attribute, encoding: str) -> None:
        self._current.set_data(attr.payload)

    def _on_mapi_props(self, attr: Attribute, encoding: str) -> MapiBlockResult:
        block = self.mapi_decoder.decode_attachment_props(attr.payload, encoding)
        for field_name, target in MAPI_FIELD_TARGETS.items():
            value = block.get(field_name)
            if value:
                setattr(self._current, target, value)
        data = block.get("data")
        if data is not None:
            self._current.set_data(data)
        return block

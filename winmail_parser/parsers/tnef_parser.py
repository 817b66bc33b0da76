# ============================================================================
# winmail_parser/parsers/tnef_parser.py - TNEF attribute stream parser
# ============================================================================

"""
Top-level TNEF decoder.

Stream layout::

    [u32 signature 0x223e9f78][u16 legacy key]
    repeated: [u8 level][u32 type/id][u32 length][payload][u16 checksum]

Only a bad signature is fatal. A truncated attribute ends the loop and the
data collected so far is returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, Iterator, Optional, Set, Tuple

from ..attachments import AttachmentAssembler
from ..codepages import DEFAULT_ENCODING, codepage_to_encoding
from ..constants import (
    ATTRIBUTE_HEADER_SIZE,
    LVL_ATTACHMENT,
    LVL_MESSAGE,
    TNEF_SIGNATURE,
    Attr,
)
from ..cursor import ByteCursor, decode_ansi
from ..exceptions import TnefSignatureError
from ..format_detector import TnefFormatDetector
from ..interfaces import ContainerFormatParser
from ..models import Attribute, MapiBlockResult, TnefParseResult
from .mapi_decoder import MapiPropertyDecoder

# wTrpidType, cbgrtrp, cch, cb ahead of the sender string in attFrom
TRP_HEADER_SIZE = 8
DATE_STRUCT_SIZE = 14


@dataclass
class _ParseState:
    """Mutable state owned by a single parse() call."""

    assembler: AttachmentAssembler
    encoding: str = DEFAULT_ENCODING
    result: TnefParseResult = field(default_factory=TnefParseResult)
    # message slots already filled from Unicode MAPI properties
    unicode_slots: Set[str] = field(default_factory=set)


class TnefFormatParser(ContainerFormatParser):
    """Parser for TNEF (winmail.dat) containers."""

    def __init__(self, logger: Optional[logging.Logger] = None,
                 mapi_decoder: Optional[MapiPropertyDecoder] = None,
                 format_detector: Optional[TnefFormatDetector] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.mapi_decoder = mapi_decoder or MapiPropertyDecoder(self.logger)
        self.format_detector = format_detector or TnefFormatDetector(self.logger)
        self._message_handlers: Dict[int, Callable[[_ParseState, Attribute], None]] = {
            Attr.OEM_CODEPAGE: self._on_codepage,
            Attr.SUBJECT: self._on_subject,
            Attr.FROM: self._on_from,
            Attr.BODY: self._on_body,
            Attr.DATE_SENT: self._on_date_sent,
            Attr.MAPI_PROPS: self._on_message_props,
        }

    def can_parse(self, data: bytes, filename: Optional[str] = None) -> Tuple[bool, float]:
        """Check if this is a TNEF stream."""
        return self.format_detector.detect_format(data, filename)

    # ------------------------------------------------------------------
    def parse(self, data: bytes, filename: Optional[str] = None) -> TnefParseResult:
        """Decode a TNEF buffer.

        Raises:
            TnefSignatureError: if the buffer does not start with the TNEF signature
        """
        cursor = ByteCursor(data)
        self._check_signature(cursor)
        cursor.skip(2)  # legacy key

        state = _ParseState(assembler=AttachmentAssembler(self.mapi_decoder, self.logger))
        attribute_count = 0

        for attr in self.iter_attributes(cursor, state):
            attribute_count += 1
            if attr.level == LVL_MESSAGE:
                handler = self._message_handlers.get(attr.attr_id)
                if handler is not None:
                    handler(state, attr)
                else:
                    self.logger.debug(f"Ignoring message attribute 0x{attr.attr_id:04x}")
            elif attr.level == LVL_ATTACHMENT:
                block = state.assembler.handle(attr, state.encoding)
                if block is not None:
                    self._collect_warnings(state, block)
            else:
                self.logger.debug(f"Ignoring attribute with unknown level {attr.level}")

        result = state.result
        result.attachments = state.assembler.finalize()
        result.codepage = state.encoding

        self.logger.info(
            f"Decoded TNEF{f' {filename}' if filename else ''}: {attribute_count} attributes, "
            f"{len(result.attachments)} attachments"
        )
        return result

    def iter_attributes(self, cursor: ByteCursor,
                        state: Optional[_ParseState] = None) -> Iterator[Attribute]:
        """Yield attributes until the stream ends or an attribute is truncated."""
        while cursor.remaining >= ATTRIBUTE_HEADER_SIZE:
            start = cursor.offset
            level = cursor.read_u8()
            attr_id = cursor.read_u32() & 0xFFFF
            length = cursor.read_u32()

            if length > cursor.remaining:
                message = (
                    f"Attribute 0x{attr_id:04x} at offset {start} declares {length} bytes, "
                    f"only {cursor.remaining} left"
                )
                self.logger.warning(f"{message}; stopping")
                if state is not None:
                    state.result.warnings.append(message)
                return

            payload = cursor.read_bytes(length)
            if cursor.remaining >= 2:
                cursor.read_u16()  # checksum, not verified

            self.logger.debug(f"Attribute level={level} id=0x{attr_id:04x} length={length}")
            yield Attribute(level=level, attr_id=attr_id, payload=payload, length=length)

    # ------------------------------------------------------------------
    def _check_signature(self, cursor: ByteCursor) -> None:
        if cursor.remaining < 4:
            raise TnefSignatureError()
        signature = cursor.read_u32()
        if signature != TNEF_SIGNATURE:
            raise TnefSignatureError(signature)

    def _set_legacy(self, state: _ParseState, slot: str, value: str) -> None:
        if slot in state.unicode_slots:
            self.logger.debug(f"Keeping MAPI {slot}; legacy value ignored")
            return
        setattr(state.result, slot, value)

    def _on_codepage(self, state: _ParseState, attr: Attribute) -> None:
        if len(attr.payload) < 4:
            return
        codepage = int.from_bytes(attr.payload[:4], "little")
        state.encoding = codepage_to_encoding(codepage)
        self.logger.debug(f"OEM codepage {codepage} -> {state.encoding}")

    def _on_subject(self, state: _ParseState, attr: Attribute) -> None:
        self._set_legacy(state, "subject", decode_ansi(attr.payload, state.encoding))

    def _on_from(self, state: _ParseState, attr: Attribute) -> None:
        if len(attr.payload) < TRP_HEADER_SIZE:
            return
        sender = decode_ansi(attr.payload[TRP_HEADER_SIZE:], state.encoding)
        self._set_legacy(state, "sender", sender)

    def _on_body(self, state: _ParseState, attr: Attribute) -> None:
        self._set_legacy(state, "body", decode_ansi(attr.payload, state.encoding))

    def _on_date_sent(self, state: _ParseState, attr: Attribute) -> None:
        if len(attr.payload) < DATE_STRUCT_SIZE:
            return
        cursor = ByteCursor(attr.payload)
        year, month, day, hour, minute, second = (cursor.read_u16() for _ in range(6))
        try:
            state.result.date_sent = datetime(year, month, day, hour, minute, second)
        except ValueError as e:
            self.logger.debug(f"Ignoring invalid attDateSent: {e}")

    def _on_message_props(self, state: _ParseState, attr: Attribute) -> None:
        block = self.mapi_decoder.decode_message_props(attr.payload, state.encoding)
        self._collect_warnings(state, block)
        result = state.result

        for slot in ("subject", "body", "body_html"):
            value = block.get(slot)
            if value:
                setattr(result, slot, value)
                state.unicode_slots.add(slot)

        sender_name = block.get("sender_name")
        if sender_name:
            result.sender = sender_name
            state.unicode_slots.add("sender")
        sender_email = block.get("sender_email")
        if sender_email:
            result.sender = f"{result.sender} <{sender_email}>" if result.sender else sender_email
            state.unicode_slots.add("sender")

    @staticmethod
    def _collect_warnings(state: _ParseState, block: MapiBlockResult) -> None:
        state.result.warnings.extend(s.describe() for s in block.skipped)
        if block.error:
            state.result.warnings.append(block.error)

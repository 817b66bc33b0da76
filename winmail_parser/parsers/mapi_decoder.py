# ============================================================================
# winmail_parser/parsers/mapi_decoder.py - Nested MAPI property blocks
# ============================================================================

"""
Decoder for the MAPI property blocks carried by ``attMAPIProps`` and
``attAttachment`` attributes.

Block layout::

    [u32 count] then count x [u16 type][u16 id][named header?][value]

Decoding is best effort. A block never raises: whatever was resolved
before a problem is returned in a ``MapiBlockResult`` together with the
list of properties that were skipped.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..constants import GUID_SIZE, NAMED_PROPERTY_BASE, PropId, PropType
from ..cursor import ByteCursor, decode_ansi, decode_utf16le, pad4
from ..exceptions import UnexpectedEndError
from ..models import MapiBlockResult, MapiProperty, PropertyValue, SkippedProperty

# Smallest property that can still be decoded: type (2) + id (2) + 1 byte
MIN_PROPERTY_SIZE = 5

# prop id -> (field name, first non-empty value wins)
Route = Tuple[str, bool]

MESSAGE_ROUTES: Dict[int, Route] = {
    PropId.SUBJECT: ("subject", False),
    PropId.SENDER_NAME: ("sender_name", True),
    PropId.SENT_REPR_NAME: ("sender_name", True),
    PropId.SENDER_EMAIL: ("sender_email", True),
    PropId.SENT_REPR_EMAIL: ("sender_email", True),
    PropId.BODY: ("body", False),
    PropId.BODY_HTML: ("body_html", False),
}

ATTACHMENT_ROUTES: Dict[int, Route] = {
    PropId.ATTACH_FILENAME: ("filename", False),
    PropId.ATTACH_LONG_FILENAME: ("long_filename", False),
    PropId.DISPLAY_NAME: ("display_name", False),
    PropId.ATTACH_MIME_TAG: ("mime_type", False),
    PropId.ATTACH_EXTENSION: ("extension", False),
    PropId.ATTACH_DATA_BIN: ("data", False),
}

# Fields that carry raw bytes rather than text
BINARY_FIELDS = {"data"}

SCALAR_VARIABLE_TYPES = (PropType.STRING8, PropType.UNICODE, PropType.BINARY)
MULTI_VALUE_TYPES = (PropType.MV_STRING8, PropType.MV_UNICODE, PropType.MV_BINARY)


class BoundaryLostError(Exception):
    """The next property can no longer be located reliably."""


class MapiPropertyDecoder:
    """Decode MAPI property blocks into message or attachment fields."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    def decode_message_props(self, data: bytes, encoding: str) -> MapiBlockResult:
        return self.decode_block(data, encoding, MESSAGE_ROUTES)

    def decode_attachment_props(self, data: bytes, encoding: str) -> MapiBlockResult:
        return self.decode_block(data, encoding, ATTACHMENT_ROUTES)

    # ------------------------------------------------------------------
    def decode_block(self, data: bytes, encoding: str,
                     routes: Optional[Dict[int, Route]] = None) -> MapiBlockResult:
        """Decode one property block, routing known ids into ``result.fields``."""
        routes = routes if routes is not None else {}
        result = MapiBlockResult()
        cursor = ByteCursor(data)
        prop_type = prop_id = 0

        try:
            count = cursor.read_u32()
            self.logger.debug(f"MAPI block: {count} properties in {len(data)} bytes")

            for index in range(count):
                if cursor.remaining < MIN_PROPERTY_SIZE:
                    self.logger.debug(
                        f"MAPI block ends after {index} of {count} properties "
                        f"({cursor.remaining} bytes left)"
                    )
                    result.stopped_early = True
                    break

                prop_type = cursor.read_u16()
                prop_id = cursor.read_u16()
                if prop_id >= NAMED_PROPERTY_BASE:
                    self._skip_named_header(cursor)

                value = self._read_value(cursor, prop_type, encoding, result, prop_id)
                prop = MapiProperty(prop_type, prop_id, value)
                result.properties.append(prop)
                self._route(prop, routes, result)

        except BoundaryLostError as e:
            result.skipped.append(SkippedProperty(prop_type, prop_id, str(e)))
            result.stopped_early = True
            self.logger.warning(f"Stopped MAPI block at offset {cursor.offset}: {e}")
        except UnexpectedEndError as e:
            result.stopped_early = True
            result.error = str(e)
            self.logger.warning(f"Truncated MAPI block: {e}")
        except Exception as e:
            result.stopped_early = True
            result.error = str(e)
            self.logger.error(f"Error decoding MAPI block: {e}")

        return result

    # ------------------------------------------------------------------
    def _skip_named_header(self, cursor: ByteCursor) -> None:
        """Skip the GUID and name of a named property (id >= 0x8000)."""
        self._skip_exact(cursor, GUID_SIZE, "named property GUID")
        kind = cursor.read_u32()
        if kind == 0:
            self._skip_exact(cursor, 4, "named property id")
        else:
            name_length = cursor.read_u32()
            self._skip_exact(cursor, pad4(name_length), "named property name")

    def _read_value(self, cursor: ByteCursor, prop_type: int, encoding: str,
                    result: MapiBlockResult, prop_id: int) -> PropertyValue:
        if prop_type == PropType.SHORT:
            value = cursor.read_u16()
            cursor.skip(2)
            return value

        if prop_type in (PropType.LONG, PropType.BOOLEAN):
            return cursor.read_u32()

        if prop_type == PropType.SYSTIME:
            self._skip_exact(cursor, 8, "timestamp")
            return None

        if prop_type in SCALAR_VARIABLE_TYPES:
            count = cursor.read_u32()
            if count != 1:
                self._skip_values(cursor, count)
                result.skipped.append(SkippedProperty(
                    prop_type, prop_id, f"unsupported value count {count}"))
                self.logger.debug(f"Skipped property 0x{prop_id:04x}: value count {count}")
                return None
            length = cursor.read_u32()
            raw = cursor.read_bytes(length)
            cursor.skip(pad4(length) - length)
            if prop_type == PropType.STRING8:
                return decode_ansi(raw, encoding)
            if prop_type == PropType.UNICODE:
                return decode_utf16le(raw)
            return raw

        if prop_type in MULTI_VALUE_TYPES:
            count = cursor.read_u32()
            self._skip_values(cursor, count)
            result.skipped.append(SkippedProperty(
                prop_type, prop_id, f"multi-valued property ({count} values)"))
            self.logger.debug(f"Skipped multi-valued property 0x{prop_id:04x}")
            return None

        # Unknown width: the following property can not be located.
        cursor.skip(4)
        raise BoundaryLostError(f"unknown property type 0x{prop_type:04x}")

    def _skip_values(self, cursor: ByteCursor, count: int) -> None:
        """Skip ``count`` length-prefixed, 4-byte padded values."""
        for _ in range(count):
            length = cursor.read_u32()
            self._skip_exact(cursor, pad4(length), "multi-value entry")

    @staticmethod
    def _skip_exact(cursor: ByteCursor, n: int, what: str) -> None:
        if cursor.skip(n) != n:
            raise BoundaryLostError(f"{what} runs past the end of the block")

    # ------------------------------------------------------------------
    def _route(self, prop: MapiProperty, routes: Dict[int, Route],
               result: MapiBlockResult) -> None:
        route = routes.get(prop.prop_id)
        if route is None or prop.value is None:
            return
        name, first_wins = route
        value = self._coerce(name, prop.value)
        if value is None or (not value and name not in BINARY_FIELDS):
            return
        if first_wins and result.fields.get(name):
            return
        result.fields[name] = value

    @staticmethod
    def _coerce(name: str, value: PropertyValue) -> PropertyValue:
        if name in BINARY_FIELDS:
            return value if isinstance(value, bytes) else None
        if name == "body_html" and isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value if isinstance(value, str) else None

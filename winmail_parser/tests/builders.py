"""Byte-level builders for TNEF streams and MAPI property blocks used in tests."""

import struct

from winmail_parser.constants import LVL_ATTACHMENT, LVL_MESSAGE, TNEF_SIGNATURE, PropType
from winmail_parser.cursor import pad4


def checksum(payload: bytes) -> int:
    return sum(payload) & 0xFFFF


def attribute(level: int, attr_id: int, payload: bytes, data_type: int = 0x0006,
              with_checksum: bool = True) -> bytes:
    header = struct.pack("<BII", level, (data_type << 16) | attr_id, len(payload))
    tail = struct.pack("<H", checksum(payload)) if with_checksum else b""
    return header + payload + tail


def message_attr(attr_id: int, payload: bytes, **kwargs) -> bytes:
    return attribute(LVL_MESSAGE, attr_id, payload, **kwargs)


def attach_attr(attr_id: int, payload: bytes, **kwargs) -> bytes:
    return attribute(LVL_ATTACHMENT, attr_id, payload, **kwargs)


def tnef_stream(*attributes: bytes, signature: int = TNEF_SIGNATURE, key: int = 0x0001) -> bytes:
    return struct.pack("<IH", signature, key) + b"".join(attributes)


def _padded(raw: bytes) -> bytes:
    return raw + b"\x00" * (pad4(len(raw)) - len(raw))


def prop_header(prop_type: int, prop_id: int) -> bytes:
    return struct.pack("<HH", prop_type, prop_id)


def variable_value(raw: bytes) -> bytes:
    """count == 1, length, data, padding."""
    return struct.pack("<II", 1, len(raw)) + _padded(raw)


def multi_values(*values: bytes) -> bytes:
    out = struct.pack("<I", len(values))
    for raw in values:
        out += struct.pack("<I", len(raw)) + _padded(raw)
    return out


def string8_prop(prop_id: int, text: str, encoding: str = "cp1252") -> bytes:
    return prop_header(PropType.STRING8, prop_id) + variable_value(text.encode(encoding) + b"\x00")


def unicode_prop(prop_id: int, text: str) -> bytes:
    return prop_header(PropType.UNICODE, prop_id) + variable_value(text.encode("utf-16-le") + b"\x00\x00")


def binary_prop(prop_id: int, data: bytes) -> bytes:
    return prop_header(PropType.BINARY, prop_id) + variable_value(data)


def long_prop(prop_id: int, value: int) -> bytes:
    return prop_header(PropType.LONG, prop_id) + struct.pack("<I", value)


def short_prop(prop_id: int, value: int) -> bytes:
    return prop_header(PropType.SHORT, prop_id) + struct.pack("<HH", value, 0)


def systime_prop(prop_id: int) -> bytes:
    return prop_header(PropType.SYSTIME, prop_id) + b"\x01" * 8


def named_id_header(guid: bytes = b"\xaa" * 16, name_id: int = 0x8233) -> bytes:
    return guid + struct.pack("<II", 0, name_id)


def named_string_header(name: str, guid: bytes = b"\xbb" * 16) -> bytes:
    raw = name.encode("utf-16-le") + b"\x00\x00"
    return guid + struct.pack("<II", 1, len(raw)) + _padded(raw)


def mapi_block(*props: bytes, count: int = None) -> bytes:
    return struct.pack("<I", len(props) if count is None else count) + b"".join(props)

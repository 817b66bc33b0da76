# ============================================================================
# winmail_parser/constants.py - TNEF attribute and MAPI property identifiers
# ============================================================================

TNEF_SIGNATURE = 0x223E9F78

# Attribute levels
LVL_MESSAGE = 0x01
LVL_ATTACHMENT = 0x02

# Fixed attribute header: level (1) + type/id word (4) + length (4)
ATTRIBUTE_HEADER_SIZE = 9


class Attr:
    """Message-level attribute ids (low 16 bits of the type/id word)."""

    FROM = 0x8000
    SUBJECT = 0x8004
    DATE_SENT = 0x8005
    BODY = 0x800C
    MAPI_PROPS = 0x9003
    OEM_CODEPAGE = 0x9007


class AttachAttr:
    """Attachment-level attribute ids."""

    REND_DATA = 0x9002
    DATA = 0x800F
    TITLE = 0x8010
    MAPI_PROPS = 0x9005


class PropType:
    """MAPI property type tags."""

    SHORT = 0x0002
    LONG = 0x0003
    BOOLEAN = 0x000B
    STRING8 = 0x001E
    UNICODE = 0x001F
    SYSTIME = 0x0040
    BINARY = 0x0102
    MV_STRING8 = 0x101E
    MV_UNICODE = 0x101F
    MV_BINARY = 0x1102


class PropId:
    """MAPI property ids routed into message or attachment fields."""

    SUBJECT = 0x0037
    SENT_REPR_NAME = 0x0042
    SENT_REPR_EMAIL = 0x0065
    SENDER_NAME = 0x0C1A
    SENDER_EMAIL = 0x0C1F
    BODY = 0x1000
    BODY_HTML = 0x1013
    DISPLAY_NAME = 0x3001
    ATTACH_DATA_BIN = 0x3701
    ATTACH_EXTENSION = 0x3703
    ATTACH_FILENAME = 0x3704
    ATTACH_LONG_FILENAME = 0x3707
    ATTACH_MIME_TAG = 0x370E


# Property ids at or above this value are named properties
NAMED_PROPERTY_BASE = 0x8000
GUID_SIZE = 16

DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_ATTACHMENT_NAME = "attachment"

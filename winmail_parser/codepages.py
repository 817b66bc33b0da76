# ============================================================================
# winmail_parser/codepages.py - Legacy codepage to Python codec mapping
# ============================================================================

from typing import Dict

# Codec names follow the WHATWG decoders that legacy mail clients use:
# Shift_JIS is really Windows-31J and EUC-KR is really UHC.
CODEPAGE_ENCODINGS: Dict[int, str] = {
    932: "cp932",
    936: "gbk",
    949: "cp949",
    950: "big5",
    1250: "cp1250",
    1251: "cp1251",
    1252: "cp1252",
    1253: "cp1253",
    1254: "cp1254",
    1255: "cp1255",
    1256: "cp1256",
    1257: "cp1257",
    1258: "cp1258",
    65001: "utf-8",
}

# Legacy TNEF traffic without a codepage attribute is overwhelmingly Japanese.
DEFAULT_ENCODING = CODEPAGE_ENCODINGS[932]


def codepage_to_encoding(codepage: int) -> str:
    """Map a Windows codepage number to a Python codec name."""
    return CODEPAGE_ENCODINGS.get(codepage, DEFAULT_ENCODING)

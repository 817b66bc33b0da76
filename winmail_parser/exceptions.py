# ============================================================================
# winmail_parser/exceptions.py
# ============================================================================


class TnefError(Exception):
    """Base class for TNEF decoding errors."""


class TnefSignatureError(TnefError):
    """Raised when the input is not a recognized TNEF container."""

    def __init__(self, signature=None):
        self.signature = signature
        if signature is None:
            message = "Not a valid TNEF (winmail.dat) file: missing signature"
        else:
            message = f"Not a valid TNEF (winmail.dat) file: bad signature 0x{signature:08x}"
        super().__init__(message)


class UnexpectedEndError(TnefError):
    """Raised when a read runs past the end of the buffer."""

    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Unexpected end of data at offset {offset}: "
            f"wanted {wanted} bytes, {available} available"
        )

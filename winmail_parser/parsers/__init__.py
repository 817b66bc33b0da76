"""
Container decoders.

- TNEF: attribute stream parser for winmail.dat files
- MAPI: nested property block decoder used by the TNEF parser
"""

from .mapi_decoder import MapiPropertyDecoder
from .tnef_parser import TnefFormatParser

__all__ = [
    'MapiPropertyDecoder',
    'TnefFormatParser',
]

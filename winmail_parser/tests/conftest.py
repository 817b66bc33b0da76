import logging

import pytest

from winmail_parser.parsers.mapi_decoder import MapiPropertyDecoder
from winmail_parser.parsers.tnef_parser import TnefFormatParser


@pytest.fixture
def logger():
    return logging.getLogger("test")


@pytest.fixture
def mapi_decoder(logger):
    return MapiPropertyDecoder(logger)


@pytest.fixture
def tnef_parser(logger):
    return TnefFormatParser(logger)

import pytest

from winmail_parser.attachments import AssemblerState, AttachmentAssembler, resolve_name
from winmail_parser.constants import LVL_ATTACHMENT, AttachAttr, PropId
from winmail_parser.mime_types import guess_mime_type
from winmail_parser.models import AttachmentFields, Attribute
from winmail_parser.tests.builders import binary_prop, mapi_block, string8_prop, unicode_prop


def attr(attr_id, payload=b""):
    return Attribute(level=LVL_ATTACHMENT, attr_id=attr_id, payload=payload, length=len(payload))


@pytest.fixture
def assembler(mapi_decoder, logger):
    return AttachmentAssembler(mapi_decoder, logger)


def test_state_transitions(assembler):
    assert assembler.state is AssemblerState.IDLE
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assert assembler.state is AssemblerState.ACCUMULATING
    assembler.handle(attr(AttachAttr.DATA, b"12345"), "cp1252")
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assert assembler.state is AssemblerState.ACCUMULATING
    assert len(assembler.collected) == 1
    assembler.finalize()
    assert assembler.state is AssemblerState.IDLE
    assert len(assembler.collected) == 2


def test_attributes_before_first_marker_are_ignored(assembler):
    assembler.handle(attr(AttachAttr.TITLE, b"orphan.txt\x00"), "cp1252")
    assembler.handle(attr(AttachAttr.DATA, b"orphan"), "cp1252")
    assert assembler.state is AssemblerState.IDLE
    assert assembler.finalize() == []


def test_unhandled_ids_are_ignored(assembler):
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assert assembler.handle(attr(0x8012, b"\x00" * 14), "cp1252") is None
    assembler.handle(attr(AttachAttr.DATA, b"x"), "cp1252")
    assert [a.size for a in assembler.finalize()] == [1]


def test_attachments_without_data_are_dropped(assembler):
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assembler.handle(attr(AttachAttr.TITLE, b"empty.txt\x00"), "cp1252")
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assembler.handle(attr(AttachAttr.DATA, b""), "cp1252")
    assert assembler.finalize() == []


def test_mapi_props_override_legacy_values(assembler):
    props = mapi_block(
        unicode_prop(PropId.ATTACH_LONG_FILENAME, "請求書.xlsx"),
        binary_prop(PropId.ATTACH_DATA_BIN, b"mapi-bytes"),
    )
    assembler.handle(attr(AttachAttr.REND_DATA), "cp932")
    assembler.handle(attr(AttachAttr.TITLE, "請求書.XLS".encode("cp932") + b"\x00"), "cp932")
    assembler.handle(attr(AttachAttr.DATA, b"legacy"), "cp932")
    block = assembler.handle(attr(AttachAttr.MAPI_PROPS, props), "cp932")
    assert block is not None and not block.stopped_early

    (attachment,) = assembler.finalize()
    assert attachment.name == "請求書.xlsx"
    assert attachment.data == b"mapi-bytes"
    assert attachment.size == len(b"mapi-bytes")
    assert attachment.mime_type == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def test_empty_mapi_data_replaces_legacy_payload(assembler):
    props = mapi_block(binary_prop(PropId.ATTACH_DATA_BIN, b""))
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assembler.handle(attr(AttachAttr.DATA, b"legacy"), "cp1252")
    assembler.handle(attr(AttachAttr.MAPI_PROPS, props), "cp1252")
    assert assembler.finalize() == []


def test_explicit_mime_tag_is_kept(assembler):
    props = mapi_block(
        string8_prop(PropId.ATTACH_MIME_TAG, "text/x-custom"),
        string8_prop(PropId.ATTACH_FILENAME, "notes.txt"),
    )
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assembler.handle(attr(AttachAttr.DATA, b"abc"), "cp1252")
    assembler.handle(attr(AttachAttr.MAPI_PROPS, props), "cp1252")
    (attachment,) = assembler.finalize()
    assert attachment.mime_type == "text/x-custom"


def test_extension_field_drives_mime_inference(assembler):
    props = mapi_block(
        unicode_prop(PropId.DISPLAY_NAME, "Scan"),
        string8_prop(PropId.ATTACH_EXTENSION, ".PNG"),
    )
    assembler.handle(attr(AttachAttr.REND_DATA), "cp1252")
    assembler.handle(attr(AttachAttr.DATA, b"\x89PNG"), "cp1252")
    assembler.handle(attr(AttachAttr.MAPI_PROPS, props), "cp1252")
    (attachment,) = assembler.finalize()
    assert attachment.name == "Scan"
    assert attachment.mime_type == "image/png"


def test_name_priority():
    fields = AttachmentFields(
        legacy_name="legacy.txt",
        mapi_display_name="display",
        mapi_filename="SHORT.TXT",
        mapi_long_filename="long name.txt",
    )
    assert resolve_name(fields) == "long name.txt"
    fields.mapi_long_filename = ""
    assert resolve_name(fields) == "SHORT.TXT"
    fields.mapi_filename = ""
    assert resolve_name(fields) == "display"
    fields.mapi_display_name = ""
    assert resolve_name(fields) == "legacy.txt"
    fields.legacy_name = ""
    assert resolve_name(fields) == "attachment"


def test_guess_mime_type():
    assert guess_mime_type("report.PDF") == "application/pdf"
    assert guess_mime_type("archive.tar.7z") == "application/x-7z-compressed"
    assert guess_mime_type("anything", ".docx").startswith("application/vnd.openxmlformats")
    assert guess_mime_type("photo.jpg", "png") == "image/png"
    assert guess_mime_type("README") == "application/octet-stream"
    assert guess_mime_type("pdf") == "application/pdf"
    assert guess_mime_type("data.unknownext") == "application/octet-stream"

import json

from winmail_parser.cli import extract_attachments, main, safe_filename
from winmail_parser.constants import AttachAttr, Attr
from winmail_parser.models import TnefAttachment
from winmail_parser.tests.builders import attach_attr, message_attr, tnef_stream


def write_sample(tmp_path):
    data = tnef_stream(
        message_attr(Attr.SUBJECT, b"Invoice\x00"),
        attach_attr(AttachAttr.REND_DATA, b"\x00" * 14),
        attach_attr(AttachAttr.TITLE, b"invoice.pdf\x00"),
        attach_attr(AttachAttr.DATA, b"%PDF-1.4"),
        attach_attr(AttachAttr.REND_DATA, b"\x00" * 14),
        attach_attr(AttachAttr.TITLE, b"invoice.pdf\x00"),
        attach_attr(AttachAttr.DATA, b"%PDF-1.5"),
    )
    path = tmp_path / "winmail.dat"
    path.write_bytes(data)
    return path


def test_cli_prints_json(tmp_path, capsys):
    path = write_sample(tmp_path)
    assert main([str(path)]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["result"]["subject"] == "Invoice"
    assert [a["mimeType"] for a in summary["result"]["attachments"]] == ["application/pdf"] * 2


def test_cli_extracts_attachments(tmp_path, capsys):
    path = write_sample(tmp_path)
    out_dir = tmp_path / "out"
    assert main([str(path), "--extract-dir", str(out_dir)]) == 0
    assert (out_dir / "invoice.pdf").read_bytes() == b"%PDF-1.4"
    assert (out_dir / "invoice (1).pdf").read_bytes() == b"%PDF-1.5"
    assert "Extracted:" in capsys.readouterr().out


def test_cli_text_summary(tmp_path, capsys):
    path = write_sample(tmp_path)
    assert main([str(path), "--text"]) == 0
    out = capsys.readouterr().out
    assert "Subject: Invoice" in out
    assert "Attachment: invoice.pdf (8 bytes, application/pdf)" in out


def test_cli_writes_output_file(tmp_path):
    path = write_sample(tmp_path)
    output = tmp_path / "result.json"
    assert main([str(path), "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["status"] == "success"


def test_cli_rejects_non_tnef(tmp_path, capsys):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"just some text")
    assert main([str(path)]) == 1
    assert json.loads(capsys.readouterr().out)["error"]["code"] == "NOT_TNEF"


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.dat")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_safe_filename():
    assert safe_filename("../../etc/passwd") == "_.._etc_passwd"
    assert safe_filename('a:b*c?.txt') == "a_b_c_.txt"
    assert safe_filename("  ") == "attachment"
    assert safe_filename("報告書.pdf") == "報告書.pdf"


def test_extract_attachments_without_extension(tmp_path):
    attachments = [TnefAttachment("attachment", 1, b"a", "application/octet-stream")] * 2
    paths = extract_attachments(attachments, tmp_path)
    assert [p.name for p in paths] == ["attachment", "attachment (1)"]

"""Tests for the pdf-replace command line tool."""

import io
import json
import sys

import pikepdf
from conftest import text_instructions

from pdf_replacer.cli import main

RULES_JSON = '[{"key": "[PLACEHOLDER]", "value": "Acme Corp"}]'


def write_rules(tmp_path, data=RULES_JSON):
    path = tmp_path / "rules.json"
    path.write_text(data, encoding="utf-8")
    return str(path)


def test_replaces_text_and_writes_output(sample_pdf_path, tmp_path):
    output = tmp_path / "out.pdf"

    assert main(["-j", write_rules(tmp_path), "-i", str(sample_pdf_path), "-o", str(output)]) == 0

    with pikepdf.open(output) as pdf:
        ((operands, _), _) = text_instructions(pdf.pages[0])
        assert bytes(operands[0]) == b"Acme Corp"


def test_rules_from_stdin_match_rules_from_file(sample_pdf_path, tmp_path, monkeypatch):
    from_file = tmp_path / "from_file.pdf"
    from_stdin = tmp_path / "from_stdin.pdf"
    assert main(["-j", write_rules(tmp_path), "-i", str(sample_pdf_path), "-o", str(from_file)]) == 0

    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(RULES_JSON.encode("utf-8")), encoding="utf-8"))
    assert main(["-i", str(sample_pdf_path), "-o", str(from_stdin)]) == 0

    assert from_file.read_bytes() == from_stdin.read_bytes()


def test_output_defaults_to_stdout(sample_pdf_path, tmp_path, capsysbinary):
    assert main(["-j", write_rules(tmp_path), "-i", str(sample_pdf_path), "-v", "0"]) == 0

    assert capsysbinary.readouterr().out.startswith(b"%PDF")


def test_invalid_rules_exit_with_error(sample_pdf_path, tmp_path, caplog):
    output = tmp_path / "out.pdf"

    assert main(["-j", write_rules(tmp_path, "{not json"), "-i", str(sample_pdf_path), "-o", str(output)]) == 1
    assert not output.exists()
    assert "rule list" in caplog.text.lower()


def test_missing_input_exits_with_error(tmp_path):
    missing = tmp_path / "missing.pdf"

    assert main(["-j", write_rules(tmp_path), "-i", str(missing), "-o", str(tmp_path / "out.pdf")]) == 1


def test_broken_content_stream_exits_with_error(sample_pdf_path, tmp_path, monkeypatch, caplog):
    output = tmp_path / "out.pdf"

    def fail(page_or_stream, operators=""):
        raise pikepdf.models.PdfParsingError("unexpected token", line=1)

    monkeypatch.setattr(pikepdf, "parse_content_stream", fail)

    assert main(["-j", write_rules(tmp_path), "-i", str(sample_pdf_path), "-o", str(output)]) == 1
    assert not output.exists()
    assert "unable to decode content stream" in caplog.text


def test_output_over_input_exits_with_error(sample_pdf_path, tmp_path):
    original = sample_pdf_path.read_bytes()

    assert main(["-j", write_rules(tmp_path), "-i", str(sample_pdf_path), "-o", str(sample_pdf_path)]) == 1
    assert sample_pdf_path.read_bytes() == original


def test_list_text(sample_pdf_path, capsys):
    assert main(["-i", str(sample_pdf_path), "--list-text", "-v", "0"]) == 0

    runs = json.loads(capsys.readouterr().out)
    assert [run["text"] for run in runs] == ["[PLACEHOLDER]", "Hello", "Hello World"]
    assert [run["page"] for run in runs] == [1, 1, 2]


def test_fonts_report(sample_pdf_path, capsys):
    assert main(["-i", str(sample_pdf_path), "--fonts", "-v", "0"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert [(entry["page"], entry["font"], entry["classification"]) for entry in report] == [
        (1, "/F1", "simple"),
        (2, "/F2", "composite"),
    ]

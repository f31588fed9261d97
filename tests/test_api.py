"""Tests for api.py: the PDFTextReplacer facade."""

import io

import pikepdf
from conftest import add_page, simple_font, text_instructions

from pdf_replacer import PDFTextReplacer, ReplacementRule
from pdf_replacer.fonts.encodings import CodecRegistry, SingleByteCodec


def test_replace_in_open_document(pdf):
    first = add_page(pdf, b"BT /F1 12 Tf ([PLACEHOLDER]) Tj ET", {"/F1": simple_font()})
    add_page(pdf, b"BT /F1 12 Tf (Nothing here) Tj ET", {"/F1": simple_font()})

    changed = PDFTextReplacer().replace_in_document(pdf, [ReplacementRule("[PLACEHOLDER]", "Acme Corp")])

    assert changed == 1
    ((operands, _),) = text_instructions(first)
    assert bytes(operands[0]) == b"Acme Corp"


def test_replace_in_document_uses_the_replacer_codecs(pdf):
    page = add_page(pdf, b"BT /F1 12 Tf <01> Tj ET", {"/F1": simple_font()})
    codecs = CodecRegistry({"WinAnsiEncoding": SingleByteCodec("WinAnsiEncoding", {0x01: "x", 0x02: "y"})})

    assert PDFTextReplacer(codecs).replace_in_document(pdf, [ReplacementRule("x", "yx")]) == 1

    ((operands, _),) = text_instructions(page)
    assert bytes(operands[0]) == b"\x02\x01"


def test_replace_text_into_stream(sample_pdf_path):
    output = io.BytesIO()

    changed = PDFTextReplacer().replace_text(
        str(sample_pdf_path), output, [ReplacementRule("[PLACEHOLDER]", "Acme Corp")]
    )

    assert changed == 1
    output.seek(0)
    with pikepdf.open(output) as pdf:
        ((operands, _), _) = text_instructions(pdf.pages[0])
        assert bytes(operands[0]) == b"Acme Corp"

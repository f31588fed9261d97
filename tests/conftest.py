"""Fixtures building small PDFs in memory with pikepdf."""

import pikepdf
import pytest
from pikepdf import Dictionary, Name

# Codes of the composite test font; 0x0141 checks CIDs above 255
COMPOSITE_MAP = {
    0x0001: "H",
    0x0002: "e",
    0x0003: "l",
    0x0004: "o",
    0x0005: " ",
    0x0006: "W",
    0x0007: "r",
    0x0008: "d",
    0x0141: "Ł",
}


def tounicode_cmap(mapping, code_width=2):
    """Build a ToUnicode CMap program from a code -> text mapping."""
    low = "00" * code_width
    high = "FF" * code_width
    lines = [
        "/CIDInit /ProcSet findresource begin",
        "12 dict begin",
        "begincmap",
        "/CIDSystemInfo << /Registry (Adobe) /Ordering (UCS) /Supplement 0 >> def",
        "/CMapName /Adobe-Identity-UCS def",
        "/CMapType 2 def",
        "1 begincodespacerange",
        f"<{low}> <{high}>",
        "endcodespacerange",
        f"{len(mapping)} beginbfchar",
    ]
    for code, text in mapping.items():
        lines.append(f"<{code:0{2 * code_width}X}> <{text.encode('utf-16-be').hex().upper()}>")
    lines += [
        "endbfchar",
        "endcmap",
        "CMapName currentdict /CMap defineresource pop",
        "end",
        "end",
    ]
    return "\n".join(lines).encode("ascii")


def cmap_program(body):
    """Wrap raw bfchar/bfrange blocks in a minimal CMap program."""
    return (
        b"/CIDInit /ProcSet findresource begin\n12 dict begin\nbegincmap\n"
        + body
        + b"\nendcmap\nCMapName currentdict /CMap defineresource pop\nend\nend"
    )


def composite_hex(text, mapping=None):
    """Encode text with the composite test font's codes (two bytes each)."""
    mapping = mapping or COMPOSITE_MAP
    reverse = {v: k for k, v in mapping.items()}
    return b"".join(reverse[c].to_bytes(2, "big") for c in text)


def simple_font(encoding="/WinAnsiEncoding"):
    font = Dictionary(Type=Name.Font, Subtype=Name.Type1, BaseFont=Name.Helvetica)
    if encoding is not None:
        font.Encoding = Name(encoding) if isinstance(encoding, str) else encoding
    return font


def composite_font(pdf, mapping=None, cmap_data=None):
    if cmap_data is None:
        cmap_data = tounicode_cmap(mapping or COMPOSITE_MAP)
    return Dictionary(
        Type=Name.Font,
        Subtype=Name.Type0,
        BaseFont=Name("/TestCIDFont"),
        Encoding=Name("/Identity-H"),
        ToUnicode=pdf.make_stream(cmap_data),
    )


def add_page(pdf, content, fonts):
    """Append a page with the given content stream and font resources."""
    page = pdf.add_blank_page()
    page.obj.Resources = Dictionary(Font=Dictionary({name: font for name, font in fonts.items()}))
    page.obj.Contents = pdf.make_stream(content)
    return page


def page_instructions(page):
    return [
        (list(instruction.operands), str(instruction.operator))
        for instruction in pikepdf.parse_content_stream(page)
    ]


def text_instructions(page):
    return [(operands, operator) for operands, operator in page_instructions(page) if operator in ("Tj", "TJ")]


@pytest.fixture
def pdf():
    document = pikepdf.new()
    yield document
    document.close()


@pytest.fixture
def sample_pdf_path(tmp_path):
    """A two page document: WinAnsi placeholders and a composite font."""
    path = tmp_path / "sample.pdf"
    document = pikepdf.new()
    add_page(
        document,
        b"BT /F1 12 Tf 72 720 Td ([PLACEHOLDER]) Tj 0 -20 Td [(Hel) -20 (lo)] TJ ET",
        {"/F1": simple_font()},
    )
    add_page(
        document,
        b"BT /F2 12 Tf 72 720 Td <" + composite_hex("Hello World").hex().encode() + b"> Tj ET",
        {"/F2": composite_font(document)},
    )
    document.save(path)
    document.close()
    return path

"""Font analysis: encoding classification and per-page font tables."""

import enum
import logging

import pikepdf

from ..config import IDENTITY_ENCODING, SIMPLE_ENCODINGS
from ..core.cmap import extract_font_cmap

logger = logging.getLogger(__name__)


class EncodingClass(enum.Enum):
    """Which codec path a font's text goes through."""

    COMPOSITE = "composite"
    SIMPLE = "simple"
    UNSUPPORTED = "unsupported"


def classify_encoding(encoding_name):
    """
    Classify a font encoding name.

    Args:
        encoding_name (str or None): Encoding name without the leading slash.

    Returns:
        EncodingClass: COMPOSITE for Identity-H, SIMPLE for the standard
        single-table encodings and the UniGB UCS-2/UTF-16 CMaps, otherwise
        UNSUPPORTED.
    """
    if encoding_name == IDENTITY_ENCODING:
        return EncodingClass.COMPOSITE
    if encoding_name in SIMPLE_ENCODINGS:
        return EncodingClass.SIMPLE
    return EncodingClass.UNSUPPORTED


class FontDescriptor:
    """Encoding name and Unicode maps of one font resource."""

    def __init__(self, encoding_name, cmap=None):
        self.encoding_name = encoding_name
        self.cmap = cmap
        self.encoding_class = classify_encoding(encoding_name)

    @property
    def supported(self):
        return self.encoding_class is not EncodingClass.UNSUPPORTED

    def __repr__(self):
        return (f"<FontDescriptor {self.encoding_name} {self.encoding_class.value}"
                f" cmap={'yes' if self.cmap is not None else 'no'}>")


def _name_text(name):
    return str(name)[1:]


def get_font_encoding_name(font):
    """
    Resolve the encoding name of a font dictionary.

    A named /Encoding is used as is. An encoding dictionary contributes its
    /BaseEncoding only when it carries no /Differences, since differences
    remap codes away from the base table.

    Returns:
        str or None: Encoding name without the leading slash.
    """
    encoding = font.get("/Encoding")
    if encoding is None:
        return None
    if isinstance(encoding, pikepdf.Name):
        return _name_text(encoding)
    if isinstance(encoding, pikepdf.Dictionary):
        if "/Differences" in encoding:
            return None
        base = encoding.get("/BaseEncoding")
        if isinstance(base, pikepdf.Name):
            return _name_text(base)
    return None


def get_page_fonts(page):
    """Return the page's /Font resource dictionary, or None."""
    page = getattr(page, "obj", page)
    if "/Resources" not in page:
        return None
    resources = page["/Resources"]
    if "/Font" not in resources:
        return None
    return resources["/Font"]


def build_font_table(page, page_number=None):
    """
    Build the font table of a page.

    Args:
        page: pikepdf page.
        page_number (int, optional): 1-based page number for log messages.

    Returns:
        dict: Font resource name (e.g. ``"/F1"``) -> FontDescriptor.
    """
    table = {}
    font_dict = get_page_fonts(page)
    if font_dict is None:
        return table

    for font_name, font in font_dict.items():
        if not isinstance(font, pikepdf.Dictionary):
            logger.warning("Page %s: font resource %s is not a dictionary, skipping", page_number, font_name)
            continue
        encoding_name = get_font_encoding_name(font)
        descriptor = FontDescriptor(encoding_name, extract_font_cmap(font, font_name))
        if not descriptor.supported:
            logger.debug("Page %s: font %s uses unsupported encoding %s, its text is left alone",
                         page_number, font_name, encoding_name)
        table[font_name] = descriptor
    return table


def describe_fonts(pdf):
    """
    Report the fonts of every page and how their text would be handled.

    Args:
        pdf (pikepdf.Pdf): Open document.

    Returns:
        list: One dict per page font with page, font, base_font, subtype,
        encoding, classification and cmap_size keys.
    """
    report = []
    for page_number, page in enumerate(pdf.pages, start=1):
        font_dict = get_page_fonts(page)
        if font_dict is None:
            continue
        for font_name, font in font_dict.items():
            if not isinstance(font, pikepdf.Dictionary):
                continue
            descriptor = FontDescriptor(get_font_encoding_name(font), extract_font_cmap(font, font_name))
            base_font = font.get("/BaseFont")
            subtype = font.get("/Subtype")
            report.append({
                "page": page_number,
                "font": font_name,
                "base_font": _name_text(base_font) if isinstance(base_font, pikepdf.Name) else None,
                "subtype": _name_text(subtype) if isinstance(subtype, pikepdf.Name) else None,
                "encoding": descriptor.encoding_name,
                "classification": descriptor.encoding_class.value,
                "cmap_size": len(descriptor.cmap) if descriptor.cmap is not None else 0,
            })
    return report

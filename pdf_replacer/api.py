"""Public API for the PDF replacer module."""

import io
import logging
import sys

import pikepdf

from .config import SAVE_OPTIONS
from .core.replacer import collect_page_text, replace_document_text
from .core.rules import load_rules
from .fonts.analysis import describe_fonts

logger = logging.getLogger(__name__)


def save_document(pdf, output=None):
    """
    Write the whole document to a path or a binary stream.

    Args:
        pdf (pikepdf.Pdf): Document to save.
        output: Output path, writable binary stream, or None for stdout.
    """
    if output is None:
        # stdout may not be seekable, so render in memory first
        buffer = io.BytesIO()
        pdf.save(buffer, **SAVE_OPTIONS)
        sys.stdout.buffer.write(buffer.getvalue())
        sys.stdout.buffer.flush()
        return
    pdf.save(output, **SAVE_OPTIONS)


def replace_pdf_text(input_pdf, output_pdf, rules, codecs=None):
    """
    Replace text on every page of a PDF.

    Args:
        input_pdf (str): Path to input PDF.
        output_pdf: Output path or binary stream; None writes to stdout.
        rules (list): ReplacementRule objects, applied in order.
        codecs (CodecRegistry, optional): Simple-encoding codecs.

    Returns:
        int: Number of pages whose content was rewritten.
    """
    with pikepdf.open(input_pdf) as pdf:
        logger.info("Processing %s (%d pages, %d rules)", input_pdf, len(pdf.pages), len(rules))
        changed = replace_document_text(pdf, rules, codecs)
        save_document(pdf, output_pdf)
    return changed


def parse_page_text(pdf_path, page_number=None, codecs=None):
    """
    Decode the text runs shown on a page, or on every page.

    Args:
        pdf_path (str): PDF file path.
        page_number (int, optional): 1-based page number; None for all pages.

    Returns:
        list: Dicts with page, font, operator and text keys, in stream order.
    """
    with pikepdf.open(pdf_path) as pdf:
        if page_number is not None:
            return collect_page_text(pdf, page_number, codecs)
        results = []
        for number in range(1, len(pdf.pages) + 1):
            results.extend(collect_page_text(pdf, number, codecs))
        return results


def analyze_fonts(pdf_path):
    """Return the per-page font report of a PDF (see ``describe_fonts``)."""
    with pikepdf.open(pdf_path) as pdf:
        return describe_fonts(pdf)


class PDFTextReplacer:
    """Main class for replacing text in PDF files."""

    def __init__(self, codecs=None):
        """
        Initialize a PDFTextReplacer instance.

        Args:
            codecs (CodecRegistry, optional): Simple-encoding codecs, defaults
                to the built-in registry.
        """
        self.codecs = codecs

    def load_rules(self, source):
        return load_rules(source)

    def replace_text(self, input_pdf, output_pdf, rules):
        """
        Replace text in a PDF document.

        Args:
            input_pdf (str): Path to input PDF file.
            output_pdf: Output path or binary stream, None for stdout.
            rules (list): ReplacementRule objects.

        Returns:
            int: Number of rewritten pages.
        """
        return replace_pdf_text(input_pdf, output_pdf, rules, self.codecs)

    def replace_in_document(self, pdf, rules):
        """Replace text in an already open pikepdf document, in place."""
        return replace_document_text(pdf, rules, self.codecs)

    def analyze_fonts(self, pdf_path):
        return analyze_fonts(pdf_path)

    def parse_page_text(self, pdf_path, page_number=None):
        return parse_page_text(pdf_path, page_number, self.codecs)

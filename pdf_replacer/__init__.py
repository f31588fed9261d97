"""Replace text in PDF content streams, respecting each font's encoding."""

from .api import PDFTextReplacer, analyze_fonts, parse_page_text, replace_pdf_text
from .core.rules import ReplacementRule, load_rules

__version__ = "0.1.0"

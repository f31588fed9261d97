"""Core functionality for PDF text replacement."""

import logging
from decimal import Decimal

import pikepdf

from ..config import WORD_GAP_THRESHOLD
from ..exceptions import ContentStreamError, FontOperandError, PageNotFoundError
from ..fonts.analysis import EncodingClass, build_font_table
from .mapper import UnicodeMapper
from .rules import apply_rules

logger = logging.getLogger(__name__)

_END = object()
_SHOW_STRING = pikepdf.Operator("Tj")


def _is_number(value):
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


class ContentStreamWalker:
    """
    Walk a page's content stream instructions and rewrite shown text.

    The walker follows ``Tf`` to know which font is current. ``Tj`` string
    operands are rewritten in place when a rule matches. A ``TJ`` whose
    merged text matches is replaced by a single ``Tj`` of the new text, which
    drops its kerning. Text in fonts with an unsupported encoding is never
    touched, and every other operator passes through unchanged.
    """

    def __init__(self, fonts, rules, mapper=None, page_number=None):
        """
        Args:
            fonts (dict): Font table of the page (name -> FontDescriptor).
            rules (list): ReplacementRule objects.
            mapper (UnicodeMapper, optional): Defaults to a mapper over ``fonts``.
            page_number (int, optional): 1-based page number for log messages.
        """
        self.fonts = fonts
        self.rules = rules
        self.mapper = mapper if mapper is not None else UnicodeMapper(fonts)
        self.page_number = page_number
        self.current_font = None
        self.current_class = EncodingClass.UNSUPPORTED
        self.rewritten = 0

    @property
    def modified(self):
        return self.rewritten > 0

    def walk(self, instructions):
        """Return the rewritten instruction list."""
        return [self.process(instruction) for instruction in instructions]

    def process(self, instruction):
        if isinstance(instruction, pikepdf.ContentStreamInlineImage):
            return instruction

        operator = str(instruction.operator)
        if operator == "Tf":
            self.set_font(instruction.operands)
        elif operator == "Tj":
            return self._rewrite_tj(instruction)
        elif operator == "TJ":
            return self._rewrite_tj_array(instruction)
        return instruction

    def iter_text(self, instructions):
        """
        Yield the decoded text of every Tj and TJ shown in a supported font.

        Yields:
            tuple: (font name, operator, decoded text).
        """
        for instruction in instructions:
            if isinstance(instruction, pikepdf.ContentStreamInlineImage):
                continue
            operator = str(instruction.operator)
            if operator == "Tf":
                self.set_font(instruction.operands)
            elif operator == "Tj" and self.can_rewrite:
                for operand in instruction.operands:
                    if isinstance(operand, pikepdf.String):
                        yield self.current_font, operator, self.mapper.decode(self.current_font, bytes(operand))
            elif operator == "TJ" and self.can_rewrite:
                yield self.current_font, operator, self.collect_text(instruction.operands)

    def set_font(self, operands):
        if len(operands) == 0:
            raise FontOperandError(f"Page {self.page_number}: Tf operator is missing its font operand")
        font_name = operands[0]
        if not isinstance(font_name, pikepdf.Name):
            raise FontOperandError(f"Page {self.page_number}: Tf font operand {font_name!r} is not a name")

        self.current_font = str(font_name)
        descriptor = self.fonts.get(self.current_font)
        if descriptor is None:
            logger.debug("Page %s: font %s is not in the page resources", self.page_number, self.current_font)
            self.current_class = EncodingClass.UNSUPPORTED
        else:
            self.current_class = descriptor.encoding_class

    @property
    def can_rewrite(self):
        return self.current_font in self.fonts and self.current_class is not EncodingClass.UNSUPPORTED

    def collect_text(self, operands):
        """
        Concatenate the decoded text of a TJ operand list.

        Strings are decoded with the current font. A spacing number below
        the word gap threshold becomes one space, and one space follows every
        array nested inside the TJ array.
        """
        parts = []
        # (iterator, depth): depth 0 is the operand list, 1 the TJ array itself
        stack = [(iter(operands), 0)]
        while stack:
            items, depth = stack[-1]
            item = next(items, _END)
            if item is _END:
                stack.pop()
                if depth >= 2:
                    parts.append(" ")
                continue

            if isinstance(item, pikepdf.String):
                parts.append(self.mapper.decode(self.current_font, bytes(item)))
            elif isinstance(item, pikepdf.Array):
                stack.append((iter(item), depth + 1))
            elif _is_number(item) and item < WORD_GAP_THRESHOLD:
                parts.append(" ")
        return "".join(parts)

    def _rewrite_tj(self, instruction):
        if not self.can_rewrite:
            return instruction

        operands = list(instruction.operands)
        changed = False
        for index, operand in enumerate(operands):
            if not isinstance(operand, pikepdf.String):
                continue
            text = self.mapper.decode(self.current_font, bytes(operand))
            logger.debug("Page %s: Tj %s %r", self.page_number, self.current_font, text)
            new_text, modified = apply_rules(text, self.rules)
            if modified:
                operands[index] = pikepdf.String(self.mapper.encode(self.current_font, new_text))
                changed = True
                logger.debug("Page %s: Tj %r -> %r", self.page_number, text, new_text)

        if not changed:
            return instruction
        self.rewritten += 1
        return pikepdf.ContentStreamInstruction(operands, instruction.operator)

    def _rewrite_tj_array(self, instruction):
        if not self.can_rewrite:
            return instruction

        text = self.collect_text(instruction.operands)
        logger.debug("Page %s: TJ %s %r", self.page_number, self.current_font, text)
        new_text, modified = apply_rules(text, self.rules)
        if not modified:
            return instruction

        logger.debug("Page %s: TJ %r -> Tj %r", self.page_number, text, new_text)
        self.rewritten += 1
        encoded = self.mapper.encode(self.current_font, new_text)
        return pikepdf.ContentStreamInstruction([pikepdf.String(encoded)], _SHOW_STRING)


def get_page(pdf, page_number):
    """
    Return a page by its 1-based number.

    Raises:
        PageNotFoundError: If the document has no such page.
    """
    page_count = len(pdf.pages)
    if page_number < 1 or page_number > page_count:
        raise PageNotFoundError(page_number, page_count)
    return pdf.pages[page_number - 1]


def parse_page_content(page, page_number=None):
    """Parse a page's content stream into instructions."""
    if "/Contents" not in page.obj:
        return []
    try:
        return list(pikepdf.parse_content_stream(page))
    except (pikepdf.PdfError, pikepdf.models.PdfParsingError, TypeError) as e:
        raise ContentStreamError(f"Page {page_number}: unable to decode content stream: {e}") from e


def replace_page_text(pdf, page_number, rules, codecs=None):
    """
    Apply replacement rules to the text shown on one page.

    The page's content stream is only re-serialized when something changed,
    so untouched pages keep their original bytes.

    Args:
        pdf (pikepdf.Pdf): Open document, modified in place.
        page_number (int): 1-based page number.
        rules (list): ReplacementRule objects.
        codecs (CodecRegistry, optional): Simple-encoding codecs.

    Returns:
        bool: True if the page content was rewritten.

    Raises:
        PageNotFoundError: If the page does not exist.
        ContentStreamError: If the content stream cannot be decoded or encoded.
        FontOperandError: On a Tf operator without a font name.
    """
    page = get_page(pdf, page_number)
    fonts = build_font_table(page, page_number)
    instructions = parse_page_content(page, page_number)

    walker = ContentStreamWalker(fonts, rules, UnicodeMapper(fonts, codecs), page_number)
    new_instructions = walker.walk(instructions)
    if not walker.modified:
        logger.debug("Page %d: no replacements", page_number)
        return False

    try:
        content = pikepdf.unparse_content_stream(new_instructions)
    except (pikepdf.PdfError, pikepdf.models.PdfParsingError, TypeError, ValueError) as e:
        raise ContentStreamError(f"Page {page_number}: unable to encode content stream: {e}") from e

    page.obj.Contents = pdf.make_stream(content)
    logger.info("Page %d: rewrote %d text operations", page_number, walker.rewritten)
    return True


def replace_document_text(pdf, rules, codecs=None):
    """
    Apply replacement rules to every page, in document order.

    Returns:
        int: Number of pages whose content was rewritten.
    """
    changed = 0
    for page_number in range(1, len(pdf.pages) + 1):
        if replace_page_text(pdf, page_number, rules, codecs):
            changed += 1
    logger.info("Rewrote %d of %d pages", changed, len(pdf.pages))
    return changed


def collect_page_text(pdf, page_number, codecs=None):
    """
    List the decoded text runs of a page without changing it.

    Returns:
        list: Dicts with page, font, operator and text keys.
    """
    page = get_page(pdf, page_number)
    fonts = build_font_table(page, page_number)
    walker = ContentStreamWalker(fonts, [], UnicodeMapper(fonts, codecs), page_number)
    return [
        {"page": page_number, "font": font, "operator": operator, "text": text}
        for font, operator, text in walker.iter_text(parse_page_content(page, page_number))
    ]

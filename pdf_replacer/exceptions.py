"""Errors raised while replacing text in PDF content streams."""


class ReplacerError(Exception):
    """Base class for text replacement errors."""


class PageNotFoundError(ReplacerError):
    def __init__(self, page_number, page_count):
        super().__init__(f"Page {page_number} not found, document has {page_count} pages")
        self.page_number = page_number
        self.page_count = page_count


class ContentStreamError(ReplacerError):
    pass


class FontOperandError(ReplacerError):
    pass


class RuleListError(ReplacerError):
    pass


class CMapError(ReplacerError):
    """A ToUnicode CMap could not be read. Never fatal: the font just has no CMap."""

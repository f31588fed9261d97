"""ToUnicode CMap extraction for PDF fonts."""

import logging
from types import MappingProxyType

import pikepdf

from ..exceptions import CMapError

logger = logging.getLogger(__name__)


class CMapData:
    """
    Forward and reverse Unicode maps of a font.

    ``forward`` maps a character code to its Unicode text, ``reverse`` maps a
    Unicode text back to a code. When two codes map to the same text the code
    declared last in the CMap program wins. Both maps are read-only.

    Args:
        forward: Code -> text mapping.
        declared (list, optional): (code, text) pairs in CMap declaration
            order, redeclarations included. Defaults to the order of
            ``forward``.
    """

    def __init__(self, forward, declared=None):
        forward = dict(forward)
        if declared is None:
            declared = forward.items()
        reverse = {}
        for code, text in declared:
            # skip declarations a later one for the same code overrode
            if forward.get(code) == text:
                reverse[text] = code
        self.forward = MappingProxyType(forward)
        self.reverse = MappingProxyType(reverse)

    def __len__(self):
        return len(self.forward)

    def __repr__(self):
        return f"<CMapData {len(self.forward)} codes>"


def _code_of(operand):
    if not isinstance(operand, pikepdf.String):
        raise CMapError(f"Expected a hex string code in CMap, got {operand!r}")
    return int.from_bytes(bytes(operand), "big")


def _expand_bfchar(operands, entries):
    if len(operands) % 2:
        raise CMapError("bfchar block has an odd number of operands")
    for i in range(0, len(operands), 2):
        code = _code_of(operands[i])
        target = operands[i + 1]
        if not isinstance(target, pikepdf.String):
            raise CMapError(f"bfchar destination for code {code:04X} is not a string")
        entries.append((code, bytes(target)))


def _expand_bfrange(operands, entries):
    if len(operands) % 3:
        raise CMapError("bfrange block operands are not in triples")
    for i in range(0, len(operands), 3):
        start = _code_of(operands[i])
        end = _code_of(operands[i + 1])
        target = operands[i + 2]

        if isinstance(target, pikepdf.Array):
            # <lo> <hi> [<dst1> <dst2> ...]
            for offset, item in enumerate(target):
                if start + offset > end:
                    break
                if not isinstance(item, pikepdf.String):
                    raise CMapError(f"bfrange array entry for code {start + offset:04X} is not a string")
                entries.append((start + offset, bytes(item)))
            continue

        if not isinstance(target, pikepdf.String):
            raise CMapError(f"bfrange destination for {start:04X}..{end:04X} is not a string")

        # <lo> <hi> <dst>: destination increments with the code
        payload = bytes(target)
        if not payload:
            continue
        width = len(payload)
        base = int.from_bytes(payload, "big")
        limit = 1 << (8 * width)
        for offset in range(end - start + 1):
            entries.append((start + offset, ((base + offset) % limit).to_bytes(width, "big")))


def parse_cmap(stream):
    """
    Parse a ToUnicode CMap stream into (code, payload) entries.

    The CMap program is tokenized by pikepdf's content stream parser, which
    also takes care of decompressing the stream. Only ``bfchar`` and
    ``bfrange`` blocks contribute entries.

    Args:
        stream (pikepdf.Stream): The font's /ToUnicode stream.

    Returns:
        list: ``(code, payload)`` tuples in declaration order, where payload is
        the raw UTF-16BE destination bytes.

    Raises:
        CMapError: If the stream cannot be read or a block is malformed.
    """
    try:
        instructions = pikepdf.parse_content_stream(stream)
    except (pikepdf.PdfError, pikepdf.models.PdfParsingError, TypeError) as e:
        raise CMapError(f"Unable to parse CMap stream: {e}") from e

    entries = []
    for instruction in instructions:
        if isinstance(instruction, pikepdf.ContentStreamInlineImage):
            continue
        operator = str(instruction.operator)
        if operator == "endbfchar":
            _expand_bfchar(instruction.operands, entries)
        elif operator == "endbfrange":
            _expand_bfrange(instruction.operands, entries)
    return entries


def build_cmap_data(entries):
    """
    Build CMapData from parsed (code, payload) entries.

    A payload must hold whole UTF-16 code units. An entry that is a single
    lone surrogate unit is dropped.

    Raises:
        CMapError: On an odd-length or otherwise undecodable payload.
    """
    forward = {}
    declared = []
    for code, payload in entries:
        if len(payload) % 2:
            raise CMapError(f"Odd-length UTF-16BE payload for code {code:04X}")
        if len(payload) == 2 and 0xD800 <= int.from_bytes(payload, "big") <= 0xDFFF:
            continue
        try:
            text = payload.decode("utf-16-be")
        except UnicodeDecodeError as e:
            raise CMapError(f"Invalid UTF-16BE payload for code {code:04X}: {e}") from e
        forward[code] = text
        declared.append((code, text))
    return CMapData(forward, declared)


def extract_font_cmap(font, font_name=""):
    """
    Extract the Unicode maps of a font from its /ToUnicode stream.

    Args:
        font: The PDF font dictionary.
        font_name (str): Resource name used in log messages.

    Returns:
        CMapData or None: None when the font has no usable CMap.
    """
    to_unicode = font.get("/ToUnicode")
    if to_unicode is None:
        return None
    if not isinstance(to_unicode, pikepdf.Stream):
        logger.warning("Font %s has a /ToUnicode entry that is not a stream, ignoring it", font_name)
        return None

    try:
        cmap = build_cmap_data(parse_cmap(to_unicode))
    except CMapError as e:
        logger.warning("Font %s has an unusable ToUnicode CMap: %s", font_name, e)
        return None

    logger.debug("Font %s: %d ToUnicode mappings", font_name, len(cmap))
    return cmap

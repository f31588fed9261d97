"""Per-font conversion between content stream bytes and Unicode text."""

import logging

from ..config import COMPOSITE_CODE_WIDTH, NO_FONT
from ..fonts.analysis import EncodingClass
from ..fonts.encodings import default_registry

logger = logging.getLogger(__name__)


class UnicodeMapper:
    """
    Decode and encode string operands according to the font that shows them.

    Composite (Identity-H) fonts go through the font's ToUnicode CMap, two
    bytes per code. Simple fonts go through the codec registered for their
    encoding name. Both directions are lossy: unmapped codes and characters
    are dropped without notice.
    """

    def __init__(self, fonts, codecs=None):
        """
        Args:
            fonts (dict): Font resource name -> FontDescriptor.
            codecs (CodecRegistry, optional): Simple-encoding codecs. Defaults
                to the built-in registry.
        """
        self.fonts = fonts
        self.codecs = codecs if codecs is not None else default_registry()

    def decode(self, font_id, data):
        font = self.fonts.get(font_id)
        if font is None:
            return NO_FONT
        data = bytes(data)

        if font.encoding_class is EncodingClass.COMPOSITE:
            return self._decode_composite(font, data)
        if font.encoding_class is EncodingClass.SIMPLE:
            return self.codecs.decode(font.encoding_name, data)
        return ""

    def encode(self, font_id, text):
        font = self.fonts.get(font_id)
        if font is None:
            return b""

        if font.encoding_class is EncodingClass.COMPOSITE:
            return self._encode_composite(font_id, font, text)
        if font.encoding_class is EncodingClass.SIMPLE:
            return self.codecs.encode(font.encoding_name, text)
        return b""

    @staticmethod
    def _decode_composite(font, data):
        if font.cmap is None:
            return ""
        forward = font.cmap.forward
        width = COMPOSITE_CODE_WIDTH
        parts = []
        # A trailing partial code is dropped
        for i in range(0, len(data) - width + 1, width):
            text = forward.get(int.from_bytes(data[i:i + width], "big"))
            if text is not None:
                parts.append(text)
        return "".join(parts)

    @staticmethod
    def _encode_composite(font_id, font, text):
        if font.cmap is None:
            return b""
        reverse = font.cmap.reverse
        width = COMPOSITE_CODE_WIDTH
        encoded = bytearray()
        for char in text:
            code = reverse.get(char)
            if code is None or code >= 1 << (8 * width):
                logger.debug("Font %s has no code for %r, dropping it", font_id, char)
                continue
            encoded += code.to_bytes(width, "big")
        return bytes(encoded)

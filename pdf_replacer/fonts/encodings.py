"""Byte <-> text codecs for the simple (single-table) PDF font encodings."""

from functools import lru_cache

from fontTools import agl
from fontTools.encodings.MacRoman import MacRoman
from fontTools.encodings.StandardEncoding import StandardEncoding

# Codes below this are control codes, undefined in every PDF base encoding
FIRST_PRINTABLE_CODE = 32

# MacExpertEncoding glyph names (PDF 32000-1, Annex D.4)
MAC_EXPERT_ENCODING = {
    0x20: "space", 0x21: "exclamsmall", 0x22: "Hungarumlautsmall", 0x23: "centoldstyle",
    0x24: "dollaroldstyle", 0x25: "dollarsuperior", 0x26: "ampersandsmall", 0x27: "Acutesmall",
    0x28: "parenleftsuperior", 0x29: "parenrightsuperior", 0x2A: "twodotenleader", 0x2B: "onedotenleader",
    0x2C: "comma", 0x2D: "hyphen", 0x2E: "period", 0x2F: "fraction",
    0x30: "zerooldstyle", 0x31: "oneoldstyle", 0x32: "twooldstyle", 0x33: "threeoldstyle",
    0x34: "fouroldstyle", 0x35: "fiveoldstyle", 0x36: "sixoldstyle", 0x37: "sevenoldstyle",
    0x38: "eightoldstyle", 0x39: "nineoldstyle", 0x3A: "colon", 0x3B: "semicolon",
    0x3D: "threequartersemdash", 0x3F: "questionsmall", 0x44: "Ethsmall", 0x47: "onequarter",
    0x48: "onehalf", 0x49: "threequarters", 0x4A: "oneeighth", 0x4B: "threeeighths",
    0x4C: "fiveeighths", 0x4D: "seveneighths", 0x4E: "onethird", 0x4F: "twothirds",
    0x56: "ff", 0x57: "fi", 0x58: "fl", 0x59: "ffi",
    0x5A: "ffl", 0x5B: "parenleftinferior", 0x5D: "parenrightinferior", 0x5E: "Circumflexsmall",
    0x5F: "hypheninferior", 0x60: "Gravesmall", 0x61: "Asmall", 0x62: "Bsmall",
    0x63: "Csmall", 0x64: "Dsmall", 0x65: "Esmall", 0x66: "Fsmall",
    0x67: "Gsmall", 0x68: "Hsmall", 0x69: "Ismall", 0x6A: "Jsmall",
    0x6B: "Ksmall", 0x6C: "Lsmall", 0x6D: "Msmall", 0x6E: "Nsmall",
    0x6F: "Osmall", 0x70: "Psmall", 0x71: "Qsmall", 0x72: "Rsmall",
    0x73: "Ssmall", 0x74: "Tsmall", 0x75: "Usmall", 0x76: "Vsmall",
    0x77: "Wsmall", 0x78: "Xsmall", 0x79: "Ysmall", 0x7A: "Zsmall",
    0x7B: "colonmonetary", 0x7C: "onefitted", 0x7D: "rupiah", 0x7E: "Tildesmall",
    0x81: "asuperior", 0x82: "centsuperior", 0x87: "Aacutesmall", 0x88: "Agravesmall",
    0x89: "Acircumflexsmall", 0x8A: "Adieresissmall", 0x8B: "Atildesmall", 0x8C: "Aringsmall",
    0x8D: "Ccedillasmall", 0x8E: "Eacutesmall", 0x8F: "Egravesmall", 0x90: "Ecircumflexsmall",
    0x91: "Edieresissmall", 0x92: "Iacutesmall", 0x93: "Igravesmall", 0x94: "Icircumflexsmall",
    0x95: "Idieresissmall", 0x96: "Ntildesmall", 0x97: "Oacutesmall", 0x98: "Ogravesmall",
    0x99: "Ocircumflexsmall", 0x9A: "Odieresissmall", 0x9B: "Otildesmall", 0x9C: "Uacutesmall",
    0x9D: "Ugravesmall", 0x9E: "Ucircumflexsmall", 0x9F: "Udieresissmall", 0xA1: "eightsuperior",
    0xA2: "fourinferior", 0xA3: "threeinferior", 0xA4: "sixinferior", 0xA5: "eightinferior",
    0xA6: "seveninferior", 0xA7: "Scaronsmall", 0xA9: "centinferior", 0xAA: "twoinferior",
    0xAC: "Dieresissmall", 0xAE: "Caronsmall", 0xAF: "osuperior", 0xB0: "fiveinferior",
    0xB2: "commainferior", 0xB3: "periodinferior", 0xB4: "Yacutesmall", 0xB6: "dollarinferior",
    0xB9: "Thornsmall", 0xBB: "nineinferior", 0xBC: "zeroinferior", 0xBD: "Zcaronsmall",
    0xBE: "AEsmall", 0xBF: "Oslashsmall", 0xC0: "questiondownsmall", 0xC1: "oneinferior",
    0xC2: "Lslashsmall", 0xC9: "Cedillasmall", 0xCF: "OEsmall", 0xD0: "figuredash",
    0xD1: "hyphensuperior", 0xD6: "exclamdownsmall", 0xD8: "Ydieresissmall", 0xDA: "onesuperior",
    0xDB: "twosuperior", 0xDC: "threesuperior", 0xDD: "foursuperior", 0xDE: "fivesuperior",
    0xDF: "sixsuperior", 0xE0: "sevensuperior", 0xE1: "ninesuperior", 0xE2: "zerosuperior",
    0xE4: "esuperior", 0xE5: "rsuperior", 0xE6: "tsuperior", 0xE9: "isuperior",
    0xEA: "ssuperior", 0xEB: "dsuperior", 0xF1: "lsuperior", 0xF2: "Ogoneksmall",
    0xF3: "Brevesmall", 0xF4: "Macronsmall", 0xF5: "bsuperior", 0xF6: "nsuperior",
    0xF7: "msuperior", 0xF8: "commasuperior", 0xF9: "periodsuperior", 0xFA: "Dotaccentsmall",
    0xFB: "Ringsmall",
}


class SingleByteCodec:
    """
    A one byte per character codec backed by a code -> text table.

    Undefined bytes are dropped when decoding and characters missing from the
    table are dropped when encoding. When several codes show the same
    character, encoding uses the lowest code.
    """

    def __init__(self, name, table):
        self.name = name
        self._decode = dict(table)
        self._encode = {}
        for code in sorted(self._decode, reverse=True):
            self._encode[self._decode[code]] = code

    def decode(self, data):
        return "".join(self._decode[b] for b in data if b in self._decode)

    def encode(self, text):
        return bytes(self._encode[c] for c in text if c in self._encode)

    def __repr__(self):
        return f"<SingleByteCodec {self.name} ({len(self._decode)} codes)>"


class UTF16Codec:
    """Codec for the UCS-2/UTF-16 based UniGB CMaps."""

    def __init__(self, name):
        self.name = name

    def decode(self, data):
        if len(data) % 2:
            data = data[:-1]
        return bytes(data).decode("utf-16-be", errors="ignore")

    def encode(self, text):
        return text.encode("utf-16-be", errors="ignore")

    def __repr__(self):
        return f"<UTF16Codec {self.name}>"


def glyph_name_table(names):
    """
    Turn an encoding vector of glyph names into a code -> text table.

    Args:
        names: Either a 256 entry list or a dict of code -> glyph name.

    Returns:
        dict: Code to Unicode text, for glyphs the Adobe Glyph List knows.
    """
    if not isinstance(names, dict):
        names = dict(enumerate(names))
    table = {}
    for code, glyph in names.items():
        if code < FIRST_PRINTABLE_CODE or not glyph or glyph == ".notdef":
            continue
        text = agl.toUnicode(glyph)
        if text:
            table[code] = text
    return table


# Where WinAnsiEncoding differs from the cp1252 code page (PDF 32000-1, Annex D.2):
# 0x7F is undefined, 0xA0 and 0xAD repeat space and hyphen
WIN_ANSI_OVERRIDES = {0x7F: None, 0xA0: " ", 0xAD: "-"}


def codepage_table(codec, overrides=None):
    """
    Code -> text table of a Python single-byte codec.

    Args:
        codec (str): Python codec name.
        overrides (dict, optional): Code -> text replacements; None removes
            the code from the table.
    """
    table = {}
    for code in range(FIRST_PRINTABLE_CODE, 256):
        try:
            table[code] = bytes([code]).decode(codec)
        except UnicodeDecodeError:
            continue
    for code, text in (overrides or {}).items():
        if text is None:
            table.pop(code, None)
        else:
            table[code] = text
    return table


class CodecRegistry:
    """Encoding-name keyed codecs handed to the Unicode mapper."""

    def __init__(self, codecs):
        self._codecs = dict(codecs)

    def __contains__(self, name):
        return name in self._codecs

    def names(self):
        return sorted(self._codecs)

    def get(self, name):
        try:
            return self._codecs[name]
        except KeyError:
            raise LookupError(f"No codec registered for encoding {name!r}") from None

    def decode(self, name, data):
        return self.get(name).decode(data)

    def encode(self, name, text):
        return self.get(name).encode(text)


def build_default_codecs():
    return {
        "StandardEncoding": SingleByteCodec("StandardEncoding", glyph_name_table(StandardEncoding)),
        "MacRomanEncoding": SingleByteCodec("MacRomanEncoding", glyph_name_table(MacRoman)),
        "MacExpertEncoding": SingleByteCodec("MacExpertEncoding", glyph_name_table(MAC_EXPERT_ENCODING)),
        "WinAnsiEncoding": SingleByteCodec("WinAnsiEncoding", codepage_table("cp1252", WIN_ANSI_OVERRIDES)),
        "UniGB-UCS2-H": UTF16Codec("UniGB-UCS2-H"),
        "UniGB-UTF16-H": UTF16Codec("UniGB-UTF16-H"),
    }


@lru_cache(maxsize=None)
def default_registry():
    """The registry covering every simple encoding the replacer supports."""
    return CodecRegistry(build_default_codecs())
